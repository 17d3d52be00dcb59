"""
Error types raised by the word count engine.
"""


class WordCountError(Exception):
    """Base class for every error the engine raises on purpose"""


class ConfigurationError(WordCountError, ValueError):
    """Degree of parallelism or another setting cannot be used"""


class PartitionBoundsError(WordCountError, IndexError):
    """A partition range falls outside the record index space"""

    def __init__(self, partition, num_records: int):
        self.partition = partition
        self.num_records = num_records
        super().__init__(
            f"Partition {partition} is outside [0, {num_records})"
        )


class WorkerFailure(WordCountError, RuntimeError):
    """A map worker failed; fatal to the whole run"""

    def __init__(self, worker_id: int, partition, message: str):
        self.worker_id = worker_id
        self.partition = partition
        super().__init__(f"Worker {worker_id} failed on {partition}: {message}")


class AggregateStateError(WordCountError, RuntimeError):
    """Intermediate aggregate used in the wrong lifecycle phase"""
