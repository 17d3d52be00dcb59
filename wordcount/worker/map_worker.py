"""
Map worker.
Runs the map function over one partition of the records and merges every
emitted pair into the shared intermediate aggregate.
"""

import time
import logging
from enum import Enum
from dataclasses import dataclass, asdict
from typing import Callable, Iterable, Optional, Sequence, Tuple

from wordcount.common.errors import WorkerFailure
from wordcount.worker.intermediate import BaseAggregate
from wordcount.worker.map_function import map_function
from wordcount.worker.partitioner import Partition, validate_partition

logger = logging.getLogger(__name__)

MapFn = Callable[[str], Iterable[Tuple[str, int]]]


class WorkerState(Enum):
    """Status of a single map worker"""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class WorkerStats:
    """Counters reported by a worker once it stops"""
    worker_id: int
    partition_start: int
    partition_end: int
    state: str
    records_processed: int
    pairs_emitted: int
    execution_time_ms: int

    def to_dict(self) -> dict:
        return asdict(self)


class MapWorker:
    """Executes the map phase for a single partition"""

    def __init__(self, worker_id: int, records: Sequence[str], partition: Partition,
                 aggregate: BaseAggregate, map_fn: MapFn = map_function):
        """
        Initialize the map worker

        Args:
            worker_id: Index of this worker, equal to its partition id
            records: The full, shared record sequence (read only)
            partition: Range of record indices this worker owns
            aggregate: Shared intermediate aggregate to append into
            map_fn: Function turning one record into (word, count) pairs
        """
        self.worker_id = worker_id
        self.records = records
        self.partition = partition
        self.aggregate = aggregate
        self.map_fn = map_fn

        self.state = WorkerState.PENDING
        self.records_processed = 0
        self.pairs_emitted = 0
        self.execution_time_ms = 0
        self.error: Optional[Exception] = None

    def execute(self) -> WorkerStats:
        """
        Map every record in the partition and append the results.

        Returns:
            WorkerStats for this worker

        Raises:
            PartitionBoundsError: If the partition does not fit the records
            WorkerFailure: If mapping or merging fails
        """
        # Out-of-range partitions are a caller defect: fail before touching anything
        validate_partition(self.partition, len(self.records))

        self.state = WorkerState.RUNNING
        start_time = time.time()
        logger.debug(f"Worker {self.worker_id}: starting {self.partition}")

        try:
            for index in range(self.partition.start, self.partition.end):
                for word, count in self.map_fn(self.records[index]):
                    self.aggregate.append(word, count)
                    self.pairs_emitted += 1
                self.records_processed += 1
        except Exception as e:
            self.state = WorkerState.FAILED
            self.execution_time_ms = int((time.time() - start_time) * 1000)
            logger.error(f"Worker {self.worker_id}: failed on {self.partition}: {e}")
            raise WorkerFailure(self.worker_id, self.partition, str(e)) from e

        self.state = WorkerState.COMPLETED
        self.execution_time_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            f"Worker {self.worker_id}: mapped {self.records_processed} records "
            f"into {self.pairs_emitted} pairs in {self.execution_time_ms}ms"
        )
        return self.stats()

    def run(self):
        """Thread target: execute and keep the exception for the coordinator."""
        try:
            self.execute()
        except Exception as e:
            self.error = e

    def stats(self) -> WorkerStats:
        return WorkerStats(
            worker_id=self.worker_id,
            partition_start=self.partition.start,
            partition_end=self.partition.end,
            state=self.state.value,
            records_processed=self.records_processed,
            pairs_emitted=self.pairs_emitted,
            execution_time_ms=self.execution_time_ms,
        )
