"""
Coordinator for the word count engine.
Partitions the records, runs the map phase on one thread per partition, waits for
every worker at the barrier, then reduces the frozen aggregate.
"""

import uuid
import logging
import threading
from enum import Enum
from functools import partial
from types import MappingProxyType
from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from wordcount.common.config import EngineConfig
from wordcount.coordinator.metrics import JobMetrics, MetricsCollector
from wordcount.worker.intermediate import BaseAggregate, create_aggregate
from wordcount.worker.map_function import map_function
from wordcount.worker.map_worker import MapFn, MapWorker, WorkerStats
from wordcount.worker.partitioner import Partition, compute_partitions
from wordcount.worker.reduce_function import reduce_function

logger = logging.getLogger(__name__)

ReduceFn = Callable[[Iterable[int]], int]


class RunState(Enum):
    """Lifecycle of a single run"""
    IDLE = "idle"
    PARTITIONING = "partitioning"
    MAPPING = "mapping"
    BARRIER = "barrier"
    REDUCING = "reducing"
    DONE = "done"
    FAILED = "failed"


# Allowed forward transitions; FAILED is reachable from any non-terminal state
TRANSITIONS = {
    RunState.IDLE: RunState.PARTITIONING,
    RunState.PARTITIONING: RunState.MAPPING,
    RunState.MAPPING: RunState.BARRIER,
    RunState.BARRIER: RunState.REDUCING,
    RunState.REDUCING: RunState.DONE,
}


@dataclass(frozen=True)
class WordCountResult:
    """Final aggregate of a run plus its statistics"""
    job_id: str
    counts: Mapping[str, int]
    worker_stats: Tuple[WorkerStats, ...]
    metrics: JobMetrics

    def sorted_items(self) -> List[Tuple[str, int]]:
        """(word, count) pairs in ascending word order."""
        return sorted(self.counts.items())

    def __len__(self):
        return len(self.counts)


class Coordinator:
    """Runs one word count job through every phase"""

    def __init__(self, config: Optional[EngineConfig] = None,
                 map_fn: Optional[MapFn] = None, reduce_fn: ReduceFn = reduce_function):
        self.config = config or EngineConfig()
        if map_fn is None:
            map_fn = partial(map_function, keep_empty_tokens=self.config.keep_empty_tokens)
        self.map_fn = map_fn
        self.reduce_fn = reduce_fn

        self.job_id = str(uuid.uuid4())
        self.state = RunState.IDLE
        self.error_message = ""
        self.partitions: List[Partition] = []
        self.workers: List[MapWorker] = []
        self.aggregate: Optional[BaseAggregate] = None
        self.collector = MetricsCollector()

    def _transition(self, new_state: RunState):
        if TRANSITIONS.get(self.state) != new_state:
            raise ValueError(f"Cannot transition from {self.state.value} to {new_state.value}")
        logger.debug(f"Job {self.job_id}: {self.state.value} -> {new_state.value}")
        self.state = new_state

    def _mark_failed(self, error_msg: str):
        self.state = RunState.FAILED
        self.error_message = error_msg
        logger.error(f"Job {self.job_id} failed: {error_msg}")

    def run(self, records: Sequence[str]) -> WordCountResult:
        """
        Count words across all records.

        Args:
            records: Finite, ordered sequence of text records

        Returns:
            WordCountResult with the final aggregate

        Raises:
            ConfigurationError: If the degree of parallelism is unusable
            PartitionBoundsError: If a worker gets an out-of-range partition
            WorkerFailure: If any worker fails; no partial result is produced
            ValueError: If this coordinator has already run
        """
        if self.state != RunState.IDLE:
            raise ValueError(f"Job {self.job_id} already ran (state: {self.state.value})")

        records = tuple(records)
        try:
            self._partition(records)
            self._map_phase(records)
            final = self._reduce_phase()
        except Exception as e:
            self._mark_failed(str(e))
            raise

        self._transition(RunState.DONE)
        self.collector.end_job(len(final))
        logger.info(f"Job {self.job_id} completed: {len(final)} distinct words")

        return WordCountResult(
            job_id=self.job_id,
            counts=MappingProxyType(final),
            worker_stats=tuple(worker.stats() for worker in self.workers),
            metrics=self.collector.get_metrics(),
        )

    def _partition(self, records: Tuple[str, ...]):
        self._transition(RunState.PARTITIONING)
        self.collector.start_job(self.job_id, self.config.num_shards, len(records))
        num_workers = self.config.resolve_parallelism()
        self.partitions = compute_partitions(len(records), num_workers)
        logger.info(
            f"Job {self.job_id}: {len(records)} records across {num_workers} worker(s)"
        )

    def _map_phase(self, records: Tuple[str, ...]):
        self._transition(RunState.MAPPING)
        self.aggregate = create_aggregate(self.config.num_shards)
        self.collector.start_map_phase(len(self.partitions))

        self.workers = [
            MapWorker(p.partition_id, records, p, self.aggregate, self.map_fn)
            for p in self.partitions
        ]

        # One thread per partition, created for this run only
        threads = [
            threading.Thread(target=worker.run,
                             name=f"map-{self.job_id[:8]}-{worker.partition.partition_id}")
            for worker in self.workers
        ]
        for thread in threads:
            thread.start()
        # Barrier: wait for every worker, successful or not
        for thread in threads:
            thread.join()

        self._transition(RunState.BARRIER)
        self.aggregate.freeze()

        for worker in self.workers:
            if worker.error is not None:
                raise worker.error

        self.collector.end_map_phase(
            self.aggregate.total_pairs(),
            [worker.stats().to_dict() for worker in self.workers],
        )
        logger.info(
            f"Job {self.job_id}: map phase complete, "
            f"{self.aggregate.total_pairs()} pairs for {len(self.aggregate)} words"
        )

    def _reduce_phase(self) -> dict:
        self._transition(RunState.REDUCING)
        self.collector.start_reduce_phase()

        # The aggregate is frozen here, so no locking is needed
        final = {}
        for word, values in sorted(self.aggregate.items()):
            final[word] = self.reduce_fn(values)
        return final


def run_word_count(records: Sequence[str], config: Optional[EngineConfig] = None) -> WordCountResult:
    """Run a single word count job with a fresh coordinator."""
    return Coordinator(config).run(records)
