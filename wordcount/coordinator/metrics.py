"""
Performance metrics collection for word count runs.
"""

import time
import json
import psutil
from dataclasses import dataclass, asdict, field
from typing import List, Optional


@dataclass
class JobMetrics:
    """Metrics for a single word count run."""

    job_id: str
    start_time: float
    end_time: float
    map_phase_start: float
    map_phase_end: float
    reduce_phase_start: float
    reduce_phase_end: float
    num_workers: int
    num_shards: int
    num_records: int
    intermediate_pairs: int = 0
    distinct_words: int = 0
    peak_memory_bytes: int = 0
    workers: List[dict] = field(default_factory=list)

    @property
    def total_time_seconds(self) -> float:
        """Total run time in seconds."""
        return self.end_time - self.start_time

    @property
    def map_phase_time_seconds(self) -> float:
        """Map phase execution time in seconds."""
        return self.map_phase_end - self.map_phase_start

    @property
    def reduce_phase_time_seconds(self) -> float:
        """Reduce phase execution time in seconds."""
        return self.reduce_phase_end - self.reduce_phase_start

    @property
    def records_per_second(self) -> float:
        total = self.total_time_seconds
        return self.num_records / total if total > 0 else 0.0

    def to_dict(self) -> dict:
        """Convert metrics to dictionary."""
        data = asdict(self)
        data['total_time_seconds'] = self.total_time_seconds
        data['map_phase_time_seconds'] = self.map_phase_time_seconds
        data['reduce_phase_time_seconds'] = self.reduce_phase_time_seconds
        return data

    def save_to_file(self, filepath: str):
        """Save metrics to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


class MetricsCollector:
    """Records phase boundaries and resource usage for one run."""

    def __init__(self):
        self.process = psutil.Process()
        self.metrics: Optional[JobMetrics] = None

    def _sample_memory(self):
        rss = self.process.memory_info().rss
        if rss > self.metrics.peak_memory_bytes:
            self.metrics.peak_memory_bytes = rss

    def start_job(self, job_id: str, num_shards: int, num_records: int):
        """Initialize metrics tracking for a new run, before partitioning."""
        self.metrics = JobMetrics(
            job_id=job_id,
            start_time=time.time(),
            end_time=0,
            map_phase_start=0,
            map_phase_end=0,
            reduce_phase_start=0,
            reduce_phase_end=0,
            num_workers=0,
            num_shards=num_shards,
            num_records=num_records,
        )
        self._sample_memory()

    def start_map_phase(self, num_workers: int):
        """Mark the start of the map phase."""
        self.metrics.map_phase_start = time.time()
        self.metrics.num_workers = num_workers

    def end_map_phase(self, intermediate_pairs: int, workers: List[dict]):
        """Mark the end of the map phase."""
        self.metrics.map_phase_end = time.time()
        self.metrics.intermediate_pairs = intermediate_pairs
        self.metrics.workers = workers
        self._sample_memory()

    def start_reduce_phase(self):
        """Mark the start of the reduce phase."""
        self.metrics.reduce_phase_start = time.time()

    def end_job(self, distinct_words: int):
        """Mark run completion."""
        now = time.time()
        self.metrics.reduce_phase_end = now
        self.metrics.end_time = now
        self.metrics.distinct_words = distinct_words
        self._sample_memory()

    def get_metrics(self) -> Optional[JobMetrics]:
        """Retrieve metrics of the current run."""
        return self.metrics
