"""
Record partitioner.
Splits R records into T contiguous index ranges, one per map worker.
"""

from dataclasses import dataclass
from typing import List

from wordcount.common.errors import ConfigurationError, PartitionBoundsError


@dataclass(frozen=True)
class Partition:
    """Half-open range [start, end) of record indices"""
    partition_id: int
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start

    def __str__(self):
        return f"Partition{self.partition_id}[{self.start}, {self.end})"


def compute_partitions(num_records: int, num_workers: int) -> List[Partition]:
    """
    Split [0, num_records) into exactly num_workers ranges.

    The first num_workers - 1 ranges have num_records // num_workers records
    each; the last range takes the remainder. When there are fewer records
    than workers the leading ranges are empty.

    Args:
        num_records: Number of records R, >= 0
        num_workers: Number of workers T, >= 1

    Returns:
        List of T partitions covering [0, R) with no gaps and no overlaps

    Raises:
        ConfigurationError: If num_workers < 1
        ValueError: If num_records < 0
    """
    if num_workers < 1:
        raise ConfigurationError(f"Cannot partition across {num_workers} workers")
    if num_records < 0:
        raise ValueError(f"Record count must be >= 0, got {num_records}")

    chunk_size = num_records // num_workers

    partitions = []
    for i in range(num_workers):
        start = i * chunk_size
        end = num_records if i == num_workers - 1 else (i + 1) * chunk_size
        partition = Partition(partition_id=i, start=start, end=end)
        validate_partition(partition, num_records)
        partitions.append(partition)

    return partitions


def validate_partition(partition: Partition, num_records: int):
    """Raise PartitionBoundsError unless 0 <= start <= end <= num_records."""
    if not 0 <= partition.start <= partition.end <= num_records:
        raise PartitionBoundsError(partition, num_records)
