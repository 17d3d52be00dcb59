"""
Intermediate aggregate shared by all map workers.
Holds word -> list of partial counts. Writers only get a synchronized
append; readers only get access once the aggregate has been frozen.
"""

import threading
from collections import defaultdict
from typing import Dict, Iterator, List, Tuple

from wordcount.common.errors import AggregateStateError, ConfigurationError


class BaseAggregate:
    """Read side shared by every aggregate: frozen state and iteration"""

    def __init__(self):
        self._frozen = False

    def append(self, word: str, count: int):
        raise NotImplementedError

    def freeze(self):
        raise NotImplementedError

    def _buckets(self) -> List[Dict[str, List[int]]]:
        """Dicts holding the partial counts; every word lives in exactly one."""
        raise NotImplementedError

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_frozen(self):
        if not self._frozen:
            raise AggregateStateError("Aggregate must be frozen before it is read")

    def items(self) -> Iterator[Tuple[str, List[int]]]:
        """Iterate (word, partial counts) pairs of the frozen aggregate."""
        self._check_frozen()
        for bucket in self._buckets():
            for word, values in bucket.items():
                yield word, list(values)

    def total_pairs(self) -> int:
        self._check_frozen()
        return sum(len(values) for bucket in self._buckets() for values in bucket.values())

    def __len__(self) -> int:
        self._check_frozen()
        return sum(len(bucket) for bucket in self._buckets())


class IntermediateAggregate(BaseAggregate):
    """Word -> partial counts, guarded by one lock covering every key"""

    def __init__(self):
        super().__init__()
        self._data: Dict[str, List[int]] = defaultdict(list)
        self._lock = threading.Lock()

    def append(self, word: str, count: int):
        """Append one partial count for word. This is the critical section."""
        with self._lock:
            if self._frozen:
                raise AggregateStateError(f"Cannot append '{word}' to a frozen aggregate")
            self._data[word].append(count)

    def freeze(self):
        """Make the aggregate read-only. Called once all writers have finished."""
        with self._lock:
            self._frozen = True

    def _buckets(self) -> List[Dict[str, List[int]]]:
        return [self._data]


class ShardedIntermediateAggregate(BaseAggregate):
    """
    Same contract as IntermediateAggregate, with one lock per shard.

    A word always hashes to the same shard, so every update to a key's list
    is still atomic with respect to concurrent updates of any key.
    """

    def __init__(self, num_shards: int):
        if num_shards < 1:
            raise ConfigurationError(f"num_shards must be >= 1, got {num_shards}")
        super().__init__()
        self.num_shards = num_shards
        self._shards: List[Dict[str, List[int]]] = [defaultdict(list) for _ in range(num_shards)]
        self._shard_locks = [threading.Lock() for _ in range(num_shards)]

    def _shard_for(self, word: str) -> int:
        return hash(word) % self.num_shards

    def append(self, word: str, count: int):
        shard_id = self._shard_for(word)
        with self._shard_locks[shard_id]:
            if self._frozen:
                raise AggregateStateError(f"Cannot append '{word}' to a frozen aggregate")
            self._shards[shard_id][word].append(count)

    def freeze(self):
        # Take every shard lock so no append is in flight while freezing
        for lock in self._shard_locks:
            lock.acquire()
        try:
            self._frozen = True
        finally:
            for lock in reversed(self._shard_locks):
                lock.release()

    def _buckets(self) -> List[Dict[str, List[int]]]:
        return self._shards


def create_aggregate(num_shards: int = 1) -> BaseAggregate:
    """Return a single-lock aggregate for 1 shard, a sharded one otherwise."""
    if num_shards == 1:
        return IntermediateAggregate()
    return ShardedIntermediateAggregate(num_shards)
