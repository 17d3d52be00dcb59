"""
Unit tests for MapWorker
"""

import pytest
from unittest.mock import Mock

from wordcount.common.errors import PartitionBoundsError, WorkerFailure
from wordcount.worker.intermediate import IntermediateAggregate
from wordcount.worker.map_worker import MapWorker, WorkerState
from wordcount.worker.partitioner import Partition


RECORDS = (
    "This is sentence one.",
    "This is sentence two.",
    "Hello, hello!! HELLO",
)


class TestMapWorkerExecution:
    """Tests for mapping a partition into the aggregate"""

    def test_maps_only_its_own_partition(self):
        aggregate = IntermediateAggregate()
        worker = MapWorker(0, RECORDS, Partition(0, 2, 3), aggregate)

        stats = worker.execute()
        aggregate.freeze()

        assert dict(aggregate.items()) == {'hello': [1, 1, 1]}
        assert stats.records_processed == 1
        assert stats.pairs_emitted == 3
        assert stats.state == 'completed'
        assert worker.state == WorkerState.COMPLETED

    def test_appends_every_pair_in_word_order(self):
        aggregate = Mock()
        worker = MapWorker(1, RECORDS, Partition(1, 0, 1), aggregate)

        worker.execute()

        calls = [c.args for c in aggregate.append.call_args_list]
        assert calls == [('this', 1), ('is', 1), ('sentence', 1), ('one', 1)]

    def test_empty_partition_does_nothing(self):
        aggregate = Mock()
        worker = MapWorker(0, RECORDS, Partition(0, 0, 0), aggregate)

        stats = worker.execute()

        aggregate.append.assert_not_called()
        assert stats.records_processed == 0
        assert stats.state == 'completed'

    def test_uses_injected_map_function(self):
        aggregate = IntermediateAggregate()
        map_fn = Mock(return_value=[('x', 1)])
        worker = MapWorker(0, RECORDS, Partition(0, 0, 3), aggregate, map_fn)

        worker.execute()
        aggregate.freeze()

        assert map_fn.call_count == 3
        assert dict(aggregate.items()) == {'x': [1, 1, 1]}


class TestMapWorkerFailures:
    """Tests for fail-fast and failure wrapping"""

    def test_out_of_range_partition_fails_before_mapping(self):
        aggregate = Mock()
        worker = MapWorker(0, RECORDS, Partition(0, 1, 5), aggregate)

        with pytest.raises(PartitionBoundsError):
            worker.execute()

        aggregate.append.assert_not_called()
        assert worker.state == WorkerState.PENDING

    def test_map_error_becomes_worker_failure(self):
        def broken_map(record):
            raise KeyError('boom')

        worker = MapWorker(3, RECORDS, Partition(3, 0, 2), IntermediateAggregate(), broken_map)

        with pytest.raises(WorkerFailure) as exc_info:
            worker.execute()

        assert exc_info.value.worker_id == 3
        assert exc_info.value.partition == Partition(3, 0, 2)
        assert isinstance(exc_info.value.__cause__, KeyError)
        assert worker.state == WorkerState.FAILED
        assert worker.stats().state == 'failed'

    def test_append_error_becomes_worker_failure(self):
        aggregate = IntermediateAggregate()
        aggregate.freeze()
        worker = MapWorker(0, RECORDS, Partition(0, 0, 1), aggregate)

        with pytest.raises(WorkerFailure):
            worker.execute()

    def test_run_keeps_the_failure_for_the_coordinator(self):
        def broken_map(record):
            raise KeyError('boom')

        worker = MapWorker(0, RECORDS, Partition(0, 0, 1), IntermediateAggregate(), broken_map)

        worker.run()

        assert isinstance(worker.error, WorkerFailure)
        assert worker.state == WorkerState.FAILED

    def test_run_without_failure_leaves_no_error(self):
        worker = MapWorker(0, RECORDS, Partition(0, 0, 1), IntermediateAggregate())

        worker.run()

        assert worker.error is None
        assert worker.state == WorkerState.COMPLETED
