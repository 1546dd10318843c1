"""
Tests for sequential batch processing.

Run with: pytest tests/test_batching.py -v
"""

import threading

import pytest

from i18n_adapt.batching import batch_count, chunked, process_in_batches
from i18n_adapt.errors import ProviderError, TranslationCancelledError


class TestChunked:

    def test_last_chunk_holds_remainder(self):
        assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    def test_empty_input(self):
        assert chunked([], 3) == []

    def test_rejects_zero_size(self):
        with pytest.raises(ValueError):
            chunked([1], 0)


class TestProcessInBatches:

    @pytest.mark.parametrize("batch_size", [1, 2, 3, 7, 10, 50])
    def test_order_preserved_for_any_batch_size(self, batch_size):
        items = [f"item{i}" for i in range(10)]
        result = process_in_batches(
            items, lambda batch: [s.upper() for s in batch],
            batch_size=batch_size, delay=0,
        )
        assert result == [s.upper() for s in items]

    def test_sleeps_between_batches_only(self):
        sleeps = []
        process_in_batches(
            list(range(5)), lambda batch: batch,
            batch_size=2, delay=1.5, sleep=sleeps.append,
        )
        # three batches, two pauses, none after the last
        assert sleeps == [1.5, 1.5]

    def test_single_batch_never_sleeps(self):
        sleeps = []
        process_in_batches([1, 2], lambda b: b, batch_size=5, delay=2, sleep=sleeps.append)
        assert sleeps == []

    def test_zero_delay_never_sleeps(self):
        sleeps = []
        process_in_batches(list(range(6)), lambda b: b, batch_size=2, delay=0, sleep=sleeps.append)
        assert sleeps == []

    def test_empty_input_makes_no_calls(self):
        calls = []
        result = process_in_batches([], lambda b: calls.append(b) or b, batch_size=3, delay=0)
        assert result == []
        assert calls == []

    def test_failure_aborts_remaining_batches(self):
        seen = []

        def batch_fn(batch):
            seen.append(batch)
            if len(seen) == 2:
                raise ProviderError("boom", status=500)
            return batch

        with pytest.raises(ProviderError, match="status 500"):
            process_in_batches(list(range(6)), batch_fn, batch_size=2, delay=0)
        assert seen == [[0, 1], [2, 3]]

    def test_progress_reported_per_batch(self):
        progress = []
        process_in_batches(
            list(range(5)), lambda b: b, batch_size=2, delay=0,
            progress=lambda done, total: progress.append((done, total)),
        )
        assert progress == [(1, 3), (2, 3), (3, 3)]

    def test_cancel_before_next_batch(self):
        cancel = threading.Event()
        seen = []

        def batch_fn(batch):
            seen.append(batch)
            cancel.set()
            return batch

        with pytest.raises(TranslationCancelledError, match="batch 2/3"):
            process_in_batches(
                list(range(6)), batch_fn, batch_size=2, delay=0, cancel_event=cancel,
            )
        assert seen == [[0, 1]]

    def test_cancel_event_used_for_pacing(self):
        cancel = threading.Event()
        cancel.wait = lambda timeout=None: waits.append(timeout)
        waits = []
        process_in_batches(
            list(range(4)), lambda b: b, batch_size=2, delay=0.5, cancel_event=cancel,
        )
        assert waits == [0.5]


def test_batch_count():
    assert batch_count(0, 15) == 0
    assert batch_count(15, 15) == 1
    assert batch_count(16, 15) == 2
