"""
Sequential batch processing with pacing between batches.

Providers are rate limited and the pipeline depends on index-for-index
correspondence, so batches are sent strictly one after another with a
fixed pause in between. The first failing batch aborts the whole run and
its partial results are discarded; there is no resumption.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable, Optional, Sequence, TypeVar

from i18n_adapt.config import DEFAULT_BATCH_DELAY, DEFAULT_BATCH_SIZE
from i18n_adapt.errors import TranslationCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Called after each batch with (batches_done, batches_total)
BatchProgressCallback = Callable[[int, int], None]


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into contiguous chunks of at most ``size``."""
    if size < 1:
        raise ValueError(f"batch size must be at least 1, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def process_in_batches(
    items: Sequence[T],
    batch_fn: Callable[[list[T]], Sequence[R]],
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay: float = DEFAULT_BATCH_DELAY,
    *,
    cancel_event: Optional[threading.Event] = None,
    sleep: Callable[[float], None] = time.sleep,
    progress: Optional[BatchProgressCallback] = None,
) -> list[R]:
    """Run ``batch_fn`` over ``items`` in sequential batches.

    Args:
        items: Items to process, in order
        batch_fn: Called once per batch; returns that batch's results
        batch_size: Maximum items per batch
        delay: Seconds to pause between batches (not after the last)
        cancel_event: When set, the run stops before the next batch
        sleep: Pause function, used when no cancel_event is given
        progress: Optional callback invoked after each batch

    Returns:
        Concatenated results in batch order and intra-batch order

    Raises:
        TranslationCancelledError: cancel_event was set between batches
        Exception: Whatever batch_fn raised, unchanged
    """
    batches = chunked(items, batch_size)
    total = len(batches)
    results: list[R] = []

    for index, batch in enumerate(batches, start=1):
        if cancel_event is not None and cancel_event.is_set():
            raise TranslationCancelledError(
                f"Cancelled before batch {index}/{total}"
            )

        logger.info("Processing batch %d/%d (%d items)...", index, total, len(batch))
        try:
            results.extend(batch_fn(batch))
        except Exception as e:
            logger.error("Error processing batch %d/%d: %s", index, total, e)
            raise

        if progress is not None:
            progress(index, total)

        if index < total and delay > 0:
            if cancel_event is not None:
                cancel_event.wait(delay)
            else:
                sleep(delay)

    return results


def batch_count(item_count: int, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
    return math.ceil(item_count / batch_size) if item_count else 0
