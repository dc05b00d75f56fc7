"""Order-preserving fan-out of independent batch entries."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Sequence, TypeVar

from . import config

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Below this many entries the pool costs more than it saves
SEQUENTIAL_THRESHOLD = 4


def run_batch(
    func: Callable[[T], R],
    entries: Sequence[T],
    on_error: Callable[[T, Exception], R],
    max_workers: Optional[int] = None,
) -> List[R]:
    """Apply *func* to every entry and return the results in input order.

    Entries share no state.  An exception raised for one entry is turned
    into that entry's result by *on_error* and never reaches its siblings.
    """
    if not entries:
        return []

    if len(entries) < SEQUENTIAL_THRESHOLD:
        results: List[R] = []
        for entry in entries:
            try:
                results.append(func(entry))
            except Exception as exc:
                logger.warning("Batch entry %r failed: %s", entry, exc)
                results.append(on_error(entry, exc))
        return results

    ordered: List[Optional[R]] = [None] * len(entries)
    num_workers = min(max_workers or config.MAX_WORKERS, len(entries))

    with ThreadPoolExecutor(max_workers=num_workers) as executor:
        future_to_index = {
            executor.submit(func, entry): i
            for i, entry in enumerate(entries)
        }
        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                ordered[index] = future.result()
            except Exception as exc:
                logger.warning("Batch entry %r failed: %s", entries[index], exc)
                ordered[index] = on_error(entries[index], exc)

    return ordered  # type: ignore[return-value]
