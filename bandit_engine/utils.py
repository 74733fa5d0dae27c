"""Small helpers shared by the engines."""
from __future__ import annotations

import time
from typing import Optional, Sequence


def select_argmax(values: Sequence[float]) -> Optional[int]:
    """Index of the strictly largest value, first index winning ties.

    ``-inf`` and NaN entries never win, so ``None`` is returned when nothing
    else is present (or *values* is empty).
    """
    best_value = -float("inf")
    best_index: Optional[int] = None
    for i, value in enumerate(values):
        if value > best_value:
            best_value = value
            best_index = i
    return best_index


def timestamp_millis() -> int:
    """Wall-clock Unix epoch time in milliseconds."""
    return time.time_ns() // 1_000_000
