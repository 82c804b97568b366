"""Monotonic stacking-order key allocation."""

from __future__ import annotations

DEFAULT_BASELINE_Z_INDEX = 100


class StackOrderAllocator:
    """Issues strictly increasing z-index values above a baseline."""

    def __init__(self, baseline: int = DEFAULT_BASELINE_Z_INDEX) -> None:
        if isinstance(baseline, bool) or not isinstance(baseline, int) or baseline < 0:
            raise ValueError(f"Baseline z-index must be a non-negative integer: {baseline!r}")
        self._current = baseline

    def next(self) -> int:
        """Advance the counter and return the new key."""
        self._current += 1
        return self._current

    def current(self) -> int:
        """Return the most recently issued key (or the baseline)."""
        return self._current

    def copy(self) -> StackOrderAllocator:
        return StackOrderAllocator(self._current)

    def __repr__(self) -> str:
        return f"StackOrderAllocator(current={self._current})"
