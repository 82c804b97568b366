"""Stack-order allocator tests."""

from __future__ import annotations

import pytest

from desktop.stack_order import DEFAULT_BASELINE_Z_INDEX, StackOrderAllocator


def test_allocator_starts_above_baseline() -> None:
    allocator = StackOrderAllocator()
    assert allocator.current() == DEFAULT_BASELINE_Z_INDEX == 100
    assert allocator.next() == 101
    assert allocator.next() == 102
    assert allocator.current() == 102


def test_copy_is_independent() -> None:
    allocator = StackOrderAllocator(10)
    fork = allocator.copy()
    assert fork.next() == 11
    assert allocator.current() == 10


@pytest.mark.parametrize("baseline", [-1, 1.5, "100", True])
def test_rejects_invalid_baseline(baseline: object) -> None:
    with pytest.raises(ValueError):
        StackOrderAllocator(baseline)  # type: ignore[arg-type]
