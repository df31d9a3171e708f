"""
Linear vs. binary search timing over synthetic records.

Used by ``todostore bench`` to show how lookup cost grows with collection
size. Records are generated with ids ``1..size`` (already sorted), and the
target sits near the end of the range, which is the worst realistic case for
a linear scan.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from todostore.core.contracts.record import Record

from .sorted_index import find, linear_find


@dataclass(frozen=True, slots=True)
class SearchTiming:
    """Wall-clock totals for one benchmark size."""

    size: int
    iterations: int
    target_id: int
    linear_seconds: float
    binary_seconds: float

    @property
    def speedup(self) -> float:
        """How many times faster binary search was (``inf`` if it took ~0s)."""
        if self.binary_seconds <= 0:
            return float("inf")
        return self.linear_seconds / self.binary_seconds


def make_records(size: int) -> list[Record]:
    """Build ``size`` records with ids ``1..size``."""
    return [Record(id=i, contents=f"Todo item {i}") for i in range(1, size + 1)]


def compare_search(size: int, iterations: int = 1000) -> SearchTiming:
    """Time ``iterations`` lookups of ``size - 10`` with both strategies."""
    if size < 1:
        raise ValueError("size must be positive")
    if iterations < 1:
        raise ValueError("iterations must be positive")

    records = make_records(size)
    target_id = max(size - 10, 1)

    start = time.perf_counter()
    for _ in range(iterations):
        linear_find(records, target_id)
    linear_seconds = time.perf_counter() - start

    start = time.perf_counter()
    for _ in range(iterations):
        find(records, target_id)
    binary_seconds = time.perf_counter() - start

    return SearchTiming(
        size=size,
        iterations=iterations,
        target_id=target_id,
        linear_seconds=linear_seconds,
        binary_seconds=binary_seconds,
    )


__all__ = ["SearchTiming", "make_records", "compare_search"]
