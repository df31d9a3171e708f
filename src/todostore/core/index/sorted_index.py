"""
Sorted Index: binary search and ordered insert/remove over records.

Every function here operates on a sequence of :class:`Record` objects that is
already strictly ascending by ``id``. None of them re-validate that
precondition (that would turn O(log n) lookups into O(n) scans); the
persistence layer restores the order on load and the service only ever
produces sorted sequences.

Functions never mutate their input. ``insert_sorted`` and ``remove_at`` build
new lists so a caller can discard the result if persisting it fails.

Complexity
----------
- ``find`` / ``insertion_point`` : O(log n)
- ``insert_sorted`` / ``remove_at`` : O(n) (list copy with a shift)
"""

from __future__ import annotations

from collections.abc import Sequence

from todostore.core.contracts.record import Record


def find(records: Sequence[Record], target_id: int) -> int | None:
    """Return the index of the record with ``target_id``, or ``None``.

    Classic closed-interval binary search over ``[0, len - 1]``.
    """
    left, right = 0, len(records) - 1

    while left <= right:
        mid = left + (right - left) // 2
        mid_id = records[mid].id

        if mid_id == target_id:
            return mid
        if mid_id < target_id:
            left = mid + 1
        else:
            right = mid - 1

    return None


def insertion_point(records: Sequence[Record], target_id: int) -> int:
    """Return the leftmost index ``i`` with ``records[i].id >= target_id``.

    Equals ``len(records)`` when every id is smaller, and 0 for an empty
    sequence.
    """
    left, right = 0, len(records)

    while left < right:
        mid = left + (right - left) // 2
        if records[mid].id < target_id:
            left = mid + 1
        else:
            right = mid

    return left


def insert_sorted(records: Sequence[Record], record: Record) -> list[Record]:
    """Return a new list with ``record`` placed at its sorted position.

    The caller guarantees ``record.id`` is not already present.
    """
    pos = insertion_point(records, record.id)
    return [*records[:pos], record, *records[pos:]]


def remove_at(records: Sequence[Record], index: int) -> list[Record]:
    """Return a new list without the element at ``index``.

    Raises
    ------
    IndexError
        If ``index`` is outside ``[0, len(records) - 1]``.
    """
    if not 0 <= index < len(records):
        raise IndexError(f"index {index} out of range for {len(records)} records")
    return [*records[:index], *records[index + 1 :]]


def replace_at(records: Sequence[Record], index: int, record: Record) -> list[Record]:
    """Return a new list with the element at ``index`` swapped for ``record``.

    The replacement must keep the same id; only contents may change.
    """
    if records[index].id != record.id:
        raise ValueError("replace_at cannot change a record id")
    return [*records[:index], record, *records[index + 1 :]]


def is_strictly_ascending(records: Sequence[Record]) -> bool:
    """Return True if ids strictly increase (sorted and unique)."""
    return all(a.id < b.id for a, b in zip(records, records[1:], strict=False))


def linear_find(records: Sequence[Record], target_id: int) -> int | None:
    """Reference O(n) scan; used by the search benchmark as the baseline."""
    for i, record in enumerate(records):
        if record.id == target_id:
            return i
    return None


__all__ = [
    "find",
    "insertion_point",
    "insert_sorted",
    "remove_at",
    "replace_at",
    "is_strictly_ascending",
    "linear_find",
]
