"""Unit tests for the pure sorted-index algorithms and the id allocator."""

from __future__ import annotations

import pytest

from todostore.core.contracts.record import Record
from todostore.core.index import (
    find,
    insert_sorted,
    insertion_point,
    is_strictly_ascending,
    next_id,
    remove_at,
    replace_at,
)
from todostore.core.index.sorted_index import linear_find


def _records(*ids: int) -> list[Record]:
    return [Record(id=i, contents=f"todo {i}") for i in ids]


ODD = _records(1, 3, 5, 7, 9)


@pytest.mark.parametrize(  # type: ignore[misc]
    ("target", "expected"),
    [
        (1, 0),  # first element
        (9, 4),  # last element
        (5, 2),  # middle element
        (3, 1),  # first half
        (7, 3),  # second half
        (2, None),  # between existing ids
        (0, None),  # before first
        (10, None),  # after last
    ],
)
def test_find(target: int, expected: int | None) -> None:
    """Binary search returns the index of an id or None when it is absent."""
    assert find(ODD, target) == expected


def test_find_agrees_with_linear_scan() -> None:
    """Every id in and around the range gives the same answer as a scan."""
    records = _records(2, 4, 8, 16, 32, 64)
    for target in range(0, 70):
        assert find(records, target) == linear_find(records, target)


def test_find_on_empty_and_single() -> None:
    """Edge sizes: empty sequence and a single element."""
    assert find([], 1) is None
    single = _records(4)
    assert find(single, 4) == 0
    assert find(single, 3) is None
    assert find(single, 5) is None


@pytest.mark.parametrize(  # type: ignore[misc]
    ("target", "expected"),
    [(0, 0), (1, 0), (2, 1), (5, 2), (6, 2), (7, 2), (8, 3), (100, 3)],
)
def test_insertion_point(target: int, expected: int) -> None:
    """Leftmost index whose id is >= target."""
    assert insertion_point(_records(1, 3, 7), target) == expected


def test_insertion_point_empty() -> None:
    """An empty sequence always inserts at 0."""
    assert insertion_point([], 42) == 0


def test_insert_sorted_keeps_invariant_for_every_gap() -> None:
    """Any missing id lands in its slot; result is ascending and complete."""
    base = _records(2, 4, 6, 8, 10)
    for new_id in (1, 3, 5, 7, 9, 11):
        new = Record(id=new_id, contents="new")

        result = insert_sorted(base, new)

        assert len(result) == len(base) + 1
        assert result[insertion_point(base, new_id)] == new
        assert is_strictly_ascending(result)
        assert [r.id for r in result].count(new_id) == 1
        assert all(r in result for r in base)


def test_insert_sorted_documented_positions() -> None:
    """Begin, middle and end insertions into [3, 7, 9]."""
    base = _records(3, 7, 9)
    assert insert_sorted(base, Record(id=1, contents="a"))[0].id == 1
    assert insert_sorted(base, Record(id=5, contents="b"))[1].id == 5
    assert insert_sorted(base, Record(id=8, contents="c"))[2].id == 8
    assert insert_sorted(base, Record(id=10, contents="d"))[3].id == 10


def test_insert_sorted_leaves_input_untouched() -> None:
    """The input list is never mutated."""
    base = _records(1, 2)
    insert_sorted(base, Record(id=3, contents="x"))
    assert [r.id for r in base] == [1, 2]


def test_insert_into_empty() -> None:
    """Inserting into an empty sequence yields a single-element list."""
    result = insert_sorted([], Record(id=1, contents="first"))
    assert [r.id for r in result] == [1]


def test_remove_at_then_find_is_absent() -> None:
    """Removing an element makes it unfindable and keeps the order."""
    for index, record in enumerate(ODD):
        result = remove_at(ODD, index)
        assert len(result) == len(ODD) - 1
        assert find(result, record.id) is None
        assert is_strictly_ascending(result)
    assert len(ODD) == 5


def test_remove_at_out_of_range() -> None:
    """Out-of-range indexes raise instead of silently doing nothing."""
    with pytest.raises(IndexError):
        remove_at(ODD, 5)
    with pytest.raises(IndexError):
        remove_at([], 0)


def test_replace_at_keeps_id() -> None:
    """`replace_at` swaps contents but refuses to change an id."""
    result = replace_at(ODD, 2, Record(id=5, contents="changed"))
    assert result[2].contents == "changed"
    assert ODD[2].contents == "todo 5"
    with pytest.raises(ValueError):
        replace_at(ODD, 2, Record(id=6, contents="nope"))


def test_is_strictly_ascending() -> None:
    """Duplicates and descending pairs break the invariant."""
    assert is_strictly_ascending([])
    assert is_strictly_ascending(_records(1))
    assert is_strictly_ascending(_records(1, 2, 10))
    assert not is_strictly_ascending(_records(2, 1))
    assert not is_strictly_ascending(_records(1, 1))


def test_next_id() -> None:
    """Next id is max + 1; gaps below the max are never reused."""
    assert next_id([]) == 1
    assert next_id(_records(1)) == 2
    assert next_id(_records(1, 2, 3)) == 4
    assert next_id(_records(2, 3)) == 4  # id 1 deleted earlier: not reused
    assert next_id(_records(1)) == 2  # id 2 (old max) deleted: comes back
