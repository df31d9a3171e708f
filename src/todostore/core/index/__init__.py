from __future__ import annotations

from .ids import next_id
from .sorted_index import (
    find,
    insert_sorted,
    insertion_point,
    is_strictly_ascending,
    remove_at,
    replace_at,
)

__all__ = [
    "find",
    "insertion_point",
    "insert_sorted",
    "remove_at",
    "replace_at",
    "is_strictly_ascending",
    "next_id",
]
