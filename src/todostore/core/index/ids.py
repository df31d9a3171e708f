"""ID allocation: the next id is one past the current maximum."""

from __future__ import annotations

from collections.abc import Iterable

from todostore.core.contracts.record import Record


def next_id(records: Iterable[Record]) -> int:
    """Return ``1 + max(id)``, or 1 for an empty collection.

    Ids freed by deleting a non-maximal record are never handed out again.
    Deleting the current maximum lowers the max, so its id comes back on the
    next allocation. Callers rely on this exact rule.
    """
    return max((r.id for r in records), default=0) + 1


__all__ = ["next_id"]
