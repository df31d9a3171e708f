"""
Storage protocol plus an in-memory implementation.

The service only ever needs two calls from a backend:

- ``load()``  -> the complete record sequence, sorted ascending by id.
- ``save(records)`` -> overwrite the complete sequence.

Keeping the contract that small lets the service and the sorted index be
tested against :class:`MemoryStorage`, with no filesystem involved.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from todostore.core.contracts.record import Record


@runtime_checkable
class RecordStorage(Protocol):
    """Full-snapshot persistence for the record sequence."""

    def load(self) -> list[Record]:
        """Return every stored record, sorted ascending by id."""
        ...

    def save(self, records: Sequence[Record]) -> None:
        """Replace the stored sequence with ``records`` (in the given order)."""
        ...


class MemoryStorage:
    """Volatile storage backed by a Python list.

    Both ``load`` and ``save`` copy the list, so callers can never alias the
    stored state. Records themselves are frozen and safe to share.

    Attributes
    ----------
    save_count : int
        Number of successful ``save`` calls (handy in tests).
    """

    __slots__ = ("_records", "save_count")

    def __init__(self, records: Sequence[Record] | None = None) -> None:
        self._records: list[Record] = sorted(records or (), key=lambda r: r.id)
        self.save_count: int = 0

    def load(self) -> list[Record]:
        return list(self._records)

    def save(self, records: Sequence[Record]) -> None:
        self._records = list(records)
        self.save_count += 1


__all__ = ["RecordStorage", "MemoryStorage"]
