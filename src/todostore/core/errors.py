"""Typed error taxonomy for the todo store.

Every failure raised by the core derives from :class:`TodoStoreError` and
carries a stable ``kind`` label so transports (HTTP, CLI) can map it without
string matching:

- ``validation`` : contents empty or whitespace-only.
- ``not_found``  : update/delete referencing an unknown id.
- ``io``         : the backing file could not be opened, read or written.
- ``parse``      : the backing file does not hold a valid record array.

The core never retries or recovers; errors surface to the immediate caller.
"""

from __future__ import annotations

from typing import Any, ClassVar


class TodoStoreError(Exception):
    """Base class for all todo store failures."""

    kind: ClassVar[str] = "error"

    def to_payload(self) -> dict[str, Any]:
        """Return a deterministic, JSON-safe description of the failure."""
        return {"kind": self.kind, "detail": str(self)}


class ValidationError(TodoStoreError):
    """Raised when todo contents are empty after trimming."""

    kind: ClassVar[str] = "validation"


class NotFoundError(TodoStoreError):
    """Raised when no record carries the requested id."""

    kind: ClassVar[str] = "not_found"

    def __init__(self, record_id: int) -> None:
        super().__init__(f"todo with ID {record_id} not found")
        self.record_id = record_id

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["id"] = self.record_id
        return payload


class StorageIOError(TodoStoreError):
    """Raised when the backing file cannot be opened, read or written."""

    kind: ClassVar[str] = "io"


class ParseError(TodoStoreError):
    """Raised when the persisted payload is not a valid record array."""

    kind: ClassVar[str] = "parse"


__all__ = [
    "TodoStoreError",
    "ValidationError",
    "NotFoundError",
    "StorageIOError",
    "ParseError",
]
