"""
Todo service: the operation set exposed to the API and the CLI.

Each write operation (``create`` / ``update`` / ``delete``) runs one
read-modify-write cycle inside a single exclusive section:

    load  ->  apply sorted-index change to a copy  ->  save  ->  return

Locking ``load`` and ``save`` separately would let two writers load the same
snapshot and the second save would silently drop the first one's change
(lost update). ``get_all`` only reads, so it takes a shared section.

Error contract
--------------
- ``ValidationError`` : contents empty after trimming (checked before the
  lock is taken; storage is never touched).
- ``NotFoundError``   : unknown id on update/delete.
- ``StorageIOError`` / ``ParseError`` : propagated unchanged from storage.

If ``save`` raises, the operation raises too; the mutated copy is dropped and
nothing is reported as committed.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import ClassVar

from todostore.core.contracts.record import Record
from todostore.core.errors import NotFoundError, ValidationError
from todostore.core.index import find, insert_sorted, next_id, remove_at, replace_at
from todostore.core.locking import ReadWriteLock
from todostore.core.settings import get_logger
from todostore.core.storage import JsonFileStorage, RecordStorage

logger = get_logger("todostore.service")


def normalize_contents(contents: str) -> str:
    """Trim ``contents`` and reject empty or whitespace-only text."""
    text = contents.strip()
    if not text:
        logger.warning("Rejected todo with empty contents")
        raise ValidationError("contents cannot be empty")
    return text


class TodoService:
    """Sorted, persisted todo collection with serialized writes.

    Parameters
    ----------
    storage:
        Any :class:`RecordStorage`; defaults to :class:`JsonFileStorage`
        at the configured data file.
    """

    # Process-wide instance used by the API dependency (see `get_service`).
    _instance: ClassVar[TodoService | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, storage: RecordStorage | None = None) -> None:
        self.storage: RecordStorage = storage if storage is not None else JsonFileStorage()
        self._lock = ReadWriteLock()

    @classmethod
    def get_instance(cls) -> TodoService:
        """Accessor for the global singleton instance."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset_instance(cls, service: TodoService | None = None) -> None:
        """Replace (or clear) the global instance; used by app setup and tests."""
        with cls._instance_lock:
            cls._instance = service

    @classmethod
    def for_file(cls, path: Path) -> TodoService:
        """Build a service backed by the JSON file at ``path``."""
        return cls(JsonFileStorage(path))

    # ------------------------------- Reads ----------------------------------

    def get_all(self) -> list[Record]:
        """Return every record, ascending by id."""
        with self._lock.shared():
            return self.storage.load()

    # ------------------------------- Writes ---------------------------------

    def create(self, contents: str) -> Record:
        """Append a new todo with the next id and return it."""
        text = normalize_contents(contents)

        with self._lock.exclusive():
            records = self.storage.load()
            record = Record(id=next_id(records), contents=text)
            self.storage.save(insert_sorted(records, record))

        logger.info("Created todo %d", record.id)
        return record

    def update(self, record_id: int, contents: str) -> Record:
        """Replace the contents of todo ``record_id`` and return it."""
        text = normalize_contents(contents)

        with self._lock.exclusive():
            records = self.storage.load()
            index = find(records, record_id)
            if index is None:
                logger.warning("Update rejected: todo %d not found", record_id)
                raise NotFoundError(record_id)

            record = records[index].model_copy(update={"contents": text})
            self.storage.save(replace_at(records, index, record))

        logger.info("Updated todo %d", record.id)
        return record

    def delete(self, record_id: int) -> None:
        """Remove todo ``record_id``."""
        with self._lock.exclusive():
            records = self.storage.load()
            index = find(records, record_id)
            if index is None:
                logger.warning("Delete rejected: todo %d not found", record_id)
                raise NotFoundError(record_id)

            self.storage.save(remove_at(records, index))

        logger.info("Deleted todo %d", record_id)


# Global accessor for convenience (FastAPI dependency)
def get_service() -> TodoService:
    return TodoService.get_instance()


__all__ = ["TodoService", "get_service", "normalize_contents"]
