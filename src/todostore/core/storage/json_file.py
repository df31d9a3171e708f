"""Disk-backed record storage as a single indented JSON array.

This module persists the whole todo collection to one file.

- Default path: `TODOSTORE_DATA_FILE` env var (via settings) or `todos.json`
- Content:      `[{"id": 1, "contents": "..."}, ...]`, two-space indent,
                trailing newline

Load semantics
--------------
- A missing file is the first-use case and yields `[]`.
- The decoded array is re-sorted by id before it is returned, so a
  hand-edited file cannot break binary search.
- Undecodable bytes, bad JSON, a non-array payload, invalid records (including
  blank contents) or duplicate ids raise `ParseError`. A JSON `null` reads as
  an empty collection.

Save semantics
--------------
`save` truncates and rewrites the file in full on every call. There is no
temp-file-and-rename: a crash mid-write can leave a truncated file. This is
a known durability gap for a store of this size.

Usage
-----
>>> storage = JsonFileStorage(Path("todos.json"))
>>> storage.save([Record(id=1, contents="buy milk")])
>>> storage.load()
[Record(id=1, contents='buy milk')]
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import pydantic
from pydantic import TypeAdapter

from todostore.core.contracts.record import Record
from todostore.core.errors import ParseError, StorageIOError
from todostore.core.index.sorted_index import is_strictly_ascending
from todostore.core.settings import get_logger, load_settings

_RECORDS = TypeAdapter(list[Record])

logger = get_logger("todostore.storage")


def _default_path() -> Path:
    """Return the configured data file path."""
    return load_settings().data_file


class JsonFileStorage:
    """Persist the record sequence to a JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path if path is not None else _default_path()

    def load(self) -> list[Record]:
        """Read and decode the file; return records sorted by id."""
        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            logger.debug("No data file at %s; starting empty", self.path)
            return []
        except UnicodeDecodeError as exc:
            raise ParseError(f"{self.path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise StorageIOError(f"failed to read {self.path}: {exc}") from exc

        records = self._decode(raw)
        records.sort(key=lambda r: r.id)
        if not is_strictly_ascending(records):
            raise ParseError(f"{self.path} contains duplicate todo ids")

        logger.debug("Loaded %d todos from %s", len(records), self.path)
        return records

    def save(self, records: Sequence[Record]) -> None:
        """Overwrite the file with the complete sequence."""
        payload = [r.model_dump() for r in records]
        try:
            if not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.write("\n")
        except OSError as exc:
            raise StorageIOError(f"failed to write {self.path}: {exc}") from exc

        logger.debug("Saved %d todos to %s", len(payload), self.path)

    def _decode(self, raw: str) -> list[Record]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ParseError(f"{self.path} is not valid JSON: {exc}") from exc

        if data is None:
            return []
        if not isinstance(data, list):
            raise ParseError(f"{self.path} must hold a JSON array of todos")

        try:
            return _RECORDS.validate_json(raw, strict=True)
        except pydantic.ValidationError as exc:
            raise ParseError(f"{self.path} holds invalid todo records: {exc}") from exc


__all__ = ["JsonFileStorage"]
