from __future__ import annotations

from .base import MemoryStorage, RecordStorage
from .json_file import JsonFileStorage

__all__ = ["RecordStorage", "MemoryStorage", "JsonFileStorage"]
