"""Tests for `TodoService`: CRUD semantics, errors and write serialization."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from todostore.core.contracts.record import Record
from todostore.core.errors import NotFoundError, StorageIOError, ValidationError
from todostore.core.index import is_strictly_ascending
from todostore.core.service import TodoService, get_service, normalize_contents
from todostore.core.storage import MemoryStorage


@pytest.fixture  # type: ignore[misc]
def service() -> TodoService:
    """A service over fresh in-memory storage."""
    return TodoService(MemoryStorage())


class FailingSaveStorage(MemoryStorage):
    """MemoryStorage whose `save` can be switched to fail."""

    __slots__ = ("fail",)

    def __init__(self, records: Sequence[Record] | None = None) -> None:
        super().__init__(records)
        self.fail = False

    def save(self, records: Sequence[Record]) -> None:
        if self.fail:
            raise StorageIOError("disk full")
        super().save(records)


class SlowStorage(MemoryStorage):
    """MemoryStorage that yields between load and save to widen race windows."""

    __slots__ = ()

    def load(self) -> list[Record]:
        records = super().load()
        time.sleep(0.001)
        return records


def _pairs(records: list[Record]) -> list[tuple[int, str]]:
    return [(r.id, r.contents) for r in records]


def test_documented_scenario(service: TodoService) -> None:
    """create, create, update, delete, list."""
    assert _pairs([service.create("buy milk")]) == [(1, "buy milk")]
    assert _pairs([service.create("walk dog")]) == [(2, "walk dog")]
    assert _pairs([service.update(1, "buy oat milk")]) == [(1, "buy oat milk")]
    assert service.delete(2) is None
    assert _pairs(service.get_all()) == [(1, "buy oat milk")]

    with pytest.raises(NotFoundError):
        service.update(999, "x")
    with pytest.raises(NotFoundError) as excinfo:
        service.delete(999)
    assert excinfo.value.record_id == 999
    assert excinfo.value.to_payload() == {
        "kind": "not_found",
        "detail": "todo with ID 999 not found",
        "id": 999,
    }


def test_id_allocation_never_fills_gaps(service: TodoService) -> None:
    """Ids are max + 1: 1, 2, then 3 after deleting 1."""
    assert service.create("a").id == 1
    assert service.create("b").id == 2
    service.delete(1)
    assert service.create("c").id == 3


def test_deleting_max_frees_its_id(service: TodoService) -> None:
    """Deleting the current maximum lets the next create reuse it."""
    service.create("a")
    service.create("b")
    service.delete(2)
    assert service.create("c").id == 2


def test_contents_are_trimmed(service: TodoService) -> None:
    """Leading/trailing whitespace is stripped on create and update."""
    assert service.create("  pad me \n").contents == "pad me"
    assert service.update(1, "\tagain  ").contents == "again"


@pytest.mark.parametrize("bad", ["", "   ", "\n\t"])  # type: ignore[misc]
def test_blank_contents_rejected_without_touching_storage(bad: str) -> None:
    """Validation fails before any load/save happens."""
    storage = MemoryStorage([Record(id=1, contents="keep")])
    service = TodoService(storage)

    with pytest.raises(ValidationError):
        service.create(bad)
    with pytest.raises(ValidationError):
        service.update(1, bad)

    assert storage.save_count == 0
    assert _pairs(service.get_all()) == [(1, "keep")]


def test_validation_checked_before_not_found(service: TodoService) -> None:
    """`update` with blank contents on a missing id reports validation."""
    with pytest.raises(ValidationError):
        service.update(42, " ")


def test_normalize_contents() -> None:
    """The shared validator trims and rejects blanks."""
    assert normalize_contents(" x ") == "x"
    with pytest.raises(ValidationError):
        normalize_contents("   ")


def test_failed_save_is_not_committed() -> None:
    """If `save` fails, the error surfaces and stored state is unchanged."""
    storage = FailingSaveStorage([Record(id=1, contents="one")])
    service = TodoService(storage)
    storage.fail = True

    with pytest.raises(StorageIOError):
        service.create("two")
    with pytest.raises(StorageIOError):
        service.update(1, "changed")
    with pytest.raises(StorageIOError):
        service.delete(1)

    storage.fail = False
    assert _pairs(service.get_all()) == [(1, "one")]
    assert service.create("two").id == 2


def test_returned_records_do_not_alias_storage(service: TodoService) -> None:
    """Mutating the list from `get_all` never leaks into the store."""
    service.create("a")
    snapshot = service.get_all()
    snapshot.clear()
    assert len(service.get_all()) == 1


def test_concurrent_creates_lose_nothing() -> None:
    """Parallel creates get distinct ids 1..N and all survive."""
    service = TodoService(SlowStorage())
    n = 40

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda i: service.create(f"item {i}"), range(n)))

    assert sorted(r.id for r in created) == list(range(1, n + 1))
    records = service.get_all()
    assert len(records) == n
    assert is_strictly_ascending(records)


def test_concurrent_mixed_writes_are_serialized() -> None:
    """Updates and deletes racing with creates never resurrect or drop rows."""
    seed = [Record(id=i, contents=f"seed {i}") for i in range(1, 21)]
    service = TodoService(SlowStorage(seed))
    barrier = threading.Barrier(3)

    def creator() -> None:
        barrier.wait()
        for i in range(10):
            service.create(f"new {i}")

    def updater() -> None:
        barrier.wait()
        for i in range(1, 11):
            service.update(i, f"updated {i}")

    def deleter() -> None:
        barrier.wait()
        for i in range(11, 21):
            service.delete(i)

    threads = [threading.Thread(target=fn) for fn in (creator, updater, deleter)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(10)

    records = service.get_all()
    by_id = {r.id: r.contents for r in records}
    assert is_strictly_ascending(records)
    assert all(by_id[i] == f"updated {i}" for i in range(1, 11))
    assert all(not c.startswith("seed") for i, c in by_id.items() if i > 10)
    assert sum(1 for c in by_id.values() if c.startswith("new ")) == 10
    assert len(records) == 20


def test_file_backed_service_persists(tmp_path: Path) -> None:
    """A second service over the same file sees the first one's writes."""
    path = tmp_path / "todos.json"
    TodoService.for_file(path).create("persist me")

    assert _pairs(TodoService.for_file(path).get_all()) == [(1, "persist me")]


def test_get_service_singleton(tmp_path: Path) -> None:
    """`get_service` returns the installed instance until it is reset."""
    mine = TodoService.for_file(tmp_path / "x.json")
    TodoService.reset_instance(mine)
    try:
        assert get_service() is mine
    finally:
        TodoService.reset_instance()


def test_get_instance_is_single_under_contention(monkeypatch: pytest.MonkeyPatch) -> None:
    """Concurrent first calls to `get_instance` all share one service and lock."""

    def slow_storage() -> MemoryStorage:
        time.sleep(0.02)
        return MemoryStorage()

    monkeypatch.setattr("todostore.core.service.JsonFileStorage", slow_storage)
    TodoService.reset_instance()
    barrier = threading.Barrier(8)

    def first_call() -> TodoService:
        barrier.wait()
        return TodoService.get_instance()

    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            instances = list(pool.map(lambda _: first_call(), range(8)))
        assert len({id(s) for s in instances}) == 1
    finally:
        TodoService.reset_instance()
