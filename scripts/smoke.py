# scripts/smoke.py
"""
Smoke Test Script for the todostore core.

Runs the canonical CRUD scenario, then hammers one service with concurrent
creates from many threads and checks that no write was lost.

Usage
-----
1. Use a throwaway temp file:
    $ python scripts/smoke.py

2. Use a specific data file (it is overwritten):
    $ python scripts/smoke.py --file /tmp/todos.json --threads 32
"""

import argparse
import logging
import sys
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from todostore.core.index import is_strictly_ascending
from todostore.core.service import TodoService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger("smoke")


def run_scenario(service: TodoService) -> None:
    """create, create, update, delete, list."""
    first = service.create("buy milk")
    second = service.create("walk dog")
    service.update(first.id, "buy oat milk")
    service.delete(second.id)
    remaining = service.get_all()
    log.info("Scenario result: %s", [r.model_dump() for r in remaining])
    assert [(r.id, r.contents) for r in remaining] == [(1, "buy oat milk")]


def run_concurrent_creates(service: TodoService, threads: int, per_thread: int) -> None:
    """Fire `threads * per_thread` creates in parallel and verify the result."""
    before = len(service.get_all())

    def worker(n: int) -> None:
        for i in range(per_thread):
            service.create(f"worker {n} item {i}")

    with ThreadPoolExecutor(max_workers=threads) as pool:
        list(pool.map(worker, range(threads)))

    records = service.get_all()
    expected = before + threads * per_thread
    log.info("Concurrent creates: expected %d records, found %d", expected, len(records))
    assert len(records) == expected, "lost update detected"
    assert is_strictly_ascending(records)


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run todostore smoke test")
    parser.add_argument("--file", "-f", type=Path, help="Data file to use (overwritten)")
    parser.add_argument("--threads", "-t", type=int, default=16)
    parser.add_argument("--per-thread", "-n", type=int, default=10)
    args = parser.parse_args()

    with tempfile.TemporaryDirectory() as tmp:
        path = args.file or Path(tmp) / "todos.json"
        path.unlink(missing_ok=True)
        service = TodoService.for_file(path)

        run_scenario(service)
        run_concurrent_creates(service, args.threads, args.per_thread)

    log.info("✅ Smoke test passed")


if __name__ == "__main__":
    main()
