# src/todostore/cli.py
"""
todostore Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`.
Every data command goes through the same `TodoService` the HTTP API uses, so
the sorted-index and locking guarantees hold here too.

Features
--------
- **CRUD**: `list`, `add`, `edit`, `remove` against a JSON data file.
- **Server**: `serve` starts the FastAPI app under uvicorn.
- **Benchmark**: `bench` compares linear and binary search timings.

Usage
-----
    $ todostore add "buy milk"
    $ todostore list --file /tmp/todos.json
    $ todostore bench --size 1000 --size 100000
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from todostore.core.contracts.record import Record
from todostore.core.errors import TodoStoreError
from todostore.core.index.bench import compare_search
from todostore.core.service import TodoService
from todostore.core.settings import load_settings

# Ensure env vars (like TODOSTORE_DATA_FILE) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="todostore: a sorted, file-backed todo list.",
    rich_markup_mode="markdown",
)
console = Console()

DEFAULT_BENCH_SIZES = [100, 1000, 10000, 100000]

FileOption = Annotated[
    Path | None,
    typer.Option(
        "--file",
        "-f",
        dir_okay=False,
        help="JSON data file (defaults to TODOSTORE_DATA_FILE or todos.json).",
    ),
]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _service(file: Path | None) -> TodoService:
    """Build a service for `file`, falling back to the configured data file."""
    return TodoService.for_file(file if file is not None else load_settings().data_file)


def _render_records(records: list[Record]) -> None:
    """Print records as a two-column table."""
    if not records:
        console.print("[dim]No todos yet.[/dim]")
        return

    table = Table(title=f"Todos ({len(records)})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Contents")
    for record in records:
        table.add_row(str(record.id), escape(record.contents))
    console.print(table)


def _fail(exc: TodoStoreError) -> typer.Exit:
    """Print a store error and return the Exit to raise."""
    console.print(f"[bold red]❌ Error ({exc.kind}):[/bold red] {escape(str(exc))}")
    return typer.Exit(code=1)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command("list")  # type: ignore[misc]
def list_todos(file: FileOption = None) -> None:
    """Show every todo, ascending by id."""
    try:
        records = _service(file).get_all()
    except TodoStoreError as e:
        raise _fail(e) from e
    _render_records(records)


@app.command()  # type: ignore[misc]
def add(
    contents: Annotated[str, typer.Argument(help="Todo text.")],
    file: FileOption = None,
) -> None:
    """Create a todo; its id is one past the current maximum."""
    try:
        record = _service(file).create(contents)
    except TodoStoreError as e:
        raise _fail(e) from e
    console.print(f"[bold green]✅ Created[/bold green] #{record.id}: {escape(record.contents)}")


@app.command()  # type: ignore[misc]
def edit(
    todo_id: Annotated[int, typer.Argument(metavar="ID", help="Id of the todo to change.")],
    contents: Annotated[str, typer.Argument(help="New todo text.")],
    file: FileOption = None,
) -> None:
    """Replace the contents of an existing todo."""
    try:
        record = _service(file).update(todo_id, contents)
    except TodoStoreError as e:
        raise _fail(e) from e
    console.print(f"[bold green]✅ Updated[/bold green] #{record.id}: {escape(record.contents)}")


@app.command()  # type: ignore[misc]
def remove(
    todo_id: Annotated[int, typer.Argument(metavar="ID", help="Id of the todo to delete.")],
    file: FileOption = None,
) -> None:
    """Delete a todo by id."""
    try:
        _service(file).delete(todo_id)
    except TodoStoreError as e:
        raise _fail(e) from e
    console.print(f"[bold green]✅ Deleted[/bold green] #{todo_id}")


@app.command()  # type: ignore[misc]
def serve(
    host: Annotated[str | None, typer.Option(help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option(help="Bind port.")] = None,
    reload: Annotated[bool, typer.Option(help="Auto-reload on code changes.")] = False,
) -> None:
    """Run the HTTP API (GET/POST /todos, PUT/DELETE /todos/{id})."""
    # Imported lazily: building the ASGI app reads settings at import time.
    from todostore.api import server

    server.main(host=host, port=port, reload=reload)


@app.command()  # type: ignore[misc]
def bench(
    size: Annotated[
        list[int] | None,
        typer.Option("--size", "-s", min=1, help="Collection size; repeatable."),
    ] = None,
    iterations: Annotated[
        int, typer.Option("--iterations", "-n", min=1, help="Lookups per strategy.")
    ] = 1000,
) -> None:
    """Compare linear and binary search over synthetic sorted todos."""
    sizes = size or DEFAULT_BENCH_SIZES

    console.print(
        Panel.fit(
            "[bold cyan]Linear Search vs Binary Search[/bold cyan]",
            border_style="cyan",
        )
    )

    table = Table()
    table.add_column("Todos", justify="right")
    table.add_column("Linear (avg)", justify="right")
    table.add_column("Binary (avg)", justify="right")
    table.add_column("Speedup", justify="right", style="green")

    for n in sizes:
        timing = compare_search(n, iterations)
        table.add_row(
            f"{n:,}",
            f"{timing.linear_seconds / iterations * 1e6:.2f} µs",
            f"{timing.binary_seconds / iterations * 1e6:.2f} µs",
            f"{timing.speedup:.2f}x",
        )

    console.print(table)
    console.print("[dim]Linear search is O(n); binary search is O(log n).[/dim]")


if __name__ == "__main__":
    app()
