"""
ASGI Entry Point for the todostore API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` first so that the settings module
and the service singleton see `TODOSTORE_DATA_FILE` and friends.

Usage
-----
Run via the module entry point:
    $ python -m todostore.api.server

Or via uvicorn directly:
    $ uvicorn todostore.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env BEFORE importing the application factory.
load_dotenv(dotenv_path=Path(".env"))

from todostore.api.app import create_app  # noqa: E402
from todostore.core.settings import get_logger, load_settings  # noqa: E402

# Factory invocation
app = create_app()


def main(host: str | None = None, port: int | None = None, reload: bool = False) -> None:
    """Run the API server; defaults come from settings."""
    cfg = load_settings()
    bind_host = host or cfg.host
    bind_port = port or cfg.port

    logger = get_logger("todostore.server")
    logger.info("todostore server starting on %s:%d", bind_host, bind_port)
    logger.info("  GET    /todos       - Get all todos")
    logger.info("  POST   /todos       - Create a new todo")
    logger.info("  PUT    /todos/{id}  - Update a todo")
    logger.info("  DELETE /todos/{id}  - Delete a todo")

    uvicorn.run(
        "todostore.api.server:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
