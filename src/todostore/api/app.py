"""
FastAPI Application Factory & Configuration.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Middleware Setup**: CORS (Cross-Origin Resource Sharing) for frontend access.
2.  **Exception Handling**: Mapping typed store errors to HTTP statuses and
    returning structured JSON for everything else.
3.  **Routing**: Mounting the todo router and the health probe.
4.  **Lifecycle**: Making sure the service singleton exists before requests.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`). This allows for:
-   Easy testing (each test builds its own app around its own service).
-   Storage injection (a pre-built `TodoService` overrides the dependency).

Error mapping
-------------
The core knows nothing about HTTP; this is the only place statuses are chosen.

    ValidationError            -> 400
    NotFoundError              -> 404
    StorageIOError, ParseError -> 500
    malformed body / bad id    -> 400
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todostore import __version__
from todostore.api.routers import todos
from todostore.api.schemas import HealthInfo
from todostore.core.errors import NotFoundError, TodoStoreError, ValidationError
from todostore.core.service import TodoService, get_service
from todostore.core.settings import get_logger, load_settings

logger = get_logger("todostore.api")

_STATUS_FOR_ERROR: dict[type[TodoStoreError], int] = {
    ValidationError: HTTPStatus.BAD_REQUEST,
    NotFoundError: HTTPStatus.NOT_FOUND,
}


def status_for(exc: TodoStoreError) -> int:
    """Return the HTTP status for a store error (500 unless mapped)."""
    for cls, code in _STATUS_FOR_ERROR.items():
        if isinstance(exc, cls):
            return int(code)
    return int(HTTPStatus.INTERNAL_SERVER_ERROR)


def _error_response(code: int, payload: dict[str, Any]) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content={"error": HTTPStatus(code).phrase, **payload},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    ASGI Lifespan context manager.

    - **Startup**: Initialize the service singleton unless a test injected one.
    - **Shutdown**: Nothing to release; every save already hit the disk.
    """
    logger.info("todostore API starting up")
    if get_service not in app.dependency_overrides:
        service = TodoService.get_instance()
        logger.info("Serving todos from %s", getattr(service.storage, "path", "memory"))

    yield

    logger.info("todostore API shutting down")


def create_app(service: TodoService | None = None) -> FastAPI:
    """
    Construct and configure the todostore FastAPI application.

    Parameters
    ----------
    service:
        Optional pre-built service. When given, every request uses it instead
        of the process-wide singleton.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="todostore API",
        description="Sorted, file-backed todo list",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    if service is not None:
        app.dependency_overrides[get_service] = lambda: service

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # -----------------------------------------------------------------------
    # Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(TodoStoreError)
    async def store_error_handler(request: Request, exc: TodoStoreError) -> JSONResponse:
        """Map typed store errors to their HTTP status."""
        code = status_for(exc)
        if code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return _error_response(code, exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed JSON bodies and non-integer ids are plain 400s."""
        first = exc.errors()[0] if exc.errors() else {}
        detail = str(first.get("msg", "invalid request"))
        if "todo_id" in first.get("loc", ()):
            detail = "Invalid todo ID"
        return _error_response(
            HTTPStatus.BAD_REQUEST, {"kind": "bad_request", "detail": detail}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler so unexpected failures still return structured JSON."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, {"kind": "internal", "detail": str(exc)}
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(todos.router)

    @app.get("/health", response_model=HealthInfo, tags=["System"])
    async def health_check() -> HealthInfo:
        """Simple liveness probe."""
        return HealthInfo(environment=load_settings().environment, version=__version__)

    return app


__all__ = ["create_app", "status_for"]
