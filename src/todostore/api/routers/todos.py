"""
API Routes for todos.

Endpoints
---------
- `GET /todos`         : list all todos (ascending by id).
- `POST /todos`        : create a todo; the id is assigned by the store.
- `PUT /todos/{id}`    : replace a todo's contents.
- `DELETE /todos/{id}` : remove a todo.

Design Decisions
----------------
- **Sync handlers**: the service blocks on a lock and on file I/O, so these
  are plain `def` endpoints and FastAPI runs them in its threadpool.
- **No error mapping here**: service errors propagate to the handlers
  registered in `todostore.api.app`.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from todostore.api.schemas import ErrorBody
from todostore.core.contracts.record import TodoRequest, TodoResponse
from todostore.core.service import TodoService, get_service

router = APIRouter(prefix="/todos", tags=["Todos"])

ServiceDep = Annotated[TodoService, Depends(get_service)]

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorBody}}
_BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorBody}}


@router.get("", response_model=TodoResponse, summary="List all todos")
def list_todos(service: ServiceDep) -> TodoResponse:
    return TodoResponse(message="Todos retrieved successfully", data=service.get_all())


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
    summary="Create a todo",
)
def create_todo(request: TodoRequest, service: ServiceDep) -> TodoResponse:
    """Create a todo with the next free id (max + 1)."""
    record = service.create(request.contents)
    return TodoResponse(message="Todo created successfully", data=[record])


@router.put(
    "/{todo_id}",
    response_model=TodoResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Update a todo",
)
def update_todo(todo_id: int, request: TodoRequest, service: ServiceDep) -> TodoResponse:
    record = service.update(todo_id, request.contents)
    return TodoResponse(message="Todo updated successfully", data=[record])


@router.delete(
    "/{todo_id}",
    response_model=TodoResponse,
    response_model_exclude_none=True,
    responses=_NOT_FOUND,
    summary="Delete a todo",
)
def delete_todo(todo_id: int, service: ServiceDep) -> TodoResponse:
    service.delete(todo_id)
    return TodoResponse(message="Todo deleted successfully")


__all__ = ["router"]
