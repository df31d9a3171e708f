"""Record contracts shared by the core, the API and the CLI.

This module defines three Pydantic v2 models:

- `Record`       : one stored todo, `{id, contents}`. Frozen, so a sequence
  loaded from storage can be shared without defensive copies.
- `TodoRequest`  : the inbound create/update envelope.
- `TodoResponse` : the outbound `{message, data}` envelope.

The wire/disk shape of `Record` is exactly `{"id": int, "contents": str}`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Record(BaseModel):
    """A single todo keyed by a unique positive integer id."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(gt=0, description="Unique identifier, assigned by the store")
    contents: str = Field(description="Trimmed, non-empty todo text")

    @field_validator("contents")
    @classmethod
    def _contents_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("contents cannot be empty or whitespace-only")
        return v


class TodoRequest(BaseModel):
    """Input for create/update.

    `id` is tolerated for compatibility with older clients that echo it back;
    the store never reads it.
    """

    id: int | None = Field(default=None, description="Ignored")
    contents: str = Field(description="Todo text; trimmed before validation")


class TodoResponse(BaseModel):
    """Standard response envelope for the HTTP API."""

    message: str
    data: list[Record] | None = None


__all__ = ["Record", "TodoRequest", "TodoResponse"]
