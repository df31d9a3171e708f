"""HTTP-only response shapes (health and error bodies).

Record envelopes (`TodoRequest`, `TodoResponse`) live in
`todostore.core.contracts.record` because the CLI shares them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthInfo(BaseModel):
    """Payload returned by `GET /health`."""

    status: str = Field(default="ok")
    environment: str
    version: str


class ErrorBody(BaseModel):
    """Structured error returned for every non-2xx response."""

    error: str = Field(description="HTTP reason phrase, e.g. 'Not Found'")
    kind: str = Field(description="Stable error label, e.g. 'not_found'")
    detail: str
    id: int | None = Field(default=None, description="Requested id, on 'not_found' only")


__all__ = ["HealthInfo", "ErrorBody"]
