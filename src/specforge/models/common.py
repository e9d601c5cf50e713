"""Pydantic models shared by every endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ViolationDetail(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str
    message: str


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx outcome."""

    model_config = ConfigDict(extra="forbid")

    error: str = Field(..., min_length=1)
    code: str
    detail: str | None = None
    violations: list[ViolationDetail] | None = None
    raw: str | None = None
    details: dict[str, Any] | None = None
    trace_id: str
