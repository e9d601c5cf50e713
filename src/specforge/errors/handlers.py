"""FastAPI exception handlers producing the uniform ErrorResponse body."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from specforge.errors.exceptions import (
    SchemaViolationError,
    SpecForgeError,
    UpstreamMalformedError,
)
from specforge.models.common import ErrorResponse, ViolationDetail

logger = logging.getLogger(__name__)


def build_error_response(exc: SpecForgeError, trace_id: str) -> ErrorResponse:
    """Map a SpecForgeError onto the wire error shape."""
    detail = None
    details = None
    violations = None
    raw = None

    if isinstance(exc, SchemaViolationError):
        detail = exc.details
        violations = [ViolationDetail(**v.as_dict()) for v in exc.violations]
    elif isinstance(exc, UpstreamMalformedError):
        raw = exc.raw
    elif isinstance(exc.details, str):
        detail = exc.details
    elif isinstance(exc.details, dict):
        details = exc.details

    return ErrorResponse(
        error=exc.message,
        code=exc.code,
        detail=detail,
        violations=violations,
        raw=raw,
        details=details,
        trace_id=trace_id,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(SpecForgeError)
    async def specforge_error_handler(request: Request, exc: SpecForgeError):
        trace_id = getattr(request.state, "trace_id", "unknown")
        if exc.status_code >= 500:
            logger.warning(
                "request_failed",
                extra={
                    "path": request.url.path,
                    "code": exc.code,
                    "status_code": exc.status_code,
                    "reason": exc.message,
                },
            )
        error_response = build_error_response(exc, trace_id)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response.model_dump(mode="json", exclude_none=True),
            headers=exc.headers or None,
        )
