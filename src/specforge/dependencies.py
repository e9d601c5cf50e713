"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request

from specforge.logging_config import bind_request_context
from specforge.services.orchestrator import SpecPipeline
from specforge.services.rate_limiter import resolve_client_key


def get_trace_id(request: Request) -> str:
    """Extract trace_id from request state (set by middleware)."""
    return getattr(request.state, "trace_id", "unknown")


def get_client_key(request: Request) -> str:
    """Caller identity used for admission control; empty when unresolvable."""
    client_key = resolve_client_key(request.headers)
    bind_request_context(get_trace_id(request), client_key=client_key or None)
    return client_key


def get_pipeline(request: Request) -> SpecPipeline:
    """Build the orchestrator over the app's shared collaborators."""
    state = request.app.state
    return SpecPipeline(
        settings=state.settings,
        rate_limiter=state.rate_limiter,
        generator=state.generator,
        validator=state.contract_validator,
    )


# Type aliases for dependency injection
ClientKey = Annotated[str, Depends(get_client_key)]
Pipeline = Annotated[SpecPipeline, Depends(get_pipeline)]
