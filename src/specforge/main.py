"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from specforge import __version__
from specforge.config import Settings, settings
from specforge.logging_config import configure_logging
from specforge.schemas.validator import SchemaValidator
from specforge.services.decoder import ContractValidator
from specforge.services.generation import OpenAIGenerator
from specforge.services.rate_limiter import AdmissionController

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    logger.info(
        "SpecForge API started (model=%s, rate_limit=%s)",
        app.state.settings.generation_model,
        app.state.settings.rate_limit_enabled,
    )
    yield

    # Shutdown
    generator = app.state.generator
    if hasattr(generator, "aclose"):
        await generator.aclose()
    logger.info("SpecForge API shutdown complete")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings
    app = FastAPI(
        title="SpecForge API",
        version=__version__,
        description="Turns business requirements or source code into a validated AppSpec.",
        lifespan=lifespan,
    )

    # Shared collaborators, built once per process
    app.state.settings = app_settings
    app.state.rate_limiter = AdmissionController.from_settings(app_settings)
    app.state.generator = OpenAIGenerator.from_settings(app_settings)
    app.state.contract_validator = ContractValidator(SchemaValidator())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Trace-Id", "X-RateLimit-Remaining", "Retry-After"],
    )

    from specforge.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    # Register error handlers
    from specforge.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    # Prometheus metrics (internal endpoint)
    try:
        from prometheus_fastapi_instrumentator import Instrumentator
        Instrumentator(
            should_group_status_codes=True,
            should_respect_env_var=False,
            excluded_handlers=["/api/v1/health", "/metrics"],
        ).instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
    except ImportError:
        logger.debug("prometheus-fastapi-instrumentator not installed, /metrics disabled")

    from specforge.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
