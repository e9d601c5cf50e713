"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from specforge.api.routes import extraction, health, schemas

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(extraction.router)
api_router.include_router(schemas.router)
