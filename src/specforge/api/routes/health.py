"""Health check endpoints."""

from fastapi import APIRouter

from specforge import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Return service health status."""
    return {"status": "healthy", "service": "specforge-api", "version": __version__}
