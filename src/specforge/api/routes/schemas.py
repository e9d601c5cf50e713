"""Schema contract routes."""

from fastapi import APIRouter

from specforge.errors.exceptions import NotFoundError
from specforge.schemas.loader import load_schema
from specforge.schemas.registry import SCHEMA_REGISTRY

router = APIRouter(tags=["Schemas"])


@router.get("/schemas")
async def list_schemas() -> dict:
    return {"schemas": sorted(SCHEMA_REGISTRY)}


@router.get("/schemas/{name}")
async def get_schema(name: str) -> dict:
    """Return the strict schema the generator is constrained by."""
    if name not in SCHEMA_REGISTRY:
        raise NotFoundError("Schema", name)
    return load_schema(name)
