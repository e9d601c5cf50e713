"""Spec extraction, review and render routes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from specforge.dependencies import ClientKey, Pipeline
from specforge.services.orchestrator import PipelineResponse

router = APIRouter(tags=["Specs"])


def _respond(result: PipelineResponse) -> JSONResponse:
    return JSONResponse(content=result.body, headers=result.headers or None)


@router.post("/extract")
async def extract_from_text(request: Request, pipeline: Pipeline, client_key: ClientKey) -> JSONResponse:
    """Turn free-text requirements into a validated AppSpec."""
    return _respond(await pipeline.extract_from_text(client_key, await request.body()))


@router.post("/extract-from-code")
async def extract_from_code(request: Request, pipeline: Pipeline, client_key: ClientKey) -> JSONResponse:
    """Infer an AppSpec from a list of ``{path, content}`` source files."""
    return _respond(await pipeline.extract_from_code(client_key, await request.body()))


@router.post("/review")
async def review_spec(request: Request, pipeline: Pipeline, client_key: ClientKey) -> JSONResponse:
    """Score requirements (and an optional AppSpec) and list clarifying questions."""
    return _respond(await pipeline.review(client_key, await request.body()))


@router.post("/render")
async def render_spec(request: Request, pipeline: Pipeline) -> JSONResponse:
    return _respond(await pipeline.render(await request.body()))
