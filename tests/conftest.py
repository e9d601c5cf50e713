"""Shared test fixtures."""

import asyncio
import json
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from specforge.config import Settings

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


def load_text_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8").strip()


class StubGenerator:
    """Generation backend double that replays queued outputs and records requests.

    A queued exception is raised instead of returned; a queued coroutine
    function is awaited, which lets tests simulate a slow backend.
    """

    def __init__(self, *outputs):
        self.outputs = list(outputs)
        self.requests = []

    def queue(self, *outputs) -> None:
        self.outputs.extend(outputs)

    async def complete(self, request):
        self.requests.append(request)
        output = self.outputs.pop(0) if self.outputs else None
        if isinstance(output, Exception):
            raise output
        if callable(output):
            return await output()
        return output


def slow_output(delay: float, text: str = "{}"):
    async def _produce():
        await asyncio.sleep(delay)
        return text

    return _produce


@pytest.fixture
def sample_app_spec() -> dict:
    return load_fixture("orders-app-spec.json")


@pytest.fixture
def sample_review() -> dict:
    return load_fixture("spec-review.json")


@pytest.fixture
def requirements_text() -> str:
    return load_text_fixture("orders-requirements.txt")


@pytest.fixture
def app_settings() -> Settings:
    return Settings(
        min_input_length=20,
        max_input_length=12_000,
        rate_limit_enabled=True,
        rate_limit_capacity=30,
        rate_limit_window_seconds=60,
        generation_timeout_seconds=5.0,
        consistency_checks_enabled=True,
    )


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator()


@pytest.fixture
def app(app_settings, stub_generator):
    """Create a test application instance with the generator stubbed out."""
    from specforge.main import create_app

    _app = create_app(app_settings)
    _app.state.generator = stub_generator
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
