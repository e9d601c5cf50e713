"""API tests for POST /api/v1/render."""

import json

import pytest

URL = "/api/v1/render"


@pytest.mark.asyncio
async def test_render_spec(client, stub_generator, sample_app_spec):
    response = await client.post(URL, json={"appSpec": sample_app_spec})
    assert response.status_code == 200
    body = response.json()
    assert body["summary"].startswith("App: OrderDesk\nEntities (3)")
    assert body["markdown"].startswith("# OrderDesk")
    assert stub_generator.requests == []


@pytest.mark.asyncio
async def test_render_spec_with_review(client, sample_app_spec, sample_review):
    response = await client.post(URL, json={"appSpec": sample_app_spec, "review": sample_review})
    assert response.status_code == 200
    assert "## Spec Review" in response.json()["markdown"]


@pytest.mark.asyncio
async def test_render_rejects_invalid_spec_as_bad_request(client, sample_app_spec):
    del sample_app_spec["entities"]
    response = await client.post(URL, json={"appSpec": sample_app_spec})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "SCHEMA_VIOLATION"
    assert body["violations"] == [{"path": "entities", "message": "is a required property"}]


@pytest.mark.asyncio
async def test_render_rejects_invalid_review(client, sample_app_spec):
    response = await client.post(URL, json={"appSpec": sample_app_spec, "review": {"score": 5}})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_render_requires_spec(client):
    response = await client.post(URL, json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_render_rejects_non_finite_review_score(client, sample_app_spec):
    content = json.dumps({"appSpec": sample_app_spec})[:-1] + (
        ', "review": {"score": 1e400, "missing": [], "ambiguities": [], "questions": []}}'
    )
    response = await client.post(URL, content=content, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "SCHEMA_VIOLATION"
    assert [v["path"] for v in body["violations"]] == ["score"]
