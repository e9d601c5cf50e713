"""API tests for POST /api/v1/review."""

import json

import pytest

from specforge.prompts.builder import serialize_app_spec
from specforge.prompts.templates import QA_SYSTEM

URL = "/api/v1/review"


@pytest.mark.asyncio
async def test_review_returns_flat_review(client, stub_generator, requirements_text, sample_review):
    stub_generator.queue(json.dumps(sample_review))

    response = await client.post(URL, json={"text": requirements_text})

    assert response.status_code == 200
    body = response.json()
    assert body == sample_review
    request = stub_generator.requests[0]
    assert request.prompt.system == QA_SYSTEM
    assert request.schema_name == "SpecReview"
    assert "Current AppSpec" not in request.prompt.user


@pytest.mark.asyncio
async def test_review_embeds_current_spec(client, stub_generator, requirements_text, sample_review, sample_app_spec):
    stub_generator.queue(json.dumps(sample_review))

    response = await client.post(URL, json={"text": requirements_text, "appSpec": sample_app_spec})

    assert response.status_code == 200
    assert serialize_app_spec(sample_app_spec) in stub_generator.requests[0].prompt.user


@pytest.mark.asyncio
async def test_review_flags_truncation(client, stub_generator, sample_review):
    stub_generator.queue(json.dumps(sample_review))
    response = await client.post(URL, json={"text": "Tickets have a status. " * 1000})
    assert response.status_code == 200
    assert response.json()["truncated"] is True


@pytest.mark.asyncio
async def test_review_rejects_short_text(client, stub_generator):
    response = await client.post(URL, json={"text": "hi", "appSpec": {}})
    assert response.status_code == 400
    assert stub_generator.requests == []


@pytest.mark.asyncio
async def test_review_output_is_validated(client, stub_generator, requirements_text):
    stub_generator.queue(json.dumps({"score": "great", "missing": [], "ambiguities": []}))

    response = await client.post(URL, json={"text": requirements_text})

    assert response.status_code == 502
    body = response.json()
    assert body["code"] == "SCHEMA_VIOLATION"
    assert {v["path"] for v in body["violations"]} == {"questions", "score"}


@pytest.mark.asyncio
async def test_review_malformed_output(client, stub_generator, requirements_text):
    stub_generator.queue("Score: 80/100")
    response = await client.post(URL, json={"text": requirements_text})
    assert response.status_code == 502
    assert response.json()["raw"] == "Score: 80/100"


@pytest.mark.asyncio
async def test_review_rejects_overflowing_score(client, stub_generator, requirements_text):
    raw = '{"score": 1e400, "missing": [], "ambiguities": [], "questions": []}'
    stub_generator.queue(raw)

    response = await client.post(URL, json={"text": requirements_text})

    assert response.status_code == 502
    body = response.json()
    assert body["code"] == "UPSTREAM_MALFORMED"
    assert body["raw"] == raw


@pytest.mark.asyncio
async def test_review_rejects_score_too_large_for_float(client, stub_generator, requirements_text):
    stub_generator.queue('{"score": 1' + "0" * 400 + ', "missing": [], "ambiguities": [], "questions": []}')

    response = await client.post(URL, json={"text": requirements_text})

    assert response.status_code == 502
    body = response.json()
    assert body["code"] == "SCHEMA_VIOLATION"
    assert [v["path"] for v in body["violations"]] == ["score"]


@pytest.mark.asyncio
async def test_review_embeds_empty_spec(client, stub_generator, requirements_text, sample_review):
    stub_generator.queue(json.dumps(sample_review))

    response = await client.post(URL, json={"text": requirements_text, "appSpec": {}})

    assert response.status_code == 200
    assert "Current AppSpec (JSON):\n{}" in stub_generator.requests[0].prompt.user
