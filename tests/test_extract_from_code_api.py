"""API tests for POST /api/v1/extract-from-code."""

import json

import pytest

from specforge.prompts.templates import CODE_EXTRACTION_SYSTEM, CODE_EXTRACTION_USER_PREFIX

URL = "/api/v1/extract-from-code"

FILES = [
    {"path": "package.json", "content": '{"name": "order-desk", "version": "1.0.0"}'},
    {
        "path": "src/models/order.ts",
        "content": "export interface Order {\n  id: string;\n  customerId: string;\n  total: number;\n}",
    },
]


@pytest.mark.asyncio
async def test_files_are_rendered_as_labeled_blocks(client, stub_generator, sample_app_spec):
    stub_generator.queue(json.dumps(sample_app_spec))

    response = await client.post(URL, json={"files": FILES})

    assert response.status_code == 200
    assert response.json()["appSpec"] == sample_app_spec
    request = stub_generator.requests[0]
    assert request.prompt.system == CODE_EXTRACTION_SYSTEM
    assert request.prompt.user == (
        CODE_EXTRACTION_USER_PREFIX
        + f"--- package.json ---\n{FILES[0]['content']}\n\n--- src/models/order.ts ---\n{FILES[1]['content']}"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"files": []}, {"files": "src/"}, {"files": [{"path": "a.py"}]}])
async def test_malformed_file_lists_are_rejected(client, stub_generator, body):
    response = await client.post(URL, json=body)
    assert response.status_code == 400
    assert response.json()["error"]
    assert stub_generator.requests == []


@pytest.mark.asyncio
async def test_malformed_entries_are_skipped(client, stub_generator, sample_app_spec):
    stub_generator.queue(json.dumps(sample_app_spec))
    response = await client.post(URL, json={"files": [FILES[1], {"path": "README.md"}]})
    assert response.status_code == 200
    assert "README.md" not in stub_generator.requests[0].prompt.user


@pytest.mark.asyncio
async def test_short_combined_code_is_rejected(client, app_settings, stub_generator):
    app_settings.min_input_length = 200
    response = await client.post(URL, json={"files": [{"path": "a.py", "content": "x = 1"}]})
    assert response.status_code == 400
    assert "Total code length too short" in response.json()["error"]
    assert stub_generator.requests == []


@pytest.mark.asyncio
async def test_combined_listing_is_truncated_as_a_whole(client, app_settings, stub_generator, sample_app_spec):
    files = [{"path": f"src/module_{i}.py", "content": "def handler():\n    return 1\n" * 200} for i in range(5)]
    stub_generator.queue(json.dumps(sample_app_spec))

    response = await client.post(URL, json={"files": files})

    assert response.status_code == 200
    assert response.json()["truncated"] is True
    user = stub_generator.requests[0].prompt.user
    assert len(user) == app_settings.max_input_length
    assert user.startswith(CODE_EXTRACTION_USER_PREFIX + "--- src/module_0.py ---\n")
