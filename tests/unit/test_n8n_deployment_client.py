from __future__ import annotations

import json

import httpx
import pytest

from flowforge.domain.exceptions import DeploymentFailed
from flowforge.infrastructure.deployment.n8n_client import N8nDeploymentClient

WORKFLOW = {"name": "Generated", "nodes": [{"name": "Start"}], "connections": {}}


@pytest.mark.asyncio
async def test_deploy_creates_inactive_workflow_with_api_key() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "wf-42"})

    client = N8nDeploymentClient(tags=["AI-Generated"], transport=httpx.MockTransport(handler))

    receipt = await client.deploy(WORKFLOW, "Lead Router", "https://n8n.example.com/", "key-123")

    assert receipt.workflow_id == "wf-42"
    assert receipt.workflow_url == "https://n8n.example.com/workflow/wf-42"
    request = seen[0]
    assert str(request.url) == "https://n8n.example.com/api/v1/workflows"
    assert request.headers["X-N8N-API-KEY"] == "key-123"
    body = json.loads(request.content)
    assert body == {
        "name": "Lead Router",
        "nodes": [{"name": "Start"}],
        "connections": {},
        "settings": {},
        "tags": ["AI-Generated"],
        "active": False,
    }


@pytest.mark.asyncio
async def test_missing_summary_uses_default_name() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"id": 7})

    client = N8nDeploymentClient(transport=httpx.MockTransport(handler))

    receipt = await client.deploy({"nodes": []}, "", "http://localhost:5678", "k")

    assert seen[0]["name"] == "AI Generated Workflow"
    assert receipt.workflow_id == "7"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,message",
    [
        (401, "Invalid API key or unauthorized"),
        (404, "n8n instance not found - check your URL"),
        (400, "Invalid workflow data"),
        (500, "Failed to deploy workflow"),
    ],
)
async def test_rejections_map_to_user_facing_messages(status, message) -> None:
    client = N8nDeploymentClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(status, text="nope"))
    )

    with pytest.raises(DeploymentFailed) as excinfo:
        await client.deploy(WORKFLOW, "W", "http://localhost:5678", "k")

    assert excinfo.value.status_code == status
    assert excinfo.value.message == message


@pytest.mark.asyncio
async def test_unreachable_instance_is_a_bad_gateway() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = N8nDeploymentClient(transport=httpx.MockTransport(handler))

    with pytest.raises(DeploymentFailed) as excinfo:
        await client.deploy(WORKFLOW, "W", "http://localhost:5678", "k")

    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_null_connections_and_settings_are_sent_as_empty_objects() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"id": "1"})

    client = N8nDeploymentClient(transport=httpx.MockTransport(handler))

    await client.deploy({"nodes": [], "connections": None, "settings": []}, "W", "http://localhost:5678", "k")

    assert seen[0]["connections"] == {}
    assert seen[0]["settings"] == {}
