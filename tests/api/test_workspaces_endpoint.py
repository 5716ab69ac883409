"""Workspace endpoint tests — schema load and suggestions over HTTP."""

import httpx
import pytest
from httpx import AsyncClient

from kql_intellisense.core.config import settings
from kql_intellisense.services.suggestion_providers import CORE_OPERATORS


async def _load(client: AsyncClient, workspace_id: str = "ws-1"):
    return await client.post(
        f"/api/v1/workspaces/{workspace_id}/schema/load",
        json={"token": "test-token"},
    )


async def test_load_schema_success(client: AsyncClient):
    response = await _load(client)
    assert response.status_code == 200
    data = response.json()
    assert data == {"loaded": True, "workspace_id": "ws-1", "table_count": 3}


async def test_load_schema_fetches_from_configured_service(
    client: AsyncClient, engine_registry, mock_schema_transport
):
    seen: list[httpx.Request] = []
    engine = engine_registry.get("ws-1")
    engine.registry._client = httpx.AsyncClient(
        transport=mock_schema_transport({"tables": []}, 200, seen)
    )

    response = await _load(client)

    assert response.json()["loaded"] is True
    assert [str(r.url) for r in seen] == [
        f"{settings.schema_api.schema_api_url}/workspaces/ws-1/schema"
    ]


async def test_load_schema_rejects_caller_supplied_api_url(client: AsyncClient):
    response = await client.post(
        "/api/v1/workspaces/ws-1/schema/load",
        json={"token": "t", "api_url": "https://attacker.test/api"},
    )
    assert response.status_code == 422


async def test_load_schema_requires_token(client: AsyncClient):
    response = await client.post("/api/v1/workspaces/ws-1/schema/load", json={})
    assert response.status_code == 422


@pytest.mark.parametrize("schema_response", [({"error": "denied"}, 403)])
async def test_failed_load_is_not_an_http_error(client: AsyncClient, schema_response):
    response = await _load(client)
    assert response.status_code == 200
    assert response.json() == {"loaded": False, "workspace_id": "ws-1", "table_count": 0}


async def test_failed_reload_keeps_previous_schema(
    client: AsyncClient, engine_registry, mock_schema_transport
):
    assert (await _load(client)).json()["loaded"] is True

    engine = engine_registry.get("ws-1")
    engine.registry._client = httpx.AsyncClient(
        transport=mock_schema_transport({"error": "boom"}, 500)
    )
    response = await _load(client)
    assert response.json() == {"loaded": False, "workspace_id": "ws-1", "table_count": 3}

    response = await client.get("/api/v1/workspaces/ws-1/schema")
    assert response.status_code == 200
    names = [t["name"] for t in response.json()["tables"]]
    assert names == ["SecurityEvent", "Perf", "Syslog"]


async def test_get_schema_after_load(client: AsyncClient):
    await _load(client)
    response = await client.get("/api/v1/workspaces/ws-1/schema")
    assert response.status_code == 200
    names = [t["name"] for t in response.json()["tables"]]
    assert names == ["SecurityEvent", "Perf", "Syslog"]


async def test_get_schema_before_load_is_404(client: AsyncClient):
    response = await client.get("/api/v1/workspaces/ws-9/schema")
    assert response.status_code == 404


async def test_suggestions_start_of_query(client: AsyncClient):
    await _load(client)
    response = await client.post(
        "/api/v1/workspaces/ws-1/suggestions", json={"text": ""}
    )
    assert response.status_code == 200
    items = response.json()["items"]
    assert [i["value"] for i in items] == ["SecurityEvent", "Perf", "Syslog"]
    assert items[0] == {
        "type": "table",
        "value": "SecurityEvent",
        "label": "SecurityEvent",
        "description": "Windows security events",
        "insertText": "SecurityEvent",
    }


async def test_suggestions_columns(client: AsyncClient):
    await _load(client)
    response = await client.post(
        "/api/v1/workspaces/ws-1/suggestions",
        json={"text": "SecurityEvent\n| where ", "cursor_position": 5},
    )
    items = response.json()["items"]
    assert {i["type"] for i in items} == {"column"}
    assert [i["value"] for i in items] == [
        "TimeGenerated",
        "EventID",
        "Account",
        "Computer",
    ]


async def test_suggestions_after_pipe(client: AsyncClient):
    response = await client.post(
        "/api/v1/workspaces/ws-1/suggestions", json={"text": "SecurityEvent\n| "}
    )
    items = response.json()["items"]
    assert [i["value"] for i in items] == list(CORE_OPERATORS)


async def test_suggestions_function_placeholder(client: AsyncClient):
    response = await client.post(
        "/api/v1/workspaces/ws-1/suggestions",
        json={"text": "SecurityEvent\n| summarize "},
    )
    first = response.json()["items"][0]
    assert first["type"] == "function"
    assert first["insertText"] == "count($0)"


async def test_workspaces_are_isolated(client: AsyncClient):
    await _load(client, "ws-1")
    response = await client.post(
        "/api/v1/workspaces/ws-2/suggestions", json={"text": ""}
    )
    assert response.json()["items"] == []


async def test_discard_workspace(client: AsyncClient):
    await _load(client)
    response = await client.delete("/api/v1/workspaces/ws-1")
    assert response.status_code == 204
    response = await client.delete("/api/v1/workspaces/ws-1")
    assert response.status_code == 404


async def test_request_id_header(client: AsyncClient):
    response = await client.post(
        "/api/v1/workspaces/ws-1/suggestions",
        json={"text": ""},
        headers={"X-Request-ID": "req-42"},
    )
    assert response.headers["X-Request-ID"] == "req-42"


async def test_malformed_request_id_is_replaced(client: AsyncClient):
    response = await client.post(
        "/api/v1/workspaces/ws-1/suggestions",
        json={"text": ""},
        headers={"X-Request-ID": "not a valid id!" + "x" * 100},
    )
    request_id = response.headers["X-Request-ID"]
    assert request_id != "not a valid id!" + "x" * 100
    assert len(request_id) == 36
