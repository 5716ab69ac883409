"""Shared test fixtures.

The upstream schema service is mocked with httpx.MockTransport.
Tests never require a running schema service.
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from kql_intellisense.api.deps import get_engine_registry
from kql_intellisense.main import app
from kql_intellisense.schemas.schema import WorkspaceSchema
from kql_intellisense.services.engine_registry import EngineRegistry
from kql_intellisense.services.schema_registry import SchemaRegistry
from kql_intellisense.services.suggestion_engine import SuggestionEngine

API_URL = "https://schema.test/api"

SECURITY_SCHEMA_BODY = {
    "tables": [
        {
            "name": "SecurityEvent",
            "description": "Windows security events",
            "columns": [
                {"name": "TimeGenerated", "type": "datetime"},
                {"name": "EventID", "type": "int", "description": "Event identifier"},
                {"name": "Account", "type": "string"},
                {"name": "Computer", "type": "string"},
            ],
        },
        {
            "name": "Perf",
            "description": "Performance counters",
            "columns": [
                {"name": "TimeGenerated", "type": "datetime"},
                {"name": "CounterName", "type": "string"},
                {"name": "CounterValue", "type": "real"},
            ],
        },
        {
            "name": "Syslog",
            "columns": [
                {"name": "Facility", "type": "string"},
            ],
        },
    ]
}


def schema_transport(body=None, status_code: int = 200, seen: list | None = None):
    """MockTransport answering every request with ``body``."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if isinstance(body, (bytes, str)):
            return httpx.Response(status_code, content=body)
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def security_schema() -> WorkspaceSchema:
    return WorkspaceSchema.model_validate(SECURITY_SCHEMA_BODY)


@pytest.fixture
def ab_schema() -> WorkspaceSchema:
    """Two tables A and B; A has columns X and Y."""
    return WorkspaceSchema.model_validate(
        {
            "tables": [
                {"name": "A", "columns": [{"name": "X"}, {"name": "Y"}]},
                {"name": "B", "columns": []},
            ]
        }
    )


async def make_engine(body=None, status_code: int = 200) -> SuggestionEngine:
    """Engine whose registry has loaded ``body`` through a mocked fetch."""
    client = httpx.AsyncClient(transport=schema_transport(body, status_code))
    engine = SuggestionEngine(SchemaRegistry(client=client))
    if body is not None:
        await engine.load_schema("ws-test", API_URL, "test-token")
    return engine


@pytest.fixture
def schema_response() -> tuple:
    """(body, status_code) the mocked schema service answers with.

    Override with @pytest.mark.parametrize("schema_response", [...]).
    """
    return SECURITY_SCHEMA_BODY, 200


@pytest.fixture
def engine_registry(schema_response) -> EngineRegistry:
    body, status_code = schema_response

    def factory() -> SuggestionEngine:
        client = httpx.AsyncClient(transport=schema_transport(body, status_code))
        return SuggestionEngine(SchemaRegistry(client=client))

    return EngineRegistry(max_engines=10, engine_factory=factory)


@pytest.fixture
async def client(engine_registry) -> AsyncClient:
    """Provide an httpx AsyncClient wired to the FastAPI test app.

    ASGITransport does not run the lifespan, so the engine registry is
    injected through a dependency override.
    """
    app.dependency_overrides[get_engine_registry] = lambda: engine_registry

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.pop(get_engine_registry, None)


@pytest.fixture
def load_engine():
    """Factory fixture: ``await load_engine(body)`` -> loaded SuggestionEngine."""
    return make_engine


@pytest.fixture
def mock_schema_transport():
    """Factory fixture for schema_transport."""
    return schema_transport
