"""Dependency injection for FastAPI routes.

All services are provided via Depends() from this module.
Route handlers never instantiate services directly.
"""

from fastapi import Depends, Request

from kql_intellisense.core.logging_config import bind_workspace
from kql_intellisense.services.engine_registry import EngineRegistry
from kql_intellisense.services.suggestion_engine import SuggestionEngine


async def get_engine_registry(request: Request) -> EngineRegistry:
    """Return the process-wide engine registry from app state."""
    return request.app.state.engine_registry


async def get_engine(
    workspace_id: str,
    engines: EngineRegistry = Depends(get_engine_registry),
) -> SuggestionEngine:
    """Resolve the engine for the ``workspace_id`` path parameter."""
    bind_workspace(workspace_id)
    return engines.get(workspace_id)
