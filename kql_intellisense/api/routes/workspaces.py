"""Workspace endpoints — schema loading and completion.

A failed schema load is not an HTTP error: the response says
``loaded=false`` and the workspace keeps whatever schema it had.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from kql_intellisense.api.deps import get_engine, get_engine_registry
from kql_intellisense.core.config import settings
from kql_intellisense.schemas.schema import (
    SchemaLoadRequest,
    SchemaLoadResponse,
    WorkspaceSchema,
)
from kql_intellisense.schemas.suggestion import (
    SuggestionListResponse,
    SuggestionRequest,
)
from kql_intellisense.services.engine_registry import EngineRegistry
from kql_intellisense.services.suggestion_engine import SuggestionEngine

router = APIRouter()


@router.post("/{workspace_id}/schema/load", response_model=SchemaLoadResponse)
async def load_schema(
    workspace_id: str,
    body: SchemaLoadRequest,
    engine: SuggestionEngine = Depends(get_engine),
):
    """Fetch the workspace schema from the upstream schema service."""
    loaded = await engine.load_schema(
        workspace_id, settings.schema_api.schema_api_url, body.token
    )
    schema = engine.registry.current()
    return SchemaLoadResponse(
        loaded=loaded,
        workspace_id=workspace_id,
        table_count=len(schema.tables) if schema else 0,
    )


@router.get("/{workspace_id}/schema", response_model=WorkspaceSchema)
async def get_schema(
    workspace_id: str,
    engine: SuggestionEngine = Depends(get_engine),
):
    """Return the schema currently held for the workspace."""
    schema = engine.registry.current()
    if schema is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Schema not loaded"
        )
    return schema


@router.post("/{workspace_id}/suggestions", response_model=SuggestionListResponse)
async def get_suggestions(
    workspace_id: str,
    body: SuggestionRequest,
    engine: SuggestionEngine = Depends(get_engine),
):
    """Completion suggestions for the end of ``body.text``."""
    return SuggestionListResponse(
        items=engine.get_suggestions(body.text, body.cursor_position)
    )


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_workspace(
    workspace_id: str,
    engines: EngineRegistry = Depends(get_engine_registry),
):
    """Drop the workspace's engine and schema (e.g. editor tab closed)."""
    if not engines.discard(workspace_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found"
        )
