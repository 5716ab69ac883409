"""Health check endpoints. No authentication required.

- /health       — service status and engine count
- /health/live  — liveness probe (always 200)
"""

from fastapi import APIRouter, Depends

from kql_intellisense.api.deps import get_engine_registry
from kql_intellisense.services.engine_registry import EngineRegistry

router = APIRouter()


@router.get("/health")
async def health_check(engines: EngineRegistry = Depends(get_engine_registry)):
    return {
        "status": "healthy",
        "service": "kql-intellisense",
        "engines": len(engines),
    }


@router.get("/health/live")
async def liveness():
    """Liveness probe — process is alive."""
    return {"status": "live"}
