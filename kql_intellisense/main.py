"""KQL IntelliSense FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kql_intellisense.api.routes import health, metrics, templates, workspaces
from kql_intellisense.core.config import settings
from kql_intellisense.core.logging_config import configure_logging
from kql_intellisense.core.metrics import app_info
from kql_intellisense.core.middleware import ObservabilityMiddleware
from kql_intellisense.services.engine_registry import EngineRegistry

VERSION = "0.1.0"

configure_logging()
logger = structlog.stdlib.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle events."""
    app_info.info({"version": VERSION, "env": settings.app_env})
    app.state.engine_registry = EngineRegistry(max_engines=settings.max_engines)
    logger.info(
        "startup",
        schema_api_url=settings.schema_api.schema_api_url,
        max_engines=settings.max_engines,
    )

    yield

    logger.info("shutdown", engines=len(app.state.engine_registry))


app = FastAPI(
    title="KQL IntelliSense",
    description="Context-aware KQL autocompletion against live workspace schema",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# All REST routes under /api/v1/
app.include_router(health.router, tags=["health"])
app.include_router(workspaces.router, prefix="/api/v1/workspaces", tags=["workspaces"])
app.include_router(templates.router, prefix="/api/v1/templates", tags=["templates"])
if settings.metrics_enabled:
    app.include_router(metrics.router, tags=["metrics"])
