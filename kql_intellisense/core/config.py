"""Application configuration via pydantic-settings.

All config is sourced from environment variables. Never use os.getenv() directly.
"""

import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaApiSettings(BaseSettings):
    """Upstream workspace schema service — consumed by the schema registry."""

    model_config = SettingsConfigDict(env_prefix="")

    # Base URL; the registry appends /workspaces/{id}/schema
    schema_api_url: str = "http://localhost:7071/api"
    schema_request_timeout: float = 10.0  # seconds

    @field_validator("schema_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class Settings(BaseSettings):
    """KQL IntelliSense service settings.

    Environment variables are the single source of truth.
    Defaults are development-safe values only.
    """

    model_config = SettingsConfigDict(env_file=".env")

    app_env: str = "development"

    # Nested settings groups
    schema_api: SchemaApiSettings = SchemaApiSettings()

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    metrics_enabled: bool = True

    # Upper bound on per-workspace engines held in memory
    max_engines: int = 100

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return json.loads(v)
        return v


settings = Settings()
