"""Pydantic schemas for workspace schema (tables/columns).

These mirror the upstream schema service body:
``{ tables: [ { name, description?, columns: [ { name, type, description? } ] } ] }``.
Unknown fields sent by the upstream service (e.g. ``category``) are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class ColumnSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    type: str = ""
    description: str | None = None


class TableSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    description: str | None = None
    columns: list[ColumnSchema] = Field(default_factory=list)


class WorkspaceSchema(BaseModel):
    """Tables and columns known for one workspace."""

    model_config = ConfigDict(extra="ignore")

    tables: list[TableSchema]

    def find_table(self, name: str) -> TableSchema | None:
        """Exact, case-sensitive lookup by table name."""
        for table in self.tables:
            if table.name == name:
                return table
        return None


class SchemaLoadRequest(BaseModel):
    """Body for POST /workspaces/{id}/schema/load.

    The schema service URL comes from settings, never from the caller.
    """

    model_config = ConfigDict(extra="forbid")

    token: str


class SchemaLoadResponse(BaseModel):
    loaded: bool
    workspace_id: str
    table_count: int = 0
