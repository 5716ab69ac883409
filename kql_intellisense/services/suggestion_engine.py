"""Suggestion engine — turns editor text into an ordered suggestion list.

The analyzed position selects providers from PROVIDERS_BY_POSITION; the
time-range overlay is appended when the current word looks like a time
expression. Results are concatenated in provider order, never re-sorted
or deduplicated.
"""

import structlog

from kql_intellisense.core.metrics import (
    schema_loads_total,
    suggestion_requests_total,
    suggestions_returned,
)
from kql_intellisense.schemas.schema import TableSchema
from kql_intellisense.schemas.suggestion import Suggestion
from kql_intellisense.services.context_analyzer import (
    Position,
    QueryContext,
    analyze,
    extract_current_table,
)
from kql_intellisense.services.schema_registry import SchemaRegistry
from kql_intellisense.services.suggestion_providers import (
    Provider,
    aggregation_provider,
    column_provider,
    operator_provider,
    prefix_provider,
    table_provider,
    time_range_provider,
)
from kql_intellisense.services.template_registry import (
    QueryTemplate,
    get_query_templates,
)

logger = structlog.stdlib.get_logger(__name__)

PROVIDERS_BY_POSITION: dict[Position, tuple[Provider, ...]] = {
    Position.START_OF_QUERY: (table_provider, operator_provider),
    Position.AFTER_COLUMN_KEYWORD: (column_provider,),
    Position.AFTER_GROUPING_KEYWORD: (column_provider,),
    Position.AFTER_SUMMARIZE: (aggregation_provider,),
    Position.GENERAL_TOKEN: (prefix_provider,),
}


class SuggestionEngine:
    """Completion engine for one editor/workspace.

    Owns its SchemaRegistry; nothing is shared between engines.
    """

    def __init__(self, registry: SchemaRegistry | None = None):
        self.registry = registry or SchemaRegistry()

    async def load_schema(self, workspace_id: str, api_url: str, token: str) -> bool:
        loaded = await self.registry.load(workspace_id, api_url, token)
        schema = self.registry.current()
        if loaded:
            schema_loads_total.labels(status="success").inc()
            logger.info(
                "schema_loaded",
                workspace_id=workspace_id,
                table_count=len(schema.tables) if schema else 0,
            )
        else:
            schema_loads_total.labels(status="failure").inc()
            logger.warning(
                "schema_load_failed",
                workspace_id=workspace_id,
                error=self.registry.last_error,
                kept_previous=schema is not None,
            )
        return loaded

    def get_context(self, full_text: str) -> QueryContext:
        return analyze(full_text)

    def get_suggestions(
        self, full_text: str, cursor_position: int | None = None
    ) -> list[Suggestion]:
        """Suggestions for the end of ``full_text``.

        ``cursor_position`` is accepted but not used: context always comes
        from the trailing tokens of the last line.
        """
        context = analyze(full_text)
        # Snapshot; a reload finishing meanwhile is picked up next keystroke
        schema = self.registry.current()

        suggestions: list[Suggestion] = []
        for provider in PROVIDERS_BY_POSITION.get(context.position, ()):
            suggestions.extend(provider(context, schema))
        suggestions.extend(time_range_provider(context, schema))

        suggestion_requests_total.labels(position=context.position.name).inc()
        suggestions_returned.observe(len(suggestions))
        return suggestions

    def extract_current_table(self, full_text: str) -> TableSchema | None:
        return extract_current_table(full_text, self.registry.current())

    def get_query_templates(self) -> list[QueryTemplate]:
        return get_query_templates()
