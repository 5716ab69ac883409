"""Suggestion providers.

Each provider is a pure function ``(QueryContext, WorkspaceSchema | None)``
returning suggestions of a single type, in catalog or schema declaration
order. Providers never raise on a missing schema; they return nothing.
"""

from collections.abc import Callable

from kql_intellisense.schemas.schema import TableSchema, WorkspaceSchema
from kql_intellisense.schemas.suggestion import (
    CURSOR_PLACEHOLDER,
    ColumnSuggestion,
    FunctionSuggestion,
    KeywordSuggestion,
    Suggestion,
    TableSuggestion,
    TimeRangeSuggestion,
)
from kql_intellisense.services.context_analyzer import (
    QueryContext,
    extract_current_table,
)

Provider = Callable[[QueryContext, WorkspaceSchema | None], list[Suggestion]]

# Tabular operators offered right after a pipe
CORE_OPERATORS = (
    "where",
    "project",
    "extend",
    "summarize",
    "take",
    "sort",
    "join",
    "union",
)

KQL_KEYWORDS = (
    # Operators
    "where", "project", "extend", "summarize", "join", "union", "take", "top",
    "limit", "sort", "order", "by", "asc", "desc", "count", "sum", "avg", "min",
    "max", "distinct", "mv-expand", "parse", "make-series", "render", "with",
    "as", "on", "in",
    # String predicates
    "contains", "startswith", "endswith", "matches", "regex",
    # Logic
    "and", "or", "not", "between",
    # Date/time
    "ago", "now", "datetime", "timespan", "bin",
    # Math
    "floor", "ceiling", "round", "abs", "sqrt", "log", "exp",
    # String
    "strcat", "strlen", "substring", "toupper", "tolower", "trim", "split",
    "extract", "replace", "format_datetime", "format_timespan",
    # Conditional
    "iff", "iif", "case", "isempty", "isnotempty", "isnull", "isnotnull",
)

AGGREGATION_FUNCTIONS = (
    "count()", "dcount()", "sum()", "avg()", "min()", "max()", "stdev()",
    "variance()", "percentile()", "percentiles()", "make_list()", "make_set()",
    "make_bag()", "arg_max()", "arg_min()", "any()", "anyif()", "countif()",
    "sumif()", "dcountif()",
)

KQL_FUNCTIONS = AGGREGATION_FUNCTIONS + (
    # Dynamic
    "array_length()", "bag_keys()", "bag_merge()", "bag_remove_keys()",
    # Parsing
    "parse_json()", "parse_csv()", "parse_xml()", "parse_url()", "parse_path()",
    # Encoding
    "base64_encode_tostring()", "base64_decode_tostring()", "hash()",
    "hash_sha256()",
)

TIME_RANGES = (
    "ago(1h)",
    "ago(1d)",
    "ago(7d)",
    "ago(30d)",
    "ago(90d)",
    "between(ago(7d)..now())",
    "between(ago(30d)..now())",
    "startofday(now())",
    "endofday(now())",
    "startofweek(now())",
    "startofmonth(now())",
    "startofyear(now())",
)


def function_insert_text(func: str) -> str:
    """``count()`` -> ``count($0)`` so the caret lands between the parens."""
    return func.replace("()", f"({CURSOR_PLACEHOLDER})")


def _table_suggestion(table: TableSchema) -> TableSuggestion:
    return TableSuggestion(
        value=table.name,
        label=table.name,
        description=table.description or "",
        insert_text=table.name,
    )


def table_provider(
    context: QueryContext, schema: WorkspaceSchema | None
) -> list[Suggestion]:
    """Every table, at the start of a query.

    A pipe followed by whitespace starts a new stage, where only operators fit.
    """
    if schema is None or (context.at_pipe and context.current_word == ""):
        return []
    return [_table_suggestion(t) for t in schema.tables]


def operator_provider(
    context: QueryContext, schema: WorkspaceSchema | None
) -> list[Suggestion]:
    """Core tabular operators, right after a pipe."""
    if not context.at_pipe:
        return []
    return [
        KeywordSuggestion(
            value=op,
            label=op,
            description=f"KQL {op} operator",
            insert_text=f" {op} ",
        )
        for op in CORE_OPERATORS
    ]


def column_provider(
    context: QueryContext, schema: WorkspaceSchema | None
) -> list[Suggestion]:
    """Columns of the table named at the head of the query."""
    table = extract_current_table(context.full_text, schema)
    if table is None:
        return []

    # where/extend/project show the column description too; by/on only the type
    detailed = context.previous_word.lower() not in ("by", "on")
    suggestions: list[Suggestion] = []
    for col in table.columns:
        description = col.type
        if detailed and col.description:
            description = f"{col.type} - {col.description}"
        suggestions.append(
            ColumnSuggestion(
                value=col.name,
                label=col.name,
                description=description,
                insert_text=col.name,
            )
        )
    return suggestions


def aggregation_provider(
    context: QueryContext, schema: WorkspaceSchema | None
) -> list[Suggestion]:
    return [
        FunctionSuggestion(
            value=func,
            label=func,
            description="Aggregation function",
            insert_text=function_insert_text(func),
        )
        for func in AGGREGATION_FUNCTIONS
    ]


def prefix_provider(
    context: QueryContext, schema: WorkspaceSchema | None
) -> list[Suggestion]:
    """Keywords, then functions, then tables starting with the current word."""
    prefix = context.current_word.lower()
    suggestions: list[Suggestion] = []

    for keyword in KQL_KEYWORDS:
        if keyword.startswith(prefix):
            suggestions.append(
                KeywordSuggestion(
                    value=keyword,
                    label=keyword,
                    description="KQL keyword",
                    insert_text=keyword,
                )
            )

    for func in KQL_FUNCTIONS:
        if func.lower().startswith(prefix):
            suggestions.append(
                FunctionSuggestion(
                    value=func,
                    label=func,
                    description="KQL function",
                    insert_text=function_insert_text(func),
                )
            )

    if schema is not None:
        suggestions.extend(
            _table_suggestion(t)
            for t in schema.tables
            if t.name.lower().startswith(prefix)
        )
    return suggestions


def time_range_provider(
    context: QueryContext, schema: WorkspaceSchema | None
) -> list[Suggestion]:
    if not context.time_context:
        return []
    return [
        TimeRangeSuggestion(
            value=time_range,
            label=time_range,
            description="Time range",
            insert_text=time_range,
        )
        for time_range in TIME_RANGES
    ]
