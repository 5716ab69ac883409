"""Hardcoded query template registry.

Templates are code-defined example queries offered as starting points in the
editor. They do not depend on the loaded workspace schema and are returned
verbatim.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class QueryTemplate:
    name: str
    template: str
    description: str


TEMPLATES: tuple[QueryTemplate, ...] = (
    QueryTemplate(
        name="Basic Query",
        template="TableName\n| where TimeGenerated >= ago(1d)\n| take 100",
        description="Simple query with time filter",
    ),
    QueryTemplate(
        name="Count by Category",
        template=(
            "TableName\n"
            "| where TimeGenerated >= ago(7d)\n"
            "| summarize Count = count() by Category\n"
            "| order by Count desc"
        ),
        description="Count records grouped by category",
    ),
    QueryTemplate(
        name="Time Series",
        template=(
            "TableName\n"
            "| where TimeGenerated >= ago(1d)\n"
            "| summarize Count = count() by bin(TimeGenerated, 1h)\n"
            "| render timechart"
        ),
        description="Create time series chart",
    ),
    QueryTemplate(
        name="Top N by Field",
        template=(
            "TableName\n"
            "| where TimeGenerated >= ago(1d)\n"
            "| summarize Count = count() by FieldName\n"
            "| top 10 by Count desc"
        ),
        description="Get top 10 items by count",
    ),
    QueryTemplate(
        name="Search Text",
        template=(
            "TableName\n"
            "| where TimeGenerated >= ago(1d)\n"
            '| where ColumnName contains "searchtext"\n'
            "| project TimeGenerated, ColumnName, OtherColumns"
        ),
        description="Search for specific text",
    ),
    QueryTemplate(
        name="Join Tables",
        template=(
            "Table1\n"
            "| join kind=inner (\n"
            "    Table2\n"
            "    | where TimeGenerated >= ago(1d)\n"
            ") on CommonField\n"
            "| project Column1, Column2, Column3"
        ),
        description="Join two tables on common field",
    ),
    QueryTemplate(
        name="Parse JSON",
        template=(
            "TableName\n"
            "| where TimeGenerated >= ago(1d)\n"
            "| extend ParsedData = parse_json(JsonColumn)\n"
            "| extend Field1 = ParsedData.field1, Field2 = ParsedData.field2\n"
            "| project TimeGenerated, Field1, Field2"
        ),
        description="Parse JSON column and extract fields",
    ),
    QueryTemplate(
        name="Security Events",
        template=(
            "SecurityEvent\n"
            "| where TimeGenerated >= ago(1d)\n"
            "| where EventID == 4625 // Failed logon\n"
            "| summarize FailedLogons = count() by Account, Computer\n"
            "| where FailedLogons > 5"
        ),
        description="Find failed logon attempts",
    ),
    QueryTemplate(
        name="Performance Metrics",
        template=(
            "Perf\n"
            "| where TimeGenerated >= ago(1h)\n"
            '| where ObjectName == "Processor" and CounterName == "% Processor Time"\n'
            "| summarize AvgCPU = avg(CounterValue) by Computer, bin(TimeGenerated, 5m)\n"
            "| where AvgCPU > 80"
        ),
        description="Monitor CPU usage",
    ),
    QueryTemplate(
        name="M365 Defender Incidents",
        template=(
            "SecurityIncident\n"
            "| where TimeGenerated >= ago(7d)\n"
            '| where Status == "Active"\n'
            "| project IncidentNumber, Title, Severity, Owner, CreatedTime\n"
            "| order by CreatedTime desc"
        ),
        description="Get active security incidents",
    ),
)


def get_query_templates() -> list[QueryTemplate]:
    return list(TEMPLATES)


def get_query_template(name: str) -> QueryTemplate | None:
    for template in TEMPLATES:
        if template.name == name:
            return template
    return None
