"""Central Prometheus metrics registry.

All application metrics are defined here to avoid scattered metric definitions
and ensure consistent naming/labeling.
"""

from prometheus_client import Counter, Gauge, Histogram, Info

# Application info
app_info = Info("kql_intellisense_app", "KQL IntelliSense application info")

# --- HTTP ---
http_requests_total = Counter(
    "kql_intellisense_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
http_request_duration_seconds = Histogram(
    "kql_intellisense_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

# --- Schema loading ---
schema_loads_total = Counter(
    "kql_intellisense_schema_loads_total",
    "Total workspace schema load attempts",
    ["status"],
)
schema_load_duration_seconds = Histogram(
    "kql_intellisense_schema_load_duration_seconds",
    "Workspace schema fetch duration in seconds",
)

# --- Suggestions ---
suggestion_requests_total = Counter(
    "kql_intellisense_suggestion_requests_total",
    "Total suggestion requests by classified position",
    ["position"],
)
suggestions_returned = Histogram(
    "kql_intellisense_suggestions_returned",
    "Number of suggestions returned per request",
    buckets=[0, 1, 5, 10, 25, 50, 100, 250],
)

# --- Engines ---
engines_active = Gauge(
    "kql_intellisense_engines_active",
    "Number of per-workspace suggestion engines held in memory",
)
