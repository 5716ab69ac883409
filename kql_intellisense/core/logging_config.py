"""Structured logging configuration via structlog.

Stdlib loggers and structlog loggers share one ProcessorFormatter, so
library output (httpx, uvicorn) and engine events render the same way.
Per-request context (request_id, workspace_id) travels in structlog.contextvars.
"""

import logging
import sys

import structlog

from kql_intellisense.core.config import settings

SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _select_renderer(json_logs: bool | None) -> structlog.types.Processor:
    if json_logs is None:
        json_logs = settings.app_env != "development"
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Install structlog as the logging backend. Call once at app startup.

    ``level`` and ``json_logs`` override the settings-derived defaults.
    """
    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _select_renderer(json_logs),
        ],
        foreign_pre_chain=SHARED_PROCESSORS,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel((level or settings.log_level).upper())

    # httpx logs every schema fetch at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def bind_workspace(workspace_id: str) -> None:
    """Attach the workspace id to every log line for the rest of the request."""
    structlog.contextvars.bind_contextvars(workspace_id=workspace_id)
