"""structlog setup for the grievance workflow.

Production renders one JSON object per line; every other environment uses
the coloured console renderer. The threshold comes from ``LOG_LEVEL``.

A rejected escalation in production looks like:

    {"event": "transition_rejected", "level": "warning",
     "timestamp": "2026-01-15T10:00:00Z", "service": "WorkflowEngine",
     "operation": "escalate", "grievance_id": 4, "kind": "TerminalLevel",
     "correlation_id": "5f0c...", "principal": "dean-1"}
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from grievance_workflow.infrastructure.observability.correlation import (
    request_context_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"


def resolve_log_level(name: str | None = None) -> int:
    """Map a level name (or $LOG_LEVEL) to a stdlib level, INFO if unknown."""
    level = logging.getLevelName((name or os.getenv(LOG_LEVEL_ENV, "INFO")).upper())
    return level if isinstance(level, int) else logging.INFO


def _renderer(environment: str) -> Processor:
    if environment.lower() == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_structlog(environment: str = "production", level: str | None = None) -> None:
    """Install the processor chain. Call once per process."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, request_context_processor),
        structlog.processors.format_exc_info,
        _renderer(environment),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_service(
    service_name: str, component: str = "workflow"
) -> structlog.BoundLogger:
    return structlog.get_logger().bind(service=service_name, component=component)
