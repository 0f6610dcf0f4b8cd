"""Structured logging and per-request context."""

from grievance_workflow.infrastructure.observability.correlation import (
    RequestContextTokens,
    bind_request_context,
    generate_correlation_id,
    get_correlation_id,
    get_request_principal,
    request_context_processor,
    reset_request_context,
    set_correlation_id,
)
from grievance_workflow.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_service,
    resolve_log_level,
)

__all__: list[str] = [
    "RequestContextTokens",
    "bind_request_context",
    "configure_structlog",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger_for_service",
    "get_request_principal",
    "request_context_processor",
    "reset_request_context",
    "resolve_log_level",
    "set_correlation_id",
]
