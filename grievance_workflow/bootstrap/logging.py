"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from grievance_workflow.config.workflow_config import WorkflowConfig
from grievance_workflow.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)


def configure_structlog(environment: str) -> None:
    """Configure structlog for the given environment."""
    _configure_structlog(environment=environment.lower())


def configure_logging_from_config(config: WorkflowConfig) -> None:
    configure_structlog(config.environment)


__all__ = ["configure_logging_from_config", "configure_structlog"]
