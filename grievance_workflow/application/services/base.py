"""LoggingMixin shared by the workflow services.

Services call ``_init_logger`` from ``__init__`` and open an
operation-scoped logger per public call:

    log = self._log_operation("resolve", caller=caller, grievance_id=gid)
    try:
        ...
    except GrievanceRejectionError as e:
        self._log_rejection(log, e)
        raise
    log.info("grievance_resolved")
"""

import structlog

from grievance_workflow.domain.errors.workflow import GrievanceRejectionError
from grievance_workflow.infrastructure.observability.correlation import (
    get_correlation_id,
)


class LoggingMixin:
    """Binds ``service`` and ``component`` once, ``operation`` per call."""

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "workflow") -> None:
        self._log = structlog.get_logger().bind(
            service=type(self).__name__, component=component
        )

    def _log_operation(self, operation: str, **context: object) -> structlog.BoundLogger:
        """Logger for one call, carrying the request's correlation id."""
        return self._log.bind(
            operation=operation, correlation_id=get_correlation_id(), **context
        )

    @staticmethod
    def _log_rejection(
        log: structlog.BoundLogger,
        error: GrievanceRejectionError,
        event: str = "transition_rejected",
    ) -> None:
        """Business rejections are expected traffic: warning, never error."""
        log.warning(event, kind=error.kind, reason=str(error), **error.context)
