"""Audit emission failure.

Raised when a mutation could not be witnessed by the audit log. The
mutation is rolled back before this error propagates, so an unwitnessed
state change is never observable.
"""

from __future__ import annotations

from grievance_workflow.domain.exceptions import GrievanceWorkflowError


class AuditEmissionError(GrievanceWorkflowError):
    """Raised when appending to the audit log fails.

    This is an infrastructure failure, not a business rejection, and is
    therefore never folded into an ``OperationResult``.

    Attributes:
        subject: The grievance id or principal whose event was lost.
        event_kind: Kind of event that failed to append.
        cause: Underlying exception.
    """

    def __init__(self, subject: str, event_kind: str, cause: Exception) -> None:
        self.subject = subject
        self.event_kind = event_kind
        self.cause = cause
        super().__init__(
            f"Failed to append {event_kind} for {subject}: {cause}; "
            "mutation rolled back"
        )
