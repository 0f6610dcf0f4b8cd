"""Domain events for the grievance workflow."""

from grievance_workflow.domain.events.audit import (
    AuditEntry,
    AuditEvent,
    AuditEventKind,
    SubjectType,
)

__all__: list[str] = ["AuditEntry", "AuditEvent", "AuditEventKind", "SubjectType"]
