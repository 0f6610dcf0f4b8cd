"""Audit event model.

Every successful workflow transition or role change appends exactly one
AuditEvent (transfer_admin appends two). Events are immutable and carry a
sequence number derived from total operation order; sequence, not
timestamp, is the authoritative ordering.

Record layout: sequence, kind, actor, subject, payload, timestamp.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any


class AuditEventKind(str, Enum):
    """Kinds of events written to the audit log."""

    GRIEVANCE_SUBMITTED = "grievance.submitted"
    GRIEVANCE_REVIEWED = "grievance.reviewed"
    GRIEVANCE_ASSIGNED = "grievance.assigned"
    GRIEVANCE_REASSIGNED = "grievance.reassigned"
    GRIEVANCE_RESOLVED = "grievance.resolved"
    GRIEVANCE_ESCALATED = "grievance.escalated"
    GRIEVANCE_CLOSED = "grievance.closed"
    ROLE_ASSIGNED = "role.assigned"
    ROLE_REVOKED = "role.revoked"

    @property
    def subject_type(self) -> SubjectType:
        if self.value.startswith("role."):
            return SubjectType.PRINCIPAL
        return SubjectType.GRIEVANCE


class SubjectType(str, Enum):
    """What an event's subject identifier refers to."""

    GRIEVANCE = "grievance"
    PRINCIPAL = "principal"


@dataclass(frozen=True)
class AuditEntry:
    """An event waiting to be appended (no sequence or timestamp yet)."""

    kind: AuditEventKind
    actor: str
    subject: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, eq=True)
class AuditEvent:
    """One immutable audit log entry.

    Attributes:
        sequence: Position in the global log, starting at 1, gap-free.
        kind: What happened.
        actor: Principal that performed the mutation.
        subject: Grievance id (as string) or principal the event is about.
        payload: Remarks, description, roles, handler and similar detail.
            Stored as a read-only view over a private copy.
        timestamp: When the mutation was committed (UTC).
    """

    sequence: int
    kind: AuditEventKind
    actor: str
    subject: str
    timestamp: datetime
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def __hash__(self) -> int:
        return hash((self.sequence, self.kind, self.actor, self.subject))

    @property
    def subject_type(self) -> SubjectType:
        return self.kind.subject_type

    @property
    def grievance_id(self) -> int | None:
        if self.subject_type is SubjectType.GRIEVANCE:
            return int(self.subject)
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the append-only record layout."""
        return {
            "sequence": self.sequence,
            "kind": self.kind.value,
            "actor": self.actor,
            "subject_type": self.subject_type.value,
            "subject": self.subject,
            "payload": dict(self.payload),
            "timestamp": self.timestamp.isoformat(),
        }

    def canonical_bytes(self) -> bytes:
        """Deterministic serialization (sorted keys) for export or hashing."""
        return json.dumps(self.to_dict(), sort_keys=True).encode("utf-8")
