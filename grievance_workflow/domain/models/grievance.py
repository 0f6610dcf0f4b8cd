"""Grievance domain model.

A grievance is created by a student, then moves through the workflow:

    Submitted -> InReview -> {AssignedToHandler | Resolved | Escalated} -> ... -> Closed

Records are frozen; every transition produces a new snapshot via the
``with_*`` methods and the repository swaps it in atomically. Records
are never deleted.

Invariants:
- id is dense, starts at 1, never reused
- escalation_level never regresses
- Closed is terminal; Resolved has no outgoing transitions
- resolved_by is only set on resolution or closure
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from grievance_workflow.domain.models.role import EscalationLevel, Role

MAX_DESCRIPTION_LENGTH: int = 1000
MAX_REMARKS_LENGTH: int = 500


class GrievanceStatus(Enum):
    """Lifecycle status of a grievance.

    State Machine:
        SUBMITTED -> IN_REVIEW, ASSIGNED_TO_HANDLER, RESOLVED, ESCALATED
        IN_REVIEW -> IN_REVIEW, ASSIGNED_TO_HANDLER, RESOLVED, ESCALATED
        ASSIGNED_TO_HANDLER -> RESOLVED, ESCALATED
        ESCALATED -> IN_REVIEW, ASSIGNED_TO_HANDLER, RESOLVED, ESCALATED, CLOSED
        RESOLVED, CLOSED -> (none)
    """

    SUBMITTED = "Submitted"
    IN_REVIEW = "InReview"
    ASSIGNED_TO_HANDLER = "AssignedToHandler"
    ESCALATED = "Escalated"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    def is_terminal(self) -> bool:
        """Closed is the only terminal status."""
        return self is GrievanceStatus.CLOSED

    def is_actionable(self) -> bool:
        """True while the record can still be resolved or escalated."""
        return self in ACTIONABLE_STATUSES

    def valid_transitions(self) -> frozenset[GrievanceStatus]:
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())


ACTIONABLE_STATUSES: frozenset[GrievanceStatus] = frozenset(
    {
        GrievanceStatus.SUBMITTED,
        GrievanceStatus.IN_REVIEW,
        GrievanceStatus.ASSIGNED_TO_HANDLER,
        GrievanceStatus.ESCALATED,
    }
)

REVIEWABLE_STATUSES: frozenset[GrievanceStatus] = frozenset(
    {
        GrievanceStatus.SUBMITTED,
        GrievanceStatus.IN_REVIEW,
        GrievanceStatus.ESCALATED,
    }
)

# Escalated is delegable so a record escalated to the YearCoordinator tier
# can be handed to a specific HOD
DELEGABLE_STATUSES: frozenset[GrievanceStatus] = REVIEWABLE_STATUSES

REASSIGNABLE_STATUSES: frozenset[GrievanceStatus] = frozenset(
    {
        GrievanceStatus.ASSIGNED_TO_HANDLER,
        GrievanceStatus.ESCALATED,
    }
)

STATUS_TRANSITION_MATRIX: dict[GrievanceStatus, frozenset[GrievanceStatus]] = {
    GrievanceStatus.SUBMITTED: frozenset(
        {
            GrievanceStatus.IN_REVIEW,
            GrievanceStatus.ASSIGNED_TO_HANDLER,
            GrievanceStatus.RESOLVED,
            GrievanceStatus.ESCALATED,
        }
    ),
    GrievanceStatus.IN_REVIEW: frozenset(
        {
            GrievanceStatus.IN_REVIEW,
            GrievanceStatus.ASSIGNED_TO_HANDLER,
            GrievanceStatus.RESOLVED,
            GrievanceStatus.ESCALATED,
        }
    ),
    GrievanceStatus.ASSIGNED_TO_HANDLER: frozenset(
        {
            GrievanceStatus.ASSIGNED_TO_HANDLER,
            GrievanceStatus.RESOLVED,
            GrievanceStatus.ESCALATED,
        }
    ),
    GrievanceStatus.ESCALATED: frozenset(
        {
            GrievanceStatus.IN_REVIEW,
            GrievanceStatus.ASSIGNED_TO_HANDLER,
            GrievanceStatus.RESOLVED,
            GrievanceStatus.ESCALATED,
            GrievanceStatus.CLOSED,
        }
    ),
    GrievanceStatus.RESOLVED: frozenset(),
    GrievanceStatus.CLOSED: frozenset(),
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Grievance:
    """One complaint record.

    Attributes:
        id: Sequential identifier starting at 1.
        submitter: Principal that created the record.
        description: Complaint text, set once at creation.
        status: Current lifecycle status.
        escalation_level: Tier currently responsible.
        assigned_handler: Specific HOD accountable for the record, if any.
        assigned_by: Role of the tier that made the handler assignment;
            only that tier may re-assign.
        submitted_at: Creation timestamp (UTC).
        last_updated_at: Timestamp of the latest mutation (UTC).
        resolution_remarks: Remarks given on resolution or closure.
        resolved_by: Principal that resolved or closed the record.
    """

    id: int
    submitter: str
    description: str
    status: GrievanceStatus = field(default=GrievanceStatus.SUBMITTED)
    escalation_level: EscalationLevel = field(default=EscalationLevel.COUNSELOR)
    assigned_handler: str | None = field(default=None)
    assigned_by: Role | None = field(default=None)
    submitted_at: datetime = field(default_factory=_utc_now)
    last_updated_at: datetime = field(default_factory=_utc_now)
    resolution_remarks: str | None = field(default=None)
    resolved_by: str | None = field(default=None)

    def __post_init__(self) -> None:
        if self.id < 1:
            raise ValueError(f"Grievance id must be >= 1, got {self.id}")
        if not self.description.strip():
            raise ValueError("Grievance description cannot be empty")

    def _transition(self, new_status: GrievanceStatus, at: datetime, **changes: object) -> Grievance:
        if new_status not in self.status.valid_transitions():
            raise ValueError(
                f"Illegal status transition {self.status.value} -> {new_status.value}"
            )
        new_level = changes.get("escalation_level", self.escalation_level)
        if isinstance(new_level, EscalationLevel) and new_level < self.escalation_level:
            raise ValueError("Escalation level cannot regress")
        return replace(self, status=new_status, last_updated_at=at, **changes)

    def with_review(self, at: datetime) -> Grievance:
        return self._transition(GrievanceStatus.IN_REVIEW, at)

    def with_handler(self, handler: str, assigned_by: Role, at: datetime) -> Grievance:
        """Delegate to a specific HOD; the tier moves to HOD."""
        return self._transition(
            GrievanceStatus.ASSIGNED_TO_HANDLER,
            at,
            escalation_level=EscalationLevel.HOD,
            assigned_handler=handler,
            assigned_by=assigned_by,
        )

    def with_reassigned_handler(self, handler: str, at: datetime) -> Grievance:
        """Swap the handler without touching status or tier."""
        return replace(self, assigned_handler=handler, last_updated_at=at)

    def with_resolution(self, resolver: str, remarks: str, at: datetime) -> Grievance:
        return self._transition(
            GrievanceStatus.RESOLVED,
            at,
            resolved_by=resolver,
            resolution_remarks=remarks,
        )

    def with_escalation(
        self,
        at: datetime,
        handler: str | None = None,
        assigned_by: Role | None = None,
    ) -> Grievance:
        """Advance one tier.

        The handler is kept only when the next tier requires one; otherwise
        it is cleared.
        """
        next_level = self.escalation_level.next()
        if not next_level.requires_handler:
            handler = None
            assigned_by = None
        return self._transition(
            GrievanceStatus.ESCALATED,
            at,
            escalation_level=next_level,
            assigned_handler=handler,
            assigned_by=assigned_by,
        )

    def with_closure(self, closer: str, remarks: str, at: datetime) -> Grievance:
        return self._transition(
            GrievanceStatus.CLOSED,
            at,
            resolved_by=closer,
            resolution_remarks=remarks,
        )
