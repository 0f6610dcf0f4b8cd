"""API models for grievance endpoints.

Pydantic request/response payloads. Text bounds are enforced by the
workflow engine, not here, so over-long or blank text comes back as a
ValidationError problem with the same shape as every other rejection.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class GrievanceStatusEnum(str, Enum):
    """Lifecycle status of a grievance."""

    SUBMITTED = "Submitted"
    IN_REVIEW = "InReview"
    ASSIGNED_TO_HANDLER = "AssignedToHandler"
    ESCALATED = "Escalated"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class EscalationLevelEnum(str, Enum):
    """Tier currently responsible for a grievance."""

    COUNSELOR = "Counselor"
    YEAR_COORDINATOR = "YearCoordinator"
    HOD = "HOD"
    DEAN = "Dean"


class SubmitGrievanceRequest(BaseModel):
    description: str = Field(..., description="Complaint text (non-blank, bounded)")


class SubmitGrievanceResponse(BaseModel):
    id: int = Field(..., description="Sequential grievance id", ge=1)


class RemarksRequest(BaseModel):
    """Body for resolve and close."""

    remarks: str = Field(..., description="Resolution or closing remarks")


class EscalateRequest(BaseModel):
    """Body for escalate.

    Attributes:
        remarks: Reason for escalating.
        handler: HOD to assign; required only when escalating into the HOD tier.
    """

    remarks: str = Field(..., description="Reason for escalating")
    handler: str | None = Field(
        default=None,
        description="HOD principal; required when the next tier is HOD",
    )


class AssignHandlerRequest(BaseModel):
    handler: str = Field(..., description="HOD principal to hand the grievance to")


class GrievanceResponse(BaseModel):
    """Full grievance record as visible to the caller.

    Attributes:
        id: Sequential identifier.
        submitter: Principal that raised the grievance.
        description: Complaint text.
        status: Current lifecycle status.
        escalation_level: Tier currently responsible.
        assigned_handler: HOD individually accountable, if any.
        assigned_by: Role of the tier that made the assignment.
        submitted_at: Creation time (ISO 8601 UTC).
        last_updated_at: Latest mutation time (ISO 8601 UTC).
        resolution_remarks: Remarks given on resolution or closure.
        resolved_by: Principal that resolved or closed the grievance.
    """

    id: int
    submitter: str
    description: str
    status: GrievanceStatusEnum
    escalation_level: EscalationLevelEnum
    assigned_handler: str | None = None
    assigned_by: str | None = None
    submitted_at: datetime
    last_updated_at: datetime
    resolution_remarks: str | None = None
    resolved_by: str | None = None


class GrievanceIdListResponse(BaseModel):
    ids: list[int] = Field(default_factory=list, description="Grievance ids, ascending")
    count: int = Field(..., ge=0)


class GrievanceCountResponse(BaseModel):
    count: int = Field(..., ge=0, description="Total grievances ever submitted")


class AuditEventResponse(BaseModel):
    """One audit log entry in the append-only record layout."""

    sequence: int = Field(..., ge=1)
    kind: str
    actor: str
    subject_type: str
    subject: str
    payload: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime


class AuditEventListResponse(BaseModel):
    events: list[AuditEventResponse] = Field(default_factory=list)


class ProblemDetailResponse(BaseModel):
    """RFC 7807 problem body carried in the ``detail`` field of error responses."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
    kind: str
    context: dict[str, Any] = Field(default_factory=dict)
