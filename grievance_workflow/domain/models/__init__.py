"""Domain models for the grievance workflow."""

from grievance_workflow.domain.models.grievance import (
    ACTIONABLE_STATUSES,
    DELEGABLE_STATUSES,
    MAX_DESCRIPTION_LENGTH,
    MAX_REMARKS_LENGTH,
    REASSIGNABLE_STATUSES,
    REVIEWABLE_STATUSES,
    Grievance,
    GrievanceStatus,
)
from grievance_workflow.domain.models.operation_result import OperationResult
from grievance_workflow.domain.models.role import (
    DELEGATING_ROLES,
    EscalationLevel,
    Role,
)

__all__: list[str] = [
    "ACTIONABLE_STATUSES",
    "DELEGABLE_STATUSES",
    "DELEGATING_ROLES",
    "MAX_DESCRIPTION_LENGTH",
    "MAX_REMARKS_LENGTH",
    "REASSIGNABLE_STATUSES",
    "REVIEWABLE_STATUSES",
    "EscalationLevel",
    "Grievance",
    "GrievanceStatus",
    "OperationResult",
    "Role",
]
