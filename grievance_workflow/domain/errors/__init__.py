"""Domain errors for the grievance workflow.

Provides the rejection taxonomy (Unauthorized, NotFound,
InvalidStateForAction, TerminalLevel, ValidationError,
InvalidRoleOperation) plus the infrastructure-level AuditEmissionError.
"""

from grievance_workflow.domain.errors.audit import AuditEmissionError
from grievance_workflow.domain.errors.role import (
    CannotAssignAdminError,
    InvalidRoleOperationError,
    InvalidTargetError,
    NotAdminError,
)
from grievance_workflow.domain.errors.workflow import (
    GrievanceRejectionError,
    InvalidHandlerError,
    InvalidStateForActionError,
    NotFoundError,
    TerminalLevelError,
    UnauthorizedError,
    ValidationError,
)

__all__: list[str] = [
    "AuditEmissionError",
    "CannotAssignAdminError",
    "GrievanceRejectionError",
    "InvalidHandlerError",
    "InvalidRoleOperationError",
    "InvalidStateForActionError",
    "InvalidTargetError",
    "NotAdminError",
    "NotFoundError",
    "TerminalLevelError",
    "UnauthorizedError",
    "ValidationError",
]
