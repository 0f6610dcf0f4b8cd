"""Role registry errors.

Only the single admin principal may change roles, the admin role itself
is never handed out through ordinary assignment, and the admin can never
be left without the ADMIN role.
"""

from __future__ import annotations

from grievance_workflow.domain.errors.workflow import (
    GrievanceRejectionError,
    UnauthorizedError,
)


class NotAdminError(UnauthorizedError):
    """Caller attempted an admin-only operation without being the admin."""

    def __init__(self, caller: str, action: str) -> None:
        super().__init__(
            caller=caller,
            action=action,
            reason="caller is not the admin",
            required="Admin",
        )


class InvalidRoleOperationError(GrievanceRejectionError):
    """Role operation is structurally invalid (self-assign, admin target, ...)."""

    kind = "InvalidRoleOperation"

    def __init__(self, message: str, target: str | None = None) -> None:
        self.target = target
        super().__init__(message, target=target)


class InvalidTargetError(InvalidRoleOperationError):
    """Target principal is blank, the caller, or the admin."""

    def __init__(self, target: str | None, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid role target {target!r}: {reason}", target=target)


class CannotAssignAdminError(InvalidRoleOperationError):
    """ADMIN is only ever moved via transfer_admin."""

    def __init__(self, target: str) -> None:
        super().__init__(
            f"Cannot assign Admin role to {target}; use transfer_admin",
            target=target,
        )
