"""Workflow rejection errors for the grievance state machine.

Every business rule the workflow enforces has exactly one error kind here.
Rejections are local and synchronous: they are raised before any state
is written, so a rejected call never leaves a partial mutation behind.

Each error carries:
- kind: stable taxonomy name used by the result facade and HTTP adapter
- context: enough detail (grievance id, required role/tier, current
  status) to explain the rejection to the caller
"""

from __future__ import annotations

from typing import Any

from grievance_workflow.domain.exceptions import GrievanceWorkflowError


class GrievanceRejectionError(GrievanceWorkflowError):
    """Base class for expected business rejections.

    Subclasses set ``kind``. The facade converts any instance of this
    class into a failed ``OperationResult``; anything else propagates.

    Attributes:
        context: Structured detail about the rejected request.
    """

    kind: str = "Rejected"

    def __init__(self, message: str, **context: Any) -> None:
        self.context: dict[str, Any] = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging and error responses."""
        return {
            "kind": self.kind,
            "message": str(self),
            "context": dict(self.context),
        }


class UnauthorizedError(GrievanceRejectionError):
    """Caller's role, tier or handler assignment does not permit the action."""

    kind = "Unauthorized"

    def __init__(
        self,
        caller: str,
        action: str,
        reason: str,
        grievance_id: int | None = None,
        required: str | None = None,
    ) -> None:
        self.caller = caller
        self.action = action
        self.grievance_id = grievance_id
        self.required = required
        target = f" on grievance {grievance_id}" if grievance_id is not None else ""
        needs = f" (requires {required})" if required else ""
        super().__init__(
            f"{caller} may not {action}{target}: {reason}{needs}",
            caller=caller,
            action=action,
            grievance_id=grievance_id,
            required=required,
        )


class NotFoundError(GrievanceRejectionError):
    """Grievance id outside the assigned range."""

    kind = "NotFound"

    def __init__(self, grievance_id: int) -> None:
        self.grievance_id = grievance_id
        super().__init__(
            f"Grievance not found: {grievance_id}", grievance_id=grievance_id
        )


class InvalidStateForActionError(GrievanceRejectionError):
    """Transition is not legal from the record's current status."""

    kind = "InvalidStateForAction"

    def __init__(
        self,
        grievance_id: int,
        action: str,
        current_status: str,
        allowed_statuses: list[str] | None = None,
    ) -> None:
        self.grievance_id = grievance_id
        self.action = action
        self.current_status = current_status
        self.allowed_statuses = allowed_statuses or []
        allowed_str = (
            f" Allowed from: {self.allowed_statuses}" if self.allowed_statuses else ""
        )
        super().__init__(
            f"Cannot {action} grievance {grievance_id} in status "
            f"{current_status}.{allowed_str}",
            grievance_id=grievance_id,
            action=action,
            current_status=current_status,
            allowed_statuses=self.allowed_statuses,
        )


class TerminalLevelError(GrievanceRejectionError):
    """Escalation attempted past the apex tier."""

    kind = "TerminalLevel"

    def __init__(self, grievance_id: int, level: str) -> None:
        self.grievance_id = grievance_id
        self.level = level
        super().__init__(
            f"Grievance {grievance_id} is already at {level}; "
            "there is no higher tier to escalate to",
            grievance_id=grievance_id,
            level=level,
        )


class ValidationError(GrievanceRejectionError):
    """Text bounds, emptiness or argument shape violated."""

    kind = "ValidationError"

    def __init__(self, field: str, reason: str, **context: Any) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}", field=field, **context)


class InvalidHandlerError(ValidationError):
    """Proposed handler does not hold the role the target tier requires."""

    def __init__(
        self,
        grievance_id: int,
        handler: str | None,
        reason: str,
    ) -> None:
        self.grievance_id = grievance_id
        self.handler = handler
        super().__init__(
            "handler",
            reason,
            grievance_id=grievance_id,
            handler=handler,
        )
