"""Workflow Engine - the grievance state machine.

Validates each requested transition against the record's current status,
the caller's role, and the record's escalation tier / assigned handler,
then applies it atomically together with its audit event.

Transitions:

    submit              STUDENT                         -> Submitted @ Counselor
    review              tier actor, not terminal        -> InReview
    assign_to_handler   Counselor/YC at their own tier  -> AssignedToHandler @ HOD
    reassign_handler    tier that made the assignment   -> handler swapped
    resolve             tier actor                      -> Resolved
    escalate            tier actor, below Dean          -> Escalated @ next tier
    close               Dean at Dean tier, Escalated    -> Closed

Tier actor: any holder of the tier's role at Counselor, YearCoordinator
and Dean; only the specifically assigned handler at HOD.

Check order (first failure wins):
    NotFound -> InvalidStateForAction -> Unauthorized -> TerminalLevel -> ValidationError

Developer Golden Rules:
1. ONE WRITER PER GRIEVANCE - Every transition runs under that id's lock
2. CHECK THEN COMMIT - No write happens until every check has passed
3. EVENT WITH SAVE - Audit append follows the write inside the lock; on
   append failure the previous snapshot is restored
4. FAIL LOUD - Rejections raise taxonomy errors with full context
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Callable
from datetime import datetime
from typing import Any

from grievance_workflow.application.ports.audit_log import AuditLogProtocol
from grievance_workflow.application.ports.grievance_repository import (
    GrievanceRepositoryProtocol,
)
from grievance_workflow.application.ports.time_authority import TimeAuthorityProtocol
from grievance_workflow.application.services.base import LoggingMixin
from grievance_workflow.application.services.role_registry_service import (
    RoleRegistryService,
)
from grievance_workflow.config.workflow_config import WorkflowConfig
from grievance_workflow.domain.errors import (
    AuditEmissionError,
    GrievanceRejectionError,
    InvalidHandlerError,
    InvalidStateForActionError,
    NotFoundError,
    TerminalLevelError,
    UnauthorizedError,
    ValidationError,
)
from grievance_workflow.domain.events.audit import AuditEventKind
from grievance_workflow.domain.models.grievance import (
    ACTIONABLE_STATUSES,
    DELEGABLE_STATUSES,
    REASSIGNABLE_STATUSES,
    REVIEWABLE_STATUSES,
    Grievance,
    GrievanceStatus,
)
from grievance_workflow.domain.models.role import (
    DELEGATING_ROLES,
    EscalationLevel,
    Role,
)
from grievance_workflow.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)


def _status_names(statuses: frozenset[GrievanceStatus]) -> list[str]:
    return sorted(s.value for s in statuses)


class WorkflowEngine(LoggingMixin):
    """State machine over GrievanceRepositoryProtocol.

    Attributes:
        _repository: Grievance storage with secondary indices.
        _roles: Role registry consulted for every caller.
        _audit_log: Append-only event log.
        _time: Clock for record and event timestamps.
        _config: Text bounds.
        _locks: One lock per grievance id.
        _submission_lock: Serializes id allocation.
    """

    def __init__(
        self,
        repository: GrievanceRepositoryProtocol,
        role_registry: RoleRegistryService,
        audit_log: AuditLogProtocol,
        config: WorkflowConfig | None = None,
        time_authority: TimeAuthorityProtocol | None = None,
    ) -> None:
        self._repository = repository
        self._roles = role_registry
        self._audit_log = audit_log
        self._config = config or WorkflowConfig()
        self._time = time_authority or SystemTimeAuthority()
        self._locks: defaultdict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._submission_lock = asyncio.Lock()
        self._init_logger(component="workflow")

    # =========================================================================
    # Submission
    # =========================================================================

    async def submit(self, caller: str, description: str) -> Grievance:
        """Create a grievance at the Counselor tier.

        Raises:
            UnauthorizedError: Caller is not a STUDENT.
            ValidationError: Description blank or over the length bound.
            AuditEmissionError: Submission event could not be appended.
        """
        log = self._log_operation(
            "submit", caller=caller, description_length=len(description)
        )
        try:
            role = await self._roles.role_of(caller)
            if role is not Role.STUDENT:
                raise UnauthorizedError(
                    caller=caller,
                    action="submit a grievance",
                    reason=f"role is {role.value}",
                    required=Role.STUDENT.value,
                )
            self._validate_text(
                "description", description, self._config.max_description_length
            )
        except GrievanceRejectionError as e:
            self._log_rejection(log, e)
            raise

        async with self._submission_lock:
            now = self._time.utcnow()
            grievance = Grievance(
                id=await self._repository.next_id(),
                submitter=caller,
                description=description,
                status=GrievanceStatus.SUBMITTED,
                escalation_level=EscalationLevel.COUNSELOR,
                submitted_at=now,
                last_updated_at=now,
            )
            await self._repository.insert(grievance)
            try:
                await self._audit_log.append(
                    AuditEventKind.GRIEVANCE_SUBMITTED,
                    actor=caller,
                    subject=str(grievance.id),
                    payload={"description": description},
                    timestamp=now,
                )
            except Exception as e:
                log.error(
                    "audit_append_failed_rolling_back",
                    grievance_id=grievance.id,
                    error=str(e),
                )
                await self._repository.revert_insert(grievance.id)
                raise AuditEmissionError(
                    str(grievance.id), AuditEventKind.GRIEVANCE_SUBMITTED.value, e
                ) from e

        log.info("grievance_submitted", grievance_id=grievance.id)
        return grievance

    # =========================================================================
    # Transitions
    # =========================================================================

    async def review(self, caller: str, grievance_id: int) -> Grievance:
        """Mark a grievance as in review by the responsible tier."""

        async def check(g: Grievance, role: Role) -> None:
            self._require_status(g, "review", REVIEWABLE_STATUSES)
            self._require_tier_actor(g, caller, role, "review")

        return await self._apply(
            caller,
            grievance_id,
            "review",
            check,
            lambda g, role, now: g.with_review(now),
            AuditEventKind.GRIEVANCE_REVIEWED,
            lambda g: {},
        )

    async def assign_to_handler(
        self, caller: str, grievance_id: int, handler: str
    ) -> Grievance:
        """Delegate a grievance to a specific HOD.

        Only a Counselor or YearCoordinator acting at its own tier may
        delegate; the tier jumps to HOD and the handler becomes individually
        accountable.
        """

        async def check(g: Grievance, role: Role) -> None:
            self._require_status(g, "assign", DELEGABLE_STATUSES)
            if role not in DELEGATING_ROLES:
                raise UnauthorizedError(
                    caller=caller,
                    action="assign a handler",
                    reason=f"role {role.value} cannot delegate",
                    grievance_id=g.id,
                    required="Counselor or YearCoordinator",
                )
            self._require_tier_actor(g, caller, role, "assign a handler")
            await self._require_handler(g, handler)

        return await self._apply(
            caller,
            grievance_id,
            "assign_to_handler",
            check,
            lambda g, role, now: g.with_handler(handler, role, now),
            AuditEventKind.GRIEVANCE_ASSIGNED,
            lambda g: {
                "handler": handler,
                "assigned_by_role": g.assigned_by.value if g.assigned_by else None,
            },
        )

    async def reassign_handler(
        self, caller: str, grievance_id: int, handler: str
    ) -> Grievance:
        """Replace the assigned HOD.

        Only a holder of the role that made the original assignment may
        re-assign; the HOD tier itself cannot hand a record sideways.
        """
        previous_handler: dict[str, str | None] = {}

        async def check(g: Grievance, role: Role) -> None:
            self._require_status(g, "reassign", REASSIGNABLE_STATUSES)
            if g.escalation_level is not EscalationLevel.HOD or g.assigned_handler is None:
                raise InvalidStateForActionError(
                    grievance_id=g.id,
                    action="reassign",
                    current_status=f"{g.status.value} at {g.escalation_level.name}",
                    allowed_statuses=_status_names(REASSIGNABLE_STATUSES),
                )
            if g.assigned_by is None or role is not g.assigned_by:
                raise UnauthorizedError(
                    caller=caller,
                    action="reassign the handler",
                    reason="only the tier that made the assignment may re-assign",
                    grievance_id=g.id,
                    required=g.assigned_by.value if g.assigned_by else None,
                )
            if handler == g.assigned_handler:
                raise InvalidHandlerError(g.id, handler, "already the assigned handler")
            await self._require_handler(g, handler)
            previous_handler["value"] = g.assigned_handler

        return await self._apply(
            caller,
            grievance_id,
            "reassign_handler",
            check,
            lambda g, role, now: g.with_reassigned_handler(handler, now),
            AuditEventKind.GRIEVANCE_REASSIGNED,
            lambda g: {
                "handler": handler,
                "previous_handler": previous_handler.get("value"),
            },
        )

    async def resolve(self, caller: str, grievance_id: int, remarks: str) -> Grievance:
        """Resolve at the current tier. Resolved records accept no further action."""

        async def check(g: Grievance, role: Role) -> None:
            self._require_status(g, "resolve", ACTIONABLE_STATUSES)
            self._require_tier_actor(g, caller, role, "resolve")
            self._validate_text("remarks", remarks, self._config.max_remarks_length)

        return await self._apply(
            caller,
            grievance_id,
            "resolve",
            check,
            lambda g, role, now: g.with_resolution(caller, remarks, now),
            AuditEventKind.GRIEVANCE_RESOLVED,
            lambda g: {"remarks": remarks, "level": g.escalation_level.name},
        )

    async def escalate(
        self,
        caller: str,
        grievance_id: int,
        remarks: str,
        handler: str | None = None,
    ) -> Grievance:
        """Advance one tier.

        Escalating into the HOD tier requires naming the HOD who becomes
        the assigned handler; every other escalation clears the handler.

        Raises:
            TerminalLevelError: Record is already at the Dean tier.
            InvalidHandlerError: Handler missing for HOD, present otherwise,
                or not an HOD.
        """
        from_level: dict[str, EscalationLevel] = {}

        async def check(g: Grievance, role: Role) -> None:
            self._require_status(g, "escalate", ACTIONABLE_STATUSES)
            self._require_tier_actor(g, caller, role, "escalate")
            if g.escalation_level.is_apex:
                raise TerminalLevelError(g.id, g.escalation_level.name)
            self._validate_text("remarks", remarks, self._config.max_remarks_length)
            next_level = g.escalation_level.next()
            if next_level.requires_handler:
                if handler is None:
                    raise InvalidHandlerError(
                        g.id, handler, f"escalating to {next_level.name} requires a handler"
                    )
                await self._require_handler(g, handler)
            elif handler is not None:
                raise InvalidHandlerError(
                    g.id, handler, f"{next_level.name} tier does not take a handler"
                )
            from_level["value"] = g.escalation_level

        def transition(g: Grievance, role: Role, now: datetime) -> Grievance:
            return g.with_escalation(now, handler=handler, assigned_by=role)

        return await self._apply(
            caller,
            grievance_id,
            "escalate",
            check,
            transition,
            AuditEventKind.GRIEVANCE_ESCALATED,
            lambda g: {
                "remarks": remarks,
                "from_level": from_level["value"].name,
                "to_level": g.escalation_level.name,
                "handler": g.assigned_handler,
            },
        )

    async def close(self, caller: str, grievance_id: int, remarks: str) -> Grievance:
        """Close an escalated grievance at the Dean tier. Closed is terminal."""

        async def check(g: Grievance, role: Role) -> None:
            self._require_status(g, "close", frozenset({GrievanceStatus.ESCALATED}))
            if role is not Role.DEAN:
                raise UnauthorizedError(
                    caller=caller,
                    action="close",
                    reason=f"role is {role.value}",
                    grievance_id=g.id,
                    required=Role.DEAN.value,
                )
            if g.escalation_level is not EscalationLevel.DEAN:
                raise UnauthorizedError(
                    caller=caller,
                    action="close",
                    reason=f"grievance is at the {g.escalation_level.name} tier",
                    grievance_id=g.id,
                    required=f"{EscalationLevel.DEAN.name} tier",
                )
            self._validate_text("remarks", remarks, self._config.max_remarks_length)

        return await self._apply(
            caller,
            grievance_id,
            "close",
            check,
            lambda g, role, now: g.with_closure(caller, remarks, now),
            AuditEventKind.GRIEVANCE_CLOSED,
            lambda g: {"remarks": remarks},
        )

    # =========================================================================
    # Internals
    # =========================================================================

    async def _apply(
        self,
        caller: str,
        grievance_id: int,
        operation: str,
        check: Callable[[Grievance, Role], Any],
        transition: Callable[[Grievance, Role, datetime], Grievance],
        event_kind: AuditEventKind,
        payload: Callable[[Grievance], dict[str, Any]],
    ) -> Grievance:
        """Run one transition under the grievance's lock.

        ``check`` raises on any violated precondition; only then is the new
        snapshot written and the event appended.
        """
        log = self._log_operation(operation, caller=caller, grievance_id=grievance_id)
        # Locks exist only for stored ids; records are never deleted once committed
        if await self._repository.get(grievance_id) is None:
            error = NotFoundError(grievance_id)
            self._log_rejection(log, error)
            raise error
        async with self._locks[grievance_id]:
            try:
                current = await self._repository.get(grievance_id)
                if current is None:
                    raise NotFoundError(grievance_id)
                role = await self._roles.role_of(caller)
                await check(current, role)
            except GrievanceRejectionError as e:
                self._log_rejection(log, e)
                raise

            now = self._time.utcnow()
            updated = transition(current, role, now)
            await self._repository.replace(updated)
            try:
                await self._audit_log.append(
                    event_kind,
                    actor=caller,
                    subject=str(grievance_id),
                    payload=payload(updated),
                    timestamp=now,
                )
            except Exception as e:
                log.error("audit_append_failed_rolling_back", error=str(e))
                await self._repository.replace(current)
                raise AuditEmissionError(str(grievance_id), event_kind.value, e) from e

        log.info(
            f"grievance_{event_kind.value.split('.')[-1]}",
            status=updated.status.value,
            level=updated.escalation_level.name,
        )
        return updated

    @staticmethod
    def _require_status(
        grievance: Grievance, action: str, allowed: frozenset[GrievanceStatus]
    ) -> None:
        if grievance.status not in allowed:
            raise InvalidStateForActionError(
                grievance_id=grievance.id,
                action=action,
                current_status=grievance.status.value,
                allowed_statuses=_status_names(allowed),
            )

    @staticmethod
    def is_tier_actor(grievance: Grievance, principal: str, role: Role) -> bool:
        """True if ``principal`` may act at the grievance's current tier."""
        level = grievance.escalation_level
        if role is not level.role:
            return False
        if level.requires_handler:
            return grievance.assigned_handler == principal
        return True

    def _require_tier_actor(
        self, grievance: Grievance, caller: str, role: Role, action: str
    ) -> None:
        if self.is_tier_actor(grievance, caller, role):
            return
        level = grievance.escalation_level
        if level.requires_handler and role is level.role:
            reason = "not the assigned handler"
            required = f"assigned handler {grievance.assigned_handler}"
        else:
            reason = f"role {role.value} does not match the {level.name} tier"
            required = level.role.value
        raise UnauthorizedError(
            caller=caller,
            action=action,
            reason=reason,
            grievance_id=grievance.id,
            required=required,
        )

    async def _require_handler(self, grievance: Grievance, handler: str) -> None:
        if not handler or not handler.strip():
            raise InvalidHandlerError(grievance.id, handler, "handler cannot be blank")
        handler_role = await self._roles.role_of(handler)
        if handler_role is not Role.HOD:
            raise InvalidHandlerError(
                grievance.id,
                handler,
                f"handler must hold the {Role.HOD.value} role, has {handler_role.value}",
            )

    @staticmethod
    def _validate_text(field: str, value: str, max_length: int) -> None:
        if not value or not value.strip():
            raise ValidationError(field, "cannot be empty")
        if len(value) > max_length:
            raise ValidationError(
                field,
                f"exceeds maximum length of {max_length} characters",
                length=len(value),
                max_length=max_length,
            )
