"""Role Registry Service.

Stores exactly one role per principal. Only the single admin principal
may mutate the registry, ADMIN is never handed out by ordinary
assignment, and the admin can be transferred but never revoked to zero.

Developer Golden Rules:
1. ADMIN CHECK FIRST - Reject non-admin callers before inspecting targets
2. CHECK THEN COMMIT - All validation precedes the first write
3. EVENT AFTER SAVE - Append the audit event after the registry write,
   restore the previous role if the append fails
4. LOG EVERYTHING - Rejections at warning, commits at info
"""

from __future__ import annotations

import asyncio

from grievance_workflow.application.ports.audit_log import AuditLogProtocol
from grievance_workflow.application.ports.role_repository import (
    RoleRepositoryProtocol,
)
from grievance_workflow.application.ports.time_authority import TimeAuthorityProtocol
from grievance_workflow.application.services.base import LoggingMixin
from grievance_workflow.domain.errors import (
    AuditEmissionError,
    CannotAssignAdminError,
    GrievanceRejectionError,
    InvalidRoleOperationError,
    InvalidTargetError,
    NotAdminError,
)
from grievance_workflow.domain.events.audit import AuditEntry, AuditEventKind
from grievance_workflow.domain.models.role import Role
from grievance_workflow.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)


class RoleRegistryService(LoggingMixin):
    """Admin-gated role assignment over a RoleRepositoryProtocol.

    All mutations are serialized on one lock so role reads made inside a
    mutation see a consistent registry.

    Attributes:
        _repository: Role storage.
        _audit_log: Append-only event log.
        _time: Clock used to stamp events.
    """

    def __init__(
        self,
        repository: RoleRepositoryProtocol,
        audit_log: AuditLogProtocol,
        time_authority: TimeAuthorityProtocol | None = None,
    ) -> None:
        self._repository = repository
        self._audit_log = audit_log
        self._time = time_authority or SystemTimeAuthority()
        self._lock = asyncio.Lock()
        self._init_logger(component="role_registry")

    async def role_of(self, principal: str) -> Role:
        """Pure lookup; unassigned principals report Role.NONE."""
        return await self._repository.get_role(principal)

    async def admin_id(self) -> str:
        return await self._repository.admin_id()

    async def principals_with_role(self, role: Role) -> list[str]:
        return await self._repository.principals_with_role(role)

    async def assign_role(self, caller: str, target: str, role: Role) -> Role:
        """Assign ``role`` to ``target``, replacing any prior role.

        Returns:
            The target's previous role.

        Raises:
            NotAdminError: Caller is not the admin.
            CannotAssignAdminError: ``role`` is ADMIN.
            InvalidTargetError: Target is blank, the admin, or the caller.
            InvalidRoleOperationError: ``role`` is Role.NONE.
        """
        log = self._log_operation(
            "assign_role", caller=caller, target=target, role=role.value
        )
        async with self._lock:
            try:
                admin = await self._require_admin(caller, "assign roles")
                self._validate_target(target, caller, admin)
                if role is Role.ADMIN:
                    raise CannotAssignAdminError(target)
                if role is Role.NONE:
                    raise InvalidRoleOperationError(
                        f"Cannot assign {role.value}; use revoke_role", target=target
                    )
            except GrievanceRejectionError as e:
                self._log_rejection(log, e, "role_assignment_rejected")
                raise

            previous = await self._repository.set_role(target, role)
            try:
                await self._audit_log.append(
                    AuditEventKind.ROLE_ASSIGNED,
                    actor=caller,
                    subject=target,
                    payload={"role": role.value, "previous_role": previous.value},
                    timestamp=self._time.utcnow(),
                )
            except Exception as e:
                log.error("audit_append_failed_rolling_back", error=str(e))
                await self._repository.set_role(target, previous)
                raise AuditEmissionError(
                    target, AuditEventKind.ROLE_ASSIGNED.value, e
                ) from e

        log.info("role_assigned", previous_role=previous.value)
        return previous

    async def revoke_role(self, caller: str, target: str) -> Role:
        """Remove ``target``'s role.

        Returns:
            The revoked role.

        Raises:
            NotAdminError: Caller is not the admin.
            InvalidTargetError: Target is blank, the admin, or holds no role.
        """
        log = self._log_operation("revoke_role", caller=caller, target=target)
        async with self._lock:
            try:
                admin = await self._require_admin(caller, "revoke roles")
                self._validate_target(target, caller, admin)
                current = await self._repository.get_role(target)
                if current is Role.NONE:
                    raise InvalidTargetError(target, "principal holds no role")
            except GrievanceRejectionError as e:
                self._log_rejection(log, e, "role_revocation_rejected")
                raise

            revoked = await self._repository.clear_role(target)
            try:
                await self._audit_log.append(
                    AuditEventKind.ROLE_REVOKED,
                    actor=caller,
                    subject=target,
                    payload={"role": revoked.value},
                    timestamp=self._time.utcnow(),
                )
            except Exception as e:
                log.error("audit_append_failed_rolling_back", error=str(e))
                await self._repository.set_role(target, revoked)
                raise AuditEmissionError(
                    target, AuditEventKind.ROLE_REVOKED.value, e
                ) from e

        log.info("role_revoked", revoked_role=revoked.value)
        return revoked

    async def transfer_admin(self, caller: str, new_admin: str) -> None:
        """Move ADMIN from ``caller`` to ``new_admin`` atomically.

        The old admin is left with no role. Two events (revoke, assign) are
        appended as one batch so the log never shows half a transfer.

        Raises:
            NotAdminError: Caller is not the admin.
            InvalidTargetError: ``new_admin`` is blank or the caller.
        """
        log = self._log_operation("transfer_admin", caller=caller, new_admin=new_admin)
        async with self._lock:
            try:
                await self._require_admin(caller, "transfer admin")
                if not new_admin or not new_admin.strip():
                    raise InvalidTargetError(new_admin, "principal cannot be blank")
                if new_admin == caller:
                    raise InvalidTargetError(new_admin, "already the admin")
            except GrievanceRejectionError as e:
                self._log_rejection(log, e, "admin_transfer_rejected")
                raise

            previous_role = await self._repository.get_role(new_admin)
            await self._repository.clear_role(caller)
            await self._repository.set_admin(new_admin)
            try:
                await self._audit_log.append_batch(
                    [
                        AuditEntry(
                            kind=AuditEventKind.ROLE_REVOKED,
                            actor=caller,
                            subject=caller,
                            payload={"role": Role.ADMIN.value, "reason": "admin_transfer"},
                        ),
                        AuditEntry(
                            kind=AuditEventKind.ROLE_ASSIGNED,
                            actor=caller,
                            subject=new_admin,
                            payload={
                                "role": Role.ADMIN.value,
                                "previous_role": previous_role.value,
                                "reason": "admin_transfer",
                            },
                        ),
                    ],
                    timestamp=self._time.utcnow(),
                )
            except Exception as e:
                log.error("audit_append_failed_rolling_back", error=str(e))
                await self._repository.set_admin(caller)
                await self._repository.set_role(new_admin, previous_role)
                raise AuditEmissionError(
                    new_admin, AuditEventKind.ROLE_ASSIGNED.value, e
                ) from e

        log.info("admin_transferred", previous_role=previous_role.value)

    async def _require_admin(self, caller: str, action: str) -> str:
        admin = await self._repository.admin_id()
        if caller != admin:
            raise NotAdminError(caller, action)
        return admin

    @staticmethod
    def _validate_target(target: str, caller: str, admin: str) -> None:
        if not target or not target.strip():
            raise InvalidTargetError(target, "principal cannot be blank")
        if target == admin:
            raise InvalidTargetError(target, "the admin's role cannot be changed")
        if target == caller:
            raise InvalidTargetError(target, "self-assignment is not allowed")
