"""Visibility Filter - who may see which grievances.

    STUDENT             records they submitted
    COUNSELOR / YC      records currently at their tier, any status
    HOD                 records assigned to them
    DEAN                records Escalated or Closed, plus records at the Dean tier
    ADMIN               nothing here; list_all / inspect are the elevated paths
    NONE                nothing

Listing is served from the repository's secondary indices, never by
scanning every record. Single fetches re-derive the same rules for one
record and reject with Unauthorized rather than returning a redacted view.
Reads take no lock and see the latest committed snapshot.
"""

from __future__ import annotations

from grievance_workflow.application.ports.audit_log import AuditLogProtocol
from grievance_workflow.application.ports.grievance_repository import (
    GrievanceRepositoryProtocol,
)
from grievance_workflow.application.services.base import LoggingMixin
from grievance_workflow.application.services.role_registry_service import (
    RoleRegistryService,
)
from grievance_workflow.domain.errors import (
    GrievanceRejectionError,
    NotAdminError,
    NotFoundError,
    UnauthorizedError,
)
from grievance_workflow.domain.events.audit import AuditEventKind
from grievance_workflow.domain.models.grievance import Grievance, GrievanceStatus
from grievance_workflow.domain.models.role import EscalationLevel, Role

_DEAN_STATUSES: frozenset[GrievanceStatus] = frozenset(
    {GrievanceStatus.ESCALATED, GrievanceStatus.CLOSED}
)

# Events that count as a staff member having acted on a record
_ACTION_KINDS: frozenset[AuditEventKind] = frozenset(
    {
        AuditEventKind.GRIEVANCE_REVIEWED,
        AuditEventKind.GRIEVANCE_ASSIGNED,
        AuditEventKind.GRIEVANCE_REASSIGNED,
        AuditEventKind.GRIEVANCE_RESOLVED,
        AuditEventKind.GRIEVANCE_ESCALATED,
        AuditEventKind.GRIEVANCE_CLOSED,
    }
)

# Roles that see every record at their own tier
_TIER_WIDE: dict[Role, EscalationLevel] = {
    Role.COUNSELOR: EscalationLevel.COUNSELOR,
    Role.YEAR_COORDINATOR: EscalationLevel.YEAR_COORDINATOR,
}


def can_view(grievance: Grievance, principal: str, role: Role) -> bool:
    """Apply the visibility rules to a single record."""
    if role is Role.STUDENT:
        return grievance.submitter == principal
    if role in _TIER_WIDE:
        return grievance.escalation_level is _TIER_WIDE[role]
    if role is Role.HOD:
        return grievance.assigned_handler == principal
    if role is Role.DEAN:
        return (
            grievance.status in _DEAN_STATUSES
            or grievance.escalation_level is EscalationLevel.DEAN
        )
    return False


class VisibilityFilter(LoggingMixin):
    """Role-scoped read access to grievances."""

    def __init__(
        self,
        repository: GrievanceRepositoryProtocol,
        role_registry: RoleRegistryService,
        audit_log: AuditLogProtocol,
    ) -> None:
        self._repository = repository
        self._roles = role_registry
        self._audit_log = audit_log
        self._init_logger(component="visibility")

    async def visible_ids(self, caller: str) -> list[int]:
        """Ids ``caller`` may see, ascending. Never fails; may be empty."""
        role = await self._roles.role_of(caller)
        if role is Role.STUDENT:
            return await self._repository.ids_by_submitter(caller)
        if role in _TIER_WIDE:
            return await self._repository.ids_at_level(_TIER_WIDE[role])
        if role is Role.HOD:
            return await self._repository.ids_by_handler(caller)
        if role is Role.DEAN:
            ids: set[int] = set()
            for status in _DEAN_STATUSES:
                ids.update(await self._repository.ids_with_status(status))
            ids.update(await self._repository.ids_at_level(EscalationLevel.DEAN))
            return sorted(ids)
        return []

    async def get_by_id(self, caller: str, grievance_id: int) -> Grievance:
        """Fetch one grievance the caller is allowed to see.

        Raises:
            NotFoundError: Id was never assigned.
            UnauthorizedError: Record is outside the caller's visibility.
        """
        grievance = await self._repository.get(grievance_id)
        if grievance is None:
            raise NotFoundError(grievance_id)
        role = await self._roles.role_of(caller)
        if not can_view(grievance, caller, role):
            error = UnauthorizedError(
                caller=caller,
                action="view",
                reason=f"record is outside the visibility of role {role.value}",
                grievance_id=grievance_id,
            )
            self._log_rejection(
                self._log_operation("get_by_id", caller=caller, grievance_id=grievance_id),
                error,
                "read_rejected",
            )
            raise error
        return grievance

    async def list_all(self, caller: str) -> list[int]:
        """Every id, ascending. Admin only.

        Raises:
            NotAdminError: Caller is not the admin.
        """
        await self._require_admin(caller, "list all grievances")
        return await self._repository.all_ids()

    async def inspect(self, caller: str, grievance_id: int) -> Grievance:
        """Fetch any grievance regardless of visibility. Admin only."""
        await self._require_admin(caller, "inspect grievances")
        grievance = await self._repository.get(grievance_id)
        if grievance is None:
            raise NotFoundError(grievance_id)
        return grievance

    async def count(self) -> int:
        return await self._repository.count()

    async def list_acted_on(self, caller: str) -> list[int]:
        """Ids the caller has reviewed, assigned, resolved, escalated or closed."""
        events = await self._audit_log.events_by_actor(caller)
        return sorted(
            {
                event.grievance_id
                for event in events
                if event.kind in _ACTION_KINDS and event.grievance_id is not None
            }
        )

    async def _require_admin(self, caller: str, action: str) -> None:
        if await self._roles.role_of(caller) is not Role.ADMIN:
            error: GrievanceRejectionError = NotAdminError(caller, action)
            self._log_rejection(
                self._log_operation(action.replace(" ", "_"), caller=caller),
                error,
                "elevated_read_rejected",
            )
            raise error
