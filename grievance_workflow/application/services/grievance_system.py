"""Grievance System - the public operation surface.

Composes the role registry, workflow engine, visibility filter and audit
log behind one object. Every operation returns an OperationResult:
expected business rejections come back as ``result.error`` with a
taxonomy ``kind``; infrastructure failures (AuditEmissionError and
anything unexpected) still propagate.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TypeVar

from grievance_workflow.application.ports.audit_log import AuditLogProtocol
from grievance_workflow.application.services.base import LoggingMixin
from grievance_workflow.application.services.role_registry_service import (
    RoleRegistryService,
)
from grievance_workflow.application.services.visibility_filter import (
    VisibilityFilter,
)
from grievance_workflow.application.services.workflow_engine import WorkflowEngine
from grievance_workflow.domain.errors import GrievanceRejectionError, NotAdminError
from grievance_workflow.domain.events.audit import AuditEvent
from grievance_workflow.domain.models.grievance import Grievance
from grievance_workflow.domain.models.operation_result import OperationResult
from grievance_workflow.domain.models.role import Role

T = TypeVar("T")


class GrievanceSystem(LoggingMixin):
    """Facade over the grievance workflow services."""

    def __init__(
        self,
        role_registry: RoleRegistryService,
        workflow_engine: WorkflowEngine,
        visibility_filter: VisibilityFilter,
        audit_log: AuditLogProtocol,
    ) -> None:
        self.roles = role_registry
        self.engine = workflow_engine
        self.visibility = visibility_filter
        self.audit_log = audit_log
        self._init_logger(component="facade")

    # Workflow

    async def submit_grievance(self, caller: str, description: str) -> OperationResult[int]:
        async def run() -> int:
            return (await self.engine.submit(caller, description)).id

        return await self._result(run())

    async def review_grievance(self, caller: str, grievance_id: int) -> OperationResult[Grievance]:
        return await self._result(self.engine.review(caller, grievance_id))

    async def assign_to_handler(
        self, caller: str, grievance_id: int, handler: str
    ) -> OperationResult[Grievance]:
        return await self._result(
            self.engine.assign_to_handler(caller, grievance_id, handler)
        )

    async def reassign_handler(
        self, caller: str, grievance_id: int, handler: str
    ) -> OperationResult[Grievance]:
        return await self._result(
            self.engine.reassign_handler(caller, grievance_id, handler)
        )

    async def resolve_grievance(
        self, caller: str, grievance_id: int, remarks: str
    ) -> OperationResult[Grievance]:
        return await self._result(self.engine.resolve(caller, grievance_id, remarks))

    async def escalate_grievance(
        self,
        caller: str,
        grievance_id: int,
        remarks: str,
        handler: str | None = None,
    ) -> OperationResult[Grievance]:
        return await self._result(
            self.engine.escalate(caller, grievance_id, remarks, handler=handler)
        )

    async def close_grievance(
        self, caller: str, grievance_id: int, remarks: str
    ) -> OperationResult[Grievance]:
        return await self._result(self.engine.close(caller, grievance_id, remarks))

    # Roles

    async def assign_role(self, caller: str, target: str, role: Role) -> OperationResult[Role]:
        return await self._result(self.roles.assign_role(caller, target, role))

    async def revoke_role(self, caller: str, target: str) -> OperationResult[Role]:
        return await self._result(self.roles.revoke_role(caller, target))

    async def transfer_admin(self, caller: str, new_admin: str) -> OperationResult[None]:
        return await self._result(self.roles.transfer_admin(caller, new_admin))

    async def role_of(self, principal: str) -> Role:
        return await self.roles.role_of(principal)

    # Reads

    async def get_grievance(self, caller: str, grievance_id: int) -> OperationResult[Grievance]:
        return await self._result(self.visibility.get_by_id(caller, grievance_id))

    async def inspect_grievance(
        self, caller: str, grievance_id: int
    ) -> OperationResult[Grievance]:
        return await self._result(self.visibility.inspect(caller, grievance_id))

    async def list_visible(self, caller: str) -> list[int]:
        return await self.visibility.visible_ids(caller)

    async def list_all(self, caller: str) -> OperationResult[list[int]]:
        return await self._result(self.visibility.list_all(caller))

    async def list_acted_on(self, caller: str) -> list[int]:
        return await self.visibility.list_acted_on(caller)

    async def count_grievances(self) -> int:
        return await self.visibility.count()

    async def events_for(
        self, caller: str, grievance_id: int
    ) -> OperationResult[list[AuditEvent]]:
        """History of one grievance, for anyone who may see it or the admin."""

        async def run() -> list[AuditEvent]:
            if await self.roles.role_of(caller) is Role.ADMIN:
                await self.visibility.inspect(caller, grievance_id)
            else:
                await self.visibility.get_by_id(caller, grievance_id)
            return await self.audit_log.events_for_grievance(grievance_id)

        return await self._result(run())

    async def events_for_principal(
        self, caller: str, principal: str
    ) -> OperationResult[list[AuditEvent]]:
        """Role-change history of a principal; the admin sees all, others only their own."""

        async def run() -> list[AuditEvent]:
            if caller != principal and await self.roles.role_of(caller) is not Role.ADMIN:
                raise NotAdminError(caller, "read another principal's role history")
            return await self.audit_log.events_for_principal(principal)

        return await self._result(run())

    async def _result(self, operation: Awaitable[T]) -> OperationResult[T]:
        try:
            return OperationResult.success(await operation)
        except GrievanceRejectionError as e:
            return OperationResult.failure(e)
