"""Unit tests for RoleRegistryService.

Key Test Scenarios:
1. Admin-only mutations, checked before target validation
2. Admin role never handed out by assign_role
3. revoke_role and the "no role" sentinel
4. transfer_admin leaves exactly one admin and writes two events
5. Audit append failure rolls the registry back
"""

from unittest.mock import AsyncMock

import pytest

from grievance_workflow.application.services.role_registry_service import (
    RoleRegistryService,
)
from grievance_workflow.domain.errors import (
    AuditEmissionError,
    CannotAssignAdminError,
    InvalidRoleOperationError,
    InvalidTargetError,
    NotAdminError,
    UnauthorizedError,
)
from grievance_workflow.domain.events.audit import AuditEventKind
from grievance_workflow.domain.models.role import Role
from grievance_workflow.infrastructure.adapters.in_memory_audit_log import (
    InMemoryAuditLog,
)
from grievance_workflow.infrastructure.adapters.in_memory_role_repository import (
    InMemoryRoleRepository,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority


class TestRoleRegistryService:
    @pytest.fixture
    def audit_log(self) -> InMemoryAuditLog:
        return InMemoryAuditLog(time_authority=FakeTimeAuthority())

    @pytest.fixture
    def repository(self) -> InMemoryRoleRepository:
        return InMemoryRoleRepository(admin="admin")

    @pytest.fixture
    def registry(
        self, repository: InMemoryRoleRepository, audit_log: InMemoryAuditLog
    ) -> RoleRegistryService:
        return RoleRegistryService(
            repository, audit_log, time_authority=FakeTimeAuthority()
        )

    # assign_role

    @pytest.mark.asyncio
    async def test_assign_role(
        self, registry: RoleRegistryService, audit_log: InMemoryAuditLog
    ) -> None:
        previous = await registry.assign_role("admin", "student-1", Role.STUDENT)

        assert previous is Role.NONE
        assert await registry.role_of("student-1") is Role.STUDENT
        events = await audit_log.events_for_principal("student-1")
        assert len(events) == 1
        assert events[0].kind is AuditEventKind.ROLE_ASSIGNED
        assert events[0].actor == "admin"
        assert events[0].payload == {"role": "Student", "previous_role": "None"}

    @pytest.mark.asyncio
    async def test_assign_replaces_prior_role(self, registry: RoleRegistryService) -> None:
        await registry.assign_role("admin", "p", Role.COUNSELOR)
        previous = await registry.assign_role("admin", "p", Role.HOD)
        assert previous is Role.COUNSELOR
        assert await registry.role_of("p") is Role.HOD

    @pytest.mark.asyncio
    async def test_non_admin_cannot_assign(self, registry: RoleRegistryService) -> None:
        await registry.assign_role("admin", "dean-1", Role.DEAN)
        with pytest.raises(NotAdminError) as exc_info:
            await registry.assign_role("dean-1", "x", Role.STUDENT)
        assert isinstance(exc_info.value, UnauthorizedError)
        assert exc_info.value.kind == "Unauthorized"
        assert await registry.role_of("x") is Role.NONE

    @pytest.mark.asyncio
    async def test_admin_check_precedes_target_check(
        self, registry: RoleRegistryService
    ) -> None:
        # Blank target would be InvalidTarget, but the non-admin check wins
        with pytest.raises(NotAdminError):
            await registry.assign_role("nobody", "", Role.STUDENT)

    @pytest.mark.asyncio
    async def test_admin_self_assignment_rejected(
        self, registry: RoleRegistryService
    ) -> None:
        with pytest.raises(InvalidRoleOperationError) as exc_info:
            await registry.assign_role("admin", "admin", Role.STUDENT)
        assert exc_info.value.kind == "InvalidRoleOperation"
        assert await registry.role_of("admin") is Role.ADMIN

    @pytest.mark.asyncio
    async def test_blank_target_rejected(self, registry: RoleRegistryService) -> None:
        with pytest.raises(InvalidTargetError):
            await registry.assign_role("admin", "  ", Role.STUDENT)

    @pytest.mark.asyncio
    async def test_cannot_assign_admin(self, registry: RoleRegistryService) -> None:
        with pytest.raises(CannotAssignAdminError):
            await registry.assign_role("admin", "p", Role.ADMIN)
        assert await registry.principals_with_role(Role.ADMIN) == ["admin"]

    @pytest.mark.asyncio
    async def test_cannot_assign_none(self, registry: RoleRegistryService) -> None:
        with pytest.raises(InvalidRoleOperationError):
            await registry.assign_role("admin", "p", Role.NONE)

    # revoke_role

    @pytest.mark.asyncio
    async def test_revoke_role(
        self, registry: RoleRegistryService, audit_log: InMemoryAuditLog
    ) -> None:
        await registry.assign_role("admin", "p", Role.HOD)
        revoked = await registry.revoke_role("admin", "p")

        assert revoked is Role.HOD
        assert await registry.role_of("p") is Role.NONE
        kinds = [e.kind for e in await audit_log.events_for_principal("p")]
        assert kinds == [AuditEventKind.ROLE_ASSIGNED, AuditEventKind.ROLE_REVOKED]

    @pytest.mark.asyncio
    async def test_cannot_revoke_admin(self, registry: RoleRegistryService) -> None:
        with pytest.raises(InvalidTargetError):
            await registry.revoke_role("admin", "admin")
        assert await registry.role_of("admin") is Role.ADMIN

    @pytest.mark.asyncio
    async def test_revoke_unassigned_rejected(self, registry: RoleRegistryService) -> None:
        with pytest.raises(InvalidTargetError, match="holds no role"):
            await registry.revoke_role("admin", "stranger")

    @pytest.mark.asyncio
    async def test_non_admin_cannot_revoke(self, registry: RoleRegistryService) -> None:
        await registry.assign_role("admin", "p", Role.STUDENT)
        with pytest.raises(NotAdminError):
            await registry.revoke_role("p", "p")

    # transfer_admin

    @pytest.mark.asyncio
    async def test_transfer_admin(
        self, registry: RoleRegistryService, audit_log: InMemoryAuditLog
    ) -> None:
        await registry.assign_role("admin", "dean-1", Role.DEAN)
        head_before = await audit_log.head_sequence()

        await registry.transfer_admin("admin", "dean-1")

        assert await registry.admin_id() == "dean-1"
        assert await registry.role_of("dean-1") is Role.ADMIN
        assert await registry.role_of("admin") is Role.NONE
        assert await registry.principals_with_role(Role.ADMIN) == ["dean-1"]

        events = (await audit_log.all_events())[head_before:]
        assert [e.kind for e in events] == [
            AuditEventKind.ROLE_REVOKED,
            AuditEventKind.ROLE_ASSIGNED,
        ]
        assert events[0].subject == "admin"
        assert events[1].subject == "dean-1"
        assert events[1].payload["previous_role"] == "Dean"

    @pytest.mark.asyncio
    async def test_old_admin_loses_authority(self, registry: RoleRegistryService) -> None:
        await registry.transfer_admin("admin", "new-admin")
        with pytest.raises(NotAdminError):
            await registry.assign_role("admin", "p", Role.STUDENT)
        await registry.assign_role("new-admin", "admin", Role.STUDENT)
        assert await registry.role_of("admin") is Role.STUDENT

    @pytest.mark.asyncio
    async def test_transfer_to_self_rejected(self, registry: RoleRegistryService) -> None:
        with pytest.raises(InvalidTargetError):
            await registry.transfer_admin("admin", "admin")

    @pytest.mark.asyncio
    async def test_non_admin_cannot_transfer(self, registry: RoleRegistryService) -> None:
        with pytest.raises(NotAdminError):
            await registry.transfer_admin("p", "q")

    # audit failure

    @pytest.mark.asyncio
    async def test_assign_rolled_back_when_audit_fails(
        self, repository: InMemoryRoleRepository
    ) -> None:
        failing_log = AsyncMock()
        failing_log.append.side_effect = RuntimeError("log unavailable")
        registry = RoleRegistryService(repository, failing_log)

        with pytest.raises(AuditEmissionError):
            await registry.assign_role("admin", "p", Role.STUDENT)
        assert await registry.role_of("p") is Role.NONE

    @pytest.mark.asyncio
    async def test_transfer_rolled_back_when_audit_fails(
        self, repository: InMemoryRoleRepository
    ) -> None:
        await repository.set_role("dean-1", Role.DEAN)
        failing_log = AsyncMock()
        failing_log.append_batch.side_effect = RuntimeError("log unavailable")
        registry = RoleRegistryService(repository, failing_log)

        with pytest.raises(AuditEmissionError):
            await registry.transfer_admin("admin", "dean-1")
        assert await registry.admin_id() == "admin"
        assert await registry.role_of("admin") is Role.ADMIN
        assert await registry.role_of("dean-1") is Role.DEAN
