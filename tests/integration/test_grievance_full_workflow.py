"""Integration tests: complete grievance lifecycle through the facade.

Wires the real in-memory adapters via build_grievance_system and drives
a grievance from submission to closure, checking state, visibility and
the audit trail at each step.
"""

import pytest

from grievance_workflow.application.services.grievance_system import GrievanceSystem
from grievance_workflow.bootstrap.grievance_system import build_grievance_system
from grievance_workflow.config.workflow_config import WorkflowConfig
from grievance_workflow.domain.events.audit import AuditEventKind
from grievance_workflow.domain.models.grievance import GrievanceStatus
from grievance_workflow.domain.models.role import EscalationLevel, Role
from tests.helpers.fake_time_authority import FakeTimeAuthority

pytestmark = pytest.mark.integration


@pytest.fixture
async def system() -> GrievanceSystem:
    system = build_grievance_system(
        WorkflowConfig(admin_principal="registrar"),
        time_authority=FakeTimeAuthority(),
    )
    for principal, role in {
        "S": Role.STUDENT,
        "C": Role.COUNSELOR,
        "Y": Role.YEAR_COORDINATOR,
        "h": Role.HOD,
        "D": Role.DEAN,
    }.items():
        (await system.assign_role("registrar", principal, role)).unwrap()
    return system


class TestFullPath:
    @pytest.mark.asyncio
    async def test_submit_to_close(self, system: GrievanceSystem) -> None:
        gid = (await system.submit_grievance("S", "Hostel water supply")).unwrap()

        g = (await system.escalate_grievance("C", gid, "Coordinator needed")).unwrap()
        assert g.escalation_level is EscalationLevel.YEAR_COORDINATOR

        g = (await system.assign_to_handler("Y", gid, "h")).unwrap()
        assert g.escalation_level is EscalationLevel.HOD
        assert g.assigned_handler == "h"
        assert await system.list_visible("h") == [gid]

        g = (await system.escalate_grievance("h", gid, "Dean decision required")).unwrap()
        assert g.status is GrievanceStatus.ESCALATED
        assert g.escalation_level is EscalationLevel.DEAN
        assert await system.list_visible("h") == []
        assert await system.list_visible("D") == [gid]

        g = (await system.close_grievance("D", gid, "Repairs ordered")).unwrap()
        assert g.status is GrievanceStatus.CLOSED
        assert g.resolved_by == "D"

        late = await system.resolve_grievance("D", gid, "again")
        assert late.error_kind == "InvalidStateForAction"

        history = (await system.events_for("S", gid)).unwrap()
        assert [e.kind for e in history] == [
            AuditEventKind.GRIEVANCE_SUBMITTED,
            AuditEventKind.GRIEVANCE_ESCALATED,
            AuditEventKind.GRIEVANCE_ASSIGNED,
            AuditEventKind.GRIEVANCE_ESCALATED,
            AuditEventKind.GRIEVANCE_CLOSED,
        ]
        assert [e.actor for e in history] == ["S", "C", "Y", "h", "D"]
        sequences = [e.sequence for e in history]
        assert sequences == sorted(sequences)

    @pytest.mark.asyncio
    async def test_escalate_from_dean_is_terminal(self, system: GrievanceSystem) -> None:
        gid = (await system.submit_grievance("S", "Fees")).unwrap()
        (await system.escalate_grievance("C", gid, "up")).unwrap()
        (await system.escalate_grievance("Y", gid, "up", handler="h")).unwrap()
        (await system.escalate_grievance("h", gid, "up")).unwrap()

        result = await system.escalate_grievance("D", gid, "higher")
        assert result.error_kind == "TerminalLevel"

    @pytest.mark.asyncio
    async def test_rejected_calls_write_nothing(self, system: GrievanceSystem) -> None:
        gid = (await system.submit_grievance("S", "Fees")).unwrap()
        head = await system.audit_log.head_sequence()

        assert (await system.resolve_grievance("Y", gid, "x")).error_kind == "Unauthorized"
        assert (await system.resolve_grievance("C", gid, "")).error_kind == "ValidationError"
        assert (await system.close_grievance("D", gid, "x")).error_kind == "InvalidStateForAction"

        assert await system.audit_log.head_sequence() == head
        g = (await system.get_grievance("S", gid)).unwrap()
        assert g.status is GrievanceStatus.SUBMITTED

    @pytest.mark.asyncio
    async def test_admin_is_always_admin(self, system: GrievanceSystem) -> None:
        assert await system.role_of("registrar") is Role.ADMIN
        assert (await system.revoke_role("registrar", "registrar")).error_kind == (
            "InvalidRoleOperation"
        )
        (await system.transfer_admin("registrar", "D")).unwrap()
        assert await system.roles.principals_with_role(Role.ADMIN) == ["D"]
        assert await system.role_of("registrar") is Role.NONE
