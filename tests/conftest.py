"""
Pytest configuration and shared fixtures for grievance workflow tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking and failure injection
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from datetime import datetime, timezone

import pytest

from grievance_workflow.application.services.grievance_system import GrievanceSystem
from grievance_workflow.bootstrap.grievance_system import build_grievance_system
from grievance_workflow.config.workflow_config import WorkflowConfig
from grievance_workflow.domain.models.role import Role
from tests.helpers.fake_time_authority import FakeTimeAuthority

ADMIN = "admin"

# Principal -> role for the staffed_system fixture
STAFF: dict[str, Role] = {
    "student-1": Role.STUDENT,
    "student-2": Role.STUDENT,
    "counselor-1": Role.COUNSELOR,
    "counselor-2": Role.COUNSELOR,
    "yc-1": Role.YEAR_COORDINATOR,
    "hod-1": Role.HOD,
    "hod-2": Role.HOD,
    "dean-1": Role.DEAN,
}


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from grievance_workflow import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    return FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def workflow_config() -> WorkflowConfig:
    return WorkflowConfig(admin_principal=ADMIN)


@pytest.fixture
def grievance_system(
    workflow_config: WorkflowConfig, fake_time_authority: FakeTimeAuthority
) -> GrievanceSystem:
    """Fresh system with only the admin registered."""
    return build_grievance_system(workflow_config, time_authority=fake_time_authority)


@pytest.fixture
async def staffed_system(grievance_system: GrievanceSystem) -> GrievanceSystem:
    """System with one principal per entry in STAFF."""
    for principal, role in STAFF.items():
        await grievance_system.roles.assign_role(ADMIN, principal, role)
    return grievance_system
