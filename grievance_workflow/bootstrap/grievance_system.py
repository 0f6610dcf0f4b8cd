"""Bootstrap wiring for the grievance system.

Builds one GrievanceSystem with every service sharing the same role
registry, grievance repository, audit log and clock. The configured admin
principal holds ADMIN from the first instant.
"""

from __future__ import annotations

from grievance_workflow.application.ports.time_authority import TimeAuthorityProtocol
from grievance_workflow.application.services.grievance_system import GrievanceSystem
from grievance_workflow.application.services.role_registry_service import (
    RoleRegistryService,
)
from grievance_workflow.application.services.visibility_filter import (
    VisibilityFilter,
)
from grievance_workflow.application.services.workflow_engine import WorkflowEngine
from grievance_workflow.config.workflow_config import WorkflowConfig
from grievance_workflow.infrastructure.adapters.in_memory_audit_log import (
    InMemoryAuditLog,
)
from grievance_workflow.infrastructure.adapters.in_memory_grievance_repository import (
    InMemoryGrievanceRepository,
)
from grievance_workflow.infrastructure.adapters.in_memory_role_repository import (
    InMemoryRoleRepository,
)
from grievance_workflow.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from grievance_workflow.infrastructure.observability import get_logger_for_service

logger = get_logger_for_service("bootstrap", component="bootstrap")

_grievance_system: GrievanceSystem | None = None


def build_grievance_system(
    config: WorkflowConfig | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
) -> GrievanceSystem:
    """Wire a fresh, empty grievance system.

    Args:
        config: Admin principal and text bounds; defaults from environment.
        time_authority: Clock shared by all services; system clock if omitted.
    """
    config = config or WorkflowConfig.from_environment()
    clock = time_authority or SystemTimeAuthority()

    audit_log = InMemoryAuditLog(time_authority=clock)
    role_registry = RoleRegistryService(
        InMemoryRoleRepository(admin=config.admin_principal),
        audit_log,
        time_authority=clock,
    )
    grievances = InMemoryGrievanceRepository()
    system = GrievanceSystem(
        role_registry=role_registry,
        workflow_engine=WorkflowEngine(
            grievances,
            role_registry,
            audit_log,
            config=config,
            time_authority=clock,
        ),
        visibility_filter=VisibilityFilter(grievances, role_registry, audit_log),
        audit_log=audit_log,
    )
    logger.info(
        "grievance_system_initialized",
        admin=config.admin_principal,
        storage="InMemory",
        max_description_length=config.max_description_length,
        max_remarks_length=config.max_remarks_length,
    )
    return system


def get_grievance_system() -> GrievanceSystem:
    """Get the process-wide grievance system instance."""
    global _grievance_system
    if _grievance_system is None:
        _grievance_system = build_grievance_system()
    return _grievance_system


def set_grievance_system(system: GrievanceSystem | None) -> None:
    """Replace the process-wide instance (tests pass None to reset)."""
    global _grievance_system
    _grievance_system = system
