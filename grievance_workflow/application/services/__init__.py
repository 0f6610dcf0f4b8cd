"""Application services for the grievance workflow."""

from grievance_workflow.application.services.base import LoggingMixin
from grievance_workflow.application.services.grievance_system import GrievanceSystem
from grievance_workflow.application.services.role_registry_service import (
    RoleRegistryService,
)
from grievance_workflow.application.services.visibility_filter import (
    VisibilityFilter,
    can_view,
)
from grievance_workflow.application.services.workflow_engine import WorkflowEngine

__all__: list[str] = [
    "GrievanceSystem",
    "LoggingMixin",
    "RoleRegistryService",
    "VisibilityFilter",
    "WorkflowEngine",
    "can_view",
]
