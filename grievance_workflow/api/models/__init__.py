"""
API models (Pydantic DTOs) for the grievance workflow.

This module contains all Pydantic request/response models
used by API endpoints.
"""

from grievance_workflow.api.models.grievance import (
    AssignHandlerRequest,
    AuditEventListResponse,
    AuditEventResponse,
    EscalateRequest,
    EscalationLevelEnum,
    GrievanceCountResponse,
    GrievanceIdListResponse,
    GrievanceResponse,
    GrievanceStatusEnum,
    ProblemDetailResponse,
    RemarksRequest,
    SubmitGrievanceRequest,
    SubmitGrievanceResponse,
)
from grievance_workflow.api.models.health import HealthResponse
from grievance_workflow.api.models.role import (
    AssignRoleRequest,
    RoleChangeResponse,
    RoleEnum,
    RoleResponse,
    TransferAdminRequest,
    TransferAdminResponse,
)

__all__: list[str] = [
    "AssignHandlerRequest",
    "AssignRoleRequest",
    "AuditEventListResponse",
    "AuditEventResponse",
    "EscalateRequest",
    "EscalationLevelEnum",
    "GrievanceCountResponse",
    "GrievanceIdListResponse",
    "GrievanceResponse",
    "GrievanceStatusEnum",
    "HealthResponse",
    "ProblemDetailResponse",
    "RemarksRequest",
    "RoleChangeResponse",
    "RoleEnum",
    "RoleResponse",
    "SubmitGrievanceRequest",
    "SubmitGrievanceResponse",
    "TransferAdminRequest",
    "TransferAdminResponse",
]
