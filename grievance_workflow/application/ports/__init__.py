"""Application ports - Abstract interfaces for infrastructure adapters.

Available ports:
- RoleRepositoryProtocol: principal -> role storage and admin marker
- GrievanceRepositoryProtocol: grievance records plus secondary indices
- AuditLogProtocol: append-only ordered event log
- TimeAuthorityProtocol: injectable clock
"""

from grievance_workflow.application.ports.audit_log import AuditLogProtocol
from grievance_workflow.application.ports.grievance_repository import (
    GrievanceRepositoryProtocol,
)
from grievance_workflow.application.ports.role_repository import (
    RoleRepositoryProtocol,
)
from grievance_workflow.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AuditLogProtocol",
    "GrievanceRepositoryProtocol",
    "RoleRepositoryProtocol",
    "TimeAuthorityProtocol",
]
