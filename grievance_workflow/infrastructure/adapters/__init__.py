"""In-memory adapters for the application ports.

Available adapters:
- InMemoryRoleRepository: principal -> role map with admin marker
- InMemoryGrievanceRepository: dense grievance store with secondary indices
- InMemoryAuditLog: append-only event log with subject/actor indices
- SystemTimeAuthority: wall-clock time source
"""

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

__all__: list[str] = [
    "InMemoryAuditLog",
    "InMemoryGrievanceRepository",
    "InMemoryRoleRepository",
    "SystemTimeAuthority",
]
