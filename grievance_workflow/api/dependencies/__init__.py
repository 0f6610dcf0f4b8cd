"""FastAPI dependencies."""

from grievance_workflow.api.dependencies.grievance_system import (
    get_grievance_system,
    get_principal_id,
    set_grievance_system,
)

__all__: list[str] = [
    "get_grievance_system",
    "get_principal_id",
    "set_grievance_system",
]
