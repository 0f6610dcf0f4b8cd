"""Bootstrap wiring: builds configured services for the API and scripts."""

from grievance_workflow.bootstrap.grievance_system import (
    build_grievance_system,
    get_grievance_system,
    set_grievance_system,
)
from grievance_workflow.bootstrap.logging import (
    configure_logging_from_config,
    configure_structlog,
)

__all__ = [
    "build_grievance_system",
    "configure_logging_from_config",
    "configure_structlog",
    "get_grievance_system",
    "set_grievance_system",
]
