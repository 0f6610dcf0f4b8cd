"""Grievance system API dependencies.

The caller's identity arrives in the X-Principal-ID header; authentication
happens upstream of this service, so the header is trusted as-is.
"""

from typing import Annotated

import structlog
from fastapi import Header, HTTPException, status

from grievance_workflow.application.services.grievance_system import GrievanceSystem
from grievance_workflow.bootstrap.grievance_system import (
    get_grievance_system as _get_grievance_system,
)
from grievance_workflow.bootstrap.grievance_system import (
    set_grievance_system as _set_grievance_system,
)

logger = structlog.get_logger(__name__)


def get_grievance_system() -> GrievanceSystem:
    """FastAPI dependency providing the process-wide grievance system."""
    return _get_grievance_system()


def set_grievance_system(system: GrievanceSystem | None) -> None:
    """Inject a system instance (tests use this to start from a clean state)."""
    _set_grievance_system(system)


def get_principal_id(
    x_principal_id: Annotated[
        str | None,
        Header(description="Identity of the calling principal."),
    ] = None,
) -> str:
    """Extract the calling principal from the X-Principal-ID header.

    Raises:
        HTTPException 401: If the header is missing or blank.
    """
    if not x_principal_id or not x_principal_id.strip():
        logger.warning("auth_failed", reason="missing_principal_id")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Principal-ID header is required",
        )
    return x_principal_id.strip()


__all__ = [
    "get_grievance_system",
    "get_principal_id",
    "set_grievance_system",
]
