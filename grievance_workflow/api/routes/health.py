"""Health check endpoint for the grievance workflow API."""

from fastapi import APIRouter, Depends

from grievance_workflow.api.dependencies.grievance_system import get_grievance_system
from grievance_workflow.api.models.health import HealthResponse
from grievance_workflow.application.services.grievance_system import GrievanceSystem

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    system: GrievanceSystem = Depends(get_grievance_system),
) -> HealthResponse:
    """Return health status with store and audit log sizes."""
    return HealthResponse(
        status="healthy",
        grievance_count=await system.count_grievances(),
        audit_head=await system.audit_log.head_sequence(),
    )
