"""Role registry API routes.

Every mutation is admin-only; the services enforce it and these handlers
only translate results.
"""

from fastapi import APIRouter, Depends, Request

from grievance_workflow.api.dependencies.grievance_system import (
    get_grievance_system,
    get_principal_id,
)
from grievance_workflow.api.models.grievance import (
    AuditEventListResponse,
    ProblemDetailResponse,
)
from grievance_workflow.api.models.role import (
    AssignRoleRequest,
    RoleChangeResponse,
    RoleEnum,
    RoleResponse,
    TransferAdminRequest,
    TransferAdminResponse,
)
from grievance_workflow.api.problem import raise_problem
from grievance_workflow.api.routes.grievances import event_to_api
from grievance_workflow.application.services.grievance_system import GrievanceSystem
from grievance_workflow.domain.models.role import Role

router = APIRouter(prefix="/v1/roles", tags=["roles"])

_REJECTIONS = {
    400: {"model": ProblemDetailResponse, "description": "Invalid role operation"},
    403: {"model": ProblemDetailResponse, "description": "Caller is not the admin"},
}


@router.post(
    "/transfer-admin", response_model=TransferAdminResponse, responses=_REJECTIONS
)
async def transfer_admin(
    body: TransferAdminRequest,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> TransferAdminResponse:
    """Hand the Admin role to another principal; the caller is left with no role."""
    result = await system.transfer_admin(caller, body.new_admin)
    if result.error is not None:
        raise_problem(result.error, request)
    return TransferAdminResponse(admin=body.new_admin, previous_admin=caller)


@router.get("/{principal}", response_model=RoleResponse)
async def role_of(
    principal: str,
    system: GrievanceSystem = Depends(get_grievance_system),
) -> RoleResponse:
    role = await system.role_of(principal)
    return RoleResponse(principal=principal, role=RoleEnum(role.value))


@router.put("/{principal}", response_model=RoleChangeResponse, responses=_REJECTIONS)
async def assign_role(
    principal: str,
    body: AssignRoleRequest,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> RoleChangeResponse:
    result = await system.assign_role(caller, principal, Role(body.role.value))
    if result.error is not None:
        raise_problem(result.error, request)
    return RoleChangeResponse(
        principal=principal,
        role=body.role,
        previous_role=RoleEnum(result.unwrap().value),
    )


@router.delete("/{principal}", response_model=RoleChangeResponse, responses=_REJECTIONS)
async def revoke_role(
    principal: str,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> RoleChangeResponse:
    result = await system.revoke_role(caller, principal)
    if result.error is not None:
        raise_problem(result.error, request)
    return RoleChangeResponse(
        principal=principal,
        role=RoleEnum.NONE,
        previous_role=RoleEnum(result.unwrap().value),
    )


@router.get(
    "/{principal}/events", response_model=AuditEventListResponse, responses=_REJECTIONS
)
async def role_events(
    principal: str,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> AuditEventListResponse:
    """Role-change history of a principal (own history, or any for the admin)."""
    result = await system.events_for_principal(caller, principal)
    if result.error is not None:
        raise_problem(result.error, request)
    return AuditEventListResponse(events=[event_to_api(e) for e in result.unwrap()])
