"""Grievance API routes.

Thin HTTP surface over GrievanceSystem: every endpoint resolves the caller
from X-Principal-ID, calls one facade operation and translates a failed
OperationResult into an RFC 7807 problem.

Developer Golden Rules:
1. NO RULES HERE - Authorization and state checks live in the services
2. ONE CALL PER ROUTE - Each endpoint maps to exactly one facade operation
3. FAIL LOUD - Rejections return RFC 7807 bodies with kind and context
"""

from fastapi import APIRouter, Depends, Request

from grievance_workflow.api.dependencies.grievance_system import (
    get_grievance_system,
    get_principal_id,
)
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
from grievance_workflow.api.problem import raise_problem
from grievance_workflow.application.services.grievance_system import GrievanceSystem
from grievance_workflow.domain.events.audit import AuditEvent
from grievance_workflow.domain.models.grievance import Grievance
from grievance_workflow.domain.models.operation_result import OperationResult

router = APIRouter(prefix="/v1/grievances", tags=["grievances"])

_REJECTIONS = {
    403: {"model": ProblemDetailResponse, "description": "Caller not permitted"},
    404: {"model": ProblemDetailResponse, "description": "Grievance not found"},
    409: {"model": ProblemDetailResponse, "description": "Illegal in current state"},
    422: {"model": ProblemDetailResponse, "description": "Invalid input"},
}


# =============================================================================
# Type Mapping
# =============================================================================


def _domain_to_api(grievance: Grievance) -> GrievanceResponse:
    return GrievanceResponse(
        id=grievance.id,
        submitter=grievance.submitter,
        description=grievance.description,
        status=GrievanceStatusEnum(grievance.status.value),
        escalation_level=EscalationLevelEnum(grievance.escalation_level.role.value),
        assigned_handler=grievance.assigned_handler,
        assigned_by=grievance.assigned_by.value if grievance.assigned_by else None,
        submitted_at=grievance.submitted_at,
        last_updated_at=grievance.last_updated_at,
        resolution_remarks=grievance.resolution_remarks,
        resolved_by=grievance.resolved_by,
    )


def event_to_api(event: AuditEvent) -> AuditEventResponse:
    return AuditEventResponse(
        sequence=event.sequence,
        kind=event.kind.value,
        actor=event.actor,
        subject_type=event.subject_type.value,
        subject=event.subject,
        payload=dict(event.payload),
        timestamp=event.timestamp,
    )


def _grievance_or_problem(
    result: OperationResult[Grievance], request: Request
) -> GrievanceResponse:
    if result.error is not None:
        raise_problem(result.error, request)
    return _domain_to_api(result.unwrap())


# =============================================================================
# Submission and listing
# =============================================================================


@router.post(
    "",
    response_model=SubmitGrievanceResponse,
    status_code=201,
    responses=_REJECTIONS,
)
async def submit_grievance(
    body: SubmitGrievanceRequest,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> SubmitGrievanceResponse:
    """Submit a new grievance. Caller must hold the Student role."""
    result = await system.submit_grievance(caller, body.description)
    if result.error is not None:
        raise_problem(result.error, request)
    return SubmitGrievanceResponse(id=result.unwrap())


@router.get("", response_model=GrievanceIdListResponse)
async def list_visible(
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceIdListResponse:
    """Ids the caller may see under their role's visibility rule."""
    ids = await system.list_visible(caller)
    return GrievanceIdListResponse(ids=ids, count=len(ids))


@router.get("/all", response_model=GrievanceIdListResponse, responses=_REJECTIONS)
async def list_all(
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceIdListResponse:
    """Every grievance id. Admin only."""
    result = await system.list_all(caller)
    if result.error is not None:
        raise_problem(result.error, request)
    ids = result.unwrap()
    return GrievanceIdListResponse(ids=ids, count=len(ids))


@router.get("/acted-on", response_model=GrievanceIdListResponse)
async def list_acted_on(
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceIdListResponse:
    """Ids the caller has acted on, from the audit log."""
    ids = await system.list_acted_on(caller)
    return GrievanceIdListResponse(ids=ids, count=len(ids))


@router.get(
    "/count",
    response_model=GrievanceCountResponse,
    dependencies=[Depends(get_principal_id)],
)
async def count_grievances(
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceCountResponse:
    """Total submitted so far. Any identified caller; reveals no record content."""
    return GrievanceCountResponse(count=await system.count_grievances())


@router.get("/{grievance_id}", response_model=GrievanceResponse, responses=_REJECTIONS)
async def get_grievance(
    grievance_id: int,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceResponse:
    """Fetch one grievance within the caller's visibility.

    The admin, who sees nothing through ordinary visibility, gets the
    elevated inspection path instead.
    """
    if caller == await system.roles.admin_id():
        result = await system.inspect_grievance(caller, grievance_id)
    else:
        result = await system.get_grievance(caller, grievance_id)
    return _grievance_or_problem(result, request)


@router.get(
    "/{grievance_id}/events",
    response_model=AuditEventListResponse,
    responses=_REJECTIONS,
)
async def grievance_events(
    grievance_id: int,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> AuditEventListResponse:
    """Audit history of one grievance, in sequence order."""
    result = await system.events_for(caller, grievance_id)
    if result.error is not None:
        raise_problem(result.error, request)
    return AuditEventListResponse(events=[event_to_api(e) for e in result.unwrap()])


# =============================================================================
# Transitions
# =============================================================================


@router.post(
    "/{grievance_id}/review", response_model=GrievanceResponse, responses=_REJECTIONS
)
async def review_grievance(
    grievance_id: int,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceResponse:
    result = await system.review_grievance(caller, grievance_id)
    return _grievance_or_problem(result, request)


@router.post(
    "/{grievance_id}/assign", response_model=GrievanceResponse, responses=_REJECTIONS
)
async def assign_to_handler(
    grievance_id: int,
    body: AssignHandlerRequest,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceResponse:
    result = await system.assign_to_handler(caller, grievance_id, body.handler)
    return _grievance_or_problem(result, request)


@router.post(
    "/{grievance_id}/reassign", response_model=GrievanceResponse, responses=_REJECTIONS
)
async def reassign_handler(
    grievance_id: int,
    body: AssignHandlerRequest,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceResponse:
    result = await system.reassign_handler(caller, grievance_id, body.handler)
    return _grievance_or_problem(result, request)


@router.post(
    "/{grievance_id}/resolve", response_model=GrievanceResponse, responses=_REJECTIONS
)
async def resolve_grievance(
    grievance_id: int,
    body: RemarksRequest,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceResponse:
    result = await system.resolve_grievance(caller, grievance_id, body.remarks)
    return _grievance_or_problem(result, request)


@router.post(
    "/{grievance_id}/escalate", response_model=GrievanceResponse, responses=_REJECTIONS
)
async def escalate_grievance(
    grievance_id: int,
    body: EscalateRequest,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceResponse:
    result = await system.escalate_grievance(
        caller, grievance_id, body.remarks, handler=body.handler
    )
    return _grievance_or_problem(result, request)


@router.post(
    "/{grievance_id}/close", response_model=GrievanceResponse, responses=_REJECTIONS
)
async def close_grievance(
    grievance_id: int,
    body: RemarksRequest,
    request: Request,
    caller: str = Depends(get_principal_id),
    system: GrievanceSystem = Depends(get_grievance_system),
) -> GrievanceResponse:
    result = await system.close_grievance(caller, grievance_id, body.remarks)
    return _grievance_or_problem(result, request)
