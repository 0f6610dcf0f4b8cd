"""FastAPI application entry point for the grievance workflow."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from grievance_workflow import __version__
from grievance_workflow.api.middleware.logging_middleware import LoggingMiddleware
from grievance_workflow.api.routes.grievances import router as grievances_router
from grievance_workflow.api.routes.health import router as health_router
from grievance_workflow.api.routes.roles import router as roles_router
from grievance_workflow.bootstrap.logging import configure_logging_from_config
from grievance_workflow.config.workflow_config import WorkflowConfig
from grievance_workflow.domain.errors import AuditEmissionError

configure_logging_from_config(WorkflowConfig.from_environment())

app = FastAPI(
    title="Grievance Workflow API",
    description="Tiered grievance submission, escalation and audit",
    version=__version__,
)

app.add_middleware(LoggingMiddleware)


@app.exception_handler(AuditEmissionError)
async def audit_emission_error_handler(
    request: Request, exc: AuditEmissionError
) -> JSONResponse:
    """The mutation was rolled back; report it as a server-side failure."""
    return JSONResponse(
        status_code=500,
        content={
            "type": "urn:grievance-workflow:error:AuditEmission",
            "title": "Audit Emission Failed",
            "status": 500,
            "detail": str(exc),
            "instance": str(request.url),
        },
    )


app.include_router(health_router)
app.include_router(grievances_router)
app.include_router(roles_router)
