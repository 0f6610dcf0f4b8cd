"""
API routes for the grievance workflow.

Available routers:
- grievances: Submission, transitions, reads and audit history
- roles: Role registry administration
- health: Health check endpoint
"""

from grievance_workflow.api.routes.grievances import router as grievances_router
from grievance_workflow.api.routes.health import router as health_router
from grievance_workflow.api.routes.roles import router as roles_router

__all__: list[str] = ["grievances_router", "health_router", "roles_router"]
