"""RFC 7807 problem responses for workflow rejections.

Maps each rejection kind to an HTTP status and raises an HTTPException
whose ``detail`` is the problem body, carrying the taxonomy ``kind`` and
the error's context so clients can explain the failure.
"""

from typing import NoReturn

from fastapi import HTTPException, Request

from grievance_workflow.domain.errors import GrievanceRejectionError

PROBLEM_TYPE_PREFIX = "urn:grievance-workflow:error:"

STATUS_BY_KIND: dict[str, int] = {
    "Unauthorized": 403,
    "NotFound": 404,
    "InvalidStateForAction": 409,
    "TerminalLevel": 409,
    "ValidationError": 422,
    "InvalidRoleOperation": 400,
}

_TITLE_BY_KIND: dict[str, str] = {
    "Unauthorized": "Unauthorized",
    "NotFound": "Grievance Not Found",
    "InvalidStateForAction": "Invalid State For Action",
    "TerminalLevel": "Terminal Escalation Level",
    "ValidationError": "Validation Error",
    "InvalidRoleOperation": "Invalid Role Operation",
}


def raise_problem(error: GrievanceRejectionError, request: Request) -> NoReturn:
    """Raise the HTTP form of a rejection."""
    status_code = STATUS_BY_KIND.get(error.kind, 400)
    raise HTTPException(
        status_code=status_code,
        detail={
            "type": f"{PROBLEM_TYPE_PREFIX}{error.kind}",
            "title": _TITLE_BY_KIND.get(error.kind, error.kind),
            "status": status_code,
            "detail": str(error),
            "instance": str(request.url),
            "kind": error.kind,
            "context": dict(error.context),
        },
    ) from None
