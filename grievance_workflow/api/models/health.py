"""Liveness payload."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(default="healthy", examples=["healthy"])
    grievance_count: int = Field(ge=0, description="Grievances submitted so far")
    audit_head: int = Field(ge=0, description="Sequence of the newest audit event, 0 if none")
