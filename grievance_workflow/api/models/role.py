"""API models for role registry endpoints."""

from enum import Enum

from pydantic import BaseModel, Field


class RoleEnum(str, Enum):
    """Role held by a principal. ``None`` means no role assigned."""

    NONE = "None"
    STUDENT = "Student"
    COUNSELOR = "Counselor"
    YEAR_COORDINATOR = "YearCoordinator"
    HOD = "HOD"
    DEAN = "Dean"
    ADMIN = "Admin"


class AssignRoleRequest(BaseModel):
    role: RoleEnum = Field(..., description="Role to assign (Admin is rejected)")


class RoleResponse(BaseModel):
    principal: str
    role: RoleEnum


class RoleChangeResponse(BaseModel):
    """Outcome of an assignment or revocation.

    Attributes:
        principal: Target principal.
        role: Role held after the change.
        previous_role: Role held before the change.
    """

    principal: str
    role: RoleEnum
    previous_role: RoleEnum


class TransferAdminRequest(BaseModel):
    new_admin: str = Field(..., description="Principal to receive the Admin role")


class TransferAdminResponse(BaseModel):
    admin: str
    previous_admin: str
