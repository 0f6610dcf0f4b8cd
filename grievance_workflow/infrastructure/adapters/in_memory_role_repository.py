"""In-memory implementation of RoleRepositoryProtocol.

Durable storage is outside this system; the in-memory map is the
registry of record. The admin marker and the ADMIN role entry are always
moved together so they cannot disagree.
"""

from __future__ import annotations

from grievance_workflow.application.ports.role_repository import (
    RoleRepositoryProtocol,
)
from grievance_workflow.domain.models.role import Role


class InMemoryRoleRepository(RoleRepositoryProtocol):
    """Principal -> role map plus the admin marker.

    Attributes:
        _roles: One role per principal; unassigned principals are absent.
        _admin: Current admin principal.
    """

    def __init__(self, admin: str) -> None:
        if not admin or not admin.strip():
            raise ValueError("Admin principal cannot be blank")
        self._roles: dict[str, Role] = {admin: Role.ADMIN}
        self._admin = admin

    async def get_role(self, principal: str) -> Role:
        return self._roles.get(principal, Role.NONE)

    async def set_role(self, principal: str, role: Role) -> Role:
        if role is Role.NONE:
            return await self.clear_role(principal)
        previous = self._roles.get(principal, Role.NONE)
        self._roles[principal] = role
        return previous

    async def clear_role(self, principal: str) -> Role:
        return self._roles.pop(principal, Role.NONE)

    async def admin_id(self) -> str:
        return self._admin

    async def set_admin(self, principal: str) -> None:
        self._roles[principal] = Role.ADMIN
        self._admin = principal

    async def principals_with_role(self, role: Role) -> list[str]:
        return sorted(p for p, r in self._roles.items() if r is role)
