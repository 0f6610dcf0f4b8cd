"""Role repository port.

Storage for the principal -> role map and the identity of the single
admin. Business rules (who may assign what) live in RoleRegistryService;
this port only stores.

Developer Golden Rules:
1. ONE ROLE PER PRINCIPAL - set_role replaces, never accumulates
2. ADMIN IS TRACKED SEPARATELY - admin_id() is authoritative for "who is admin"
3. SERVICE VALIDATES - Repository does not enforce registry rules
"""

from __future__ import annotations

from typing import Protocol

from grievance_workflow.domain.models.role import Role


class RoleRepositoryProtocol(Protocol):
    """Protocol for role storage operations.

    Methods:
        get_role: Role of a principal (Role.NONE if absent)
        set_role: Store a principal's single role
        clear_role: Remove a principal's role
        admin_id: Current admin principal
        set_admin: Move the admin marker (and ADMIN role) to a principal
        principals_with_role: All principals holding a role
    """

    async def get_role(self, principal: str) -> Role:
        """Return the principal's role, or Role.NONE if unassigned."""
        ...

    async def set_role(self, principal: str, role: Role) -> Role:
        """Store a role, replacing any prior one.

        Returns:
            The previous role (Role.NONE if there was none).
        """
        ...

    async def clear_role(self, principal: str) -> Role:
        """Remove a principal's role.

        Returns:
            The removed role (Role.NONE if there was none).
        """
        ...

    async def admin_id(self) -> str:
        """Return the current admin principal."""
        ...

    async def set_admin(self, principal: str) -> None:
        """Record a principal as admin and give it Role.ADMIN."""
        ...

    async def principals_with_role(self, role: Role) -> list[str]:
        """Return principals holding ``role``, sorted."""
        ...
