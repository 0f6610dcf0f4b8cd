"""Roles and escalation tiers.

A principal holds exactly one Role at a time. Four of the roles double as
escalation tiers, ordered Counselor < YearCoordinator < HOD < Dean; a
grievance's escalation level is always one of those tiers and never
moves backwards.
"""

from __future__ import annotations

from enum import Enum


class Role(Enum):
    """Role held by a principal.

    NONE is the sentinel reported for principals that were never assigned
    a role (or whose role was revoked). It is distinct from STUDENT.
    """

    NONE = "None"
    STUDENT = "Student"
    COUNSELOR = "Counselor"
    YEAR_COORDINATOR = "YearCoordinator"
    HOD = "HOD"
    DEAN = "Dean"
    ADMIN = "Admin"

    @property
    def is_staff(self) -> bool:
        """True for roles that act on grievances at some tier."""
        return self in _TIER_ROLES


class EscalationLevel(Enum):
    """Tier currently responsible for a grievance.

    Values are the rank in the fixed hierarchy so tiers compare by value.
    """

    COUNSELOR = 0
    YEAR_COORDINATOR = 1
    HOD = 2
    DEAN = 3

    @property
    def role(self) -> Role:
        """Role whose holders act at this tier."""
        return _LEVEL_TO_ROLE[self]

    @property
    def is_apex(self) -> bool:
        return self is EscalationLevel.DEAN

    @property
    def requires_handler(self) -> bool:
        """Tiers where a specific principal, not the whole role, is accountable."""
        return self is EscalationLevel.HOD

    def next(self) -> EscalationLevel:
        """Return the next tier up.

        Raises:
            ValueError: If called on the apex tier.
        """
        if self.is_apex:
            raise ValueError("Dean is the apex tier")
        return EscalationLevel(self.value + 1)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EscalationLevel):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, EscalationLevel):
            return NotImplemented
        return self.value <= other.value

    @classmethod
    def for_role(cls, role: Role) -> EscalationLevel | None:
        """Return the tier a role acts at, or None for non-tier roles."""
        return _ROLE_TO_LEVEL.get(role)


_LEVEL_TO_ROLE: dict[EscalationLevel, Role] = {
    EscalationLevel.COUNSELOR: Role.COUNSELOR,
    EscalationLevel.YEAR_COORDINATOR: Role.YEAR_COORDINATOR,
    EscalationLevel.HOD: Role.HOD,
    EscalationLevel.DEAN: Role.DEAN,
}

_ROLE_TO_LEVEL: dict[Role, EscalationLevel] = {
    role: level for level, role in _LEVEL_TO_ROLE.items()
}

_TIER_ROLES: frozenset[Role] = frozenset(_LEVEL_TO_ROLE.values())

# Roles allowed to delegate a grievance to a specific HOD
DELEGATING_ROLES: frozenset[Role] = frozenset({Role.COUNSELOR, Role.YEAR_COORDINATOR})
