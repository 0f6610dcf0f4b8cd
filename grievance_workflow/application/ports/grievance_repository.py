"""Grievance repository port.

Holds grievance records keyed by a dense, monotonically increasing id and
the secondary indices visibility queries are served from. Records are
inserted once and afterwards only replaced with a newer snapshot by the
WorkflowEngine; there is no delete.

Developer Golden Rules:
1. DENSE IDS - insert() only accepts next_id(); ids are never reused
2. INDICES FOLLOW WRITES - insert/replace update every secondary index
3. SNAPSHOT READS - get() returns the latest committed frozen record
4. ENGINE ONLY - replace() is for the WorkflowEngine, never for callers
"""

from __future__ import annotations

from typing import Protocol

from grievance_workflow.domain.models.grievance import Grievance, GrievanceStatus
from grievance_workflow.domain.models.role import EscalationLevel


class GrievanceRepositoryProtocol(Protocol):
    """Protocol for grievance storage and indexed lookups.

    Methods:
        next_id: Id the next insert must use
        insert: Store a new record
        revert_insert: Release the most recent insert when its audit append failed
        get: Fetch by id
        replace: Swap in a newer snapshot of an existing record
        count: Number of records
        all_ids: Every id, ascending
        ids_by_submitter / ids_at_level / ids_by_handler / ids_with_status:
            index lookups, ascending
    """

    async def next_id(self) -> int:
        """Return the id the next insert must carry."""
        ...

    async def insert(self, grievance: Grievance) -> None:
        """Store a new grievance.

        Raises:
            ValueError: If grievance.id is not next_id().
        """
        ...

    async def revert_insert(self, grievance_id: int) -> None:
        """Undo the most recent, uncommitted insert.

        Raises:
            ValueError: If grievance_id is not the most recent insert.
        """
        ...

    async def get(self, grievance_id: int) -> Grievance | None:
        """Return the grievance, or None when the id was never assigned."""
        ...

    async def replace(self, grievance: Grievance) -> Grievance:
        """Replace an existing grievance with a newer snapshot.

        Returns:
            The snapshot that was replaced.

        Raises:
            KeyError: If the grievance does not exist.
        """
        ...

    async def count(self) -> int:
        ...

    async def all_ids(self) -> list[int]:
        ...

    async def ids_by_submitter(self, submitter: str) -> list[int]:
        ...

    async def ids_at_level(self, level: EscalationLevel) -> list[int]:
        ...

    async def ids_by_handler(self, handler: str) -> list[int]:
        ...

    async def ids_with_status(self, status: GrievanceStatus) -> list[int]:
        ...
