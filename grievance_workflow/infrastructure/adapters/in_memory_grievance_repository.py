"""In-memory implementation of GrievanceRepositoryProtocol.

Records are kept in a list indexed by ``id - 1`` so ids stay dense.
Four secondary indices (submitter, tier, handler, status) are maintained
incrementally on every insert and replace, so visibility queries never
scan the full store.
"""

from __future__ import annotations

from collections import defaultdict

from grievance_workflow.application.ports.grievance_repository import (
    GrievanceRepositoryProtocol,
)
from grievance_workflow.domain.models.grievance import Grievance, GrievanceStatus
from grievance_workflow.domain.models.role import EscalationLevel


class InMemoryGrievanceRepository(GrievanceRepositoryProtocol):
    """Dense grievance store with secondary indices.

    Attributes:
        _records: Committed snapshots; position i holds grievance i + 1.
        _by_submitter: submitter -> ids
        _by_level: tier -> ids currently at that tier
        _by_handler: handler -> ids currently assigned to them
        _by_status: status -> ids currently in that status
    """

    def __init__(self) -> None:
        self._records: list[Grievance] = []
        self._by_submitter: defaultdict[str, set[int]] = defaultdict(set)
        self._by_level: defaultdict[EscalationLevel, set[int]] = defaultdict(set)
        self._by_handler: defaultdict[str, set[int]] = defaultdict(set)
        self._by_status: defaultdict[GrievanceStatus, set[int]] = defaultdict(set)

    async def next_id(self) -> int:
        return len(self._records) + 1

    async def insert(self, grievance: Grievance) -> None:
        expected = len(self._records) + 1
        if grievance.id != expected:
            raise ValueError(
                f"Grievance ids are sequential: expected {expected}, got {grievance.id}"
            )
        self._records.append(grievance)
        self._index(grievance)

    async def revert_insert(self, grievance_id: int) -> None:
        if grievance_id != len(self._records):
            raise ValueError(
                f"Only the most recent insert can be reverted, not {grievance_id}"
            )
        self._unindex(self._records.pop())

    async def get(self, grievance_id: int) -> Grievance | None:
        if 1 <= grievance_id <= len(self._records):
            return self._records[grievance_id - 1]
        return None

    async def replace(self, grievance: Grievance) -> Grievance:
        previous = await self.get(grievance.id)
        if previous is None:
            raise KeyError(f"Grievance not found: {grievance.id}")
        self._unindex(previous)
        self._records[grievance.id - 1] = grievance
        self._index(grievance)
        return previous

    async def count(self) -> int:
        return len(self._records)

    async def all_ids(self) -> list[int]:
        return list(range(1, len(self._records) + 1))

    async def ids_by_submitter(self, submitter: str) -> list[int]:
        return sorted(self._by_submitter.get(submitter, ()))

    async def ids_at_level(self, level: EscalationLevel) -> list[int]:
        return sorted(self._by_level.get(level, ()))

    async def ids_by_handler(self, handler: str) -> list[int]:
        return sorted(self._by_handler.get(handler, ()))

    async def ids_with_status(self, status: GrievanceStatus) -> list[int]:
        return sorted(self._by_status.get(status, ()))

    def _index(self, grievance: Grievance) -> None:
        self._by_submitter[grievance.submitter].add(grievance.id)
        self._by_level[grievance.escalation_level].add(grievance.id)
        self._by_status[grievance.status].add(grievance.id)
        if grievance.assigned_handler is not None:
            self._by_handler[grievance.assigned_handler].add(grievance.id)

    def _unindex(self, grievance: Grievance) -> None:
        self._by_submitter[grievance.submitter].discard(grievance.id)
        self._by_level[grievance.escalation_level].discard(grievance.id)
        self._by_status[grievance.status].discard(grievance.id)
        if grievance.assigned_handler is not None:
            self._by_handler[grievance.assigned_handler].discard(grievance.id)
