"""Unit tests for InMemoryGrievanceRepository."""

from datetime import datetime, timezone

import pytest

from grievance_workflow.domain.models.grievance import Grievance, GrievanceStatus
from grievance_workflow.domain.models.role import EscalationLevel, Role
from grievance_workflow.infrastructure.adapters.in_memory_grievance_repository import (
    InMemoryGrievanceRepository,
)

T0 = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def _grievance(grievance_id: int, submitter: str = "student-1") -> Grievance:
    return Grievance(
        id=grievance_id,
        submitter=submitter,
        description=f"complaint {grievance_id}",
        submitted_at=T0,
        last_updated_at=T0,
    )


class TestInMemoryGrievanceRepository:
    @pytest.fixture
    def repository(self) -> InMemoryGrievanceRepository:
        return InMemoryGrievanceRepository()

    @pytest.mark.asyncio
    async def test_ids_are_dense_from_one(
        self, repository: InMemoryGrievanceRepository
    ) -> None:
        assert await repository.next_id() == 1
        await repository.insert(_grievance(1))
        assert await repository.next_id() == 2
        assert await repository.count() == 1

    @pytest.mark.asyncio
    async def test_insert_rejects_out_of_order_id(
        self, repository: InMemoryGrievanceRepository
    ) -> None:
        with pytest.raises(ValueError, match="sequential"):
            await repository.insert(_grievance(2))

    @pytest.mark.asyncio
    async def test_get_outside_range_returns_none(
        self, repository: InMemoryGrievanceRepository
    ) -> None:
        await repository.insert(_grievance(1))
        assert await repository.get(0) is None
        assert await repository.get(2) is None
        assert (await repository.get(1)).id == 1  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_revert_insert_releases_id(
        self, repository: InMemoryGrievanceRepository
    ) -> None:
        await repository.insert(_grievance(1))
        await repository.revert_insert(1)
        assert await repository.count() == 0
        assert await repository.ids_by_submitter("student-1") == []
        assert await repository.next_id() == 1

    @pytest.mark.asyncio
    async def test_revert_insert_only_most_recent(
        self, repository: InMemoryGrievanceRepository
    ) -> None:
        await repository.insert(_grievance(1))
        await repository.insert(_grievance(2))
        with pytest.raises(ValueError):
            await repository.revert_insert(1)

    @pytest.mark.asyncio
    async def test_replace_unknown_raises(
        self, repository: InMemoryGrievanceRepository
    ) -> None:
        with pytest.raises(KeyError):
            await repository.replace(_grievance(1))

    @pytest.mark.asyncio
    async def test_indices_follow_replace(
        self, repository: InMemoryGrievanceRepository
    ) -> None:
        original = _grievance(1)
        await repository.insert(original)
        assert await repository.ids_at_level(EscalationLevel.COUNSELOR) == [1]
        assert await repository.ids_with_status(GrievanceStatus.SUBMITTED) == [1]

        assigned = original.with_handler("hod-1", Role.COUNSELOR, T0)
        previous = await repository.replace(assigned)

        assert previous == original
        assert await repository.ids_at_level(EscalationLevel.COUNSELOR) == []
        assert await repository.ids_at_level(EscalationLevel.HOD) == [1]
        assert await repository.ids_by_handler("hod-1") == [1]
        assert await repository.ids_with_status(GrievanceStatus.SUBMITTED) == []
        assert await repository.ids_with_status(
            GrievanceStatus.ASSIGNED_TO_HANDLER
        ) == [1]

        await repository.replace(assigned.with_escalation(T0))
        assert await repository.ids_by_handler("hod-1") == []

    @pytest.mark.asyncio
    async def test_index_queries_are_ascending(
        self, repository: InMemoryGrievanceRepository
    ) -> None:
        for i in range(1, 6):
            await repository.insert(_grievance(i, submitter="student-1" if i % 2 else "student-2"))
        assert await repository.ids_by_submitter("student-1") == [1, 3, 5]
        assert await repository.ids_by_submitter("student-2") == [2, 4]
        assert await repository.all_ids() == [1, 2, 3, 4, 5]
