"""Unit tests for VisibilityFilter.

Key Test Scenarios:
1. Per-role listing rules
2. get_by_id re-derives the same rules and fails Unauthorized
3. Admin sees nothing through the general call, everything through list_all/inspect
4. list_acted_on reads the audit log actor index
"""

import pytest

from grievance_workflow.application.services.grievance_system import GrievanceSystem
from grievance_workflow.application.services.visibility_filter import (
    VisibilityFilter,
    can_view,
)
from grievance_workflow.application.services.workflow_engine import WorkflowEngine
from grievance_workflow.domain.errors import (
    NotAdminError,
    NotFoundError,
    UnauthorizedError,
)
from grievance_workflow.domain.models.role import Role


class TestVisibilityFilter:
    @pytest.fixture
    def engine(self, staffed_system: GrievanceSystem) -> WorkflowEngine:
        return staffed_system.engine

    @pytest.fixture
    def visibility(self, staffed_system: GrievanceSystem) -> VisibilityFilter:
        return staffed_system.visibility

    @pytest.fixture
    async def populated(self, engine: WorkflowEngine) -> dict[str, int]:
        """One grievance in each interesting position.

        submitted   1  student-1 at Counselor
        resolved    2  student-2 resolved at Counselor
        at_yc       3  student-1 escalated to YearCoordinator
        at_hod      4  student-2 assigned to hod-1
        at_dean     5  student-1 escalated to Dean
        closed      6  student-2 closed by Dean
        """
        ids: dict[str, int] = {}
        ids["submitted"] = (await engine.submit("student-1", "one")).id

        ids["resolved"] = (await engine.submit("student-2", "two")).id
        await engine.resolve("counselor-1", ids["resolved"], "fixed")

        ids["at_yc"] = (await engine.submit("student-1", "three")).id
        await engine.escalate("counselor-1", ids["at_yc"], "up")

        ids["at_hod"] = (await engine.submit("student-2", "four")).id
        await engine.assign_to_handler("counselor-2", ids["at_hod"], "hod-1")

        ids["at_dean"] = (await engine.submit("student-1", "five")).id
        await engine.assign_to_handler("counselor-1", ids["at_dean"], "hod-2")
        await engine.escalate("hod-2", ids["at_dean"], "up")

        ids["closed"] = (await engine.submit("student-2", "six")).id
        await engine.assign_to_handler("counselor-1", ids["closed"], "hod-1")
        await engine.escalate("hod-1", ids["closed"], "up")
        await engine.close("dean-1", ids["closed"], "done")
        return ids

    @pytest.mark.asyncio
    async def test_student_sees_own(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        assert await visibility.visible_ids("student-1") == [1, 3, 5]
        assert await visibility.visible_ids("student-2") == [2, 4, 6]

    @pytest.mark.asyncio
    async def test_counselor_sees_counselor_tier_any_status(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        expected = [populated["submitted"], populated["resolved"]]
        assert await visibility.visible_ids("counselor-1") == expected
        assert await visibility.visible_ids("counselor-2") == expected

    @pytest.mark.asyncio
    async def test_year_coordinator_sees_own_tier(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        assert await visibility.visible_ids("yc-1") == [populated["at_yc"]]

    @pytest.mark.asyncio
    async def test_tier_wide_roles_match_single_record_check(
        self, staffed_system: GrievanceSystem, populated: dict[str, int]
    ) -> None:
        for principal, role in (("counselor-1", Role.COUNSELOR), ("yc-1", Role.YEAR_COORDINATOR)):
            listed = await staffed_system.visibility.visible_ids(principal)
            checked = [
                gid
                for gid in populated.values()
                if can_view(await staffed_system.engine._repository.get(gid), principal, role)
            ]
            assert sorted(checked) == listed
        assert not can_view(
            await staffed_system.engine._repository.get(populated["at_hod"]),
            "counselor-1",
            Role.COUNSELOR,
        )

    @pytest.mark.asyncio
    async def test_hod_sees_only_assigned(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        assert await visibility.visible_ids("hod-1") == [populated["at_hod"]]
        # hod-2's record moved on to the Dean, clearing the handler
        assert await visibility.visible_ids("hod-2") == []

    @pytest.mark.asyncio
    async def test_dean_sees_escalated_and_closed(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        # at_yc is Escalated (at the YearCoordinator tier) so the Dean sees it too
        assert await visibility.visible_ids("dean-1") == [
            populated["at_yc"],
            populated["at_dean"],
            populated["closed"],
        ]

    @pytest.mark.asyncio
    async def test_dean_keeps_records_they_reviewed(
        self,
        engine: WorkflowEngine,
        visibility: VisibilityFilter,
        populated: dict[str, int],
    ) -> None:
        await engine.review("dean-1", populated["at_dean"])
        assert populated["at_dean"] in await visibility.visible_ids("dean-1")

    @pytest.mark.asyncio
    async def test_admin_and_unassigned_see_nothing(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        assert await visibility.visible_ids("admin") == []
        assert await visibility.visible_ids("stranger") == []

    @pytest.mark.asyncio
    async def test_hod_empty_until_assigned(
        self, engine: WorkflowEngine, visibility: VisibilityFilter
    ) -> None:
        gid = (await engine.submit("student-1", "text")).id
        assert await visibility.visible_ids("hod-1") == []
        await engine.assign_to_handler("counselor-1", gid, "hod-1")
        assert await visibility.visible_ids("hod-1") == [gid]

    # get_by_id

    @pytest.mark.asyncio
    async def test_get_by_id_round_trip(
        self, engine: WorkflowEngine, visibility: VisibilityFilter
    ) -> None:
        gid = (await engine.submit("student-1", "X")).id
        g = await visibility.get_by_id("student-1", gid)
        assert g.description == "X"
        assert g.status.value == "Submitted"

    @pytest.mark.asyncio
    async def test_other_student_unauthorized(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        with pytest.raises(UnauthorizedError):
            await visibility.get_by_id("student-2", populated["submitted"])

    @pytest.mark.asyncio
    async def test_get_by_id_not_found_first(self, visibility: VisibilityFilter) -> None:
        with pytest.raises(NotFoundError):
            await visibility.get_by_id("stranger", 99)

    @pytest.mark.asyncio
    async def test_get_by_id_matches_listing(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        for principal in ("student-1", "counselor-1", "yc-1", "hod-1", "dean-1", "admin"):
            visible = set(await visibility.visible_ids(principal))
            for gid in populated.values():
                if gid in visible:
                    assert (await visibility.get_by_id(principal, gid)).id == gid
                else:
                    with pytest.raises(UnauthorizedError):
                        await visibility.get_by_id(principal, gid)

    # elevated reads

    @pytest.mark.asyncio
    async def test_list_all_admin_only(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        assert await visibility.list_all("admin") == sorted(populated.values())
        with pytest.raises(NotAdminError):
            await visibility.list_all("dean-1")

    @pytest.mark.asyncio
    async def test_inspect(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        g = await visibility.inspect("admin", populated["closed"])
        assert g.status.value == "Closed"
        with pytest.raises(NotFoundError):
            await visibility.inspect("admin", 99)
        with pytest.raises(NotAdminError):
            await visibility.inspect("student-1", populated["submitted"])

    @pytest.mark.asyncio
    async def test_count(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        assert await visibility.count() == len(populated)

    @pytest.mark.asyncio
    async def test_list_acted_on(
        self, visibility: VisibilityFilter, populated: dict[str, int]
    ) -> None:
        assert await visibility.list_acted_on("counselor-1") == [
            populated["resolved"],
            populated["at_yc"],
            populated["at_dean"],
            populated["closed"],
        ]
        assert await visibility.list_acted_on("dean-1") == [populated["closed"]]
        # Submitting is not acting on a record
        assert await visibility.list_acted_on("student-1") == []
