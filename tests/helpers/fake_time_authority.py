"""Deterministic clock for workflow tests.

    >>> clock = FakeTimeAuthority(datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc))
    >>> engine = WorkflowEngine(repo, roles, audit, time_authority=clock)
    >>> clock.advance(hours=2)

With ``tick`` set, every reading moves the clock forward by that amount,
so consecutive transitions get distinct, ordered timestamps.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from grievance_workflow.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_START = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    def __init__(
        self, frozen_at: datetime | None = None, tick: timedelta | None = None
    ) -> None:
        self._now = _as_utc(frozen_at or DEFAULT_START)
        self._tick = tick or timedelta(0)
        self.readings = 0

    def utcnow(self) -> datetime:
        current = self._now
        self._now += self._tick
        self.readings += 1
        return current

    def advance(
        self, delta: timedelta | None = None, *, seconds: float = 0, hours: float = 0
    ) -> None:
        """Move forward; going backwards is only possible through set_time."""
        step = (delta or timedelta(0)) + timedelta(seconds=seconds, hours=hours)
        if step <= timedelta(0):
            raise ValueError(f"advance needs a positive amount, got {step}")
        self._now += step

    def set_time(self, new_time: datetime) -> None:
        self._now = _as_utc(new_time)
