"""In-memory implementation of AuditLogProtocol.

Append-only: events are stored in sequence order and there is no update
or delete path. Per-subject and per-actor indices hold positions into the
main list, so history queries return in sequence order without sorting.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from datetime import datetime
from typing import Any

from grievance_workflow.application.ports.audit_log import AuditLogProtocol
from grievance_workflow.application.ports.time_authority import TimeAuthorityProtocol
from grievance_workflow.domain.events.audit import (
    AuditEntry,
    AuditEvent,
    AuditEventKind,
    SubjectType,
)
from grievance_workflow.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)


class InMemoryAuditLog(AuditLogProtocol):
    """Append-only event list with subject and actor indices.

    Attributes:
        _events: All events; position i holds sequence i + 1.
        _by_subject: (subject_type, subject) -> positions
        _by_actor: actor -> positions
    """

    def __init__(self, time_authority: TimeAuthorityProtocol | None = None) -> None:
        self._time = time_authority or SystemTimeAuthority()
        self._events: list[AuditEvent] = []
        self._by_subject: defaultdict[tuple[SubjectType, str], list[int]] = defaultdict(list)
        self._by_actor: defaultdict[str, list[int]] = defaultdict(list)
        self._append_lock = asyncio.Lock()

    async def append(
        self,
        kind: AuditEventKind,
        actor: str,
        subject: str,
        payload: dict[str, Any] | None = None,
        timestamp: datetime | None = None,
    ) -> AuditEvent:
        entry = AuditEntry(kind=kind, actor=actor, subject=subject, payload=dict(payload or {}))
        events = await self.append_batch([entry], timestamp=timestamp)
        return events[0]

    async def append_batch(
        self,
        entries: list[AuditEntry],
        timestamp: datetime | None = None,
    ) -> list[AuditEvent]:
        if not entries:
            raise ValueError("Cannot append an empty batch")
        at = timestamp or self._time.utcnow()
        async with self._append_lock:
            start = len(self._events)
            # Build the whole batch before touching storage
            events = [
                AuditEvent(
                    sequence=start + offset + 1,
                    kind=entry.kind,
                    actor=entry.actor,
                    subject=entry.subject,
                    timestamp=at,
                    payload=dict(entry.payload),
                )
                for offset, entry in enumerate(entries)
            ]
            for position, event in enumerate(events, start=start):
                self._events.append(event)
                self._by_subject[(event.subject_type, event.subject)].append(position)
                self._by_actor[event.actor].append(position)
            return events

    async def events_for_grievance(self, grievance_id: int) -> list[AuditEvent]:
        return self._collect(self._by_subject.get((SubjectType.GRIEVANCE, str(grievance_id)), []))

    async def events_for_principal(self, principal: str) -> list[AuditEvent]:
        return self._collect(self._by_subject.get((SubjectType.PRINCIPAL, principal), []))

    async def events_by_actor(self, actor: str) -> list[AuditEvent]:
        return self._collect(self._by_actor.get(actor, []))

    async def all_events(self) -> list[AuditEvent]:
        return list(self._events)

    async def head_sequence(self) -> int:
        return len(self._events)

    def _collect(self, positions: list[int]) -> list[AuditEvent]:
        return [self._events[i] for i in positions]
