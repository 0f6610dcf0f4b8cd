"""Audit log port.

Append-only, strictly ordered sequence of domain events. There is no
update or delete; the log is the sole basis for reconstructing a
record's history.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from grievance_workflow.domain.events.audit import (
    AuditEntry,
    AuditEvent,
    AuditEventKind,
)


class AuditLogProtocol(Protocol):
    """Protocol for audit log operations.

    Methods:
        append: Add one event and assign it the next sequence number
        events_for_grievance: Events about a grievance, sequence order
        events_for_principal: Role events about a principal, sequence order
        events_by_actor: Events a principal performed, sequence order
        all_events: Whole log, sequence order
        head_sequence: Sequence of the latest event (0 when empty)
    """

    async def append(
        self,
        kind: AuditEventKind,
        actor: str,
        subject: str,
        payload: dict[str, Any] | None = None,
        timestamp: datetime | None = None,
    ) -> AuditEvent:
        """Append an event.

        The timestamp defaults to the log's clock; callers that stamp the
        mutated record pass the same instant so both agree.

        Returns:
            The stored event with its sequence number and timestamp.
        """
        ...

    async def append_batch(
        self,
        entries: list[AuditEntry],
        timestamp: datetime | None = None,
    ) -> list[AuditEvent]:
        """Append several events as one logical operation.

        Either every entry is appended with consecutive sequence numbers
        or none is.
        """
        ...

    async def events_for_grievance(self, grievance_id: int) -> list[AuditEvent]:
        ...

    async def events_for_principal(self, principal: str) -> list[AuditEvent]:
        ...

    async def events_by_actor(self, actor: str) -> list[AuditEvent]:
        ...

    async def all_events(self) -> list[AuditEvent]:
        ...

    async def head_sequence(self) -> int:
        ...
