"""Wall-clock TimeAuthorityProtocol implementation."""

from __future__ import annotations

from datetime import datetime, timezone

from grievance_workflow.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Returns the real current time in UTC."""

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)
