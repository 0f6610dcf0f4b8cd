"""Clock port.

Grievance timestamps (``submitted_at``, ``last_updated_at``) and audit
event timestamps all come from one injected clock, never from
``datetime.now()`` inside a service.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Source of timezone-aware UTC datetimes.

    SystemTimeAuthority reads the wall clock; tests inject
    tests.helpers.FakeTimeAuthority.
    """

    @abstractmethod
    def utcnow(self) -> datetime: ...
