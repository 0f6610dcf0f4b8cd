"""Typed outcome of a facade operation.

Expected business rejections are returned rather than raised, so callers
branch on ``result.ok`` and inspect ``result.error.kind`` instead of
catching exceptions for routine failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from grievance_workflow.domain.errors.workflow import GrievanceRejectionError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Success value or rejection, never both.

    Attributes:
        value: Payload on success (None for operations with no payload).
        error: The rejection on failure.
    """

    value: T | None = None
    error: GrievanceRejectionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> str | None:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, re-raising the rejection on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T | None = None) -> OperationResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GrievanceRejectionError) -> OperationResult[T]:
        return cls(error=error)
