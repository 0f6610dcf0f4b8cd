"""Grievance workflow configuration.

Environment Variables:
- GRIEVANCE_ADMIN_PRINCIPAL: Principal granted ADMIN at bootstrap (default: admin)
- GRIEVANCE_MAX_DESCRIPTION_LENGTH: Description length bound (default: 1000)
- GRIEVANCE_MAX_REMARKS_LENGTH: Remarks length bound (default: 500)
- GRIEVANCE_ENVIRONMENT: development or production; selects log renderer
  (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from grievance_workflow.domain.models.grievance import (
    MAX_DESCRIPTION_LENGTH,
    MAX_REMARKS_LENGTH,
)


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class WorkflowConfig:
    """Configuration for a grievance system instance.

    Attributes:
        admin_principal: Principal that holds ADMIN when the system starts.
        max_description_length: Upper bound on grievance descriptions.
        max_remarks_length: Upper bound on resolve/escalate/close remarks.
        environment: Deployment environment; "production" switches logs to JSON.
    """

    admin_principal: str = "admin"
    max_description_length: int = MAX_DESCRIPTION_LENGTH
    max_remarks_length: int = MAX_REMARKS_LENGTH
    environment: str = "development"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.admin_principal or not self.admin_principal.strip():
            raise ValueError("admin_principal cannot be blank")
        if self.max_description_length < 1:
            raise ValueError(
                f"max_description_length must be positive, got {self.max_description_length}"
            )
        if self.max_remarks_length < 1:
            raise ValueError(
                f"max_remarks_length must be positive, got {self.max_remarks_length}"
            )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_environment(cls) -> "WorkflowConfig":
        """Create config from environment variables with defaults.

        Non-positive bounds fall back to the defaults rather than failing
        startup.
        """
        max_description = _get_int_env(
            "GRIEVANCE_MAX_DESCRIPTION_LENGTH", MAX_DESCRIPTION_LENGTH
        )
        max_remarks = _get_int_env("GRIEVANCE_MAX_REMARKS_LENGTH", MAX_REMARKS_LENGTH)
        return cls(
            admin_principal=_get_str_env("GRIEVANCE_ADMIN_PRINCIPAL", "admin"),
            max_description_length=(
                max_description if max_description > 0 else MAX_DESCRIPTION_LENGTH
            ),
            max_remarks_length=max_remarks if max_remarks > 0 else MAX_REMARKS_LENGTH,
            environment=_get_str_env("GRIEVANCE_ENVIRONMENT", "development"),
        )


# Default config with the documented bounds
DEFAULT_WORKFLOW_CONFIG = WorkflowConfig()

# Testing config with small bounds for edge-case tests
TEST_WORKFLOW_CONFIG = WorkflowConfig(
    admin_principal="admin",
    max_description_length=50,
    max_remarks_length=20,
)
