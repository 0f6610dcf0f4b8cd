"""Configuration module for the grievance workflow.

Available Configurations:
- WorkflowConfig: Admin principal, text bounds and environment
"""

from grievance_workflow.config.workflow_config import (
    DEFAULT_WORKFLOW_CONFIG,
    TEST_WORKFLOW_CONFIG,
    WorkflowConfig,
)

__all__ = [
    "WorkflowConfig",
    "DEFAULT_WORKFLOW_CONFIG",
    "TEST_WORKFLOW_CONFIG",
]
