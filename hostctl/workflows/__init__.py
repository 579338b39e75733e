"""
hostctl workflows module.

Handles pending remote mutations and waiting for them to settle.
"""

from .models import WorkflowHandle, WorkflowResult, WorkflowStatus
from .workflow import Workflow, WorkflowManager

__all__ = [
    "Workflow",
    "WorkflowManager",
    "WorkflowHandle",
    "WorkflowResult",
    "WorkflowStatus",
]
