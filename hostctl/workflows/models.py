"""
hostctl workflow models.

Pydantic models describing remote workflows and their outcome.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkflowStatus(str, Enum):
    """Lifecycle of a workflow: created -> running -> succeeded | failed."""

    CREATED = "created"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (WorkflowStatus.SUCCEEDED, WorkflowStatus.FAILED)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "WorkflowStatus":
        """
        Derive the status from a remote workflow payload.

        Any `result` is terminal: succeeded, or failed for every other value
        (failed, aborted, ...). Without one, a `started_at` timestamp means
        the workflow is running.
        """
        result = payload.get("result")
        if result == "succeeded":
            return cls.SUCCEEDED
        if result:
            return cls.FAILED
        if payload.get("started_at"):
            return cls.RUNNING
        return cls.CREATED


class WorkflowHandle(BaseModel):
    """Identifies one remote workflow and where to poll it."""

    id: str
    type: Optional[str] = None
    owner_path: str

    model_config = ConfigDict(frozen=True)

    @property
    def status_path(self) -> str:
        return f"{self.owner_path}/workflows/{self.id}"


class WorkflowResult(BaseModel):
    """Terminal outcome of a workflow."""

    workflow_id: str
    type: Optional[str] = None
    status: WorkflowStatus
    message: Optional[str] = None
    reason: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def succeeded(self) -> bool:
        return self.status == WorkflowStatus.SUCCEEDED


def failure_reason(payload: Dict[str, Any]) -> str:
    """Human-readable reason for a failed workflow."""
    final_task = payload.get("final_task") or {}
    if isinstance(final_task, dict):
        if final_task.get("reason"):
            return str(final_task["reason"])
        messages = final_task.get("messages")
        if isinstance(messages, dict):
            messages = [
                m.get("message", "") if isinstance(m, dict) else str(m)
                for m in messages.values()
            ]
        if messages:
            return " ".join(str(m) for m in messages if m)
    result = payload.get("result")
    if result and result != "failed":
        return f"Workflow ended with result '{result}'"
    if payload.get("description"):
        return f"{payload['description']} failed"
    return "Workflow failed"


def success_message(payload: Dict[str, Any]) -> Optional[str]:
    """Description of a workflow that succeeded."""
    return payload.get("active_description") or payload.get("description")
