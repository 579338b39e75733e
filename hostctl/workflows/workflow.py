"""
Workflow handling for hostctl.

Every mutation the platform accepts (adding a member, changing a role,
associating a site) comes back as a workflow that finishes asynchronously.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..entities.models import Owner
from ..errors import WorkflowFailedError, WorkflowTimeoutError
from .models import (
    WorkflowHandle,
    WorkflowResult,
    WorkflowStatus,
    failure_reason,
    success_message,
)

if TYPE_CHECKING:
    from ..client import Hostctl
    from ..utils.api import HostctlApiClient

logger = logging.getLogger(__name__)


class Workflow:
    """
    A pending remote state transition.

    `wait()` polls the remote status with backoff until it is terminal or
    the timeout is exceeded. Once terminal, the result is stored and
    returned by every later call. A running workflow cannot be cancelled.

    Example:
        ```python
        workflow = await membership.set_role("admin")
        result = await workflow.wait()
        workflow.raise_for_failure()
        print(result.message)
        ```
    """

    def __init__(
        self,
        api: "HostctlApiClient",
        handle: WorkflowHandle,
        payload: Dict[str, Any],
        poll_interval: float = 3.0,
        poll_backoff: float = 1.5,
        max_poll_interval: float = 15.0,
        timeout: float = 600.0,
    ) -> None:
        self.api = api
        self.handle = handle
        self.poll_interval = poll_interval
        self.poll_backoff = poll_backoff
        self.max_poll_interval = max_poll_interval
        self.timeout = timeout

        self.payload: Dict[str, Any] = payload
        self.status = WorkflowStatus.from_payload(payload)
        self.history: List[WorkflowStatus] = [self.status]
        self._result: Optional[WorkflowResult] = None

    @property
    def id(self) -> str:
        return self.handle.id

    @property
    def type(self) -> Optional[str]:
        return self.handle.type

    @property
    def result(self) -> Optional[WorkflowResult]:
        """Terminal result, or None while the workflow is unsettled."""
        return self._result

    def _update(self, payload: Dict[str, Any]) -> None:
        self.payload = payload
        status = WorkflowStatus.from_payload(payload)
        if status != self.status:
            logger.debug("Workflow %s: %s -> %s", self.id, self.status.value, status.value)
            self.history.append(status)
        self.status = status

    async def refresh(self) -> WorkflowStatus:
        """
        Fetch the current remote status once.

        Raises:
            RemoteFetchError: If the poll fails (not retried)
        """
        payload = await self.api.workflow_status(self.handle)
        self._update(payload)
        return self.status

    async def _poll(self) -> None:
        interval = self.poll_interval
        while not self.status.is_terminal:
            await asyncio.sleep(interval)
            await self.refresh()
            interval = min(interval * self.poll_backoff, self.max_poll_interval)

    def _settle(self) -> WorkflowResult:
        succeeded = self.status == WorkflowStatus.SUCCEEDED
        self._result = WorkflowResult(
            workflow_id=self.id,
            type=self.type,
            status=self.status,
            message=success_message(self.payload) if succeeded else None,
            reason=None if succeeded else failure_reason(self.payload),
            payload=self.payload,
        )
        logger.info("Workflow %s %s", self.id, self.status.value)
        return self._result

    async def wait(self) -> WorkflowResult:
        """
        Block until the workflow reaches a terminal status.

        Returns:
            WorkflowResult (the same object on every call once settled)

        Raises:
            WorkflowTimeoutError: If the workflow is still unsettled after
                `timeout` seconds
            RemoteFetchError: If a status poll fails
        """
        if self._result is not None:
            return self._result

        try:
            await asyncio.wait_for(self._poll(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise WorkflowTimeoutError(self.id, self.timeout) from e

        return self._settle()

    def raise_for_failure(self) -> None:
        """
        Raise if the settled workflow failed.

        Raises:
            WorkflowFailedError: With the reason reported by the platform
        """
        if self._result is not None and not self._result.succeeded:
            raise WorkflowFailedError(self.id, self._result.reason or "Workflow failed")


class WorkflowManager:
    """
    Creates workflows on behalf of an owner (user or organization).

    Example:
        ```python
        workflow = await hostctl.workflows.create(
            org.owner(),
            "add_organization_user_membership",
            {"user_email": "new@example.com", "role": "admin"},
        )
        await workflow.wait()
        ```
    """

    def __init__(self, hostctl: "Hostctl") -> None:
        """
        Initialize WorkflowManager.

        Args:
            hostctl: Main client instance
        """
        self.hostctl = hostctl
        self.api = hostctl.api

    async def create(
        self,
        owner: Owner,
        workflow_type: str,
        params: Dict[str, Any],
    ) -> Workflow:
        """
        Start a workflow on the platform.

        The request is sent once; it is never retried, so a failure here
        means the mutation may or may not have been accepted.

        Args:
            owner: Organization or user the workflow runs against
            workflow_type: Platform workflow type
            params: Workflow parameters

        Returns:
            Workflow in its initial state

        Raises:
            RemoteMutationError: If the request fails
        """
        payload = await self.api.mutate(
            owner.workflows_path,
            {"type": workflow_type, "params": params},
        )
        logger.debug("Created workflow %s (%s) on %s", payload.get("id"), workflow_type, owner.path)
        return self.from_payload(owner, payload, workflow_type)

    def from_payload(
        self,
        owner: Owner,
        payload: Dict[str, Any],
        workflow_type: Optional[str] = None,
    ) -> Workflow:
        """Wrap an existing workflow payload."""
        config = self.hostctl.config
        handle = WorkflowHandle(
            id=str(payload["id"]),
            type=payload.get("type") or workflow_type,
            owner_path=owner.path,
        )
        return Workflow(
            self.api,
            handle,
            payload,
            poll_interval=config.workflow_poll_interval,
            poll_backoff=config.workflow_poll_backoff,
            max_poll_interval=config.workflow_max_poll_interval,
            timeout=config.workflow_timeout,
        )
