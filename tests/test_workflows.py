"""
Tests for hostctl.workflows module.
"""

import pytest
from unittest.mock import AsyncMock

from hostctl.entities.models import Owner, OwnerKind
from hostctl.errors import (
    RemoteFetchError,
    RemoteMutationError,
    WorkflowFailedError,
    WorkflowTimeoutError,
)
from hostctl.workflows.models import (
    WorkflowHandle,
    WorkflowStatus,
    failure_reason,
    success_message,
)
from hostctl.workflows.workflow import Workflow

from tests.conftest import failed, running, succeeded, workflow_payload

ORG_OWNER = Owner(kind=OwnerKind.ORGANIZATION, id="org-acme")


def make_workflow(api, payload=None, timeout=5.0, poll_interval=0.0) -> Workflow:
    """Build a workflow polling the mock API."""
    handle = WorkflowHandle(id="wf-1", type="add_organization_user_membership", owner_path=ORG_OWNER.path)
    return Workflow(
        api,
        handle,
        payload or workflow_payload(),
        poll_interval=poll_interval,
        poll_backoff=1.0,
        max_poll_interval=poll_interval,
        timeout=timeout,
    )


class TestWorkflowStatus:
    """Tests for deriving status from payloads."""

    def test_created(self):
        assert WorkflowStatus.from_payload(workflow_payload()) == WorkflowStatus.CREATED

    def test_running(self):
        assert WorkflowStatus.from_payload(running()) == WorkflowStatus.RUNNING

    def test_terminal(self):
        assert WorkflowStatus.from_payload(succeeded()) == WorkflowStatus.SUCCEEDED
        assert WorkflowStatus.from_payload(failed()) == WorkflowStatus.FAILED
        assert WorkflowStatus.SUCCEEDED.is_terminal

    def test_unknown_result_is_failed(self):
        payload = workflow_payload(started_at=1, result="aborted")
        assert WorkflowStatus.from_payload(payload) == WorkflowStatus.FAILED
        assert failure_reason(payload) == "Workflow ended with result 'aborted'"
        assert not WorkflowStatus.RUNNING.is_terminal

    def test_failure_reason_sources(self):
        assert failure_reason(failed(reason="No such user")) == "No such user"
        assert failure_reason(
            workflow_payload(result="failed", final_task={"messages": {"1": {"message": "Quota exceeded"}}})
        ) == "Quota exceeded"
        assert failure_reason(
            workflow_payload(result="failed", description="Add member")
        ) == "Add member failed"
        assert failure_reason(workflow_payload(result="failed")) == "Workflow failed"

    def test_success_message(self):
        assert success_message(succeeded(description="Added a@example.com")) == "Added a@example.com"
        assert success_message(workflow_payload(description="Add member")) == "Add member"


class TestWorkflow:
    """Tests for Workflow.wait()."""

    @pytest.mark.asyncio
    async def test_wait_transitions_to_succeeded(self, mock_api):
        mock_api._workflow_statuses["wf-1"] = [running(), running(), succeeded()]
        workflow = make_workflow(mock_api)

        result = await workflow.wait()

        assert result.status == WorkflowStatus.SUCCEEDED
        assert result.succeeded
        assert result.message == "Added member"
        assert workflow.history == [
            WorkflowStatus.CREATED,
            WorkflowStatus.RUNNING,
            WorkflowStatus.SUCCEEDED,
        ]
        assert mock_api.workflow_status.await_count == 3

    @pytest.mark.asyncio
    async def test_wait_is_idempotent(self, mock_api):
        mock_api._workflow_statuses["wf-1"] = [succeeded()]
        workflow = make_workflow(mock_api)

        first = await workflow.wait()
        second = await workflow.wait()

        assert first is second
        assert workflow.result is first
        assert mock_api.workflow_status.await_count == 1

    @pytest.mark.asyncio
    async def test_wait_on_terminal_payload_does_not_poll(self, mock_api):
        workflow = make_workflow(mock_api, payload=succeeded())

        result = await workflow.wait()

        assert result.succeeded
        mock_api.workflow_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wait_failed_carries_reason(self, mock_api):
        mock_api._workflow_statuses["wf-1"] = [running(), failed(reason="User is already a member")]
        workflow = make_workflow(mock_api)

        result = await workflow.wait()

        assert result.status == WorkflowStatus.FAILED
        assert result.reason == "User is already a member"
        assert result.message is None
        with pytest.raises(WorkflowFailedError) as exc_info:
            workflow.raise_for_failure()
        assert exc_info.value.reason == "User is already a member"
        assert exc_info.value.workflow_id == "wf-1"

    @pytest.mark.asyncio
    async def test_wait_settles_on_unknown_result(self, mock_api):
        mock_api._workflow_statuses["wf-1"] = [running(), workflow_payload(started_at=1, result="aborted")]
        workflow = make_workflow(mock_api)

        result = await workflow.wait()

        assert result.status == WorkflowStatus.FAILED
        assert result.reason == "Workflow ended with result 'aborted'"
        assert mock_api.workflow_status.await_count == 2
        with pytest.raises(WorkflowFailedError, match="aborted"):
            workflow.raise_for_failure()

    @pytest.mark.asyncio
    async def test_raise_for_failure_on_success(self, mock_api):
        mock_api._workflow_statuses["wf-1"] = [succeeded()]
        workflow = make_workflow(mock_api)
        await workflow.wait()

        workflow.raise_for_failure()

    @pytest.mark.asyncio
    async def test_wait_times_out(self, mock_api):
        mock_api._workflow_statuses["wf-1"] = [running()]
        workflow = make_workflow(mock_api, timeout=0.05, poll_interval=0.01)

        with pytest.raises(WorkflowTimeoutError) as exc_info:
            await workflow.wait()

        assert exc_info.value.timeout == 0.05
        assert workflow.result is None
        assert workflow.status == WorkflowStatus.RUNNING

    @pytest.mark.asyncio
    async def test_poll_error_propagates(self, mock_api):
        mock_api.workflow_status.side_effect = RemoteFetchError("boom", status_code=502)
        workflow = make_workflow(mock_api)

        with pytest.raises(RemoteFetchError):
            await workflow.wait()

        assert mock_api.workflow_status.await_count == 1


class TestWorkflowManager:
    """Tests for WorkflowManager."""

    @pytest.mark.asyncio
    async def test_create_posts_to_owner(self, hostctl):
        hostctl.api.mutate = AsyncMock(return_value={"id": "wf-9"})

        workflow = await hostctl.workflows.create(
            ORG_OWNER,
            "remove_organization_site_membership",
            {"site_id": "site-1"},
        )

        hostctl.api.mutate.assert_awaited_once_with(
            "organizations/org-acme/workflows",
            {"type": "remove_organization_site_membership", "params": {"site_id": "site-1"}},
        )
        assert workflow.id == "wf-9"
        assert workflow.type == "remove_organization_site_membership"
        assert workflow.handle.status_path == "organizations/org-acme/workflows/wf-9"
        assert workflow.status == WorkflowStatus.CREATED
        assert workflow.timeout == hostctl.config.workflow_timeout

    @pytest.mark.asyncio
    async def test_create_failure_is_not_retried(self, hostctl):
        hostctl.api.mutate = AsyncMock(side_effect=RemoteMutationError("boom", status_code=500))

        with pytest.raises(RemoteMutationError):
            await hostctl.workflows.create(ORG_OWNER, "add_organization_user_membership", {})

        assert hostctl.api.mutate.await_count == 1
