"""
Pytest configuration and fixtures for hostctl tests.

Provides a mock API client and sample platform payloads.
"""

from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest

from hostctl.client import Hostctl
from hostctl.config import HostctlConfig

SESSION_USER_ID = "11111111-0000-0000-0000-000000000001"
ORG_ID = "22222222-0000-0000-0000-000000000001"


@pytest.fixture
def hostctl_config():
    """Create a test HostctlConfig with near-zero polling delays."""
    return HostctlConfig(
        api_url="https://api.test-host.io/api",
        session_token="test-session-token-1234567890",
        user_id=SESSION_USER_ID,
        page_size=100,
        workflow_poll_interval=0,
        workflow_poll_backoff=1.0,
        workflow_max_poll_interval=0,
        workflow_timeout=5,
        debug=True,
    )


@pytest.fixture
def mock_api():
    """
    Create a mock API client.

    Listings are served from `mock_api._listings` (path -> list of pages);
    workflow polls from `mock_api._workflow_statuses` (workflow ID -> list
    of payloads, the last one repeating).
    """
    api = AsyncMock()
    listings: Dict[str, List[List[Dict[str, Any]]]] = {}
    cursors: Dict[str, int] = {}
    workflow_statuses: Dict[str, List[Dict[str, Any]]] = {}

    async def listing(path, start=None, paged=True):
        pages = listings.get(path, [[]])
        index = 0 if start is None else cursors.get(path, 0) + 1
        cursors[path] = index
        return pages[index], index < len(pages) - 1

    async def workflow_status(handle):
        statuses = workflow_statuses[handle.id]
        if len(statuses) > 1:
            return statuses.pop(0)
        return statuses[0]

    api.listing = AsyncMock(side_effect=listing)
    api.workflow_status = AsyncMock(side_effect=workflow_status)
    api.get = AsyncMock(return_value={})
    api._listings = listings
    api._workflow_statuses = workflow_statuses
    return api


@pytest.fixture
def hostctl(hostctl_config, mock_api):
    """Create a test Hostctl instance."""
    return Hostctl(config=hostctl_config, api=mock_api)


def setup_listing(hostctl, path: str, *pages: List[Dict[str, Any]]) -> None:
    """
    Serve `pages` from a listing path.

    Args:
        hostctl: Hostctl instance built on the mock API
        path: Listing path
        *pages: Record lists, one per page
    """
    hostctl.api._listings[path] = list(pages) or [[]]


def setup_workflow(
    hostctl,
    workflow_id: str = "wf-1",
    statuses: List[Dict[str, Any]] = (),
    workflow_type: str = "add_organization_user_membership",
) -> None:
    """
    Make the next mutation return a fresh workflow and define its polls.

    Args:
        hostctl: Hostctl instance built on the mock API
        workflow_id: ID of the created workflow
        statuses: Payloads returned by successive polls
        workflow_type: Workflow type reported by the platform
    """
    hostctl.api.mutate = AsyncMock(return_value={"id": workflow_id, "type": workflow_type})
    hostctl.api._workflow_statuses[workflow_id] = list(statuses) or [
        {"id": workflow_id, "result": "succeeded"}
    ]


def workflow_payload(workflow_id: str = "wf-1", **fields) -> Dict[str, Any]:
    """Build a workflow status payload."""
    return {"id": workflow_id, "type": "add_organization_user_membership", **fields}


def running(workflow_id: str = "wf-1") -> Dict[str, Any]:
    return workflow_payload(workflow_id, started_at=1700000000, result=None)


def succeeded(workflow_id: str = "wf-1", description: str = "Added member") -> Dict[str, Any]:
    return workflow_payload(
        workflow_id,
        started_at=1700000000,
        result="succeeded",
        active_description=description,
    )


def failed(workflow_id: str = "wf-1", reason: str = "User is already a member") -> Dict[str, Any]:
    return workflow_payload(
        workflow_id,
        started_at=1700000000,
        result="failed",
        final_task={"reason": reason},
    )


def org_payload(org_id: str, name: str) -> Dict[str, Any]:
    return {"id": org_id, "profile": {"name": name}}


def org_membership_payload(org_id: str, name: str, role: str = "admin") -> Dict[str, Any]:
    return {"id": org_id, "role": role, "organization": org_payload(org_id, name)}


def user_membership_payload(
    user_id: str,
    email: str,
    role: str = "team_member",
    firstname: str = None,
    lastname: str = None,
) -> Dict[str, Any]:
    profile = {}
    if firstname is not None:
        profile["firstname"] = firstname
    if lastname is not None:
        profile["lastname"] = lastname
    return {
        "id": f"membership-{user_id}",
        "role": role,
        "user": {"id": user_id, "email": email, "profile": profile},
    }


def site_membership_payload(
    site_id: str,
    name: str,
    tags=(),
    frozen: bool = False,
) -> Dict[str, Any]:
    return {
        "id": f"membership-{site_id}",
        "tags": list(tags),
        "site": {
            "id": site_id,
            "name": name,
            "service_level": "pro",
            "framework": "drupal",
            "created": 1700000000,
            "frozen": frozen,
        },
    }


@pytest.fixture
def sample_org_memberships():
    """Three organization memberships: Acme, Beta and Acme2."""
    return [
        org_membership_payload("org-acme", "Acme"),
        org_membership_payload("org-beta", "Beta", role="unprivileged"),
        org_membership_payload("org-acme2", "Acme2"),
    ]


@pytest.fixture
def sample_user_memberships():
    """Members of an organization, the session user included."""
    return [
        user_membership_payload(SESSION_USER_ID, "me@example.com", "admin", "Sam", "Self"),
        user_membership_payload("user-ann", "ann@example.com", "team_member", "Ann", "Lee"),
        user_membership_payload("user-bob", "bob@example.com", "developer"),
    ]


@pytest.fixture
def sample_site_memberships():
    """Five site memberships, two tagged prod (one of them frozen)."""
    return [
        site_membership_payload("site-1", "alpha", tags=["prod", "eu"]),
        site_membership_payload("site-2", "bravo", tags=["dev"]),
        site_membership_payload("site-3", "charlie", tags=["prod"], frozen=True),
        site_membership_payload("site-4", "delta", tags=[]),
        site_membership_payload("site-5", "echo", tags=["staging"], frozen=True),
    ]
