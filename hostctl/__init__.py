"""
hostctl - command-line client for organizations on a hosting platform.

Manage organization members, roles and site associations. Every change is
carried out by a remote workflow that hostctl waits on.

Example:
    ```python
    from hostctl import Hostctl

    hostctl = await Hostctl.create()

    # Organizations of the session user
    rows = await hostctl.orgs.list()
    org = await hostctl.orgs.get("Acme")

    # Team
    members = await hostctl.teams.list(org)
    workflow = await hostctl.teams.add_member(org, "new@example.com", "admin")
    workflow.raise_for_failure()

    # Sites
    listing = await hostctl.sites.list(org, tag="prod")
    ```
"""

from .client import Hostctl
from .config import HostctlConfig, load_config
from .errors import (
    EntityParseError,
    HostctlError,
    InvalidRoleError,
    RemoteError,
    RemoteFetchError,
    RemoteMutationError,
    UnresolvedIdentifierError,
    WorkflowError,
    WorkflowFailedError,
    WorkflowTimeoutError,
)
from .memberships import Collection, OrganizationRole, assignable_roles
from .workflows import Workflow, WorkflowResult, WorkflowStatus

__version__ = "0.1.0"

__all__ = [
    # Main client
    "Hostctl",
    "HostctlConfig",
    "load_config",
    # Collections and roles
    "Collection",
    "OrganizationRole",
    "assignable_roles",
    # Workflows
    "Workflow",
    "WorkflowResult",
    "WorkflowStatus",
    # Errors
    "HostctlError",
    "UnresolvedIdentifierError",
    "InvalidRoleError",
    "EntityParseError",
    "RemoteError",
    "RemoteFetchError",
    "RemoteMutationError",
    "WorkflowError",
    "WorkflowTimeoutError",
    "WorkflowFailedError",
]
