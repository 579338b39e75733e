"""
Main hostctl client.

This is the primary interface users interact with.
"""

from .config import HostctlConfig, load_config
from .entities import User
from .memberships import UserOrganizationMemberships, UserSiteMemberships
from .organizations import OrganizationManager, SiteManager, TeamManager
from .utils.api import HostctlApiClient
from .workflows import WorkflowManager


class Hostctl:
    """
    Main client for managing organizations on the hosting platform.

    Holds the per-invocation caches (the session user's organization and
    site memberships) and the managers that act on them.

    Example:
        ```python
        from hostctl import Hostctl

        # Initialize from environment variables
        hostctl = await Hostctl.create()

        # Or with explicit config
        hostctl = await Hostctl.create(
            api_url="https://api.example-host.io/api",
            session_token="your-session-token",
            user_id="11111111-2222-3333-4444-555555555555",
        )

        org = await hostctl.orgs.get("Acme")
        workflow = await hostctl.teams.add_member(org, "new@example.com", "admin")
        ```
    """

    def __init__(self, config: HostctlConfig, api: HostctlApiClient) -> None:
        """
        Initialize hostctl client.

        Args:
            config: hostctl configuration
            api: Remote API client

        Note:
            Use Hostctl.create() instead of direct instantiation.
        """
        self.config = config
        self.api = api

        # Session user and their cached memberships
        self.user = User(id=config.user_id)
        self.org_memberships = UserOrganizationMemberships(self, self.user)
        self.site_memberships = UserSiteMemberships(self, self.user)

        self.workflows = WorkflowManager(self)
        self.orgs = OrganizationManager(self)
        self.teams = TeamManager(self)
        self.sites = SiteManager(self)

    @classmethod
    async def create(cls, **kwargs) -> "Hostctl":
        """
        Create and initialize a hostctl client.

        Args:
            **kwargs: Configuration overrides (api_url, session_token, ...)

        Returns:
            Initialized Hostctl client

        Raises:
            ValidationError: If required configuration is missing or invalid
        """
        config = load_config(**kwargs)
        api = await HostctlApiClient.create(config)
        return cls(config=config, api=api)

    async def close(self) -> None:
        """Close the client and its HTTP connections."""
        await self.api.close()

    async def __aenter__(self) -> "Hostctl":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
