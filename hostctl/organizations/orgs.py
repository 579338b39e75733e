"""
Organization lookup for hostctl.

Organizations are reached through the session user's organization
memberships.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from ..entities.models import Organization
from ..errors import RemoteFetchError
from ..memberships.memberships import UserOrganizationMemberships
from .resolver import choices, resolve

if TYPE_CHECKING:
    from ..client import Hostctl

logger = logging.getLogger(__name__)

UNRESOLVED_ORGANIZATION = (
    "The organization {org} is either invalid or you haven't permission "
    "sufficient to access its data."
)


class OrganizationManager:
    """
    Manager for the session user's organizations.

    Example:
        ```python
        hostctl = await Hostctl.create()

        # Rows of name/id
        rows = await hostctl.orgs.list()

        # Resolve by ID or name, features included
        org = await hostctl.orgs.get("Acme")
        ```
    """

    def __init__(self, hostctl: "Hostctl") -> None:
        """
        Initialize OrganizationManager.

        Args:
            hostctl: Main client instance
        """
        self.hostctl = hostctl
        self.api = hostctl.api

    async def memberships(self) -> UserOrganizationMemberships:
        """The session user's organization memberships, fetched once."""
        memberships = self.hostctl.org_memberships
        if not memberships.populated:
            await memberships.populate()
        return memberships

    async def list(self) -> List[Dict[str, Optional[str]]]:
        """
        List the session user's organizations.

        Returns:
            Rows with `name` and `id`, in fetch order
        """
        memberships = await self.memberships()
        return [
            {"name": m.organization.name, "id": m.organization.id}
            for m in memberships.all()
        ]

    async def choices(self) -> Dict[str, str]:
        """Organization choices for interactive prompts (membership ID -> name)."""
        return choices(await self.memberships())

    async def get(self, org: Optional[str]) -> Organization:
        """
        Resolve an organization by ID or name and load its features.

        Args:
            org: Organization ID or name

        Returns:
            Organization with `features` filled in

        Raises:
            UnresolvedIdentifierError: If the organization cannot be resolved
            RemoteFetchError: If fetching memberships or features fails
        """
        memberships = await self.memberships()
        membership = resolve(
            memberships,
            org,
            "organization",
            message=UNRESOLVED_ORGANIZATION.format(org=org),
        )
        return await self.with_features(membership.organization)

    async def get_features(self, organization: Organization) -> Dict[str, bool]:
        """
        Fetch an organization's feature flags.

        Raises:
            RemoteFetchError: If the request fails
        """
        body = await self.api.get(f"{organization.owner().path}/features")
        if body is None:
            return {}
        if not isinstance(body, dict):
            raise RemoteFetchError(
                f"Unexpected feature listing for organization {organization.id}"
            )
        return {name: bool(enabled) for name, enabled in body.items()}

    async def with_features(self, organization: Organization) -> Organization:
        """A copy of the organization carrying its feature flags."""
        features = await self.get_features(organization)
        logger.debug("Organization %s features: %s", organization.id, features)
        return organization.model_copy(update={"features": features})
