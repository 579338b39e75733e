"""
Organization site management for hostctl.

Lists an organization's sites and associates or dissociates sites.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..entities.models import Organization, OrganizationSiteMembership, Site
from ..memberships.memberships import OrganizationSiteMemberships, UserSiteMemberships
from .models import SiteListing
from .resolver import choices, resolve

if TYPE_CHECKING:
    from ..client import Hostctl
    from ..workflows.workflow import Workflow

logger = logging.getLogger(__name__)


class SiteManager:
    """
    Manager for an organization's site memberships.

    Example:
        ```python
        org = await hostctl.orgs.get("Acme")

        listing = await hostctl.sites.list(org, tag="prod")
        if not listing.rows:
            print(listing.empty_message)

        site = await hostctl.sites.resolve_addable("my-site")
        workflow = await hostctl.sites.add(org, site)
        ```
    """

    def __init__(self, hostctl: "Hostctl") -> None:
        """
        Initialize SiteManager.

        Args:
            hostctl: Main client instance
        """
        self.hostctl = hostctl
        self._memberships: Dict[str, OrganizationSiteMemberships] = {}

    async def memberships(self, organization: Organization) -> OrganizationSiteMemberships:
        """An organization's site memberships, fetched once per organization."""
        memberships = self._memberships.get(organization.id)
        if memberships is None:
            memberships = OrganizationSiteMemberships(self.hostctl, organization)
            await memberships.populate()
            self._memberships[organization.id] = memberships
        return memberships

    async def user_sites(self) -> UserSiteMemberships:
        """The session user's site memberships, fetched once."""
        memberships = self.hostctl.site_memberships
        if not memberships.populated:
            await memberships.populate()
        return memberships

    def _row(self, membership: OrganizationSiteMembership) -> Dict[str, Any]:
        site = membership.site
        created = site.created.strftime(self.hostctl.config.date_format) if site.created else None
        row: Dict[str, Any] = {
            "name": site.name,
            "id": site.id,
            "service_level": site.service_level,
            "framework": site.framework,
            "created": created,
            "tags": list(membership.tags),
        }
        if site.frozen:
            row["frozen"] = True
        return row

    async def list(self, organization: Organization, tag: Optional[str] = None) -> SiteListing:
        """
        List an organization's sites.

        Args:
            organization: Organization to list
            tag: Only include sites carrying exactly this tag

        Returns:
            SiteListing; `frozen` appears in a row only when the site is frozen
        """
        memberships = await self.memberships(organization)
        selected = memberships.filter_by_tag(tag) if tag is not None else list(memberships.all())
        listing = SiteListing(
            organization_id=organization.id,
            organization_name=organization.name,
            tag=tag,
            rows=[self._row(m) for m in selected],
        )
        if listing.empty_message:
            logger.info(listing.empty_message)
        return listing

    async def addable_choices(self) -> Dict[str, str]:
        """Sites the session user can add (site ID -> name)."""
        return choices(await self.user_sites())

    async def removable_choices(self, organization: Organization) -> Dict[str, str]:
        """Sites that can be removed from the organization (site ID -> name)."""
        return choices(await self.memberships(organization))

    async def resolve_addable(self, site: Optional[str]) -> Site:
        """
        Resolve a site from the session user's site memberships.

        Raises:
            UnresolvedIdentifierError: If the site cannot be resolved
        """
        membership = resolve(await self.user_sites(), site, "site")
        return membership.site

    async def resolve_removable(self, organization: Organization, site: Optional[str]) -> Site:
        """
        Resolve a site from the organization's site memberships.

        Raises:
            UnresolvedIdentifierError: If the site cannot be resolved
        """
        membership = resolve(await self.memberships(organization), site, "site")
        return membership.site

    async def add(self, organization: Organization, site: Site) -> "Workflow":
        """Associate a site with the organization and wait for it."""
        workflow = await OrganizationSiteMemberships(self.hostctl, organization).create(site)
        await workflow.wait()
        return workflow

    async def remove(self, organization: Organization, site: Site) -> "Workflow":
        """Dissociate a site from the organization and wait for it."""
        memberships = await self.memberships(organization)
        workflow = await memberships.delete(site)
        await workflow.wait()
        return workflow
