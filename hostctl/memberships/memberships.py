"""
Membership collections for hostctl.

Specializations of Collection for the memberships a user or an
organization owns. Mutations return a Workflow.
"""

from typing import TYPE_CHECKING, List, Optional

from ..entities.models import (
    Organization,
    OrganizationSiteMembership,
    OrganizationUserMembership,
    Site,
    User,
    UserOrganizationMembership,
    UserSiteMembership,
)
from .collection import Collection
from .roles import CHANGE_MANAGEMENT, validate_role

if TYPE_CHECKING:
    from ..client import Hostctl
    from ..workflows.workflow import Workflow


class UserOrganizationMemberships(Collection[UserOrganizationMembership]):
    """
    The organizations a user belongs to.

    Lookups match the membership ID, the membership's own name, or the
    name of the organization it references.
    """

    model = UserOrganizationMembership
    resource = "organizations"
    paged = True

    def __init__(self, hostctl: "Hostctl", user: User) -> None:
        super().__init__(hostctl, user.owner())
        self.user = user

    def get_organization(self, id_or_name: str) -> Optional[Organization]:
        """The organization behind a membership, looked up by ID or name."""
        membership = self.get(id_or_name)
        return membership.organization if membership is not None else None


class OrganizationUserMemberships(Collection[OrganizationUserMembership]):
    """
    The users that belong to an organization.

    Role changes are checked against the organization's features before
    anything is sent, so `organization` should carry its features.

    Example:
        ```python
        members = OrganizationUserMemberships(hostctl, org)
        await members.populate()

        workflow = await members.add_member("new@example.com", "admin")
        await workflow.wait()

        workflow = await members.get("old@example.com").remove_member()
        ```
    """

    model = OrganizationUserMembership
    resource = "users"
    paged = True

    def __init__(self, hostctl: "Hostctl", organization: Organization) -> None:
        super().__init__(hostctl, organization.owner())
        self.organization = organization

    @property
    def can_change_management(self) -> bool:
        return self.organization.has_feature(CHANGE_MANAGEMENT)

    async def add_member(self, email: str, role: str) -> "Workflow":
        """
        Invite a user to the organization.

        Args:
            email: Email address of the user to invite
            role: Role to give the new member

        Returns:
            Workflow for the invitation

        Raises:
            InvalidRoleError: If the role is not assignable (nothing is sent)
            RemoteMutationError: If the request fails
        """
        role = validate_role(role, self.can_change_management)
        return await self.hostctl.workflows.create(
            self.owner,
            "add_organization_user_membership",
            {"user_email": email, "role": role},
        )

    async def remove_member(self, membership: OrganizationUserMembership) -> "Workflow":
        """Remove a member from the organization."""
        return await self.hostctl.workflows.create(
            self.owner,
            "remove_organization_user_membership",
            {"user_id": membership.user.id},
        )

    async def set_role(self, membership: OrganizationUserMembership, role: str) -> "Workflow":
        """
        Change a member's role.

        Raises:
            InvalidRoleError: If the role is not assignable (nothing is sent)
        """
        role = validate_role(role, self.can_change_management)
        return await self.hostctl.workflows.create(
            self.owner,
            "update_organization_user_membership",
            {"user_id": membership.user.id, "role": role},
        )


class OrganizationSiteMemberships(Collection[OrganizationSiteMembership]):
    """The sites that belong to an organization, with their tags."""

    model = OrganizationSiteMembership
    resource = "sites"
    paged = True

    def __init__(self, hostctl: "Hostctl", organization: Organization) -> None:
        super().__init__(hostctl, organization.owner())
        self.organization = organization

    async def create(self, site: Site) -> "Workflow":
        """Associate an existing site with the organization."""
        return await self.hostctl.workflows.create(
            self.owner,
            "add_organization_site_membership",
            {"site_id": site.id, "role": "team_member"},
        )

    async def delete(self, site: Site) -> "Workflow":
        """Dissociate a site from the organization."""
        return await self.hostctl.workflows.create(
            self.owner,
            "remove_organization_site_membership",
            {"site_id": site.id},
        )

    def filter_by_tag(self, tag: str) -> List[OrganizationSiteMembership]:
        """Memberships tagged with exactly `tag`, in order."""
        return self.filter_by(lambda membership: membership.has_tag(tag))


class UserSiteMemberships(Collection[UserSiteMembership]):
    """The sites a user is a member of."""

    model = UserSiteMembership
    resource = "sites"
    paged = True

    def __init__(self, hostctl: "Hostctl", user: User) -> None:
        super().__init__(hostctl, user.owner())
        self.user = user
