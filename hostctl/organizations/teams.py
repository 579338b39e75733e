"""
Team management for hostctl.

Lists an organization's members and adds, removes or re-roles them. Each
mutation is awaited until its workflow settles.
"""

from typing import TYPE_CHECKING, Dict, List, Optional

from pydantic import ValidationError

from ..entities.models import Organization
from ..errors import UnresolvedIdentifierError
from ..memberships.memberships import OrganizationUserMemberships
from ..memberships.roles import CHANGE_MANAGEMENT, assignable_roles, validate_role
from .models import AddMemberRequest
from .resolver import choices, resolve

if TYPE_CHECKING:
    from ..client import Hostctl
    from ..workflows.workflow import Workflow


class TeamManager:
    """
    Manager for organization team operations.

    Organizations passed in should come from `hostctl.orgs.get()`, which
    loads the feature flags the role checks depend on.

    Example:
        ```python
        org = await hostctl.orgs.get("Acme")

        rows = await hostctl.teams.list(org)

        workflow = await hostctl.teams.add_member(org, "new@example.com", "admin")
        workflow.raise_for_failure()
        ```
    """

    def __init__(self, hostctl: "Hostctl") -> None:
        """
        Initialize TeamManager.

        Args:
            hostctl: Main client instance
        """
        self.hostctl = hostctl
        self._members: Dict[str, OrganizationUserMemberships] = {}

    async def members(self, organization: Organization) -> OrganizationUserMemberships:
        """An organization's user memberships, fetched once per organization."""
        members = self._members.get(organization.id)
        if members is None:
            members = OrganizationUserMemberships(self.hostctl, organization)
            await members.populate()
            self._members[organization.id] = members
        return members

    def role_choices(self, organization: Organization) -> List[str]:
        """Roles that may currently be assigned in the organization."""
        return assignable_roles(self._can_change_management(organization))

    async def member_choices(
        self,
        organization: Organization,
        can_pick_self: bool = True,
    ) -> Dict[str, str]:
        """Member choices for interactive prompts (user ID -> email)."""
        return choices(await self.members(organization), exclude=self._excluded(can_pick_self))

    async def list(self, organization: Organization) -> Dict[str, Dict[str, Optional[str]]]:
        """
        List an organization's members.

        Returns:
            Rows keyed by user ID with first, last, email, role and uuid
        """
        members = await self.members(organization)
        rows: Dict[str, Dict[str, Optional[str]]] = {}
        for membership in members.all():
            user = membership.user
            rows[user.id] = {
                "first": user.profile.firstname,
                "last": user.profile.lastname,
                "email": user.email,
                "role": membership.role,
                "uuid": user.id,
            }
        return rows

    async def add_member(self, organization: Organization, email: str, role: str) -> "Workflow":
        """
        Invite a user to an organization and wait for the invitation.

        Args:
            organization: Organization with features loaded
            email: Email address to invite
            role: Role for the new member

        Returns:
            Settled Workflow

        Raises:
            UnresolvedIdentifierError: If the email is not a valid address
            InvalidRoleError: If the role is not assignable
            RemoteMutationError: If the invitation request fails
            WorkflowTimeoutError: If the workflow does not settle in time
        """
        try:
            request = AddMemberRequest(email=email, role=role)
        except ValidationError as e:
            raise UnresolvedIdentifierError(
                "member", email, message=f"'{email}' is not a valid email address"
            ) from e
        validate_role(request.role, self._can_change_management(organization))

        members = OrganizationUserMemberships(self.hostctl, organization)
        workflow = await members.add_member(str(request.email), request.role)
        await workflow.wait()
        return workflow

    async def remove_member(self, organization: Organization, member: Optional[str]) -> "Workflow":
        """
        Remove a member and wait for the removal.

        The session user cannot remove themselves this way.

        Raises:
            UnresolvedIdentifierError: If the member cannot be resolved
        """
        members = await self.members(organization)
        membership = resolve(members, member, "member", exclude=self._excluded(False))
        workflow = await membership.remove_member()
        await workflow.wait()
        return workflow

    async def change_role(
        self,
        organization: Organization,
        member: Optional[str],
        role: str,
    ) -> "Workflow":
        """
        Change a member's role and wait for the change.

        Raises:
            InvalidRoleError: If the role is not assignable
            UnresolvedIdentifierError: If the member cannot be resolved
        """
        validate_role(role, self._can_change_management(organization))
        members = await self.members(organization)
        membership = resolve(members, member, "member")
        workflow = await membership.set_role(role)
        await workflow.wait()
        return workflow

    def _can_change_management(self, organization: Organization) -> bool:
        return organization.has_feature(CHANGE_MANAGEMENT)

    def _excluded(self, can_pick_self: bool) -> List[str]:
        return [] if can_pick_self else [self.hostctl.user.id]
