"""
Organization role vocabulary.

Which roles may be assigned depends on the organization's
`change_management` feature.
"""

from enum import Enum
from typing import List

from ..errors import InvalidRoleError

CHANGE_MANAGEMENT = "change_management"


class OrganizationRole(str, Enum):
    """Role values as the platform sends and accepts them."""

    UNPRIVILEGED = "unprivileged"
    ADMIN = "admin"
    TEAM_MEMBER = "team_member"
    DEVELOPER = "developer"


BASE_ROLES = (OrganizationRole.UNPRIVILEGED, OrganizationRole.ADMIN)
CHANGE_MANAGEMENT_ROLES = (OrganizationRole.TEAM_MEMBER, OrganizationRole.DEVELOPER)


def assignable_roles(can_change_management: bool) -> List[str]:
    """
    Roles that may currently be assigned.

    Args:
        can_change_management: Whether the organization has change_management

    Returns:
        Role wire values, base roles first
    """
    roles = list(BASE_ROLES)
    if can_change_management:
        roles.extend(CHANGE_MANAGEMENT_ROLES)
    return [role.value for role in roles]


def validate_role(role: str, can_change_management: bool) -> str:
    """
    Check a requested role against the currently valid set.

    Returns:
        The role wire value

    Raises:
        InvalidRoleError: If the role is not assignable
    """
    valid = assignable_roles(can_change_management)
    if role not in valid:
        raise InvalidRoleError(role, valid)
    return role
