"""
hostctl memberships module.

In-memory collections of memberships and the organization role policy.
"""

from .collection import Collection
from .memberships import (
    OrganizationSiteMemberships,
    OrganizationUserMemberships,
    UserOrganizationMemberships,
    UserSiteMemberships,
)
from .roles import (
    CHANGE_MANAGEMENT,
    OrganizationRole,
    assignable_roles,
    validate_role,
)

__all__ = [
    "Collection",
    "UserOrganizationMemberships",
    "OrganizationUserMemberships",
    "OrganizationSiteMemberships",
    "UserSiteMemberships",
    "CHANGE_MANAGEMENT",
    "OrganizationRole",
    "assignable_roles",
    "validate_role",
]
