"""
hostctl entity module.

Typed, immutable snapshots of remote platform entities.
"""

from .models import (
    Entity,
    Membership,
    Organization,
    OrganizationProfile,
    OrganizationSiteMembership,
    OrganizationUserMembership,
    Owner,
    OwnerKind,
    Site,
    User,
    UserOrganizationMembership,
    UserProfile,
    UserSiteMembership,
)

__all__ = [
    "Entity",
    "Owner",
    "OwnerKind",
    "Organization",
    "OrganizationProfile",
    "Site",
    "User",
    "UserProfile",
    "Membership",
    "UserOrganizationMembership",
    "OrganizationUserMembership",
    "OrganizationSiteMembership",
    "UserSiteMembership",
]
