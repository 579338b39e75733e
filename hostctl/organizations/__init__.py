"""
hostctl organizations module.

Organization lookup, team management and site association.
"""

from .models import AddMemberRequest, SiteListing
from .orgs import OrganizationManager
from .resolver import choices, resolve
from .sites import SiteManager
from .teams import TeamManager

__all__ = [
    "OrganizationManager",
    "TeamManager",
    "SiteManager",
    "AddMemberRequest",
    "SiteListing",
    "resolve",
    "choices",
]
