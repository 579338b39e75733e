"""
hostctl organization command models.

Pydantic models for validated command input and listing output.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field


class AddMemberRequest(BaseModel):
    """Request model for inviting a user to an organization."""

    email: EmailStr = Field(..., description="Email address of the user to invite")
    role: str = Field(..., min_length=1, description="Role for the new member")


class SiteListing(BaseModel):
    """
    Sites of an organization, optionally filtered by tag.

    An empty listing is informational, not an error.
    """

    organization_id: str
    organization_name: Optional[str] = None
    tag: Optional[str] = None
    rows: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def empty_message(self) -> Optional[str]:
        """Why the listing is empty, or None when it is not."""
        if self.rows:
            return None
        if self.tag is None:
            return f"Organization {self.organization_name or self.organization_id} has no sites."
        return f"No sites match your criteria (tag: {self.tag})."
