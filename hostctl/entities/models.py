"""
hostctl entity models.

Pydantic models for the entities the hosting platform API returns. Every
payload is validated when the entity is built; a payload of the wrong shape
raises EntityParseError instead of producing a half-filled entity.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

from ..errors import EntityParseError

if TYPE_CHECKING:
    from ..workflows.workflow import Workflow


class OwnerKind(str, Enum):
    """Kinds of entity that own a membership collection."""

    USER = "users"
    ORGANIZATION = "organizations"


class Owner(BaseModel):
    """
    Owner of a collection: its kind and ID, from which API paths derive.
    """

    kind: OwnerKind
    id: str

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> str:
        return f"{self.kind.value}/{self.id}"

    def memberships_path(self, resource: str) -> str:
        """Listing path for this owner's memberships of one resource kind."""
        return f"{self.path}/memberships/{resource}"

    @property
    def workflows_path(self) -> str:
        return f"{self.path}/workflows"


class Entity(BaseModel):
    """
    Base entity - an immutable snapshot of one remote record.

    Entities are never mutated locally; changes go through a workflow.
    """

    id: str

    model_config = ConfigDict(frozen=True, extra="ignore", from_attributes=True)

    kind_name: ClassVar[str] = "entity"

    @classmethod
    def parse(cls, data: Any) -> "Entity":
        """
        Build an entity from a raw payload.

        Raises:
            EntityParseError: If the payload does not have this entity's shape
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise EntityParseError(cls.kind_name, str(e)) from e

    @property
    def display_names(self) -> List[str]:
        """Human-readable names this entity can be looked up by, in priority order."""
        return []

    @property
    def lookup_names(self) -> List[Optional[str]]:
        """Names by lookup priority level; None where a level has no name."""
        return list(self.display_names)


class OrganizationProfile(BaseModel):
    """Profile block of an organization."""

    name: Optional[str] = None
    machine_name: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class Organization(Entity):
    """
    Organization - a billing/administrative group owning site and user memberships.
    """

    profile: OrganizationProfile = Field(default_factory=OrganizationProfile)
    features: Dict[str, Any] = Field(default_factory=dict)

    kind_name: ClassVar[str] = "organization"

    @property
    def name(self) -> Optional[str]:
        return self.profile.name

    @property
    def label(self) -> str:
        """Name for messages; the ID when the organization has no name."""
        return self.name or self.id

    @property
    def display_names(self) -> List[str]:
        return [self.name] if self.name else []

    def has_feature(self, feature: str) -> bool:
        return bool(self.features.get(feature))

    def owner(self) -> Owner:
        return Owner(kind=OwnerKind.ORGANIZATION, id=self.id)


class UserProfile(BaseModel):
    """Profile block of a user."""

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    full_name: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class User(Entity):
    """User account on the platform."""

    email: Optional[str] = None
    profile: UserProfile = Field(default_factory=UserProfile)

    kind_name: ClassVar[str] = "user"

    @property
    def full_name(self) -> Optional[str]:
        if self.profile.full_name:
            return self.profile.full_name
        parts = [p for p in (self.profile.firstname, self.profile.lastname) if p]
        return " ".join(parts) or None

    @property
    def display_names(self) -> List[str]:
        return [n for n in (self.email, self.full_name) if n]

    @property
    def lookup_names(self) -> List[Optional[str]]:
        return [self.email, self.full_name]

    def owner(self) -> Owner:
        return Owner(kind=OwnerKind.USER, id=self.id)


class Site(Entity):
    """Site hosted on the platform."""

    name: str
    service_level: Optional[str] = None
    framework: Optional[str] = None
    created: Optional[datetime] = None
    frozen: bool = False

    kind_name: ClassVar[str] = "site"

    @field_validator("frozen", mode="before")
    @classmethod
    def _frozen_default(cls, v: Any) -> Any:
        return False if v is None else v

    @property
    def display_names(self) -> List[str]:
        return [self.name]


def _adopt_child_id(data: Any, child_key: str) -> Any:
    """Key a membership payload by the ID of the entity it references."""
    if isinstance(data, dict):
        child = data.get(child_key)
        if isinstance(child, dict) and child.get("id") is not None:
            return {**data, "id": child["id"]}
    return data


class Membership(Entity):
    """
    Base membership - joins an owner to a referenced entity.

    The membership belongs to the collection that fetched it; the back
    reference is a lookup, not a copy of the owner.
    """

    role: Optional[str] = None

    kind_name: ClassVar[str] = "membership"

    _collection: Any = PrivateAttr(default=None)

    @property
    def collection(self) -> Any:
        return self._collection

    @property
    def owner(self) -> Optional[Owner]:
        return self._collection.owner if self._collection is not None else None


class UserOrganizationMembership(Membership):
    """
    A user's membership in an organization.

    The membership may carry its own profile; the organization it refers
    to always carries one.
    """

    profile: Optional[OrganizationProfile] = None
    organization: Organization

    kind_name: ClassVar[str] = "organization membership"

    @model_validator(mode="before")
    @classmethod
    def _default_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("id") is None:
            return _adopt_child_id(data, "organization")
        return data

    @property
    def display_names(self) -> List[str]:
        names = []
        if self.profile is not None and self.profile.name:
            names.append(self.profile.name)
        names.extend(n for n in self.organization.display_names if n not in names)
        return names

    @property
    def lookup_names(self) -> List[Optional[str]]:
        own = self.profile.name if self.profile is not None else None
        return [own, self.organization.name]


class OrganizationUserMembership(Membership):
    """A user's membership in an organization, seen from the organization."""

    user: User

    kind_name: ClassVar[str] = "user membership"

    @model_validator(mode="before")
    @classmethod
    def _key_by_user(cls, data: Any) -> Any:
        return _adopt_child_id(data, "user")

    @property
    def display_names(self) -> List[str]:
        return self.user.display_names

    @property
    def lookup_names(self) -> List[Optional[str]]:
        return self.user.lookup_names

    async def remove_member(self) -> "Workflow":
        """Remove this user from the organization."""
        return await self._collection.remove_member(self)

    async def set_role(self, role: str) -> "Workflow":
        """Change this user's role in the organization."""
        return await self._collection.set_role(self, role)


class OrganizationSiteMembership(Membership):
    """A site's membership in an organization, with its organization tags."""

    site: Site
    tags: List[str] = Field(default_factory=list)

    kind_name: ClassVar[str] = "site membership"

    @model_validator(mode="before")
    @classmethod
    def _key_by_site(cls, data: Any) -> Any:
        return _adopt_child_id(data, "site")

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, dict):
            # Tag listings can come back keyed by tag name
            return list(v.keys())
        return v

    @property
    def display_names(self) -> List[str]:
        return self.site.display_names

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


class UserSiteMembership(Membership):
    """A user's membership in a site."""

    site: Site

    kind_name: ClassVar[str] = "site membership"

    @model_validator(mode="before")
    @classmethod
    def _key_by_site(cls, data: Any) -> Any:
        return _adopt_child_id(data, "site")

    @property
    def display_names(self) -> List[str]:
        return self.site.display_names
