"""
Generic entity collection for hostctl.

A collection is the in-memory cache of one kind of entity for the duration
of one invocation. Entries keep the order they were fetched in.
"""

import logging
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Type,
    TypeVar,
    ValuesView,
)

from ..entities.models import Entity, Membership, Owner

if TYPE_CHECKING:
    from ..client import Hostctl

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)


class Collection(Generic[T]):
    """
    Ordered cache of entities keyed by ID.

    Subclasses fix the entity model, the resource listed under the owner and
    whether the listing is paged. Instances are not thread-safe; confine each
    one to a single task.

    Example:
        ```python
        memberships = UserOrganizationMemberships(hostctl, hostctl.user)
        await memberships.populate()

        membership = memberships.get("Acme")  # ID or name
        for membership in memberships.all():
            print(membership.id)
        ```
    """

    model: Type[Entity] = Entity
    resource: str = ""
    paged: bool = False

    def __init__(self, hostctl: "Hostctl", owner: Owner) -> None:
        """
        Initialize the collection.

        Args:
            hostctl: Main client instance
            owner: Entity that owns this collection
        """
        self.hostctl = hostctl
        self.api = hostctl.api
        self.owner = owner
        self.populated = False
        self._models: Dict[str, T] = {}

    @property
    def path(self) -> str:
        """Remote listing path."""
        return self.owner.memberships_path(self.resource)

    async def populate(self) -> "Collection[T]":
        """
        Fetch every entity from the listing endpoint.

        Paged listings are followed with a `start` cursor (the last ID
        received) until a page reports no more results.

        Returns:
            self, for chaining

        Raises:
            RemoteFetchError: On transport or auth failure (not retried)
            EntityParseError: If a record has the wrong shape
        """
        start: Optional[str] = None
        while True:
            records, has_more = await self.api.listing(
                self.path, start=start, paged=self.paged
            )
            known = len(self._models)
            last = None
            for record in records:
                last = self.add(record)
            logger.debug(
                "Fetched %d records from %s (has_more=%s)", len(records), self.path, has_more
            )
            if not has_more or last is None or len(self._models) == known:
                break
            # The cursor is the ID of the record as sent, not the model key
            raw = records[-1]
            start = str(raw["id"]) if isinstance(raw, dict) and raw.get("id") else last.id

        self.populated = True
        return self

    def add(self, data: object) -> T:
        """
        Add or replace an entity from a raw payload.

        Re-adding an ID replaces the entry but keeps its original position.

        Returns:
            The entity that was stored

        Raises:
            EntityParseError: If the payload has the wrong shape
        """
        model = self.model.parse(data)
        if isinstance(model, Membership):
            model._collection = self
        self._models[model.id] = model  # type: ignore[assignment]
        return model  # type: ignore[return-value]

    def matches(self, id_or_name: str) -> List[T]:
        """
        Every entity a value could refer to.

        An exact ID wins outright. Otherwise display names are compared
        exactly (case-sensitive), one priority level at a time, so a
        membership's own name is tried before the name of what it references.
        """
        if id_or_name in self._models:
            return [self._models[id_or_name]]

        names = {model_id: m.lookup_names for model_id, m in self._models.items()}
        depth = max((len(n) for n in names.values()), default=0)
        for level in range(depth):
            hits = [
                m
                for model_id, m in self._models.items()
                if len(names[model_id]) > level and names[model_id][level] == id_or_name
            ]
            if hits:
                return hits
        return []

    def get(self, id_or_name: str) -> Optional[T]:
        """
        Look up an entity by ID or by display name.

        Returns:
            The entity, or None when nothing matches or the name is ambiguous
        """
        candidates = self.matches(id_or_name)
        if len(candidates) == 1:
            return candidates[0]
        if candidates:
            logger.debug(
                "'%s' matches %d entries in %s", id_or_name, len(candidates), self.path
            )
        return None

    def all(self) -> ValuesView[T]:
        """Entities in insertion order; iterating again starts over."""
        return self._models.values()

    def filter_by(self, predicate: Callable[[T], bool]) -> List[T]:
        """Entities satisfying a predicate, in order. The collection is unchanged."""
        return [model for model in self._models.values() if predicate(model)]

    def ids(self) -> List[str]:
        return list(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def __iter__(self) -> Iterator[T]:
        return iter(self._models.values())

    def __contains__(self, id_: object) -> bool:
        return id_ in self._models
