"""
Identifier resolution for hostctl.

Turns user input (an ID or a display name) into exactly one cached entity.
"""

from typing import Container, Dict, Optional, TypeVar

from ..entities.models import Entity
from ..errors import UnresolvedIdentifierError
from ..memberships.collection import Collection

T = TypeVar("T", bound=Entity)


def resolve(
    collection: Collection[T],
    value: Optional[str],
    kind: str,
    allow_none: bool = False,
    exclude: Container[str] = (),
    autoselect_solo: bool = False,
    message: Optional[str] = None,
) -> Optional[T]:
    """
    Resolve an ID or name against a populated collection.

    Order: exact ID, then exact display name (a membership's own name before
    the name of the entity it references).

    Args:
        collection: Populated collection to search
        value: User input, or None when nothing was given
        kind: What is being resolved, for error messages ("organization")
        allow_none: Return None instead of raising when nothing resolves
        exclude: IDs that may not be selected
        autoselect_solo: With no input and one selectable entry, pick it
        message: Error message to use when the value does not resolve

    Returns:
        The entity, or None if `allow_none` and nothing resolved

    Raises:
        UnresolvedIdentifierError: When required input resolves to nothing,
            only to excluded entries, or to more than one entry
    """
    if value is None:
        selectable = [m for m in collection.all() if m.id not in exclude]
        if autoselect_solo and len(selectable) == 1:
            return selectable[0]
        if allow_none:
            return None
        raise UnresolvedIdentifierError(kind, None)

    candidates = collection.matches(value)
    selectable = [m for m in candidates if m.id not in exclude]

    if len(selectable) == 1:
        return selectable[0]
    if len(selectable) > 1:
        raise UnresolvedIdentifierError(kind, value, ambiguous=True)
    if candidates:
        raise UnresolvedIdentifierError(
            kind, value, message=f"The {kind} '{value}' cannot be selected here"
        )
    if allow_none:
        return None
    raise UnresolvedIdentifierError(kind, value, message=message)


def choices(collection: Collection[T], exclude: Container[str] = ()) -> Dict[str, str]:
    """ID -> label for every selectable entry, for interactive prompts."""
    return {
        m.id: (m.display_names[0] if m.display_names else m.id)
        for m in collection.all()
        if m.id not in exclude
    }
