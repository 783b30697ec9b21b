"""Single-owner authorization for mutable resources."""

from __future__ import annotations

from typing import Any, Mapping, Optional

OWNER_FIELD = 'owner_id'


def authorize(
    resource: Optional[Mapping[str, Any]],
    actor_id: Any,
    owner_field: str = OWNER_FIELD,
) -> bool:
    """Return True when ``actor_id`` is the resource's owner.

    Ids compare by their string form, so an ObjectId matches its hex string.
    """
    if resource is None or actor_id is None:
        return False
    owner = resource.get(owner_field)
    if owner is None:
        return False
    return str(owner) == str(actor_id)


def ensure_owner(
    resource: Optional[Mapping[str, Any]],
    actor_id: Any,
    error: str,
    owner_field: str = OWNER_FIELD,
) -> None:
    """Raise ``RuntimeError(error)`` unless ``actor_id`` owns the resource."""
    if not authorize(resource, actor_id, owner_field):
        raise RuntimeError(error)
