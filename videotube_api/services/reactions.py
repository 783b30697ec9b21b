"""Reaction toggling for like/dislike/subscribe membership sets.

A reactable document carries a positive member list (``liked_by``,
``subscribed_by``) and optionally a negative one (``disliked_by``), each
with a stored counter. Toggling keeps the two lists disjoint and rewrites
both counters from the list sizes, so a counter never drifts from its list
through this path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class Polarity(str, Enum):
    positive = 'positive'
    negative = 'negative'


@dataclass(frozen=True)
class ReactionFields:
    """Document field names for one kind of reactable entity."""

    positive_set: str
    positive_counter: str
    negative_set: Optional[str] = None
    negative_counter: Optional[str] = None

    @property
    def has_negative(self) -> bool:
        return self.negative_set is not None

    def empty(self) -> Dict[str, Any]:
        """Initial reaction fields for a freshly created document."""
        doc: Dict[str, Any] = {self.positive_set: [], self.positive_counter: 0}
        if self.has_negative:
            doc[self.negative_set] = []
            doc[self.negative_counter] = 0
        return doc


VIDEO_REACTIONS = ReactionFields(
    'liked_by', 'likes', 'disliked_by', 'dislikes')
COMMENT_REACTIONS = ReactionFields('liked_by', 'likes')
SUBSCRIPTION_REACTIONS = ReactionFields('subscribed_by', 'subscribers')


@dataclass(frozen=True)
class ToggleResult:
    entity: Dict[str, Any]
    changes: Dict[str, Any] = field(default_factory=dict)
    # actor is a member of the toggled set afterwards
    active: bool = False


def normalize_members(value: Any) -> List[Any]:
    """Coerce a stored member list into a duplicate-free list.

    Legacy documents may hold ``None``, a scalar or a dict where a list is
    expected; those read as an empty list.
    """
    if not isinstance(value, list):
        return []
    seen: set[str] = set()
    members: List[Any] = []
    for member in value:
        if member is None:
            continue
        key = str(member)
        if key in seen:
            continue
        seen.add(key)
        members.append(member)
    return members


def contains(members: Iterable[Any], actor_id: Any) -> bool:
    key = str(actor_id)
    return any(str(member) == key for member in members)


def without(members: Iterable[Any], actor_id: Any) -> List[Any]:
    key = str(actor_id)
    return [member for member in members if str(member) != key]


def toggle(
    entity: Mapping[str, Any],
    actor_id: Any,
    polarity: Polarity,
    fields: ReactionFields,
) -> ToggleResult:
    """Toggle ``actor_id`` in the ``polarity`` set of ``entity``.

    Already a member: the actor is removed (toggle off). Otherwise the actor
    is removed from the opposite set first and then added. The input mapping
    is left untouched; ``changes`` holds both sets and both counters, ready
    for a single ``$set``.
    """
    if actor_id is None:
        raise RuntimeError('actor_required')
    polarity = Polarity(polarity)
    if polarity is Polarity.negative and not fields.has_negative:
        raise RuntimeError('reaction_not_supported')

    positive = normalize_members(entity.get(fields.positive_set))
    negative = (normalize_members(entity.get(fields.negative_set))
                if fields.has_negative else [])

    if polarity is Polarity.positive:
        target, opposite = positive, negative
    else:
        target, opposite = negative, positive

    if contains(target, actor_id):
        target = without(target, actor_id)
        active = False
    else:
        opposite = without(opposite, actor_id)
        target = target + [actor_id]
        active = True

    if polarity is Polarity.positive:
        positive, negative = target, opposite
    else:
        negative, positive = target, opposite

    changes: Dict[str, Any] = {
        fields.positive_set: positive,
        fields.positive_counter: len(positive),
    }
    if fields.has_negative:
        changes[fields.negative_set] = negative
        changes[fields.negative_counter] = len(negative)

    return ToggleResult(entity={**entity, **changes},
                        changes=changes,
                        active=active)


class ReactionService:
    """Load, toggle and persist the reaction sets of one collection."""

    def __init__(self, repo, fields: ReactionFields, entity: str) -> None:
        self.repo = repo
        self.fields = fields
        self.entity = entity

    async def toggle(
        self,
        entity_id: str,
        actor_id: Any,
        polarity: Polarity = Polarity.positive,
    ) -> ToggleResult:
        """Toggle and persist with a targeted update of the reaction fields.

        Only the reaction fields are written, so unrelated legacy values in
        the document never fail the update.
        """
        try:
            doc = await self.repo.get_by_id(entity_id)
            if doc is None:
                raise RuntimeError(f'{self.entity}_not_found')

            result = toggle(doc, actor_id, polarity, self.fields)

            updated = await self.repo.set_fields(entity_id, result.changes)
            if updated is None:
                raise RuntimeError(f'{self.entity}_not_found')
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_{self.entity}_reaction_error: {error}'
            ) from error

        counters = {self.fields.positive_counter:
                    updated.get(self.fields.positive_counter)}
        if self.fields.has_negative:
            counters[self.fields.negative_counter] = updated.get(
                self.fields.negative_counter)
        logger.info(
            'reaction_toggled',
            extra={
                'entity': self.entity,
                'entity_id': str(entity_id),
                'actor_id': str(actor_id),
                'polarity': Polarity(polarity).value,
                'active': result.active,
                **counters,
            },
        )
        return ToggleResult(entity=updated,
                            changes=result.changes,
                            active=result.active)
