"""Unit tests for reaction toggling (no database)."""

from __future__ import annotations

import random

import pytest
from bson import ObjectId

from videotube_api.services.reactions import (
    COMMENT_REACTIONS,
    normalize_members,
    Polarity,
    ReactionService,
    SUBSCRIPTION_REACTIONS,
    toggle,
    VIDEO_REACTIONS,
)

POS, NEG = Polarity.positive, Polarity.negative


def empty_video() -> dict:
    return {"_id": ObjectId(), "title": "t", **VIDEO_REACTIONS.empty()}


def assert_consistent(doc: dict) -> None:
    liked = {str(m) for m in doc["liked_by"]}
    disliked = {str(m) for m in doc["disliked_by"]}
    assert liked.isdisjoint(disliked)
    assert doc["likes"] == len(doc["liked_by"])
    assert doc["dislikes"] == len(doc["disliked_by"])


def test_like_on_empty_entity():
    res = toggle(empty_video(), "a", POS, VIDEO_REACTIONS)
    assert res.entity["liked_by"] == ["a"]
    assert res.entity["likes"] == 1
    assert res.entity["disliked_by"] == []
    assert res.entity["dislikes"] == 0
    assert res.active is True


def test_dislike_moves_actor_from_liked_set():
    doc = {**empty_video(), "liked_by": ["a"], "likes": 1}
    res = toggle(doc, "a", NEG, VIDEO_REACTIONS)
    assert res.entity["liked_by"] == []
    assert res.entity["likes"] == 0
    assert res.entity["disliked_by"] == ["a"]
    assert res.entity["dislikes"] == 1


def test_toggle_twice_restores_state():
    before = {**empty_video(), "liked_by": ["b"], "likes": 1,
              "disliked_by": ["c"], "dislikes": 1}
    once = toggle(before, "a", POS, VIDEO_REACTIONS).entity
    twice = toggle(once, "a", POS, VIDEO_REACTIONS).entity
    assert twice == before


def test_toggle_does_not_mutate_input():
    doc = {**empty_video(), "liked_by": ["b"], "likes": 1}
    toggle(doc, "a", POS, VIDEO_REACTIONS)
    assert doc["liked_by"] == ["b"]


def test_changes_hold_only_reaction_fields():
    doc = {**empty_video(), "duration": "3:15"}
    res = toggle(doc, "a", POS, VIDEO_REACTIONS)
    assert set(res.changes) == {"liked_by", "likes",
                                "disliked_by", "dislikes"}
    assert res.entity["duration"] == "3:15"


@pytest.mark.parametrize("bad", [None, "a,b", 5, {"a": 1}])
def test_malformed_sets_are_normalized(bad):
    doc = {"_id": 1, "liked_by": bad, "disliked_by": bad,
           "likes": "7", "dislikes": None}
    res = toggle(doc, "a", POS, VIDEO_REACTIONS)
    assert res.entity["liked_by"] == ["a"]
    assert res.entity["disliked_by"] == []
    assert_consistent(res.entity)


def test_missing_fields_are_normalized():
    res = toggle({"_id": 1}, "a", NEG, VIDEO_REACTIONS)
    assert res.entity["disliked_by"] == ["a"]
    assert res.entity["liked_by"] == []
    assert_consistent(res.entity)


def test_drifted_counter_is_recomputed():
    doc = {**empty_video(), "liked_by": ["b", "c"], "likes": 40}
    res = toggle(doc, "a", NEG, VIDEO_REACTIONS)
    assert res.entity["likes"] == 2


def test_object_id_and_hex_string_are_the_same_actor():
    actor = ObjectId()
    doc = {**empty_video(), "liked_by": [actor], "likes": 1}
    res = toggle(doc, str(actor), POS, VIDEO_REACTIONS)
    assert res.entity["liked_by"] == []
    assert res.active is False


def test_random_sequences_keep_sets_disjoint_and_counted():
    rng = random.Random(7)
    actors = ["a", "b", "c", "d"]
    doc = empty_video()
    for _ in range(300):
        doc = toggle(doc, rng.choice(actors), rng.choice([POS, NEG]),
                     VIDEO_REACTIONS).entity
        assert_consistent(doc)


def test_positive_only_entity_rejects_negative():
    with pytest.raises(RuntimeError, match="reaction_not_supported"):
        toggle({"liked_by": []}, "a", NEG, COMMENT_REACTIONS)


def test_positive_only_entity_writes_positive_fields():
    res = toggle({"subscribed_by": ["x"], "subscribers": 1}, "a", POS,
                 SUBSCRIPTION_REACTIONS)
    assert res.changes == {"subscribed_by": ["x", "a"], "subscribers": 2}


def test_missing_actor_is_rejected():
    with pytest.raises(RuntimeError, match="actor_required"):
        toggle(empty_video(), None, POS, VIDEO_REACTIONS)


def test_polarity_accepts_plain_strings():
    res = toggle(empty_video(), "a", "negative", VIDEO_REACTIONS)
    assert res.entity["disliked_by"] == ["a"]


def test_normalize_members_drops_none_and_duplicates():
    oid = ObjectId()
    assert normalize_members([oid, None, str(oid), "x"]) == [oid, "x"]


class _FakeRepo:
    def __init__(self, doc):
        self.doc = doc
        self.writes = []

    async def get_by_id(self, entity_id, projection=None):
        return self.doc

    async def set_fields(self, entity_id, changes):
        self.writes.append(changes)
        return None if self.doc is None else {**self.doc, **changes}


async def test_reaction_service_persists_single_targeted_write():
    repo = _FakeRepo({"_id": 1, "duration": "1:00", "liked_by": "bad"})
    svc = ReactionService(repo, VIDEO_REACTIONS, "video")

    res = await svc.toggle("1", "a", POS)

    assert repo.writes == [{"liked_by": ["a"], "likes": 1,
                            "disliked_by": [], "dislikes": 0}]
    assert res.entity["duration"] == "1:00"
    assert res.active is True


async def test_reaction_service_missing_entity():
    svc = ReactionService(_FakeRepo(None), COMMENT_REACTIONS, "comment")
    with pytest.raises(RuntimeError, match="comment_not_found"):
        await svc.toggle("1", "a", POS)
