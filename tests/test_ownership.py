import pytest
from bson import ObjectId

from videotube_api.services.ownership import authorize, ensure_owner


def test_other_actor_is_not_authorized():
    assert authorize({"owner_id": "u1"}, "u2") is False


def test_owner_is_authorized():
    assert authorize({"owner_id": "u1"}, "u1") is True


def test_object_id_owner_matches_hex_actor():
    owner = ObjectId()
    assert authorize({"owner_id": owner}, str(owner)) is True


def test_custom_owner_field():
    assert authorize({"author_id": "u1"}, "u1", "author_id") is True
    assert authorize({"author_id": "u1"}, "u1") is False


@pytest.mark.parametrize("resource,actor", [
    (None, "u1"),
    ({"owner_id": None}, "u1"),
    ({}, "u1"),
    ({"owner_id": "u1"}, None),
])
def test_missing_owner_or_actor_is_never_authorized(resource, actor):
    assert authorize(resource, actor) is False


def test_ensure_owner_raises_error_code():
    with pytest.raises(RuntimeError, match="not_video_owner"):
        ensure_owner({"owner_id": "u1"}, "u2", "not_video_owner")
    ensure_owner({"owner_id": "u1"}, "u1", "not_video_owner")
