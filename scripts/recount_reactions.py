"""Reconcile reaction counters and users' mirror lists with entity sets.

Toggles keep each counter equal to its set, but concurrent requests and
failed second writes (a like without its ``liked_videos`` entry) can leave
records diverged. This script recomputes everything from the sets.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable

from pymongo import MongoClient, UpdateOne
from videotube_api.core.config import settings
from videotube_api.services.reactions import (
    COMMENT_REACTIONS,
    normalize_members,
    ReactionFields,
    SUBSCRIPTION_REACTIONS,
    VIDEO_REACTIONS,
)

RECOUNTS = {
    "videos": VIDEO_REACTIONS,
    "comments": COMMENT_REACTIONS,
    "channels": SUBSCRIPTION_REACTIONS,
    "users": SUBSCRIPTION_REACTIONS,
}

# user list field -> collection whose positive set it mirrors
MIRRORS = {
    "liked_videos": "videos",
    "subscribed_channels": "channels",
    "subscribed_to": "users",
}


def recount_changes(doc: Dict[str, Any],
                    fields: ReactionFields) -> Dict[str, Any]:
    """Fields to ``$set`` so the document's sets and counters agree.

    Empty when nothing changes. A member present in both sets is kept in
    the positive one.
    """
    positive = normalize_members(doc.get(fields.positive_set))
    expected: Dict[str, Any] = {
        fields.positive_set: positive,
        fields.positive_counter: len(positive),
    }
    if fields.has_negative:
        liked = {str(m) for m in positive}
        negative = [m for m in normalize_members(doc.get(fields.negative_set))
                    if str(m) not in liked]
        expected[fields.negative_set] = negative
        expected[fields.negative_counter] = len(negative)
    return {k: v for k, v in expected.items() if doc.get(k) != v}


def build_mirrors(
    sources: Dict[str, Iterable[Dict[str, Any]]],
) -> Dict[str, Dict[str, list]]:
    """Map each user list field to {member id string: entity ids}.

    Members are keyed by their string form so ObjectId and legacy hex-string
    members land on the same user.
    """
    mirrors: Dict[str, Dict[str, list]] = {}
    for field, docs in sources.items():
        positive_set = RECOUNTS[MIRRORS[field]].positive_set
        by_member: Dict[str, list] = defaultdict(list)
        for doc in docs:
            for member in normalize_members(doc.get(positive_set)):
                by_member[str(member)].append(doc["_id"])
        mirrors[field] = by_member
    return mirrors


def mirror_fields(mirrors: Dict[str, Dict[str, list]],
                  user_id: Any) -> Dict[str, list]:
    return {field: list(mirrors.get(field, {}).get(str(user_id), []))
            for field in MIRRORS}


def main():
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]

    for col_name, fields in RECOUNTS.items():
        ops = []
        for doc in db[col_name].find({}):
            changes = recount_changes(doc, fields)
            if changes:
                ops.append(UpdateOne({"_id": doc["_id"]},
                                     {"$set": changes}))
        if ops:
            db[col_name].bulk_write(ops, ordered=False)
        print(f"{col_name}: recounted {len(ops)}")

    # rebuild user mirror lists from the entity sets
    mirrors = build_mirrors({
        field: db[col_name].find({}, {RECOUNTS[col_name].positive_set: 1})
        for field, col_name in MIRRORS.items()
    })

    ops = []
    for user in db["users"].find({}, {"_id": 1}):
        ops.append(UpdateOne(
            {"_id": user["_id"]},
            {"$set": mirror_fields(mirrors, user["_id"])},
        ))
    if ops:
        db["users"].bulk_write(ops, ordered=False)
    print(f"users: rebuilt mirror lists for {len(ops)}")
    print("Recount done.")


if __name__ == "__main__":
    main()
