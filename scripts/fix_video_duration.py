"""Rewrite legacy "MM:SS" video durations as integer seconds."""

from typing import Any, Optional

from pymongo import MongoClient, UpdateOne
from videotube_api.core.config import settings
from videotube_api.models.common import parse_duration


def duration_fix(value: Any) -> Optional[int]:
    """New value for a stored duration, or None when it is already valid."""
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return None
    return parse_duration(value)


def main():
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]
    col = db["videos"]

    ops = []
    for doc in col.find({}, {"duration": 1}):
        fixed = duration_fix(doc.get("duration"))
        if fixed is None:
            continue
        ops.append(UpdateOne({"_id": doc["_id"]},
                             {"$set": {"duration": fixed}}))
        print(f"  {doc['_id']}: {doc.get('duration')!r} -> {fixed}")

    if ops:
        col.bulk_write(ops, ordered=False)
    print(f"Fixed {len(ops)} videos.")


if __name__ == "__main__":
    main()
