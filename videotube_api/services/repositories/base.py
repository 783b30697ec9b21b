"""Shared Mongo helpers for per-collection repositories."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """ObjectId for ``value``, or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoRepo:
    """Lookup and targeted-update helpers keyed by ``_id``."""

    collection_name = ''

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db[self.collection_name]

    async def get_by_id(
        self,
        entity_id: Any,
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(entity_id)
        if oid is None:
            return None
        return await self.col.find_one({'_id': oid}, projection)

    async def list_by_ids(self, ids: Iterable[Any]) -> List[Dict[str, Any]]:
        """Fetch documents for ``ids`` preserving the given order."""
        oids = [oid for oid in map(parse_object_id, ids) if oid is not None]
        if not oids:
            return []
        docs = {doc['_id']: doc
                async for doc in self.col.find({'_id': {'$in': oids}})}
        return [docs[oid] for oid in oids if oid in docs]

    async def set_fields(
        self,
        entity_id: Any,
        changes: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """``$set`` only the given fields and return the updated document."""
        oid = parse_object_id(entity_id)
        if oid is None:
            return None
        return await self.col.find_one_and_update(
            {'_id': oid},
            {'$set': {**changes, 'updated_at': utcnow()}},
            return_document=ReturnDocument.AFTER,
        )

    async def add_member(self, entity_id: Any, field: str, value: Any) -> bool:
        """``$addToSet`` ``value`` into array ``field``."""
        result = await self.col.update_one(
            {'_id': parse_object_id(entity_id)},
            {'$addToSet': {field: value}},
        )
        return result.matched_count == 1

    async def pull_member(
            self, entity_id: Any, field: str, value: Any) -> bool:
        result = await self.col.update_one(
            {'_id': parse_object_id(entity_id)},
            {'$pull': {field: value}},
        )
        return result.matched_count == 1

    async def pull_from_all(self, field: str, value: Any) -> int:
        """Remove ``value`` from ``field`` on every document holding it."""
        result = await self.col.update_many(
            {field: value},
            {'$pull': {field: value}},
        )
        return result.modified_count

    async def delete(self, entity_id: Any) -> bool:
        oid = parse_object_id(entity_id)
        if oid is None:
            return False
        result = await self.col.delete_one({'_id': oid})
        return result.deleted_count == 1
