"""Mongo repository for users collection."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from videotube_api.services.reactions import SUBSCRIPTION_REACTIONS
from videotube_api.services.repositories.base import (
    MongoRepo,
    parse_object_id,
    utcnow,
)


class UsersRepo(MongoRepo):
    """Accounts plus their video/like/subscription back-references."""

    collection_name = 'users'

    async def insert(
        self,
        name: str,
        email: str,
        password_hash: str,
    ) -> Dict[str, Any]:
        now = utcnow()
        doc = {
            'name': name,
            'email': email,
            'password_hash': password_hash,
            'avatar': None,
            'bio': '',
            'videos': [],
            'liked_videos': [],
            'subscribed_to': [],
            'subscribed_channels': [],
            'channel_id': None,
            'created_at': now,
            'updated_at': now,
            **SUBSCRIPTION_REACTIONS.empty(),
        }
        result = await self.col.insert_one(doc)
        doc['_id'] = result.inserted_id
        return doc

    async def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.col.find_one({'email': email})

    async def search(self, query: str, limit: int) -> List[Dict[str, Any]]:
        """Case-insensitive substring match on name or email."""
        pattern = {'$regex': re.escape(query), '$options': 'i'}
        cursor = (
            self.col.find({'$or': [{'name': pattern}, {'email': pattern}]})
            .sort('name', 1)
            .limit(limit)
        )
        return [doc async for doc in cursor]

    async def update_profile(
        self,
        user_id: str,
        changes: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        if not changes:
            return await self.get_by_id(user_id)
        return await self.set_fields(user_id, changes)

    async def set_channel(
            self, user_id: Any, channel_id: Optional[ObjectId]) -> bool:
        result = await self.col.update_one(
            {'_id': parse_object_id(user_id)},
            {'$set': {'channel_id': channel_id, 'updated_at': utcnow()}},
        )
        return result.matched_count == 1

    async def sync_membership(
        self,
        user_id: Any,
        field: str,
        target_id: Any,
        present: bool,
    ) -> Optional[Dict[str, Any]]:
        """Make ``target_id`` present in (or absent from) array ``field``."""
        op = '$addToSet' if present else '$pull'
        return await self.col.find_one_and_update(
            {'_id': parse_object_id(user_id)},
            {op: {field: target_id}},
            return_document=ReturnDocument.AFTER,
        )
