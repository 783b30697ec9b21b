"""Mongo repository for channels collection."""

from __future__ import annotations

from typing import Any, Dict, Optional

from videotube_api.services.reactions import SUBSCRIPTION_REACTIONS
from videotube_api.services.repositories.base import (
    MongoRepo,
    parse_object_id,
    utcnow,
)


class ChannelsRepo(MongoRepo):
    collection_name = 'channels'

    async def insert(
        self,
        owner_id: Any,
        channel_name: str,
        description: str = '',
    ) -> Dict[str, Any]:
        now = utcnow()
        doc = {
            'channel_name': channel_name,
            'owner_id': parse_object_id(owner_id),
            'description': description,
            'channel_banner': None,
            'channel_avatar': None,
            'videos': [],
            'created_at': now,
            'updated_at': now,
            **SUBSCRIPTION_REACTIONS.empty(),
        }
        result = await self.col.insert_one(doc)
        doc['_id'] = result.inserted_id
        return doc

    async def get_by_owner(self, owner_id: Any) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(owner_id)
        if oid is None:
            return None
        return await self.col.find_one({'owner_id': oid})

    async def get_by_name(
            self, channel_name: str) -> Optional[Dict[str, Any]]:
        return await self.col.find_one({'channel_name': channel_name})
