"""Mongo repository for videos collection."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from videotube_api.services.reactions import VIDEO_REACTIONS
from videotube_api.services.repositories.base import (
    MongoRepo,
    parse_object_id,
    utcnow,
)

PUBLISHED = 'published'


class VideosRepo(MongoRepo):
    """CRUD, listing and view counting for videos."""

    collection_name = 'videos'

    async def insert(
        self,
        owner_id: Any,
        data: Dict[str, Any],
    ) -> Dict[str, Any]:
        now = utcnow()
        doc = {
            'title': data['title'],
            'description': data.get('description') or '',
            'owner_id': parse_object_id(owner_id),
            'channel_id': data.get('channel_id'),
            'video_url': data['video_url'],
            'thumbnail': data.get('thumbnail'),
            'duration': data.get('duration') or 0,
            'views': 0,
            'comments': [],
            'status': data.get('status') or PUBLISHED,
            'tags': data.get('tags') or [],
            'category': data.get('category') or 'Other',
            'created_at': now,
            'updated_at': now,
            **VIDEO_REACTIONS.empty(),
        }
        result = await self.col.insert_one(doc)
        doc['_id'] = result.inserted_id
        return doc

    @staticmethod
    def _published_query(
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {'status': PUBLISHED}
        if search:
            pattern = {'$regex': re.escape(search), '$options': 'i'}
            query['$or'] = [
                {'title': pattern},
                {'description': pattern},
                {'tags': search},
            ]
        if category:
            query['category'] = category
        return query

    async def list_published(
        self,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Published videos, newest first."""
        cursor = (
            self.col.find(self._published_query(search, category))
            .sort('created_at', -1)
            .skip(offset)
            .limit(limit)
        )
        return [doc async for doc in cursor]

    async def count_published(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> int:
        return await self.col.count_documents(
            self._published_query(search, category))

    async def list_by_owner(self, owner_id: Any) -> List[Dict[str, Any]]:
        oid = parse_object_id(owner_id)
        if oid is None:
            return []
        cursor = self.col.find({'owner_id': oid}).sort('created_at', -1)
        return [doc async for doc in cursor]

    async def increment_views(self, video_id: Any) -> Optional[Dict[str, Any]]:
        """``$inc`` views by one and return the updated document."""
        oid = parse_object_id(video_id)
        if oid is None:
            return None
        return await self.col.find_one_and_update(
            {'_id': oid},
            {'$inc': {'views': 1}},
            return_document=ReturnDocument.AFTER,
        )
