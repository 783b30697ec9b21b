"""Mongo repository for comments collection."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from videotube_api.services.reactions import COMMENT_REACTIONS
from videotube_api.services.repositories.base import (
    MongoRepo,
    parse_object_id,
    utcnow,
)


class CommentsRepo(MongoRepo):
    collection_name = 'comments'

    async def insert(
        self,
        author_id: Any,
        video_id: Any,
        text: str,
        parent_comment_id: Optional[Any] = None,
    ) -> Dict[str, Any]:
        now = utcnow()
        doc = {
            'text': text,
            'author_id': parse_object_id(author_id),
            'video_id': parse_object_id(video_id),
            'replies': [],
            'parent_comment_id': (parse_object_id(parent_comment_id)
                                  if parent_comment_id else None),
            'created_at': now,
            'updated_at': now,
            **COMMENT_REACTIONS.empty(),
        }
        result = await self.col.insert_one(doc)
        doc['_id'] = result.inserted_id
        return doc

    async def list_top_level(self, video_id: Any) -> List[Dict[str, Any]]:
        """Comments without a parent, newest first."""
        oid = parse_object_id(video_id)
        if oid is None:
            return []
        cursor = self.col.find(
            {'video_id': oid, 'parent_comment_id': None},
        ).sort('created_at', -1)
        return [doc async for doc in cursor]

    async def list_reply_ids(self, comment_id: Any) -> List[Any]:
        cursor = self.col.find(
            {'parent_comment_id': parse_object_id(comment_id)},
            {'_id': 1},
        )
        return [doc['_id'] async for doc in cursor]

    async def delete_many_by_ids(self, ids: List[Any]) -> int:
        if not ids:
            return 0
        result = await self.col.delete_many({'_id': {'$in': ids}})
        return result.deleted_count

    async def delete_by_video(self, video_id: Any) -> int:
        result = await self.col.delete_many(
            {'video_id': parse_object_id(video_id)})
        return result.deleted_count
