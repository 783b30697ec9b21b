"""Comments service: threads, author-only edits, cascading delete, likes."""

from __future__ import annotations

import logging
from typing import Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from videotube_api.models.comments import (
    CommentCreateRequest,
    CommentItem,
    CommentListResponse,
    CommentThreadItem,
)
from videotube_api.models.common import UserSummary
from videotube_api.services.ownership import ensure_owner
from videotube_api.services.reactions import (
    COMMENT_REACTIONS,
    Polarity,
    ReactionService,
)
from videotube_api.services.repositories.base import parse_object_id
from videotube_api.services.repositories.comments_repo import CommentsRepo
from videotube_api.services.repositories.users_repo import UsersRepo
from videotube_api.services.repositories.videos_repo import VideosRepo

logger = logging.getLogger(__name__)

AUTHOR_FIELD = 'author_id'


class CommentsService:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.repo = CommentsRepo(db)
        self.users_repo = UsersRepo(db)
        self.videos_repo = VideosRepo(db)
        self.reactions = ReactionService(
            self.repo, COMMENT_REACTIONS, 'comment')

    # ---------- helpers ----------

    async def _authors(self, docs: List[dict]) -> Dict[str, UserSummary]:
        ids = {str(d[AUTHOR_FIELD]) for d in docs if d.get(AUTHOR_FIELD)}
        users = await self.users_repo.list_by_ids(sorted(ids))
        return {str(u['_id']): UserSummary.from_doc(u) for u in users}

    async def _item(self, doc: dict) -> CommentItem:
        authors = await self._authors([doc])
        return CommentItem.from_doc(
            doc, authors.get(str(doc.get(AUTHOR_FIELD))))

    async def threads(self, video_id: str) -> List[CommentThreadItem]:
        """Top-level comments of a video, newest first, with replies."""
        top = await self.repo.list_top_level(video_id)
        reply_ids = [
            rid for doc in top for rid in CommentItem.from_doc(doc).replies
        ]
        replies = {
            str(doc['_id']): doc
            for doc in await self.repo.list_by_ids(reply_ids)
        }
        authors = await self._authors(top + list(replies.values()))

        result: List[CommentThreadItem] = []
        for doc in top:
            item = CommentItem.from_doc(
                doc, authors.get(str(doc.get(AUTHOR_FIELD))))
            reply_items = [
                CommentItem.from_doc(
                    replies[rid],
                    authors.get(str(replies[rid].get(AUTHOR_FIELD))),
                )
                for rid in item.replies if rid in replies
            ]
            result.append(CommentThreadItem(**item.model_dump(),
                                            reply_comments=reply_items))
        return result

    # ---------- LIST ----------

    async def list_for_video(self, video_id: str) -> CommentListResponse:
        try:
            threads = await self.threads(video_id)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_comment_list_error: {error}'
            ) from error
        return CommentListResponse(count=len(threads), comments=threads)

    # ---------- CREATE ----------

    async def create(
        self,
        actor_id: str,
        data: CommentCreateRequest,
    ) -> CommentItem:
        """Create a comment or a reply and link it from video and parent."""
        try:
            video = await self.videos_repo.get_by_id(data.video_id, {'_id': 1})
            if video is None:
                raise RuntimeError('video_not_found')

            parent = None
            if data.parent_comment_id:
                parent = await self.repo.get_by_id(data.parent_comment_id)
                if parent is not None and parent.get('parent_comment_id'):
                    # threads are one level deep: attach to the top comment
                    parent = await self.repo.get_by_id(
                        parent['parent_comment_id'])
                if parent is None or parent.get('video_id') != video['_id']:
                    raise RuntimeError('parent_comment_not_found')

            doc = await self.repo.insert(
                author_id=actor_id,
                video_id=video['_id'],
                text=data.text.strip(),
                parent_comment_id=parent['_id'] if parent else None,
            )
            await self.videos_repo.add_member(
                video['_id'], 'comments', doc['_id'])
            if parent is not None:
                await self.repo.add_member(
                    parent['_id'], 'replies', doc['_id'])
            return await self._item(doc)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_comment_create_error: {error}'
            ) from error

    # ---------- UPDATE ----------

    async def update(
        self,
        actor_id: str,
        comment_id: str,
        text: str,
    ) -> CommentItem:
        try:
            doc = await self.repo.get_by_id(comment_id)
            if doc is None:
                raise RuntimeError('comment_not_found')
            ensure_owner(doc, actor_id, 'not_comment_author', AUTHOR_FIELD)
            updated = await self.repo.set_fields(
                comment_id, {'text': text.strip()})
            if updated is None:
                raise RuntimeError('comment_not_found')
            return await self._item(updated)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_comment_update_error: {error}'
            ) from error

    # ---------- DELETE ----------

    async def delete(self, actor_id: str, comment_id: str) -> None:
        """Delete a comment and its direct replies.

        Every removed id is pulled from the video's ``comments`` and the
        comment is pulled from its parent's ``replies``.
        """
        try:
            doc = await self.repo.get_by_id(comment_id)
            if doc is None:
                raise RuntimeError('comment_not_found')
            ensure_owner(doc, actor_id, 'not_comment_author', AUTHOR_FIELD)

            ids = [doc['_id'], *await self.repo.list_reply_ids(doc['_id'])]
            for cid in ids:
                await self.videos_repo.pull_member(
                    doc.get('video_id'), 'comments', cid)
            if doc.get('parent_comment_id'):
                await self.repo.pull_member(
                    doc['parent_comment_id'], 'replies', doc['_id'])
            await self.repo.delete_many_by_ids(ids)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_comment_delete_error: {error}'
            ) from error
        logger.info('comment_deleted', extra={'comment_id': str(doc['_id']),
                                              'removed': len(ids)})

    # ---------- LIKE ----------

    async def like(self, actor_id: str, comment_id: str) -> CommentItem:
        result = await self.reactions.toggle(
            comment_id, parse_object_id(actor_id), Polarity.positive)
        try:
            return await self._item(result.entity)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_comment_get_error: {error}') from error
