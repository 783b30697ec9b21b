"""Videos service: CRUD, listing, view counting and like/dislike."""

from __future__ import annotations

import logging
import math
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from videotube_api.models.common import UserSummary
from videotube_api.models.videos import (
    UserVideosResponse,
    VideoCreateRequest,
    VideoDetailResponse,
    VideoItem,
    VideoListResponse,
    VideoUpdateRequest,
)
from videotube_api.services.comments_service import CommentsService
from videotube_api.services.ownership import ensure_owner
from videotube_api.services.reactions import (
    contains,
    normalize_members,
    Polarity,
    ReactionService,
    VIDEO_REACTIONS,
)
from videotube_api.services.repositories.base import parse_object_id
from videotube_api.services.repositories.channels_repo import ChannelsRepo
from videotube_api.services.repositories.comments_repo import CommentsRepo
from videotube_api.services.repositories.users_repo import UsersRepo
from videotube_api.services.repositories.videos_repo import VideosRepo

logger = logging.getLogger(__name__)


class VideosService:  # noqa: WPS214 (methods count)
    """Business logic for videos.

    Reactions go through :class:`ReactionService`, which writes only the
    reaction fields; the actor's ``liked_videos`` mirror is a second,
    independent write.
    """

    def __init__(
            self,
            db: AsyncIOMotorDatabase,
            comments: Optional[CommentsService] = None) -> None:
        self.repo = VideosRepo(db)
        self.users_repo = UsersRepo(db)
        self.channels_repo = ChannelsRepo(db)
        self.comments_repo = CommentsRepo(db)
        self.comments = comments or CommentsService(db)
        self.reactions = ReactionService(self.repo, VIDEO_REACTIONS, 'video')

    # ---------- LIST ----------

    async def list_videos(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> VideoListResponse:
        """Published videos, newest first, with page metadata."""
        try:
            docs = await self.repo.list_published(
                limit=limit,
                offset=(page - 1) * limit,
                search=search,
                category=category,
            )
            total = await self.repo.count_published(search, category)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_video_list_error: {error}') from error
        videos = [VideoItem.from_doc(doc) for doc in docs]
        return VideoListResponse(
            count=len(videos),
            total=total,
            page=page,
            pages=math.ceil(total / limit),
            videos=videos,
        )

    async def list_by_user(self, user_id: str) -> UserVideosResponse:
        try:
            docs = await self.repo.list_by_owner(user_id)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_video_list_error: {error}') from error
        videos = [VideoItem.from_doc(doc) for doc in docs]
        return UserVideosResponse(count=len(videos), videos=videos)

    # ---------- GET ONE ----------

    async def get_video(self, video_id: str) -> VideoDetailResponse:
        """Count a view and return the video with uploader and comments."""
        try:
            doc = await self.repo.increment_views(video_id)
            if doc is None:
                raise RuntimeError('video_not_found')
            owner = await self.users_repo.get_by_id(doc.get('owner_id'))
            threads = await self.comments.threads(doc['_id'])
        except PyMongoError as error:
            raise RuntimeError(f'mongo_video_get_error: {error}') from error
        return VideoDetailResponse(
            video=VideoItem.from_doc(doc),
            owner=UserSummary.from_doc(owner) if owner else None,
            comments=threads,
        )

    # ---------- CREATE ----------

    async def create_video(
        self,
        actor_id: str,
        data: VideoCreateRequest,
    ) -> VideoItem:
        """Insert a video and link it from the uploader and their channel."""
        try:
            channel = await self.channels_repo.get_by_owner(actor_id)
            payload = data.model_dump(mode='json')
            payload['channel_id'] = channel['_id'] if channel else None
            doc = await self.repo.insert(actor_id, payload)

            await self.users_repo.add_member(actor_id, 'videos', doc['_id'])
            if channel is not None:
                await self.channels_repo.add_member(
                    channel['_id'], 'videos', doc['_id'])
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_video_create_error: {error}'
            ) from error
        logger.info('video_created', extra={'video_id': str(doc['_id']),
                                            'owner_id': str(actor_id)})
        return VideoItem.from_doc(doc)

    # ---------- UPDATE ----------

    async def update_video(
        self,
        actor_id: str,
        video_id: str,
        data: VideoUpdateRequest,
    ) -> VideoItem:
        changes = data.model_dump(mode='json', exclude_none=True)
        try:
            doc = await self.repo.get_by_id(video_id, {'owner_id': 1})
            if doc is None:
                raise RuntimeError('video_not_found')
            ensure_owner(doc, actor_id, 'not_video_owner')
            updated = await self.repo.set_fields(video_id, changes)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_video_update_error: {error}'
            ) from error
        if updated is None:
            raise RuntimeError('video_not_found')
        return VideoItem.from_doc(updated)

    # ---------- DELETE ----------

    async def delete_video(self, actor_id: str, video_id: str) -> None:
        """Delete a video, its comments and every reference to it."""
        try:
            doc = await self.repo.get_by_id(
                video_id, {'owner_id': 1, 'channel_id': 1})
            if doc is None:
                raise RuntimeError('video_not_found')
            ensure_owner(doc, actor_id, 'not_video_owner')

            vid = doc['_id']
            await self.repo.delete(vid)
            removed = await self.comments_repo.delete_by_video(vid)
            await self.users_repo.pull_member(
                doc.get('owner_id'), 'videos', vid)
            if doc.get('channel_id'):
                await self.channels_repo.pull_member(
                    doc['channel_id'], 'videos', vid)
            await self.users_repo.pull_from_all('liked_videos', vid)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_video_delete_error: {error}'
            ) from error
        logger.info('video_deleted', extra={'video_id': str(vid),
                                            'comments_removed': removed})

    # ---------- LIKE / DISLIKE ----------

    async def react(
        self,
        actor_id: str,
        video_id: str,
        polarity: Polarity,
    ) -> VideoItem:
        """Toggle like (positive) or dislike (negative) for the actor.

        Afterwards the actor's ``liked_videos`` is made to agree with the
        video's ``liked_by``; that write is not rolled back on failure.
        """
        actor_oid = parse_object_id(actor_id)
        result = await self.reactions.toggle(video_id, actor_oid, polarity)
        video = result.entity

        liked = contains(
            normalize_members(video.get(VIDEO_REACTIONS.positive_set)),
            actor_oid,
        )
        try:
            await self.users_repo.sync_membership(
                actor_oid, 'liked_videos', video['_id'], present=liked)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_video_like_sync_error: {error}'
            ) from error
        return VideoItem.from_doc(video)
