"""Channels: one per user, owner-only edits, subscriber toggling."""

from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from videotube_api.models.channels import (
    ChannelCreateRequest,
    ChannelDetailResponse,
    ChannelItem,
    ChannelSubscribeResponse,
    ChannelUpdateRequest,
)
from videotube_api.models.common import UserSummary
from videotube_api.models.videos import VideoItem
from videotube_api.services.ownership import authorize, ensure_owner
from videotube_api.services.reactions import (
    Polarity,
    ReactionService,
    SUBSCRIPTION_REACTIONS,
)
from videotube_api.services.repositories.base import parse_object_id
from videotube_api.services.repositories.channels_repo import ChannelsRepo
from videotube_api.services.repositories.users_repo import UsersRepo
from videotube_api.services.repositories.videos_repo import VideosRepo

logger = logging.getLogger(__name__)


class ChannelsService:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.repo = ChannelsRepo(db)
        self.users_repo = UsersRepo(db)
        self.videos_repo = VideosRepo(db)
        self.reactions = ReactionService(
            self.repo, SUBSCRIPTION_REACTIONS, 'channel')

    async def _detail(self, doc: Optional[dict]) -> ChannelDetailResponse:
        if doc is None:
            raise RuntimeError('channel_not_found')
        owner = await self.users_repo.get_by_id(doc.get('owner_id'))
        videos = await self.videos_repo.list_by_ids(
            ChannelItem.from_doc(doc).videos)
        # ObjectIds are creation-ordered
        videos.sort(key=lambda v: v['_id'], reverse=True)
        return ChannelDetailResponse(
            channel=ChannelItem.from_doc(doc),
            owner=UserSummary.from_doc(owner) if owner else None,
            videos=[VideoItem.from_doc(v) for v in videos],
        )

    async def create(
        self,
        actor_id: str,
        data: ChannelCreateRequest,
    ) -> ChannelItem:
        name = data.channel_name.strip()
        try:
            if await self.repo.get_by_owner(actor_id):
                raise RuntimeError('channel_exists')
            if await self.repo.get_by_name(name):
                raise RuntimeError('channel_name_taken')
            doc = await self.repo.insert(actor_id, name, data.description)
            await self.users_repo.set_channel(actor_id, doc['_id'])
        except DuplicateKeyError as error:
            raise RuntimeError('channel_name_taken') from error
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_channel_create_error: {error}'
            ) from error
        logger.info('channel_created', extra={'channel_id': str(doc['_id']),
                                              'owner_id': str(actor_id)})
        return ChannelItem.from_doc(doc)

    async def get(self, channel_id: str) -> ChannelDetailResponse:
        try:
            return await self._detail(await self.repo.get_by_id(channel_id))
        except PyMongoError as error:
            raise RuntimeError(f'mongo_channel_get_error: {error}') from error

    async def get_by_user(self, user_id: str) -> ChannelDetailResponse:
        try:
            return await self._detail(await self.repo.get_by_owner(user_id))
        except PyMongoError as error:
            raise RuntimeError(f'mongo_channel_get_error: {error}') from error

    async def update(
        self,
        actor_id: str,
        channel_id: str,
        data: ChannelUpdateRequest,
    ) -> ChannelItem:
        changes = data.model_dump(exclude_none=True)
        try:
            doc = await self.repo.get_by_id(channel_id)
            if doc is None:
                raise RuntimeError('channel_not_found')
            ensure_owner(doc, actor_id, 'not_channel_owner')

            name = changes.get('channel_name')
            if name is not None:
                changes['channel_name'] = name = name.strip()
                other = await self.repo.get_by_name(name)
                if other is not None and other['_id'] != doc['_id']:
                    raise RuntimeError('channel_name_taken')

            updated = await self.repo.set_fields(channel_id, changes)
        except DuplicateKeyError as error:
            raise RuntimeError('channel_name_taken') from error
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_channel_update_error: {error}'
            ) from error
        if updated is None:
            raise RuntimeError('channel_not_found')
        return ChannelItem.from_doc(updated)

    async def subscribe(
        self,
        actor_id: str,
        channel_id: str,
    ) -> ChannelSubscribeResponse:
        """Toggle the actor in ``subscribed_by`` and mirror it on the actor.

        The mirror write to ``subscribed_channels`` is separate and is not
        rolled back if it fails.
        """
        try:
            doc = await self.repo.get_by_id(channel_id, {'owner_id': 1})
        except PyMongoError as error:
            raise RuntimeError(f'mongo_channel_get_error: {error}') from error
        if doc is None:
            raise RuntimeError('channel_not_found')
        if authorize(doc, actor_id):
            raise RuntimeError('cannot_subscribe_to_self')

        result = await self.reactions.toggle(
            channel_id, parse_object_id(actor_id), Polarity.positive)

        try:
            await self.users_repo.sync_membership(
                actor_id,
                'subscribed_channels',
                result.entity['_id'],
                present=result.active,
            )
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_channel_subscribe_error: {error}'
            ) from error
        return ChannelSubscribeResponse(
            subscribed=result.active,
            channel=ChannelItem.from_doc(result.entity),
        )
