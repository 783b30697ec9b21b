"""Public profiles, user search and user-to-user subscriptions."""

from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from videotube_api.models.channels import ChannelItem
from videotube_api.models.common import UserSummary
from videotube_api.models.users import (
    SubscriptionsResponse,
    UserItem,
    UserListResponse,
    UserSubscribeResponse,
)
from videotube_api.services.reactions import (
    Polarity,
    ReactionService,
    SUBSCRIPTION_REACTIONS,
)
from videotube_api.services.repositories.base import parse_object_id
from videotube_api.services.repositories.channels_repo import ChannelsRepo
from videotube_api.services.repositories.users_repo import UsersRepo


class UsersService:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.repo = UsersRepo(db)
        self.channels_repo = ChannelsRepo(db)
        self.reactions = ReactionService(
            self.repo, SUBSCRIPTION_REACTIONS, 'user')

    async def get_profile(self, user_id: str) -> UserItem:
        try:
            doc = await self.repo.get_by_id(user_id)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_get_error: {error}') from error
        if doc is None:
            raise RuntimeError('user_not_found')
        return UserItem.from_doc(doc)

    async def search(self, query: str, limit: int = 10) -> UserListResponse:
        try:
            docs = await self.repo.search(query, limit)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_search_error: {error}') from error
        users = [UserItem.from_doc(doc) for doc in docs]
        return UserListResponse(count=len(users), users=users)

    async def subscribe(
        self,
        actor_id: str,
        target_id: str,
    ) -> UserSubscribeResponse:
        """Toggle the actor's subscription to another user.

        Two writes: the target's ``subscribed_by`` set, then the actor's
        ``subscribed_to`` list. A failure between them is not rolled back.
        """
        if str(actor_id) == str(target_id):
            raise RuntimeError('cannot_subscribe_to_self')
        actor_oid = parse_object_id(actor_id)

        result = await self.reactions.toggle(
            target_id, actor_oid, Polarity.positive)

        try:
            actor_doc = await self.repo.sync_membership(
                actor_oid,
                'subscribed_to',
                result.entity['_id'],
                present=result.active,
            )
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_user_subscribe_error: {error}'
            ) from error
        if actor_doc is None:
            raise RuntimeError('user_not_found')

        return UserSubscribeResponse(
            message='Subscribed' if result.active else 'Unsubscribed',
            subscribed=result.active,
            user=UserItem.from_doc(actor_doc),
            channel=UserItem.from_doc(result.entity),
        )

    async def subscriptions(self, actor_id: str) -> SubscriptionsResponse:
        try:
            doc = await self.repo.get_by_id(actor_id)
            if doc is None:
                raise RuntimeError('user_not_found')
            user = UserItem.from_doc(doc)
            users = await self.repo.list_by_ids(user.subscribed_to)
            channels = await self.channels_repo.list_by_ids(
                user.subscribed_channels)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_user_subscriptions_error: {error}'
            ) from error
        return SubscriptionsResponse(
            count=len(users) + len(channels),
            subscriptions=[UserSummary.from_doc(u) for u in users],
            channels=[ChannelItem.from_doc(c) for c in channels],
        )
