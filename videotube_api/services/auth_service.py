"""Account registration, login and profile editing."""

from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from videotube_api.core.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from videotube_api.models.users import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserItem,
)
from videotube_api.services.repositories.users_repo import UsersRepo

logger = logging.getLogger(__name__)


def _auth_response(doc: dict) -> AuthResponse:
    user_id = str(doc['_id'])
    return AuthResponse(
        token=create_access_token(user_id),
        user=AuthUser(id=user_id,
                      name=doc['name'],
                      email=doc['email'],
                      avatar=doc.get('avatar')),
    )


class AuthService:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.repo = UsersRepo(db)

    async def register(self, data: RegisterRequest) -> AuthResponse:
        email = data.email.strip().lower()
        try:
            if await self.repo.get_by_email(email):
                raise RuntimeError('email_in_use')
            doc = await self.repo.insert(
                name=data.name.strip(),
                email=email,
                password_hash=hash_password(data.password),
            )
        except DuplicateKeyError as error:
            raise RuntimeError('email_in_use') from error
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_create_error: {error}') from error
        logger.info('user_registered', extra={'user_id': str(doc['_id'])})
        return _auth_response(doc)

    async def login(self, data: LoginRequest) -> AuthResponse:
        try:
            doc = await self.repo.get_by_email(data.email.strip().lower())
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_get_error: {error}') from error
        if doc is None or not verify_password(data.password,
                                              doc.get('password_hash')):
            raise RuntimeError('invalid_credentials')
        return _auth_response(doc)

    async def me(self, user_id: str) -> UserItem:
        try:
            doc = await self.repo.get_by_id(user_id)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_get_error: {error}') from error
        if doc is None:
            raise RuntimeError('user_not_found')
        return UserItem.from_doc(doc)

    async def update_profile(
        self,
        user_id: str,
        data: ProfileUpdateRequest,
    ) -> UserItem:
        """Apply only the fields present in the request.

        An explicit ``avatar: null`` clears the avatar; null name or bio is
        ignored.
        """
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == 'avatar'
        }
        try:
            doc = await self.repo.update_profile(user_id, changes)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_user_update_error: {error}'
            ) from error
        if doc is None:
            raise RuntimeError('user_not_found')
        return UserItem.from_doc(doc)
