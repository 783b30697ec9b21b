from typing import Optional
from fastapi import Depends, Header, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from videotube_api.core.security import decode_access_token
from videotube_api.db.mongo import get_mongo_db
from videotube_api.services.auth_service import AuthService
from videotube_api.services.channels_service import ChannelsService
from videotube_api.services.comments_service import CommentsService
from videotube_api.services.repositories.users_repo import UsersRepo
from videotube_api.services.users_service import UsersService
from videotube_api.services.videos_service import VideosService

BEARER = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def bearer_token(
        authorization: Optional[str] = Header(None)) -> str:
    if not authorization or not authorization.startswith(BEARER):
        raise _unauthorized("not_authorized")
    token = authorization.removeprefix(BEARER).strip()
    if not token:
        raise _unauthorized("not_authorized")
    return token


async def get_db() -> AsyncIOMotorDatabase:
    return await get_mongo_db()


async def get_current_user_id(
    token: str = Depends(bearer_token),
    db=Depends(get_db),
) -> str:
    """Resolve the bearer token to the id of an existing account."""
    user_id = decode_access_token(token)
    if user_id is None:
        raise _unauthorized("token_invalid_or_expired")
    try:
        user = await UsersRepo(db).get_by_id(user_id, {"_id": 1})
    except PyMongoError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="storage_unavailable")
    if user is None:
        raise _unauthorized("user_not_found")
    return str(user["_id"])


async def get_auth_service(db=Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_users_service(db=Depends(get_db)) -> UsersService:
    return UsersService(db)


async def get_channels_service(db=Depends(get_db)) -> ChannelsService:
    return ChannelsService(db)


async def get_comments_service(db=Depends(get_db)) -> CommentsService:
    return CommentsService(db)


async def get_videos_service(
        db=Depends(get_db),
        comments: CommentsService = Depends(get_comments_service),
) -> VideosService:
    return VideosService(db, comments)
