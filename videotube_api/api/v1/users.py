from http import HTTPStatus
from fastapi import APIRouter, Depends, Query

from videotube_api.api.http_utils import handle_runtime_errors
from videotube_api.dependencies import get_current_user_id, get_users_service
from videotube_api.models.users import (
    SubscriptionsResponse, UserListResponse,
    UserResponse, UserSubscribeResponse,
)
from videotube_api.services.users_service import UsersService

router = APIRouter(prefix="/api/v1/users", tags=["users"])

ERRMAP = {
    "cannot_subscribe_to_self": HTTPStatus.BAD_REQUEST,
}


@router.get("/search", response_model=UserListResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def search_users(
    query: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(10, ge=1, le=50),
    svc: UsersService = Depends(get_users_service),
):
    return await svc.search(query, limit)


# declared before "/{user_id}" so it is not captured as an id
@router.get("/subscriptions", response_model=SubscriptionsResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_subscriptions(
    user_id: str = Depends(get_current_user_id),
    svc: UsersService = Depends(get_users_service),
):
    return await svc.subscriptions(user_id)


@router.get("/{user_id}", response_model=UserResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_user_profile(
    user_id: str,
    svc: UsersService = Depends(get_users_service),
):
    return UserResponse(user=await svc.get_profile(user_id))


@router.put("/{user_id}/subscribe", response_model=UserSubscribeResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def subscribe_user(
    user_id: str,
    actor_id: str = Depends(get_current_user_id),
    svc: UsersService = Depends(get_users_service),
):
    return await svc.subscribe(actor_id=actor_id, target_id=user_id)
