from http import HTTPStatus
from fastapi import APIRouter, Depends

from videotube_api.api.http_utils import handle_runtime_errors
from videotube_api.dependencies import (
    get_channels_service, get_current_user_id,
)
from videotube_api.models.channels import (
    ChannelCreateRequest, ChannelDetailResponse, ChannelResponse,
    ChannelSubscribeResponse, ChannelUpdateRequest,
)
from videotube_api.services.channels_service import ChannelsService

router = APIRouter(prefix="/api/v1/channels", tags=["channels"])

ERRMAP = {
    "channel_not_found": HTTPStatus.NOT_FOUND,
    "not_channel_owner": HTTPStatus.FORBIDDEN,
    "channel_exists": HTTPStatus.BAD_REQUEST,
    "channel_name_taken": HTTPStatus.BAD_REQUEST,
    "cannot_subscribe_to_self": HTTPStatus.BAD_REQUEST,
}


@router.post("", response_model=ChannelResponse,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors(ERRMAP)
async def create_channel(
    body: ChannelCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: ChannelsService = Depends(get_channels_service),
):
    return ChannelResponse(channel=await svc.create(user_id, body))


@router.get("/user/{user_id}", response_model=ChannelDetailResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_user_channel(
    user_id: str,
    svc: ChannelsService = Depends(get_channels_service),
):
    return await svc.get_by_user(user_id)


@router.get("/{channel_id}", response_model=ChannelDetailResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_channel(
    channel_id: str,
    svc: ChannelsService = Depends(get_channels_service),
):
    return await svc.get(channel_id)


@router.put("/{channel_id}", response_model=ChannelResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def update_channel(
    channel_id: str,
    body: ChannelUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: ChannelsService = Depends(get_channels_service),
):
    return ChannelResponse(
        channel=await svc.update(user_id, channel_id, body))


@router.put("/{channel_id}/subscribe",
            response_model=ChannelSubscribeResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def subscribe_channel(
    channel_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: ChannelsService = Depends(get_channels_service),
):
    return await svc.subscribe(user_id, channel_id)
