from http import HTTPStatus
from typing import Optional
from fastapi import APIRouter, Depends, Query

from videotube_api.api.http_utils import handle_runtime_errors
from videotube_api.dependencies import get_current_user_id, get_videos_service
from videotube_api.models.common import MessageResponse
from videotube_api.models.videos import (
    UserVideosResponse, VideoCreateRequest, VideoDetailResponse,
    VideoListResponse, VideoResponse, VideoUpdateRequest,
)
from videotube_api.services.reactions import Polarity
from videotube_api.services.videos_service import VideosService

router = APIRouter(prefix="/api/v1/videos", tags=["videos"])

ERRMAP = {
    "video_not_found": HTTPStatus.NOT_FOUND,
    "not_video_owner": HTTPStatus.FORBIDDEN,
}


@router.get("", response_model=VideoListResponse, status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def list_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    category: Optional[str] = Query(None, max_length=50),
    svc: VideosService = Depends(get_videos_service),
):
    return await svc.list_videos(page=page, limit=limit,
                                 search=search, category=category)


@router.get("/user/{user_id}", response_model=UserVideosResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def list_user_videos(
    user_id: str,
    svc: VideosService = Depends(get_videos_service),
):
    return await svc.list_by_user(user_id)


@router.put("/{video_id}/like", response_model=VideoResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def like_video(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: VideosService = Depends(get_videos_service),
):
    return VideoResponse(
        video=await svc.react(user_id, video_id, Polarity.positive))


@router.put("/{video_id}/dislike", response_model=VideoResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def dislike_video(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: VideosService = Depends(get_videos_service),
):
    return VideoResponse(
        video=await svc.react(user_id, video_id, Polarity.negative))


@router.get("/{video_id}", response_model=VideoDetailResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_video(
    video_id: str,
    svc: VideosService = Depends(get_videos_service),
):
    return await svc.get_video(video_id)


@router.post("", response_model=VideoResponse,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors(ERRMAP)
async def create_video(
    body: VideoCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: VideosService = Depends(get_videos_service),
):
    return VideoResponse(video=await svc.create_video(user_id, body))


@router.put("/{video_id}", response_model=VideoResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def update_video(
    video_id: str,
    body: VideoUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: VideosService = Depends(get_videos_service),
):
    return VideoResponse(
        video=await svc.update_video(user_id, video_id, body))


@router.delete("/{video_id}", response_model=MessageResponse,
               status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def delete_video(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: VideosService = Depends(get_videos_service),
):
    await svc.delete_video(user_id, video_id)
    return MessageResponse(message="Video deleted successfully")
