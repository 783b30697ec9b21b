from http import HTTPStatus
from fastapi import APIRouter, Depends

from videotube_api.api.http_utils import handle_runtime_errors
from videotube_api.dependencies import (
    get_comments_service, get_current_user_id,
)
from videotube_api.models.comments import (
    CommentCreateRequest, CommentListResponse,
    CommentResponse, CommentUpdateRequest,
)
from videotube_api.models.common import MessageResponse
from videotube_api.services.comments_service import CommentsService

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])

ERRMAP = {
    "video_not_found": HTTPStatus.NOT_FOUND,
    "comment_not_found": HTTPStatus.NOT_FOUND,
    "parent_comment_not_found": HTTPStatus.NOT_FOUND,
    "not_comment_author": HTTPStatus.FORBIDDEN,
}


@router.get("/video/{video_id}", response_model=CommentListResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def list_comments(
    video_id: str,
    svc: CommentsService = Depends(get_comments_service),
):
    return await svc.list_for_video(video_id)


@router.post("", response_model=CommentResponse,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors(ERRMAP)
async def create_comment(
    body: CommentCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CommentsService = Depends(get_comments_service),
):
    return CommentResponse(comment=await svc.create(user_id, body))


@router.put("/{comment_id}", response_model=CommentResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def update_comment(
    comment_id: str,
    body: CommentUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CommentsService = Depends(get_comments_service),
):
    return CommentResponse(
        comment=await svc.update(user_id, comment_id, body.text))


@router.delete("/{comment_id}", response_model=MessageResponse,
               status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def delete_comment(
    comment_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CommentsService = Depends(get_comments_service),
):
    await svc.delete(user_id, comment_id)
    return MessageResponse(message="Comment deleted successfully")


@router.put("/{comment_id}/like", response_model=CommentResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def like_comment(
    comment_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CommentsService = Depends(get_comments_service),
):
    return CommentResponse(comment=await svc.like(user_id, comment_id))
