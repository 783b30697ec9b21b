from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from videotube_api.models.common import counter, str_id, str_ids, UserSummary


class CommentCreateRequest(BaseModel):
    text: str = Field(min_length=1, max_length=500)
    video_id: str
    parent_comment_id: Optional[str] = None


class CommentUpdateRequest(BaseModel):
    text: str = Field(min_length=1, max_length=500)


class CommentItem(BaseModel):
    id: str
    text: str
    author_id: Optional[str] = None
    author: Optional[UserSummary] = None
    video_id: Optional[str] = None
    likes: int = 0
    liked_by: List[str] = []
    replies: List[str] = []
    parent_comment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(
        cls,
        doc: dict,
        author: Optional[UserSummary] = None,
    ) -> "CommentItem":
        return cls(
            id=str(doc['_id']),
            text=doc.get('text', ''),
            author_id=str_id(doc.get('author_id')),
            author=author,
            video_id=str_id(doc.get('video_id')),
            likes=counter(doc.get('likes')),
            liked_by=str_ids(doc.get('liked_by')),
            replies=str_ids(doc.get('replies')),
            parent_comment_id=str_id(doc.get('parent_comment_id')),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
        )


class CommentThreadItem(CommentItem):
    reply_comments: List[CommentItem] = []


class CommentResponse(BaseModel):
    success: bool = True
    comment: CommentItem


class CommentListResponse(BaseModel):
    success: bool = True
    count: int
    comments: List[CommentThreadItem]
