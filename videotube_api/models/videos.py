from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from videotube_api.models.comments import CommentThreadItem
from videotube_api.models.common import (
    counter,
    parse_duration,
    str_id,
    str_ids,
    UserSummary,
)


class VideoStatus(str, Enum):
    published = "published"
    draft = "draft"
    unlisted = "unlisted"
    private = "private"


class VideoCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    video_url: str = Field(min_length=1)
    description: str = Field(default="", max_length=2000)
    thumbnail: Optional[str] = None
    duration: int = Field(default=0, ge=0)
    tags: List[str] = []
    category: str = "Other"
    status: VideoStatus = VideoStatus.published


class VideoUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    video_url: Optional[str] = Field(default=None, min_length=1)
    thumbnail: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None
    category: Optional[str] = None
    status: Optional[VideoStatus] = None


class VideoItem(BaseModel):
    id: str
    title: str
    description: str = ""
    owner_id: Optional[str] = None
    channel_id: Optional[str] = None
    video_url: str
    thumbnail: Optional[str] = None
    duration: int = 0
    views: int = 0
    likes: int = 0
    dislikes: int = 0
    liked_by: List[str] = []
    disliked_by: List[str] = []
    comments: List[str] = []
    status: str = VideoStatus.published.value
    tags: List[str] = []
    category: str = "Other"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "VideoItem":
        tags = doc.get('tags')
        return cls(
            id=str(doc['_id']),
            title=doc.get('title', ''),
            description=doc.get('description') or '',
            owner_id=str_id(doc.get('owner_id')),
            channel_id=str_id(doc.get('channel_id')),
            video_url=doc.get('video_url', ''),
            thumbnail=doc.get('thumbnail'),
            duration=parse_duration(doc.get('duration')),
            views=counter(doc.get('views')),
            likes=counter(doc.get('likes')),
            dislikes=counter(doc.get('dislikes')),
            liked_by=str_ids(doc.get('liked_by')),
            disliked_by=str_ids(doc.get('disliked_by')),
            comments=str_ids(doc.get('comments')),
            status=doc.get('status') or VideoStatus.published.value,
            tags=[str(t) for t in tags] if isinstance(tags, list) else [],
            category=doc.get('category') or 'Other',
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
        )


class VideoResponse(BaseModel):
    success: bool = True
    video: VideoItem


class VideoDetailResponse(BaseModel):
    success: bool = True
    video: VideoItem
    owner: Optional[UserSummary] = None
    comments: List[CommentThreadItem] = []


class VideoListResponse(BaseModel):
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    videos: List[VideoItem]


class UserVideosResponse(BaseModel):
    success: bool = True
    count: int
    videos: List[VideoItem]
