from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from videotube_api.models.common import counter, str_id, str_ids, UserSummary
from videotube_api.models.videos import VideoItem


class ChannelCreateRequest(BaseModel):
    channel_name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)


class ChannelUpdateRequest(BaseModel):
    channel_name: Optional[str] = Field(default=None, min_length=1,
                                        max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    channel_banner: Optional[str] = None
    channel_avatar: Optional[str] = None


class ChannelItem(BaseModel):
    id: str
    channel_name: str
    owner_id: Optional[str] = None
    description: str = ""
    channel_banner: Optional[str] = None
    channel_avatar: Optional[str] = None
    subscribers: int = 0
    subscribed_by: List[str] = []
    videos: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "ChannelItem":
        return cls(
            id=str(doc['_id']),
            channel_name=doc.get('channel_name', ''),
            owner_id=str_id(doc.get('owner_id')),
            description=doc.get('description') or '',
            channel_banner=doc.get('channel_banner'),
            channel_avatar=doc.get('channel_avatar'),
            subscribers=counter(doc.get('subscribers')),
            subscribed_by=str_ids(doc.get('subscribed_by')),
            videos=str_ids(doc.get('videos')),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
        )


class ChannelResponse(BaseModel):
    success: bool = True
    channel: ChannelItem


class ChannelDetailResponse(BaseModel):
    success: bool = True
    channel: ChannelItem
    owner: Optional[UserSummary] = None
    # newest first
    videos: List[VideoItem] = []


class ChannelSubscribeResponse(BaseModel):
    success: bool = True
    subscribed: bool
    channel: ChannelItem
