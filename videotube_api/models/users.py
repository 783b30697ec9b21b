from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, Field, model_validator

from videotube_api.models.channels import ChannelItem
from videotube_api.models.common import counter, str_id, str_ids, UserSummary

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# bcrypt only hashes the first 72 bytes and rejects longer input
PASSWORD_MAX_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError("password_too_long")
    return value


Password = Annotated[str, AfterValidator(_check_password_bytes)]


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=254)
    password: Password = Field(min_length=6)
    password_confirm: str

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.password_confirm:
            raise ValueError("passwords_do_not_match")
        return self


class LoginRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN, max_length=254)
    password: Password = Field(min_length=1)


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar: Optional[str] = None


class UserItem(BaseModel):
    """Public view of an account; never carries the password hash."""

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    bio: str = ""
    subscribers: int = 0
    subscribed_to: List[str] = []
    subscribed_channels: List[str] = []
    videos: List[str] = []
    liked_videos: List[str] = []
    channel_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "UserItem":
        return cls(
            id=str(doc['_id']),
            name=doc.get('name', ''),
            email=doc.get('email', ''),
            avatar=doc.get('avatar'),
            bio=doc.get('bio') or '',
            subscribers=counter(doc.get('subscribers')),
            subscribed_to=str_ids(doc.get('subscribed_to')),
            subscribed_channels=str_ids(doc.get('subscribed_channels')),
            videos=str_ids(doc.get('videos')),
            liked_videos=str_ids(doc.get('liked_videos')),
            channel_id=str_id(doc.get('channel_id')),
            created_at=doc.get('created_at'),
        )


class AuthUser(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: AuthUser


class UserResponse(BaseModel):
    success: bool = True
    user: UserItem


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    users: List[UserItem]


class UserSubscribeResponse(BaseModel):
    success: bool = True
    message: str
    subscribed: bool
    user: UserItem
    channel: UserItem


class SubscriptionsResponse(BaseModel):
    success: bool = True
    count: int
    subscriptions: List[UserSummary]
    channels: List[ChannelItem]
