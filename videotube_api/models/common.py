from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel


def str_id(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def str_ids(value: Any) -> List[str]:
    """Stringify an id array; a non-list legacy value reads as empty."""
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def parse_duration(value: Any) -> int:
    """Duration in seconds, accepting legacy "MM:SS" strings.

    Anything unparseable reads as 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    if isinstance(value, str):
        parts = value.strip().split(':')
        if len(parts) == 1:
            return int(parts[0]) if parts[0].isdigit() else 0
        if len(parts) == 2:
            minutes, seconds = (int(p) if p.isdigit() else 0 for p in parts)
            return minutes * 60 + seconds
    return 0


def counter(value: Any) -> int:
    return value if isinstance(value, int) and value > 0 else 0


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class UserSummary(BaseModel):
    id: str
    name: str
    avatar: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "UserSummary":
        return cls(id=str(doc['_id']),
                   name=doc.get('name', ''),
                   avatar=doc.get('avatar'))
