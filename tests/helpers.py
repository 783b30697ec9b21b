import uuid
from typing import Dict, Tuple
from httpx import AsyncClient


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register(client: AsyncClient,
                   name: str = "user") -> Tuple[str, str]:
    """Register a fresh account; return (user_id, token)."""
    email = f"{name}-{uuid.uuid4().hex[:8]}@example.com"
    r = await client.post("/api/v1/auth/register", json={
        "name": name,
        "email": email,
        "password": "secret123",
        "password_confirm": "secret123",
    })
    assert r.status_code == 201, r.text
    body = r.json()
    return body["user"]["id"], body["token"]


async def upload_video(client: AsyncClient, token: str,
                       **fields) -> dict:
    payload = {"title": "clip", "video_url": "https://cdn.test/v.mp4",
               **fields}
    r = await client.post("/api/v1/videos", json=payload,
                          headers=auth_header(token))
    assert r.status_code == 201, r.text
    return r.json()["video"]


async def post_comment(client: AsyncClient, token: str, video_id: str,
                       text: str = "nice", parent: str = None) -> dict:
    payload = {"text": text, "video_id": video_id}
    if parent:
        payload["parent_comment_id"] = parent
    r = await client.post("/api/v1/comments", json=payload,
                          headers=auth_header(token))
    assert r.status_code == 201, r.text
    return r.json()["comment"]
