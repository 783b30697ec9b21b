import pytest
from bson import ObjectId
from fastapi import HTTPException

from tests.helpers import auth_header, register
from videotube_api.core.security import create_access_token
from videotube_api.dependencies import bearer_token, get_current_user_id


def test_bearer_token_missing_header_returns_401():
    with pytest.raises(HTTPException) as e:
        bearer_token(None)
    assert e.value.status_code == 401


def test_bearer_token_wrong_scheme_returns_401():
    with pytest.raises(HTTPException) as e:
        bearer_token("Basic abc")
    assert e.value.status_code == 401


def test_bearer_token_extracts_token():
    assert bearer_token("Bearer abc.def") == "abc.def"


async def test_current_user_rejects_garbage_token(db):
    with pytest.raises(HTTPException) as e:
        await get_current_user_id("not-a-jwt", db)
    assert e.value.status_code == 401
    assert e.value.detail == "token_invalid_or_expired"


async def test_current_user_rejects_unknown_account(db):
    token = create_access_token(str(ObjectId()))
    with pytest.raises(HTTPException) as e:
        await get_current_user_id(token, db)
    assert e.value.detail == "user_not_found"


async def test_missing_token_on_protected_endpoint_returns_401(client):
    r = await client.put(f"/api/v1/videos/{ObjectId()}/like")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "not_authorized"}


async def test_expired_token_returns_401(client):
    user_id, _ = await register(client)
    token = create_access_token(user_id, expires_minutes=-1)
    r = await client.get("/api/v1/auth/me", headers=auth_header(token))
    assert r.status_code == 401
