from http import HTTPStatus
import pytest
from videotube_api.api.http_utils import handle_runtime_errors
from fastapi import HTTPException


async def test_handle_runtime_errors_maps_known_message():
    @handle_runtime_errors({"boom": HTTPStatus.BAD_REQUEST})
    async def fn():
        raise RuntimeError("boom")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == HTTPStatus.BAD_REQUEST
    assert e.value.detail == "boom"


async def test_handle_runtime_errors_matches_code_with_details():
    @handle_runtime_errors({"boom": HTTPStatus.BAD_REQUEST})
    async def fn():
        raise RuntimeError("boom: extra context")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.detail == "boom"


async def test_handle_runtime_errors_does_not_match_substrings():
    @handle_runtime_errors({
        "comment_not_found": HTTPStatus.NOT_FOUND,
        "parent_comment_not_found": HTTPStatus.UNPROCESSABLE_ENTITY,
    })
    async def fn():
        raise RuntimeError("parent_comment_not_found")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


async def test_handle_runtime_errors_includes_common_codes():
    @handle_runtime_errors({})
    async def fn():
        raise RuntimeError("reaction_not_supported")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == HTTPStatus.BAD_REQUEST


async def test_handle_runtime_errors_maps_unknown_to_500():
    @handle_runtime_errors({"known": HTTPStatus.BAD_REQUEST})
    async def fn():
        raise RuntimeError("mongo_video_get_error: timeout")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert e.value.detail == "internal_error"


async def test_handle_runtime_errors_happy_path_returns_value():
    @handle_runtime_errors({"x": HTTPStatus.BAD_REQUEST})
    async def ok():
        return "ok"
    assert await ok() == "ok"
