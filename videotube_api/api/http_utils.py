from functools import wraps
from http import HTTPStatus
import logging
from fastapi import HTTPException

logger = logging.getLogger(__name__)

# codes shared by every router
COMMON_ERRORS = {
    "actor_required": HTTPStatus.BAD_REQUEST,
    "reaction_not_supported": HTTPStatus.BAD_REQUEST,
    "user_not_found": HTTPStatus.NOT_FOUND,
}


def _match(message: str, key: str) -> bool:
    return message == key or message.startswith(f"{key}:")


def handle_runtime_errors(mapping: dict[str, HTTPStatus]):
    """
    Turns RuntimeError with a text code into HTTPException.
    Example mapping: {"video_not_found": 404, "not_video_owner": 403}
    Codes match exactly (or as a "code: details" prefix); anything
    unrecognized becomes 500 internal_error.
    """
    errors = {**COMMON_ERRORS, **mapping}

    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except RuntimeError as e:
                msg = str(e)
                for key, status in errors.items():
                    if _match(msg, key):
                        raise HTTPException(status_code=status, detail=key)
                logger.error("unhandled_runtime_error",
                             extra={"err": msg, "handler": fn.__name__})
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail="internal_error")
        return wrapper
    return decorator

