from http import HTTPStatus
from fastapi import APIRouter, Depends

from videotube_api.api.http_utils import handle_runtime_errors
from videotube_api.dependencies import get_auth_service, get_current_user_id
from videotube_api.models.users import (
    AuthResponse, LoginRequest, ProfileUpdateRequest,
    RegisterRequest, UserResponse,
)
from videotube_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

ERRMAP = {
    "email_in_use": HTTPStatus.BAD_REQUEST,
    "invalid_credentials": HTTPStatus.UNAUTHORIZED,
}


@router.post("/register", response_model=AuthResponse,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors(ERRMAP)
async def register(
    body: RegisterRequest,
    svc: AuthService = Depends(get_auth_service),
):
    return await svc.register(body)


@router.post("/login", response_model=AuthResponse,
             status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def login(
    body: LoginRequest,
    svc: AuthService = Depends(get_auth_service),
):
    return await svc.login(body)


@router.get("/me", response_model=UserResponse, status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_me(
    user_id: str = Depends(get_current_user_id),
    svc: AuthService = Depends(get_auth_service),
):
    return UserResponse(user=await svc.me(user_id))


@router.put("/profile", response_model=UserResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def update_profile(
    body: ProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: AuthService = Depends(get_auth_service),
):
    return UserResponse(user=await svc.update_profile(user_id, body))
