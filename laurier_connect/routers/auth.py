"""Account routes: signup, login and the caller's own profile."""
from __future__ import annotations

import base64
import binascii

from fastapi import APIRouter, Depends, status

from ..errors import InvalidInputError
from ..models import User
from ..schemas import AvatarUploadRequest, LoginRequest, ProfileUpdateRequest, SignUpRequest, UserResponse
from ..services import ServiceContainer, get_current_user, get_services, log_in, sign_up

router = APIRouter(prefix="/auth", tags=["auth"])


def to_user_response(user: User, *, include_avatar: bool = False) -> UserResponse:
    avatar = user.avatar
    return UserResponse(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        major=user.major,
        has_avatar=avatar is not None,
        avatar_base64=base64.b64encode(avatar).decode("ascii") if include_avatar and avatar else None,
        connection_count=len(user.connections),
        created_at=user.created_at,
    )


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup_endpoint(
    payload: SignUpRequest,
    services: ServiceContainer = Depends(get_services),
) -> UserResponse:
    user = sign_up(services.directory, email=payload.email, full_name=payload.full_name, major=payload.major)
    return to_user_response(user)


@router.post("/login", response_model=UserResponse)
async def login_endpoint(
    payload: LoginRequest,
    services: ServiceContainer = Depends(get_services),
) -> UserResponse:
    user = log_in(services.directory, email=payload.email)
    return to_user_response(user)


@router.get("/me", response_model=UserResponse)
async def me_endpoint(current_user: User = Depends(get_current_user)) -> UserResponse:
    return to_user_response(current_user, include_avatar=True)


@router.patch("/me", response_model=UserResponse)
async def update_me_endpoint(
    payload: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> UserResponse:
    user = services.directory.update_profile(current_user.id, full_name=payload.full_name, major=payload.major)
    return to_user_response(user, include_avatar=True)


@router.put("/me/avatar", response_model=UserResponse)
async def upload_avatar_endpoint(
    payload: AvatarUploadRequest,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> UserResponse:
    try:
        blob = base64.b64decode(payload.image_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError("Avatar must be base64 encoded") from exc
    user = services.directory.update_avatar(current_user.id, blob)
    return to_user_response(user, include_avatar=True)


__all__ = ["router", "to_user_response"]
