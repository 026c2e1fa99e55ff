"""Pydantic schemas for account endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class SignUpRequest(BaseModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=120)
    major: str = Field(..., min_length=1, max_length=120)


class LoginRequest(BaseModel):
    email: EmailStr


class ProfileUpdateRequest(BaseModel):
    full_name: str | None = Field(default=None, max_length=120)
    major: str | None = Field(default=None, max_length=120)


class AvatarUploadRequest(BaseModel):
    image_base64: str = Field(..., min_length=1, description="Base64 encoded image bytes")


class UserResponse(BaseModel):
    id: str
    full_name: str
    email: str
    major: str
    has_avatar: bool = False
    avatar_base64: str | None = None
    connection_count: int = 0
    created_at: datetime


__all__ = [
    "SignUpRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "AvatarUploadRequest",
    "UserResponse",
]
