"""Schemas for directory search and connection listings."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from .auth import UserResponse


class DirectorySearchResult(BaseModel):
    id: str
    full_name: str
    email: str
    major: str
    status: Literal["self", "connected", "available"]


class DirectorySearchResponse(BaseModel):
    query: str
    field: str
    results: list[DirectorySearchResult]


class ConnectionStatusResponse(BaseModel):
    user_id: str
    connected: bool
    status: Literal["connected", "disconnected", "noop"] | None = None


class ConnectionListResponse(BaseModel):
    connections: list[UserResponse]


__all__ = [
    "DirectorySearchResult",
    "DirectorySearchResponse",
    "ConnectionStatusResponse",
    "ConnectionListResponse",
]
