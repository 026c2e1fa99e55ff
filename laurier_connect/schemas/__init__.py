"""Convenience exports for schema layer."""
from .auth import AvatarUploadRequest, LoginRequest, ProfileUpdateRequest, SignUpRequest, UserResponse
from .directory import (
    ConnectionListResponse,
    ConnectionStatusResponse,
    DirectorySearchResponse,
    DirectorySearchResult,
)
from .events import AttendResponse, EventCreate, EventListResponse, EventResponse
from .messages import (
    ChatSummaryResponse,
    DirectThreadResponse,
    GroupChatCreate,
    MessageResponse,
    MessageSendRequest,
    MessageThreadResponse,
    ParticipantSummary,
)
from .posts import (
    AuthorSummary,
    PostCommentCreate,
    PostCommentResponse,
    PostCreate,
    PostFeedResponse,
    PostResponse,
)

__all__ = [
    "AvatarUploadRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "SignUpRequest",
    "UserResponse",
    "ConnectionListResponse",
    "ConnectionStatusResponse",
    "DirectorySearchResponse",
    "DirectorySearchResult",
    "AttendResponse",
    "EventCreate",
    "EventListResponse",
    "EventResponse",
    "ChatSummaryResponse",
    "DirectThreadResponse",
    "GroupChatCreate",
    "MessageResponse",
    "MessageSendRequest",
    "MessageThreadResponse",
    "ParticipantSummary",
    "AuthorSummary",
    "PostCommentCreate",
    "PostCommentResponse",
    "PostCreate",
    "PostFeedResponse",
    "PostResponse",
]
