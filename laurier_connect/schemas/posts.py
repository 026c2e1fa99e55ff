"""Pydantic schemas for feed resources."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Payload used by API clients when publishing a post."""

    content: str = Field(..., max_length=1000)


class PostCommentCreate(BaseModel):
    content: str = Field(..., max_length=500)


class AuthorSummary(BaseModel):
    id: str
    full_name: str
    major: str


class PostCommentResponse(BaseModel):
    id: str
    post_id: str
    author: AuthorSummary
    content: str
    timestamp: datetime


class PostResponse(BaseModel):
    id: str
    author: AuthorSummary
    content: str
    timestamp: datetime
    comment_count: int = 0
    comments: list[PostCommentResponse] = Field(default_factory=list)


class PostFeedResponse(BaseModel):
    """Envelope used when returning the feed, newest post first."""

    items: list[PostResponse]


__all__ = [
    "PostCreate",
    "PostCommentCreate",
    "AuthorSummary",
    "PostCommentResponse",
    "PostResponse",
    "PostFeedResponse",
]
