"""Schemas used by messaging endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class MessageSendRequest(BaseModel):
    content: str = Field(..., description="Message text; surrounding whitespace is trimmed")


class MessageResponse(BaseModel):
    id: str
    chat_id: str
    sender_id: str
    content: str
    timestamp: datetime
    is_group_message: bool = False
    group_id: str | None = None


class ParticipantSummary(BaseModel):
    id: str
    full_name: str


class ChatSummaryResponse(BaseModel):
    id: str
    is_group: bool
    group_name: str | None = None
    participants: List[ParticipantSummary]
    message_count: int
    last_message: MessageResponse | None = None
    last_activity: datetime


class MessageThreadResponse(BaseModel):
    chat_id: str
    messages: List[MessageResponse]


class DirectThreadResponse(BaseModel):
    chat_id: str | None
    user_id: str
    user_full_name: str
    messages: List[MessageResponse]


class GroupChatCreate(BaseModel):
    name: str = Field(..., max_length=60)
    members: List[str] = Field(default_factory=list, description="User ids to add next to the creator")


__all__ = [
    "MessageSendRequest",
    "MessageResponse",
    "ParticipantSummary",
    "ChatSummaryResponse",
    "MessageThreadResponse",
    "DirectThreadResponse",
    "GroupChatCreate",
]
