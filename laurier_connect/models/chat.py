"""Conversation domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple

from .user import User, utcnow


@dataclass(frozen=True, slots=True)
class DirectChatKey:
    """Canonical lookup key of a 1:1 chat: the sorted participant-id pair."""

    user_a: str
    user_b: str

    @classmethod
    def from_participants(cls, user_one: str, user_two: str) -> "DirectChatKey":
        ordered = tuple(sorted((str(user_one), str(user_two))))
        return cls(user_a=ordered[0], user_b=ordered[1])

    def participants(self) -> Tuple[str, str]:
        return (self.user_a, self.user_b)


@dataclass(frozen=True, slots=True)
class Message:
    id: str
    sender_id: str
    content: str
    timestamp: datetime
    is_group_message: bool = False
    group_id: str | None = None


@dataclass(eq=False)
class Chat:
    """A conversation with a fixed participant list and append-only history."""

    id: str
    participants: Tuple[User, ...]
    is_group: bool = False
    group_name: str | None = None
    messages: list[Message] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chat):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def participant_ids(self) -> Tuple[str, ...]:
        return tuple(user.id for user in self.participants)

    def has_participant(self, user_id: str) -> bool:
        return user_id in self.participant_ids

    @property
    def last_activity(self) -> datetime:
        if self.messages:
            return self.messages[-1].timestamp
        return self.created_at

    def other_participant(self, user_id: str) -> User | None:
        """Return the counterpart in a 1:1 chat."""
        if self.is_group:
            return None
        for user in self.participants:
            if user.id != user_id:
                return user
        return None


__all__ = ["DirectChatKey", "Message", "Chat"]
