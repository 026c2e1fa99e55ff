"""Campus event model."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .user import User


@dataclass(eq=False)
class Event:
    id: str
    title: str
    description: str
    location: str
    start_time: datetime
    end_time: datetime
    creator_id: str
    attendees: list[User] = field(default_factory=list)

    def is_attending(self, user_id: str) -> bool:
        return any(attendee.id == user_id for attendee in self.attendees)


__all__ = ["Event"]
