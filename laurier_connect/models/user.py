"""Directory user record."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class User:
    """A student known to the directory.

    Identity is the ``id`` alone: two records with the same id are the same
    user even when their profile fields differ.
    """

    id: str
    full_name: str
    email: str
    major: str
    avatar: bytes | None = None
    connections: set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=utcnow)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def is_connected_to(self, user_id: str) -> bool:
        return user_id in self.connections


__all__ = ["User", "utcnow"]
