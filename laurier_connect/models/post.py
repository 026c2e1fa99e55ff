"""Feed domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .user import User


@dataclass(frozen=True, slots=True)
class Comment:
    id: str
    author: User
    content: str
    timestamp: datetime


@dataclass(eq=False)
class Post:
    id: str
    author: User
    content: str
    timestamp: datetime
    comments: list[Comment] = field(default_factory=list)


__all__ = ["Comment", "Post"]
