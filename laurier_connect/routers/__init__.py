"""Aggregate router exports."""
from .auth import router as auth_router
from .connections import router as connections_router
from .directory import router as directory_router
from .events import router as events_router
from .messages import router as messages_router
from .posts import router as posts_router
from .realtime import router as realtime_router

__all__ = [
    "auth_router",
    "connections_router",
    "directory_router",
    "events_router",
    "messages_router",
    "posts_router",
    "realtime_router",
]
