"""Domain model exports."""
from .chat import Chat, DirectChatKey, Message
from .event import Event
from .post import Comment, Post
from .user import User, utcnow

__all__ = [
    "Chat",
    "Comment",
    "DirectChatKey",
    "Event",
    "Message",
    "Post",
    "User",
    "utcnow",
]
