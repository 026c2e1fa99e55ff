"""Business logic for the campus feed."""
from __future__ import annotations

import logging
import threading
import uuid

from ..errors import EmptyContentError, NotFoundError
from ..models import Comment, Post, User, utcnow
from .notifier import ChangeNotifier

logger = logging.getLogger(__name__)


def _require_text(content: str | None, what: str) -> str:
    text = (content or "").strip()
    if not text:
        raise EmptyContentError(f"{what} must not be empty")
    return text


class FeedStore:
    """Posts newest-first, each with an oldest-first comment thread."""

    def __init__(self, *, notifier: ChangeNotifier | None = None) -> None:
        self._lock = threading.RLock()
        self._posts: list[Post] = []
        self._notifier = notifier

    def add_post(self, content: str | None, author: User) -> Post:
        post = Post(id=str(uuid.uuid4()), author=author, content=_require_text(content, "Post"), timestamp=utcnow())
        with self._lock:
            self._posts.insert(0, post)
        logger.info("User %s published post %s", author.id, post.id)
        self._publish("post.created", post_id=post.id, author_id=author.id, content=post.content)
        return post

    def add_comment(self, post_id: str, content: str | None, author: User) -> Comment:
        text = _require_text(content, "Comment")
        with self._lock:
            post = self._find(post_id)
            comment = Comment(id=str(uuid.uuid4()), author=author, content=text, timestamp=utcnow())
            post.comments.append(comment)
            count = len(post.comments)
        self._publish(
            "comment.created", post_id=post_id, comment_id=comment.id, author_id=author.id, content=text, comment_count=count
        )
        return comment

    def get_post(self, post_id: str) -> Post:
        with self._lock:
            return self._find(post_id)

    def list_posts(self) -> list[Post]:
        with self._lock:
            return list(self._posts)

    def comments(self, post_id: str) -> tuple[Comment, ...]:
        with self._lock:
            return tuple(self._find(post_id).comments)

    def _find(self, post_id: str) -> Post:
        for post in self._posts:
            if post.id == post_id:
                return post
        raise NotFoundError("Post not found")

    def _publish(self, type_: str, **payload: object) -> None:
        if self._notifier is not None:
            self._notifier.publish("feed", type_, **payload)


__all__ = ["FeedStore"]
