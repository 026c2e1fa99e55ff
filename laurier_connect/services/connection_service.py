"""Business logic for connections between students."""
from __future__ import annotations

import logging
import threading

from ..errors import InvalidInputError, NotConnectedError
from ..models import User
from .directory_service import UserDirectory
from .notifier import ChangeNotifier

logger = logging.getLogger(__name__)


class ConnectionGraph:
    """Tracks who is connected to whom.

    Connections are stored on each user's ``connections`` set. In symmetric
    mode both directions are written under the same lock, so no reader can
    see a half-applied edge.
    """

    def __init__(
        self,
        directory: UserDirectory,
        *,
        symmetric: bool = True,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._directory = directory
        self._symmetric = symmetric
        self._notifier = notifier
        self._lock = threading.RLock()

    @property
    def symmetric(self) -> bool:
        return self._symmetric

    def _pair(self, self_id: str, other_id: str) -> tuple[User, User]:
        if self_id == other_id:
            raise InvalidInputError("Cannot connect with yourself")
        return self._directory.get(self_id), self._directory.get(other_id)

    def connect(self, self_id: str, other_id: str) -> bool:
        """Connect ``self_id`` to ``other_id``; returns False when already connected."""
        user, other = self._pair(self_id, other_id)
        with self._lock:
            changed = other.id not in user.connections
            user.connections.add(other.id)
            if self._symmetric:
                changed = changed or user.id not in other.connections
                other.connections.add(user.id)
        if changed:
            logger.info("User %s connected to %s", self_id, other_id)
            self._publish("connection.created", user_id=self_id, other_id=other_id)
        return changed

    def disconnect(self, self_id: str, other_id: str) -> bool:
        user, other = self._pair(self_id, other_id)
        with self._lock:
            changed = other.id in user.connections
            user.connections.discard(other.id)
            if self._symmetric:
                changed = changed or user.id in other.connections
                other.connections.discard(user.id)
        if changed:
            logger.info("User %s disconnected from %s", self_id, other_id)
            self._publish("connection.removed", user_id=self_id, other_id=other_id)
        return changed

    def is_connected(self, self_id: str, other_id: str) -> bool:
        user = self._directory.get(self_id)
        with self._lock:
            return other_id in user.connections

    def list_connections(self, user_id: str) -> list[User]:
        user = self._directory.get(user_id)
        with self._lock:
            connected = set(user.connections)
        return [candidate for candidate in self._directory.all() if candidate.id in connected]

    def require_connection(self, self_id: str, other_id: str) -> User:
        """Return the other user, or raise when ``self_id`` may not message them."""
        other = self._directory.get(other_id)
        if not self.is_connected(self_id, other_id):
            logger.warning("Blocked message from %s to unconnected user %s", self_id, other_id)
            raise NotConnectedError()
        return other

    def _publish(self, type_: str, **payload: object) -> None:
        if self._notifier is not None:
            self._notifier.publish("connections", type_, **payload)


__all__ = ["ConnectionGraph"]
