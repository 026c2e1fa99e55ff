"""In-process change notifications for store mutations."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """Describes one mutation of a store."""

    topic: str
    type: str
    version: int
    payload: dict[str, Any] = field(default_factory=dict)


Observer = Callable[[ChangeEvent], None]


class ChangeNotifier:
    """Observer registry with a version counter per topic.

    Presentation layers can either subscribe to a topic (``"chats"``,
    ``"feed"``, ``"events"``, ``"connections"``, ``"directory"``) or poll
    :meth:`version` and refresh when it moves.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._versions: dict[str, int] = {}
        self._observers: dict[str, list[Observer]] = {}

    def subscribe(self, topic: str, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` for ``topic`` and return an unsubscribe callable."""
        with self._lock:
            self._observers.setdefault(topic, []).append(observer)

        def _unsubscribe() -> None:
            with self._lock:
                observers = self._observers.get(topic)
                if observers and observer in observers:
                    observers.remove(observer)

        return _unsubscribe

    def version(self, topic: str) -> int:
        with self._lock:
            return self._versions.get(topic, 0)

    def publish(self, topic: str, type_: str, **payload: Any) -> ChangeEvent:
        with self._lock:
            version = self._versions.get(topic, 0) + 1
            self._versions[topic] = version
            targets = list(self._observers.get(topic, ()))
        event = ChangeEvent(topic=topic, type=type_, version=version, payload=payload)
        for observer in targets:
            try:
                observer(event)
            except Exception:
                logger.exception("Observer for %s failed on %s", topic, type_)
        return event


__all__ = ["ChangeEvent", "ChangeNotifier", "Observer"]
