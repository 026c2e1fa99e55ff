"""Business logic for campus events."""
from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone

from ..errors import InvalidInputError, InvalidRangeError, NotFoundError
from ..models import Event, User
from .notifier import ChangeNotifier

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class EventStore:
    """Scheduled events kept in creation order."""

    def __init__(self, *, notifier: ChangeNotifier | None = None) -> None:
        self._lock = threading.RLock()
        self._events: list[Event] = []
        self._notifier = notifier

    def create_event(
        self,
        *,
        creator: User,
        title: str,
        location: str,
        start_time: datetime,
        end_time: datetime,
        description: str = "",
    ) -> Event:
        """Build an event for ``creator`` (its first attendee) and add it."""
        event = Event(
            id=str(uuid.uuid4()),
            title=(title or "").strip(),
            description=(description or "").strip(),
            location=(location or "").strip(),
            start_time=_as_utc(start_time),
            end_time=_as_utc(end_time),
            creator_id=creator.id,
            attendees=[creator],
        )
        return self.add_event(event)

    def add_event(self, event: Event) -> Event:
        if not event.title:
            raise InvalidInputError("Event title is required")
        if not event.location:
            raise InvalidInputError("Event location is required")
        # Naive datetimes are UTC.
        event.start_time = _as_utc(event.start_time)
        event.end_time = _as_utc(event.end_time)
        if event.end_time <= event.start_time:
            raise InvalidRangeError()
        with self._lock:
            self._events.append(event)
        logger.info("Event %s scheduled by %s", event.id, event.creator_id)
        self._publish("event.created", event_id=event.id, title=event.title, start_time=event.start_time)
        return event

    def get_event(self, event_id: str) -> Event:
        with self._lock:
            for event in self._events:
                if event.id == event_id:
                    return event
        raise NotFoundError("Event not found")

    def list_events(self) -> list[Event]:
        with self._lock:
            return list(self._events)

    def attend_event(self, event_id: str, user: User) -> bool:
        """Add ``user`` to the attendees; False when they were already attending."""
        with self._lock:
            event = self.get_event(event_id)
            if event.is_attending(user.id):
                return False
            event.attendees.append(user)
        self._publish("event.attendee_added", event_id=event_id, user_id=user.id)
        return True

    def _publish(self, type_: str, **payload: object) -> None:
        if self._notifier is not None:
            self._notifier.publish("events", type_, **payload)


__all__ = ["EventStore"]
