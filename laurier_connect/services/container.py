"""Wiring of the service objects owned by one application instance."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from ..config import Settings
from .connection_service import ConnectionGraph
from .conversation_service import ConversationStore
from .directory_service import UserDirectory
from .event_service import EventStore
from .feed_service import FeedStore
from .messaging_service import MessagingService
from .notifier import ChangeNotifier

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    notifier: ChangeNotifier
    directory: UserDirectory
    connections: ConnectionGraph
    conversations: ConversationStore
    messaging: MessagingService
    feed: FeedStore
    events: EventStore


def build_services(settings: Settings) -> ServiceContainer:
    notifier = ChangeNotifier()
    directory = UserDirectory(email_suffix=settings.email_suffix, notifier=notifier)
    connections = ConnectionGraph(directory, symmetric=settings.symmetric_connections, notifier=notifier)
    conversations = ConversationStore(max_message_length=settings.max_message_length, notifier=notifier)
    container = ServiceContainer(
        notifier=notifier,
        directory=directory,
        connections=connections,
        conversations=conversations,
        messaging=MessagingService(directory, connections, conversations),
        feed=FeedStore(notifier=notifier),
        events=EventStore(notifier=notifier),
    )
    if settings.seed_directory:
        seeded = directory.seed()
        logger.info("Seeded directory with %d sample students", len(seeded))
    return container


def get_services(request: Request) -> ServiceContainer:
    """FastAPI dependency returning the container attached to the running app."""
    return request.app.state.services


__all__ = ["ServiceContainer", "build_services", "get_services"]
