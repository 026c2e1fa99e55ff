"""Convenience exports for service layer."""
from .auth_service import USER_ID_HEADER, get_current_user, log_in, sign_up
from .change_stream import EVENTS_CHANNEL, FEED_CHANNEL, ChangeStreamManager, chat_channel, user_channel
from .connection_service import ConnectionGraph
from .container import ServiceContainer, build_services, get_services
from .conversation_service import ChatKind, ConversationStore
from .directory_service import SAMPLE_STUDENTS, SearchField, UserDirectory
from .event_service import EventStore
from .feed_service import FeedStore
from .messaging_service import MessagingService
from .notifier import ChangeEvent, ChangeNotifier

__all__ = [
    "USER_ID_HEADER",
    "get_current_user",
    "log_in",
    "sign_up",
    "EVENTS_CHANNEL",
    "FEED_CHANNEL",
    "ChangeStreamManager",
    "chat_channel",
    "user_channel",
    "ConnectionGraph",
    "ServiceContainer",
    "build_services",
    "get_services",
    "ChatKind",
    "ConversationStore",
    "SAMPLE_STUDENTS",
    "SearchField",
    "UserDirectory",
    "EventStore",
    "FeedStore",
    "MessagingService",
    "ChangeEvent",
    "ChangeNotifier",
]
