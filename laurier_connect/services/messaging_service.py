"""Connection-gated messaging on top of the conversation store."""
from __future__ import annotations

import logging
import uuid
from typing import Sequence

from ..errors import NotParticipantError
from ..models import Chat, Message, User, utcnow
from .connection_service import ConnectionGraph
from .conversation_service import ConversationStore, participants_from_ids
from .directory_service import UserDirectory

logger = logging.getLogger(__name__)


class MessagingService:
    """Call boundary used by the API: checks connections before touching chats."""

    def __init__(self, directory: UserDirectory, graph: ConnectionGraph, conversations: ConversationStore) -> None:
        self._directory = directory
        self._graph = graph
        self._conversations = conversations

    def message_user(self, sender: User, recipient_id: str, content: str | None) -> tuple[Chat, Message]:
        """Send a direct message, creating the 1:1 chat on first contact."""
        recipient = self._graph.require_connection(sender.id, recipient_id)
        text = self._conversations.validate_content(content)
        message = Message(id=str(uuid.uuid4()), sender_id=sender.id, content=text, timestamp=utcnow())
        chat = self._conversations.create_or_append(recipient, sender)
        return chat, self._conversations.append(chat, message)

    def direct_thread(self, viewer: User, other_id: str) -> tuple[User, Chat | None]:
        other = self._graph.require_connection(viewer.id, other_id)
        return other, self._conversations.find_direct_chat(viewer.id, other.id)

    def open_direct_chat(self, viewer: User, other_id: str) -> Chat:
        other = self._graph.require_connection(viewer.id, other_id)
        return self._conversations.create_or_append(other, viewer)

    def send_to_chat(self, sender: User, chat_id: str, content: str | None) -> tuple[Chat, Message]:
        chat = self.visible_chat(sender, chat_id)
        if not chat.is_group:
            counterpart = chat.other_participant(sender.id)
            if counterpart is not None:
                self._graph.require_connection(sender.id, counterpart.id)
        message = self._conversations.send(chat, sender, content)
        return chat, message

    def create_group(self, creator: User, member_ids: Sequence[str], name: str | None) -> Chat:
        members = participants_from_ids(self._directory.get, member_ids)
        return self._conversations.create_group(creator, members, name)

    def visible_chat(self, viewer: User, chat_id: str) -> Chat:
        chat = self._conversations.get_chat(chat_id)
        if not chat.has_participant(viewer.id):
            raise NotParticipantError()
        return chat


__all__ = ["MessagingService"]
