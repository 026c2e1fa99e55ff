"""Conversation store: chat identity, message append and ordering."""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from typing import Callable, Iterable, Literal, Sequence

from ..errors import EmptyContentError, InvalidGroupError, InvalidInputError, NotFoundError, NotParticipantError
from ..models import Chat, DirectChatKey, Message, User, utcnow
from .notifier import ChangeNotifier

logger = logging.getLogger(__name__)

ChatKind = Literal["direct", "group"]


class ConversationStore:
    """Owns every chat and its message history.

    ``_index_lock`` guards the chat registry and the direct-chat index so that
    lookup-then-create is atomic. Appends to a chat are serialized by that
    chat's own lock; readers get tuple snapshots.
    """

    def __init__(self, *, max_message_length: int = 2000, notifier: ChangeNotifier | None = None) -> None:
        self._index_lock = threading.RLock()
        self._chats: dict[str, Chat] = {}
        self._direct_index: dict[DirectChatKey, str] = {}
        self._chat_locks: dict[str, threading.Lock] = {}
        self._max_message_length = max_message_length
        self._notifier = notifier

    # ------------------------------------------------------------------ lookup

    def get_chat(self, chat_id: str) -> Chat:
        with self._index_lock:
            chat = self._chats.get(chat_id)
        if chat is None:
            raise NotFoundError("Chat not found")
        return chat

    def find_direct_chat(self, user_one: str, user_two: str) -> Chat | None:
        key = DirectChatKey.from_participants(user_one, user_two)
        with self._index_lock:
            chat_id = self._direct_index.get(key)
            return self._chats.get(chat_id) if chat_id else None

    def list_chats(self, user_id: str, kind: ChatKind | None = None) -> list[Chat]:
        """Chats ``user_id`` takes part in, most recently active first."""
        with self._index_lock:
            chats = [chat for chat in self._chats.values() if chat.has_participant(user_id)]
        if kind == "direct":
            chats = [chat for chat in chats if not chat.is_group]
        elif kind == "group":
            chats = [chat for chat in chats if chat.is_group]
        return sorted(chats, key=lambda chat: chat.last_activity, reverse=True)

    def messages(self, chat_id: str) -> tuple[Message, ...]:
        chat = self.get_chat(chat_id)
        with self._lock_for(chat.id):
            return tuple(chat.messages)

    # ---------------------------------------------------------------- creation

    def create_or_append(self, with_user: User, current_user: User, message: Message | None = None) -> Chat:
        """Return the 1:1 chat between the two users, creating it on first use.

        When ``message`` is given it is appended to the chat (or seeds a new one).
        """
        if with_user.id == current_user.id:
            raise InvalidInputError("Cannot start a chat with yourself")
        key = DirectChatKey.from_participants(current_user.id, with_user.id)
        created = False
        with self._index_lock:
            chat_id = self._direct_index.get(key)
            chat = self._chats.get(chat_id) if chat_id else None
            if chat is None:
                chat = self._register(Chat(id=str(uuid.uuid4()), participants=(current_user, with_user)))
                self._direct_index[key] = chat.id
                created = True

        if created:
            logger.info("Created direct chat %s between %s and %s", chat.id, current_user.id, with_user.id)
            self._publish("chat.created", chat_id=chat.id, is_group=False, participant_ids=list(chat.participant_ids))
        if message is not None:
            self.append(chat, message)
        return chat

    def create_group(self, creator: User, participants: Iterable[User], name: str | None) -> Chat:
        group_name = (name or "").strip()
        if not group_name:
            raise InvalidGroupError("Group name is required")

        selected: list[User] = []
        for user in participants:
            if user.id != creator.id and user not in selected:
                selected.append(user)
        if len(selected) < 2:
            raise InvalidGroupError("Select at least two other participants for a group")
        members = [creator, *selected]

        with self._index_lock:
            chat = self._register(
                Chat(id=str(uuid.uuid4()), participants=tuple(members), is_group=True, group_name=group_name)
            )
        logger.info("Created group chat %s (%d members)", chat.id, len(members))
        self._publish(
            "chat.created",
            chat_id=chat.id,
            is_group=True,
            group_name=group_name,
            participant_ids=list(chat.participant_ids),
        )
        return chat

    def _register(self, chat: Chat) -> Chat:
        self._chats[chat.id] = chat
        self._chat_locks[chat.id] = threading.Lock()
        return chat

    # ----------------------------------------------------------------- sending

    def send(self, chat: Chat | str, sender: User, content: str | None) -> Message:
        target = self.get_chat(chat if isinstance(chat, str) else chat.id)
        text = self.validate_content(content)
        if not target.has_participant(sender.id):
            raise NotParticipantError()
        message = Message(
            id=str(uuid.uuid4()),
            sender_id=sender.id,
            content=text,
            timestamp=utcnow(),
            is_group_message=target.is_group,
            group_id=target.id if target.is_group else None,
        )
        return self.append(target, message)

    def validate_content(self, content: str | None) -> str:
        text = (content or "").strip()
        if not text:
            raise EmptyContentError("Message must not be empty")
        if len(text) > self._max_message_length:
            raise InvalidInputError(f"Message exceeds {self._max_message_length} characters")
        return text

    def append(self, chat: Chat, message: Message) -> Message:
        with self._lock_for(chat.id):
            if chat.messages and message.timestamp < chat.messages[-1].timestamp:
                message = replace(message, timestamp=chat.messages[-1].timestamp)
            chat.messages.append(message)
            count = len(chat.messages)
        self._publish("message.created", chat_id=chat.id, message=message, count=count)
        return message

    def _lock_for(self, chat_id: str) -> threading.Lock:
        with self._index_lock:
            return self._chat_locks[chat_id]

    def _publish(self, type_: str, **payload: object) -> None:
        if self._notifier is not None:
            self._notifier.publish("chats", type_, **payload)


def participants_from_ids(directory_get: Callable[[str], User], user_ids: Sequence[str]) -> list[User]:
    """Resolve ids through ``directory_get`` keeping first-seen order."""
    seen: list[str] = []
    for raw in user_ids:
        user_id = (raw or "").strip()
        if user_id and user_id not in seen:
            seen.append(user_id)
    return [directory_get(user_id) for user_id in seen]


__all__ = ["ChatKind", "ConversationStore", "participants_from_ids"]
