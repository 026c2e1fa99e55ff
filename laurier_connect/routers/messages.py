"""Messaging API routes."""
from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query, WebSocket, status

from ..errors import NotFoundError
from ..models import Chat, Message, User
from ..schemas import (
    ChatSummaryResponse,
    DirectThreadResponse,
    GroupChatCreate,
    MessageResponse,
    MessageSendRequest,
    MessageThreadResponse,
    ParticipantSummary,
)
from ..services import ChangeStreamManager, ServiceContainer, chat_channel, get_current_user, get_services

router = APIRouter(prefix="/messages", tags=["messages"])


def _to_message_response(chat_id: str, message: Message) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        chat_id=chat_id,
        sender_id=message.sender_id,
        content=message.content,
        timestamp=message.timestamp,
        is_group_message=message.is_group_message,
        group_id=message.group_id,
    )


def _to_chat_summary(chat: Chat, history: tuple[Message, ...]) -> ChatSummaryResponse:
    last = history[-1] if history else None
    return ChatSummaryResponse(
        id=chat.id,
        is_group=chat.is_group,
        group_name=chat.group_name,
        participants=[ParticipantSummary(id=user.id, full_name=user.full_name) for user in chat.participants],
        message_count=len(history),
        last_message=_to_message_response(chat.id, last) if last else None,
        last_activity=last.timestamp if last else chat.created_at,
    )


@router.get("/chats", response_model=list[ChatSummaryResponse])
async def list_chats_endpoint(
    kind: Literal["direct", "group"] | None = Query(None),
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> list[ChatSummaryResponse]:
    chats = services.conversations.list_chats(current_user.id, kind)
    return [_to_chat_summary(chat, services.conversations.messages(chat.id)) for chat in chats]


@router.get("/direct/{user_id}", response_model=DirectThreadResponse)
async def direct_thread_endpoint(
    user_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> DirectThreadResponse:
    other, chat = services.messaging.direct_thread(current_user, user_id)
    history = services.conversations.messages(chat.id) if chat else ()
    return DirectThreadResponse(
        chat_id=chat.id if chat else None,
        user_id=other.id,
        user_full_name=other.full_name,
        messages=[_to_message_response(chat.id, item) for item in history] if chat else [],
    )


@router.post("/direct/{user_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_direct_message_endpoint(
    user_id: str,
    payload: MessageSendRequest,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> MessageResponse:
    chat, message = services.messaging.message_user(current_user, user_id, payload.content)
    return _to_message_response(chat.id, message)


@router.post("/groups", response_model=ChatSummaryResponse, status_code=status.HTTP_201_CREATED)
async def create_group_endpoint(
    payload: GroupChatCreate,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> ChatSummaryResponse:
    chat = services.messaging.create_group(current_user, payload.members, payload.name)
    return _to_chat_summary(chat, ())


@router.get("/{chat_id}", response_model=MessageThreadResponse)
async def thread_endpoint(
    chat_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> MessageThreadResponse:
    chat = services.messaging.visible_chat(current_user, chat_id)
    history = services.conversations.messages(chat.id)
    return MessageThreadResponse(chat_id=chat.id, messages=[_to_message_response(chat.id, item) for item in history])


@router.post("/{chat_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_to_chat_endpoint(
    chat_id: str,
    payload: MessageSendRequest,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> MessageResponse:
    chat, message = services.messaging.send_to_chat(current_user, chat_id, payload.content)
    return _to_message_response(chat.id, message)


@router.websocket("/ws/{chat_id}")
async def message_thread_socket(
    websocket: WebSocket,
    chat_id: str,
    user_id: str = Query(..., alias="user_id"),
) -> None:
    services: ServiceContainer = websocket.app.state.services
    stream: ChangeStreamManager = websocket.app.state.change_stream
    try:
        chat = services.conversations.get_chat(chat_id)
    except NotFoundError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    if not chat.has_participant(user_id):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await stream.serve(chat_channel(chat.id), websocket)


__all__ = ["router"]
