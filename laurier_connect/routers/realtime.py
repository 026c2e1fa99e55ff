"""WebSocket endpoints for the shared change channels."""
from __future__ import annotations

from fastapi import APIRouter, WebSocket, status

from ..services import EVENTS_CHANNEL, FEED_CHANNEL, ChangeStreamManager, ServiceContainer, user_channel

router = APIRouter(prefix="/ws", tags=["realtime"])


def _stream(websocket: WebSocket) -> ChangeStreamManager:
    return websocket.app.state.change_stream


@router.websocket("/feed")
async def feed_socket(websocket: WebSocket) -> None:
    await _stream(websocket).serve(FEED_CHANNEL, websocket)


@router.websocket("/events")
async def events_socket(websocket: WebSocket) -> None:
    await _stream(websocket).serve(EVENTS_CHANNEL, websocket)


@router.websocket("/users/{user_id}")
async def user_socket(websocket: WebSocket, user_id: str) -> None:
    """Connection changes and new chats for one user."""
    services: ServiceContainer = websocket.app.state.services
    if not services.directory.contains(user_id):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await _stream(websocket).serve(user_channel(user_id), websocket)


__all__ = ["router"]
