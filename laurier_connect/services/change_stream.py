"""Push store change events to WebSocket subscribers.

The stream subscribes to the :class:`ChangeNotifier` topics and routes each
event to one or more channels: ``chat:<id>`` for chat traffic, ``user:<id>``
for connection changes and new chats a user was added to, plus the shared
``feed`` and ``events`` channels.
"""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import asdict, is_dataclass
from typing import Any, Callable

from fastapi import WebSocket, WebSocketDisconnect

from .notifier import ChangeEvent, ChangeNotifier

logger = logging.getLogger(__name__)

FEED_CHANNEL = "feed"
EVENTS_CHANNEL = "events"


def chat_channel(chat_id: str) -> str:
    return f"chat:{chat_id}"


def user_channel(user_id: str) -> str:
    return f"user:{user_id}"


def _chat_routes(event: ChangeEvent) -> list[str]:
    channels = [chat_channel(event.payload["chat_id"])]
    if event.type == "chat.created":
        channels.extend(user_channel(user_id) for user_id in event.payload.get("participant_ids", ()))
    return channels


def _connection_routes(event: ChangeEvent) -> list[str]:
    return [user_channel(event.payload["user_id"]), user_channel(event.payload["other_id"])]


ROUTES: dict[str, Callable[[ChangeEvent], list[str]]] = {
    "chats": _chat_routes,
    "connections": _connection_routes,
    "feed": lambda event: [FEED_CHANNEL],
    "events": lambda event: [EVENTS_CHANNEL],
}


def _jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return str(value)


def encode_change(event: ChangeEvent) -> str:
    """Render a change as the JSON frame sent to sockets."""
    frame = {"type": event.type, "topic": event.topic, "version": event.version, **event.payload}
    return json.dumps(frame, default=_jsonable)


class ChangeStreamManager:
    """Fan notifier events out to the WebSockets joined to each channel.

    Channel membership only changes on the event loop that serves the sockets.
    Notifier callbacks may fire on that loop (async endpoints) or on a worker
    thread, so delivery is always scheduled onto the loop rather than awaited.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, set[WebSocket]] = {}
        self._loop: asyncio.AbstractEventLoop | None = None
        self._pending: set[asyncio.Task[None]] = set()
        self._detach: list[Callable[[], None]] = []

    def attach(self, notifier: ChangeNotifier) -> None:
        for topic in ROUTES:
            self._detach.append(notifier.subscribe(topic, self.forward))

    def detach(self) -> None:
        while self._detach:
            self._detach.pop()()

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers.get(channel, ()))

    async def serve(self, channel: str, websocket: WebSocket) -> None:
        """Accept ``websocket`` on ``channel`` and answer pings until it closes."""
        await websocket.accept()
        self._loop = asyncio.get_running_loop()
        self._subscribers.setdefault(channel, set()).add(websocket)
        logger.info("Socket joined %s (%d listening)", channel, self.subscriber_count(channel))
        try:
            await websocket.send_json({"type": "ready", "channel": channel})
            while True:
                text = await websocket.receive_text()
                if text.strip().lower() == "ping":
                    await websocket.send_json({"type": "pong", "channel": channel})
        except WebSocketDisconnect:
            pass
        finally:
            self._leave(channel, websocket)
            logger.info("Socket left %s", channel)

    def forward(self, event: ChangeEvent) -> None:
        """Notifier observer: schedule ``event`` for every listening channel."""
        route = ROUTES.get(event.topic)
        if route is None:
            return
        channels = [channel for channel in route(event) if self._subscribers.get(channel)]
        if not channels:
            return
        frame = encode_change(event)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            task = loop.create_task(self._deliver(channels, frame))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        elif self._loop is not None and not self._loop.is_closed():
            asyncio.run_coroutine_threadsafe(self._deliver(channels, frame), self._loop)
        else:
            logger.debug("No event loop for %s; dropped %s", channels, event.type)

    async def _deliver(self, channels: list[str], frame: str) -> None:
        for channel in channels:
            for websocket in list(self._subscribers.get(channel, ())):
                try:
                    await websocket.send_text(frame)
                except Exception:
                    logger.warning("Send on %s failed; dropping socket", channel, exc_info=True)
                    self._leave(channel, websocket)

    def _leave(self, channel: str, websocket: WebSocket) -> None:
        members = self._subscribers.get(channel)
        if members is None:
            return
        members.discard(websocket)
        if not members:
            del self._subscribers[channel]


__all__ = [
    "EVENTS_CHANNEL",
    "FEED_CHANNEL",
    "ROUTES",
    "ChangeStreamManager",
    "chat_channel",
    "encode_change",
    "user_channel",
]
