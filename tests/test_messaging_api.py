"""Integration tests covering connection-gated messaging over HTTP."""
from __future__ import annotations

from typing import Callable, Iterator

import pytest
from fastapi import FastAPI, WebSocketDisconnect
from fastapi.testclient import TestClient

from laurier_connect.config import Settings
from laurier_connect.main import create_app

JOHN, EMMA, MICHAEL = "200578934", "200512345", "200598765"


@pytest.fixture
def app() -> FastAPI:
    return create_app(Settings(SEED_DIRECTORY=True))


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def as_user(client: TestClient) -> Callable[[str], dict[str, str]]:
    def _headers(user_id: str) -> dict[str, str]:
        return {"X-User-Id": user_id}
    return _headers


def test_requests_without_identity_are_rejected(client: TestClient) -> None:
    assert client.get("/messages/chats").status_code == 401
    assert client.get("/messages/chats", headers={"X-User-Id": "ghost"}).status_code == 401


def test_messaging_requires_connection(client: TestClient, as_user) -> None:
    connect = client.post(f"/connections/{EMMA}", headers=as_user(JOHN))
    assert connect.status_code == 201
    assert connect.json()["status"] == "connected"

    blocked = client.post(f"/messages/direct/{MICHAEL}", json={"content": "hey"}, headers=as_user(JOHN))
    assert blocked.status_code == 403
    assert blocked.json()["error"] == "not_connected"

    first = client.post(f"/messages/direct/{EMMA}", json={"content": "hi"}, headers=as_user(JOHN))
    assert first.status_code == 201, first.text
    chat_id = first.json()["chat_id"]

    thread = client.get(f"/messages/direct/{EMMA}", headers=as_user(JOHN))
    assert thread.status_code == 200
    assert thread.json()["chat_id"] == chat_id
    assert [item["content"] for item in thread.json()["messages"]] == ["hi"]

    second = client.post(f"/messages/direct/{EMMA}", json={"content": "there"}, headers=as_user(JOHN))
    assert second.status_code == 201
    assert second.json()["chat_id"] == chat_id

    history = client.get(f"/messages/{chat_id}", headers=as_user(EMMA))
    assert [item["content"] for item in history.json()["messages"]] == ["hi", "there"]

    chats = client.get("/messages/chats", headers=as_user(EMMA)).json()
    assert len(chats) == 1
    assert chats[0]["message_count"] == 2
    assert chats[0]["last_message"]["content"] == "there"


def test_reply_uses_the_same_chat(client: TestClient, as_user) -> None:
    client.post(f"/connections/{EMMA}", headers=as_user(JOHN))
    opened = client.post(f"/messages/direct/{EMMA}", json={"content": "ping"}, headers=as_user(JOHN)).json()
    reply = client.post(f"/messages/direct/{JOHN}", json={"content": "pong"}, headers=as_user(EMMA))
    assert reply.status_code == 201
    assert reply.json()["chat_id"] == opened["chat_id"]


def test_disconnect_blocks_further_messages(client: TestClient, as_user) -> None:
    client.post(f"/connections/{EMMA}", headers=as_user(JOHN))
    sent = client.post(f"/messages/direct/{EMMA}", json={"content": "hi"}, headers=as_user(JOHN)).json()

    removed = client.delete(f"/connections/{EMMA}", headers=as_user(JOHN))
    assert removed.json() == {"user_id": EMMA, "connected": False, "status": "disconnected"}

    assert client.post(f"/messages/{sent['chat_id']}", json={"content": "still there?"}, headers=as_user(JOHN)).status_code == 403
    assert client.get(f"/connections/{JOHN}", headers=as_user(EMMA)).json()["connected"] is False


def test_empty_message_rejected(client: TestClient, as_user) -> None:
    client.post(f"/connections/{EMMA}", headers=as_user(JOHN))
    response = client.post(f"/messages/direct/{EMMA}", json={"content": "   "}, headers=as_user(JOHN))
    assert response.status_code == 400
    assert response.json()["error"] == "empty_content"
    assert client.get("/messages/chats", headers=as_user(JOHN)).json() == []


def test_connection_gate_is_checked_before_content(client: TestClient, as_user) -> None:
    response = client.post(f"/messages/direct/{MICHAEL}", json={"content": "  "}, headers=as_user(JOHN))
    assert response.status_code == 403
    assert response.json()["error"] == "not_connected"


def test_group_chat_flow(client: TestClient, as_user) -> None:
    invalid = client.post("/messages/groups", json={"name": "Solo", "members": []}, headers=as_user(JOHN))
    assert invalid.status_code == 422
    assert invalid.json()["error"] == "invalid_group"

    unnamed = client.post("/messages/groups", json={"name": " ", "members": [EMMA]}, headers=as_user(JOHN))
    assert unnamed.status_code == 422

    pair = client.post("/messages/groups", json={"name": "Pair", "members": [EMMA]}, headers=as_user(JOHN))
    assert pair.status_code == 422
    assert pair.json()["error"] == "invalid_group"
    with_self = client.post("/messages/groups", json={"name": "Pair", "members": [JOHN, EMMA]}, headers=as_user(JOHN))
    assert with_self.status_code == 422
    assert client.get("/messages/chats", headers=as_user(EMMA)).json() == []

    created = client.post("/messages/groups", json={"name": "CP317 Team", "members": [EMMA, MICHAEL]}, headers=as_user(JOHN))
    assert created.status_code == 201, created.text
    group = created.json()
    assert group["is_group"] is True
    assert [member["id"] for member in group["participants"]] == [JOHN, EMMA, MICHAEL]

    sent = client.post(f"/messages/{group['id']}", json={"content": "standup at 10"}, headers=as_user(MICHAEL))
    assert sent.status_code == 201
    assert sent.json()["is_group_message"] is True
    assert sent.json()["group_id"] == group["id"]

    groups = client.get("/messages/chats", params={"kind": "group"}, headers=as_user(EMMA)).json()
    assert [item["group_name"] for item in groups] == ["CP317 Team"]
    assert client.get("/messages/chats", params={"kind": "direct"}, headers=as_user(EMMA)).json() == []


def test_group_with_unknown_member_is_not_found(client: TestClient, as_user) -> None:
    response = client.post("/messages/groups", json={"name": "Ghosts", "members": ["nobody"]}, headers=as_user(JOHN))
    assert response.status_code == 404


def test_outsiders_cannot_read_chats(client: TestClient, as_user) -> None:
    client.post(f"/connections/{EMMA}", headers=as_user(JOHN))
    sent = client.post(f"/messages/direct/{EMMA}", json={"content": "private"}, headers=as_user(JOHN)).json()

    assert client.get(f"/messages/{sent['chat_id']}", headers=as_user(MICHAEL)).status_code == 403
    assert client.get("/messages/unknown-chat", headers=as_user(MICHAEL)).status_code == 404


def test_chat_socket_receives_new_messages(client: TestClient, as_user) -> None:
    client.post(f"/connections/{EMMA}", headers=as_user(JOHN))
    sent = client.post(f"/messages/direct/{EMMA}", json={"content": "first"}, headers=as_user(JOHN)).json()
    chat_id = sent["chat_id"]

    with client.websocket_connect(f"/messages/ws/{chat_id}?user_id={EMMA}") as socket:
        assert socket.receive_json() == {"type": "ready", "channel": f"chat:{chat_id}"}
        client.post(f"/messages/direct/{EMMA}", json={"content": "second"}, headers=as_user(JOHN))
        event = socket.receive_json()
        assert event["type"] == "message.created"
        assert event["chat_id"] == chat_id
        assert event["message"]["content"] == "second"
        socket.send_text("ping")
        assert socket.receive_json() == {"type": "pong", "channel": f"chat:{chat_id}"}


def test_user_socket_hears_connections_and_new_groups(client: TestClient, as_user) -> None:
    with client.websocket_connect(f"/ws/users/{MICHAEL}") as socket:
        assert socket.receive_json() == {"type": "ready", "channel": f"user:{MICHAEL}"}

        client.post(f"/connections/{MICHAEL}", headers=as_user(JOHN))
        connected = socket.receive_json()
        assert connected["type"] == "connection.created"
        assert (connected["user_id"], connected["other_id"]) == (JOHN, MICHAEL)

        created = client.post(
            "/messages/groups", json={"name": "CP317 Team", "members": [EMMA, MICHAEL]}, headers=as_user(JOHN)
        ).json()
        group = socket.receive_json()
        assert group["type"] == "chat.created"
        assert group["chat_id"] == created["id"]
        assert group["group_name"] == "CP317 Team"
        assert group["participant_ids"] == [JOHN, EMMA, MICHAEL]


def test_unknown_user_socket_is_refused(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws/users/nobody") as socket:
            socket.receive_json()
