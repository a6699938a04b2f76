# tests/v1/test_chats.py
"""Tests for chat and message endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from tingling.models import User
from tingling.services import chat_service


def _open(client: TestClient, first: User, second: User) -> dict:
    response = client.post("/api/v1/chats", json={"user1_id": first.id, "user2_id": second.id})
    assert response.status_code == status.HTTP_200_OK
    return response.json()


def test_open_chat_is_idempotent(client: TestClient, test_user: User, other_user: User) -> None:
    chat = _open(client, test_user, other_user)
    same = _open(client, other_user, test_user)

    assert chat["id"] == same["id"]
    assert chat["last_message_id"] is None


def test_open_chat_with_self(client: TestClient, test_user: User) -> None:
    response = client.post("/api/v1/chats", json={"user1_id": test_user.id, "user2_id": test_user.id})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_send_and_read_messages(client: TestClient, db_session, test_user: User, other_user: User) -> None:
    chat = _open(client, test_user, other_user)

    sent = client.post(
        f"/api/v1/chats/{chat['id']}/messages",
        json={"sender_id": test_user.id, "content": "hi"},
    )
    assert sent.status_code == status.HTTP_201_CREATED
    assert sent.json()["message_type"] == "text"

    history = client.get(f"/api/v1/chats/{chat['id']}/messages")
    assert [m["content"] for m in history.json()] == ["hi"]
    assert history.json()[0]["is_deleted"] is False

    chats = client.get(f"/api/v1/users/{other_user.id}/chats").json()
    assert chats[0]["last_message_id"] == sent.json()["id"]

    read = client.post(f"/api/v1/chats/{chat['id']}/read", json={"user_id": other_user.id})
    assert read.json() == {"changed": True}
    participant = chat_service.get_chat_participant(db_session, chat["id"], other_user.id)
    db_session.refresh(participant)
    assert participant.unread_count == 0


def test_message_paging(client: TestClient, test_user: User, other_user: User) -> None:
    chat = _open(client, test_user, other_user)
    for i in range(4):
        client.post(
            f"/api/v1/chats/{chat['id']}/messages",
            json={"sender_id": test_user.id, "content": f"m{i}"},
        )

    page = client.get(f"/api/v1/chats/{chat['id']}/messages", params={"limit": 2, "offset": 1})
    assert [m["content"] for m in page.json()] == ["m1", "m2"]


def test_message_limit_is_bounded(client: TestClient, test_user: User, other_user: User) -> None:
    chat = _open(client, test_user, other_user)
    response = client.get(f"/api/v1/chats/{chat['id']}/messages", params={"limit": 100000})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_send_to_unknown_chat(client: TestClient, test_user: User) -> None:
    response = client.post(
        "/api/v1/chats/4242/messages",
        json={"sender_id": test_user.id, "content": "anyone?"},
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_delete_message_only_by_sender(client: TestClient, test_user: User, other_user: User) -> None:
    chat = _open(client, test_user, other_user)
    message_id = client.post(
        f"/api/v1/chats/{chat['id']}/messages",
        json={"sender_id": test_user.id, "content": "regret"},
    ).json()["id"]

    denied = client.delete(f"/api/v1/messages/{message_id}", params={"user_id": other_user.id})
    assert denied.json() == {"changed": False}

    allowed = client.delete(f"/api/v1/messages/{message_id}", params={"user_id": test_user.id})
    assert allowed.json() == {"changed": True}

    history = client.get(f"/api/v1/chats/{chat['id']}/messages").json()
    assert history[0]["is_deleted"] is True


def test_mark_read_for_non_participant(client: TestClient, test_user: User, other_user: User, third_user: User) -> None:
    chat = _open(client, test_user, other_user)
    response = client.post(f"/api/v1/chats/{chat['id']}/read", json={"user_id": third_user.id})
    assert response.json() == {"changed": False}
