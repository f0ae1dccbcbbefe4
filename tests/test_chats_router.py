import pytest


@pytest.fixture
def chat_id(client, job, user_headers):
    resp = client.post("/applications/apply", json={"job_id": job.id}, headers=user_headers)
    return resp.json()["chat_id"]


def test_list_and_get_chat(client, chat_id, user_headers, company_headers):
    chats = client.get("/chats", headers=user_headers).json()
    assert [c["id"] for c in chats] == [chat_id]
    assert chats[0]["unread_count"] == 1
    assert chats[0]["last_message"]["is_from_company"] is True

    detail = client.get(f"/chats/{chat_id}", headers=company_headers)
    assert detail.status_code == 200
    assert len(detail.json()["messages"]) == 1


def test_send_message_and_mark_read(client, chat_id, user_headers, company_headers):
    sent = client.post(f"/chats/{chat_id}/messages", json={"content": "Thanks!"}, headers=user_headers)
    assert sent.status_code == 201
    assert [m["content"] for m in sent.json()["messages"]][-1] == "Thanks!"

    read = client.put(f"/chats/{chat_id}/read", headers=company_headers)
    assert read.status_code == 200
    assert read.json() == {"message": "Messages marked as read", "updated": 1}

    company_chats = client.get("/chats", headers=company_headers).json()
    assert company_chats[0]["unread_count"] == 0


def test_blank_message_rejected(client, chat_id, user_headers):
    resp = client.post(f"/chats/{chat_id}/messages", json={"content": "   "}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Message content is required"}


def test_outsiders_cannot_read(client, chat_id, other_user_headers, other_company_headers):
    assert client.get(f"/chats/{chat_id}", headers=other_user_headers).status_code == 403
    assert client.put(f"/chats/{chat_id}/read", headers=other_company_headers).status_code == 403
    assert client.get("/chats/missing", headers=other_user_headers).status_code == 404


def test_ensure_chat_endpoint_returns_existing(client, chat_id, user_headers):
    app_id = client.get("/applications/user/applications", headers=user_headers).json()["items"][0]["id"]
    resp = client.post(f"/chats/application/{app_id}", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == chat_id
