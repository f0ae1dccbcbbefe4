"""End-to-end flows through the HTTP API."""

from app.repos import application_repo


def _register_company(client) -> dict:
    resp = client.post(
        "/auth/register",
        json={
            "company_name": "Initech",
            "email": "jobs@initech.example.com",
            "password": "password123",
            "industry": "Software",
            "location": "Austin",
        },
    )
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def _register_user(client, email="peter@example.com") -> dict:
    resp = client.post(
        "/users/register",
        json={"first_name": "Peter", "last_name": "Gibbons", "email": email, "password": "password123"},
    )
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def _post_job(client, headers) -> str:
    resp = client.post(
        "/jobs",
        json={
            "title": "Backend Engineer",
            "location": "Austin",
            "description": "TPS report automation",
            "requirements": ["Python"],
            "type": "full-time",
            "skills": ["Python"],
            "experience": "Mid",
            "education": "Any",
        },
        headers=headers,
    )
    assert resp.status_code == 201
    return resp.json()["id"]


def test_hiring_flow(client):
    company = _register_company(client)
    job_id = _post_job(client, company)
    user = _register_user(client)

    applied = client.post("/applications/apply", json={"job_id": job_id}, headers=user)
    assert applied.status_code == 201
    app_id = applied.json()["application"]["id"]
    assert applied.json()["application"]["status"] == "pending"

    chat = client.get(f"/chats/{applied.json()['chat_id']}", headers=user).json()
    assert len(chat["messages"]) == 1
    assert chat["messages"][0]["sender_id"] == chat["company_id"]

    moved = client.put(f"/applications/{app_id}/status", json={"status": "interviewing"}, headers=company)
    assert moved.status_code == 200
    assert client.get(f"/applications/{app_id}", headers=user).json()["status"] == "interviewing"

    withdraw = client.delete(f"/applications/withdraw/{app_id}", headers=user)
    assert withdraw.status_code == 400
    assert withdraw.json()["current_status"] == "interviewing"


def test_closing_a_job_stops_new_applications(client):
    company = _register_company(client)
    job_id = _post_job(client, company)
    user = _register_user(client)

    client.put(f"/jobs/{job_id}", json={"status": "closed"}, headers=company)
    assert client.get("/jobs").json()["total"] == 0
    resp = client.post("/applications/apply", json={"job_id": job_id}, headers=user)
    assert resp.status_code == 400
    assert resp.json()["message"] == "This job posting is no longer active"


def test_racing_double_apply_yields_one_conflict(client, monkeypatch):
    company = _register_company(client)
    job_id = _post_job(client, company)
    user = _register_user(client)
    # Both requests pass the duplicate pre-check, as two racing requests would; the unique constraint decides.
    monkeypatch.setattr(application_repo, "get_for_job_and_user", lambda db, job_id, user_id: None)

    codes = [
        client.post("/applications/apply", json={"job_id": job_id}, headers=user).status_code
        for _ in range(2)
    ]

    assert codes == [201, 409]
    listing = client.get("/applications/user/applications", headers=user).json()
    assert listing["total"] == 1
    assert len(client.get("/chats", headers=user).json()) == 1
