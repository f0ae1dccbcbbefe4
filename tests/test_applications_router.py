import pytest


@pytest.fixture
def applied(client, job, user_headers):
    resp = client.post("/applications/apply", json={"job_id": job.id, "cover_letter": "Pick me"}, headers=user_headers)
    assert resp.status_code == 201
    return resp.json()


def test_apply_response(applied, job):
    assert applied["message"] == "Application submitted successfully"
    assert applied["application"]["status"] == "pending"
    assert applied["application"]["job_id"] == job.id
    assert applied["chat_id"]


def test_apply_twice_conflict(client, applied, job, user_headers):
    resp = client.post("/applications/apply", json={"job_id": job.id}, headers=user_headers)
    assert resp.status_code == 409
    assert resp.json() == {"message": "You have already applied for this job"}


def test_apply_requires_user_and_job_id(client, job, company_headers, user_headers):
    assert client.post("/applications/apply", json={"job_id": job.id}, headers=company_headers).status_code == 403
    resp = client.post("/applications/apply", json={}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["missing"] == ["job_id"]


def test_apply_to_closed_job(client, make_job, user_headers):
    closed = make_job(status="closed")
    resp = client.post("/applications/apply", json={"job_id": closed.id}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["job_status"] == "closed"


def test_user_applications_listing(client, applied, user_headers):
    body = client.get("/applications/user/applications", headers=user_headers).json()
    assert body["total"] == 1
    item = body["items"][0]
    assert item["job"]["title"] == "Backend Engineer"
    assert item["job"]["company"]["company_name"] == "Acme Corp"


def test_job_applications_listing(client, applied, job, company_headers, other_company_headers):
    body = client.get(f"/applications/job/{job.id}", headers=company_headers).json()
    assert body["items"][0]["applicant"]["first_name"] == "Ada"
    assert "password_hash" not in body["items"][0]["applicant"]
    assert client.get(f"/applications/job/{job.id}", headers=other_company_headers).status_code == 403


def test_get_application_detail(client, applied, company_headers, user_headers, other_user_headers):
    app_id = applied["application"]["id"]
    detail = client.get(f"/applications/{app_id}", headers=company_headers).json()
    assert detail["job"]["title"] == "Backend Engineer"
    assert detail["applicant"]["experience"] == []
    assert client.get(f"/applications/{app_id}", headers=user_headers).status_code == 200
    assert client.get(f"/applications/{app_id}", headers=other_user_headers).status_code == 403


def test_update_status(client, applied, company_headers, other_company_headers):
    app_id = applied["application"]["id"]
    resp = client.put(f"/applications/{app_id}/status", json={"status": "reviewed"}, headers=company_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "reviewed"

    bad = client.put(f"/applications/{app_id}/status", json={"status": "hired"}, headers=company_headers)
    assert bad.status_code == 400
    assert "accepted" in bad.json()["allowed_values"]

    other = client.put(f"/applications/{app_id}/status", json={"status": "accepted"}, headers=other_company_headers)
    assert other.status_code == 403


def test_withdraw(client, applied, user_headers, other_user_headers):
    app_id = applied["application"]["id"]
    assert client.delete(f"/applications/withdraw/{app_id}", headers=other_user_headers).status_code == 404
    resp = client.delete(f"/applications/withdraw/{app_id}", headers=user_headers)
    assert resp.status_code == 200
    assert client.get(f"/applications/{app_id}", headers=user_headers).status_code == 404


def test_stats_endpoints(client, applied, job, company_headers):
    company = client.get("/applications/stats/company", headers=company_headers).json()
    assert company["total"] == 1
    assert company["by_status"]["pending"] == 1

    per_job = client.get(f"/applications/stats/job/{job.id}", headers=company_headers).json()
    assert per_job["job_id"] == job.id
    assert per_job["total"] == 1
