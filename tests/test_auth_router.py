from app.core.identity import Identity, Role
from app.core.security import decode_access_token

REGISTER = {
    "company_name": "Hooli",
    "email": "talent@hooli.example.com",
    "password": "password123",
    "industry": "Software",
    "location": "Palo Alto",
    "website": "https://hooli.example.com",
}


def test_company_register_returns_token(client):
    resp = client.post("/auth/register", json=REGISTER)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Company registered successfully"
    assert body["token_type"] == "bearer"
    assert body["company"]["company_name"] == "Hooli"
    assert "password" not in body["company"] and "password_hash" not in body["company"]
    assert decode_access_token(body["access_token"]) == Identity(Role.COMPANY, body["company"]["id"])


def test_company_register_duplicate_email(client):
    assert client.post("/auth/register", json=REGISTER).status_code == 201
    resp = client.post("/auth/register", json={**REGISTER, "email": "TALENT@hooli.example.com"})
    assert resp.status_code == 400
    assert "already exists" in resp.json()["message"]


def test_company_register_short_password(client):
    resp = client.post("/auth/register", json={**REGISTER, "password": "short"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"


def test_company_login(client, company):
    resp = client.post("/auth/login", json={"email": "hr@acme.example.com", "password": "password123"})
    assert resp.status_code == 200
    assert resp.json()["company"]["id"] == company.id

    bad = client.post("/auth/login", json={"email": "hr@acme.example.com", "password": "nope-nope"})
    assert bad.status_code == 401
    assert bad.json() == {"message": "Invalid email or password"}


def test_update_company_profile(client, company, company_headers, other_company):
    resp = client.put("/auth/company", json={"location": "Munich", "password": "ignored"}, headers=company_headers)
    assert resp.status_code == 200
    assert resp.json()["location"] == "Munich"

    taken = client.put("/auth/company", json={"email": "jobs@globex.example.com"}, headers=company_headers)
    assert taken.status_code == 400
    assert taken.json()["message"] == "Email already in use"


def test_company_routes_reject_users(client, user_headers):
    resp = client.put("/auth/company", json={"location": "x"}, headers=user_headers)
    assert resp.status_code == 403
    assert resp.json() == {"message": "Access denied. Not a company account."}


def test_delete_company_closes_jobs_and_invalidates_token(client, company_headers, job):
    resp = client.delete("/auth/company", headers=company_headers)
    assert resp.status_code == 200
    assert client.get(f"/jobs/{job.id}").json()["status"] == "closed"

    again = client.delete("/auth/company", headers=company_headers)
    assert again.status_code == 401
    assert again.json() == {"message": "Invalid token"}


def test_missing_and_garbage_credentials(client):
    assert client.put("/auth/company", json={}).json() == {"message": "Authentication required"}
    resp = client.put("/auth/company", json={}, headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}
