import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.identity import Identity, Role
from app.core.rate_limiter import rate_limiter
from app.core.security import create_access_token
from app.database import Base, _engine_kwargs, get_db
from app.main import app
from app.models import Application, Chat, ChatMessage, Company, Job, User  # noqa: F401
from app.repos import company_repo, user_repo
from app.services import job_service


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", poolclass=StaticPool, **_engine_kwargs("sqlite://"))
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def _db_override():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    rate_limiter.reset()
    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()
    rate_limiter.reset()


@pytest.fixture
def company(db):
    return company_repo.create(
        db,
        company_name="Acme Corp",
        email="hr@acme.example.com",
        password="password123",
        industry="Software",
        location="Berlin",
    )


@pytest.fixture
def other_company(db):
    return company_repo.create(
        db,
        company_name="Globex",
        email="jobs@globex.example.com",
        password="password123",
        industry="Energy",
        location="Springfield",
    )


@pytest.fixture
def user(db):
    return user_repo.create(
        db,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password="password123",
        skills=["Python", "SQL"],
    )


@pytest.fixture
def other_user(db):
    return user_repo.create(
        db,
        first_name="Grace",
        last_name="Hopper",
        email="grace@example.com",
        password="password123",
    )


@pytest.fixture
def company_actor(company) -> Identity:
    return Identity(role=Role.COMPANY, id=company.id)


@pytest.fixture
def user_actor(user) -> Identity:
    return Identity(role=Role.USER, id=user.id)


def _auth(account_id: str, role: Role) -> dict:
    return {"Authorization": f"Bearer {create_access_token(account_id, role)}"}


@pytest.fixture
def company_headers(company) -> dict:
    return _auth(company.id, Role.COMPANY)


@pytest.fixture
def other_company_headers(other_company) -> dict:
    return _auth(other_company.id, Role.COMPANY)


@pytest.fixture
def user_headers(user) -> dict:
    return _auth(user.id, Role.USER)


@pytest.fixture
def other_user_headers(other_user) -> dict:
    return _auth(other_user.id, Role.USER)


@pytest.fixture
def job_payload() -> dict:
    return {
        "title": "Backend Engineer",
        "location": "Remote, EU",
        "description": "Build and run our APIs.",
        "requirements": "3+ years Python\nSQL experience",
        "type": "Full-Time",
        "skills": "Python, FastAPI, PostgreSQL",
        "experience": "Mid-level",
        "education": "Bachelor's degree",
        "salary": {"min": 60000, "max": 80000, "currency": "EUR"},
    }


@pytest.fixture
def make_job(db, company_actor, job_payload):
    def _make(actor: Identity | None = None, **overrides):
        return job_service.create_job(db, actor or company_actor, {**job_payload, **overrides})

    return _make


@pytest.fixture
def job(make_job):
    return make_job()
