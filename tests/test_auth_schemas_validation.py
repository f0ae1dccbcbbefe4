import pytest
from pydantic import ValidationError

from app.schemas.application import ApplyRequest
from app.schemas.auth import CompanyRegister, CompanyUpdate
from app.schemas.user import EducationEntry, ExperienceEntry, UserProfileUpdate, UserRegister


def test_register_password_min_length():
    with pytest.raises(ValidationError):
        UserRegister(first_name="A", last_name="B", email="u@example.com", password="short")
    with pytest.raises(ValidationError):
        CompanyRegister(
            company_name="C", email="c@example.com", password="short", industry="I", location="L"
        )


def test_register_rejects_blank_names_and_bad_email():
    with pytest.raises(ValidationError):
        UserRegister(first_name="  ", last_name="B", email="u@example.com", password="longenough1")
    with pytest.raises(ValidationError):
        UserRegister(first_name="A", last_name="B", email="not-an-email", password="longenough1")


def test_profile_updates_split_skills_and_ignore_unknown_fields():
    update = UserProfileUpdate.model_validate({"skills": "Go, Rust", "password": "sneaky1234"})
    assert update.model_dump(exclude_unset=True) == {"skills": ["Go", "Rust"]}
    assert CompanyUpdate.model_validate({"password": "x"}).model_dump(exclude_unset=True) == {}


def test_experience_and_education_periods():
    ExperienceEntry(title="Dev", company="X", from_date="2020-01-01", current=True)
    with pytest.raises(ValidationError):
        ExperienceEntry(title="Dev", company="X", from_date="2020-01-01", to_date="2021-01-01", current=True)
    with pytest.raises(ValidationError):
        EducationEntry(school="S", degree="D", field_of_study="F", from_date="2020-01-01", to_date="2019-01-01")


def test_apply_request_requires_job_id():
    with pytest.raises(ValidationError):
        ApplyRequest(job_id="   ")
