from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, EmailStr, field_validator, model_validator

from app.schemas.auth import check_password_length
from app.schemas.common import NonBlank, to_list


class UserRegister(BaseModel):
    first_name: NonBlank
    last_name: NonBlank
    email: EmailStr
    password: str
    location: str | None = None
    bio: str | None = None
    skills: list[str] = []

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        return check_password_length(v)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any):
        return to_list(v, ",") or []


class UserProfileUpdate(BaseModel):
    first_name: NonBlank | None = None
    last_name: NonBlank | None = None
    email: EmailStr | None = None
    location: str | None = None
    bio: str | None = None
    skills: list[str] | None = None
    resume: str | None = None
    profile_image: str | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any):
        return to_list(v, ",")


class _Period(BaseModel):
    from_date: date
    to_date: date | None = None
    current: bool = False

    @model_validator(mode="after")
    def period_is_ordered(self):
        if self.to_date is not None and self.to_date < self.from_date:
            raise ValueError("to_date cannot be before from_date")
        if self.current and self.to_date is not None:
            raise ValueError("A current entry cannot have a to_date")
        return self


class ExperienceEntry(_Period):
    title: NonBlank
    company: NonBlank
    description: str | None = None


class EducationEntry(_Period):
    school: NonBlank
    degree: NonBlank
    field_of_study: NonBlank


class UserSummary(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    location: str | None = None
    bio: str | None = None
    skills: list[str] = []
    profile_image: str | None = None

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    resume: str | None = None
    created_at: datetime | None = None


class UserToken(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
