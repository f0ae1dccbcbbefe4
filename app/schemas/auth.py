from datetime import datetime

from pydantic import BaseModel, EmailStr, field_validator

from app.schemas.common import NonBlank


def check_password_length(v: str) -> str:
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class CompanyRegister(BaseModel):
    company_name: NonBlank
    email: EmailStr
    password: str
    industry: NonBlank
    location: NonBlank
    description: str | None = None
    website: str | None = None
    logo: str | None = None

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        return check_password_length(v)


class CompanyUpdate(BaseModel):
    """Profile fields a company may change. Password changes are not accepted here."""

    company_name: NonBlank | None = None
    email: EmailStr | None = None
    industry: NonBlank | None = None
    location: NonBlank | None = None
    description: str | None = None
    website: str | None = None
    logo: str | None = None


class CompanyResponse(BaseModel):
    id: str
    company_name: str
    email: str
    industry: str
    location: str
    description: str | None = None
    website: str | None = None
    logo: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class CompanyToken(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    company: CompanyResponse
