from datetime import datetime

from pydantic import BaseModel

from app.schemas.common import NonBlank
from app.schemas.job import CompanySummary
from app.schemas.user import UserResponse, UserSummary


class ApplyRequest(BaseModel):
    job_id: NonBlank
    cover_letter: str | None = None
    resume: str | None = None


class ApplicationStatusUpdate(BaseModel):
    status: str  # pending | reviewed | interviewing | rejected | accepted


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    user_id: str
    company_id: str
    cover_letter: str | None = None
    resume: str | None = None
    status: str
    applied_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class JobSummary(BaseModel):
    id: str
    title: str
    company_id: str
    location: str | None = None
    type: str | None = None
    status: str | None = None
    company: CompanySummary | None = None

    class Config:
        from_attributes = True


class UserApplication(ApplicationResponse):
    job: JobSummary | None = None


class JobApplication(ApplicationResponse):
    applicant: UserSummary | None = None


class ApplicationDetail(ApplicationResponse):
    job: JobSummary | None = None
    applicant: UserResponse | None = None


class AppliedResult(BaseModel):
    message: str
    application: ApplicationResponse
    chat_id: str


class ApplicationStats(BaseModel):
    total: int
    by_status: dict[str, int]
    job_id: str | None = None
