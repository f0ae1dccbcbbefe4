from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.job import JobStatus, JobType
from app.schemas.common import NonBlank, to_list


def to_job_type(value: Any) -> Any:
    # Clients send "Full-Time", "full-time" or "FULL_TIME".
    if isinstance(value, str):
        return value.strip().lower().replace("_", "-").replace(" ", "-")
    return value


class Salary(BaseModel):
    min: float | None = Field(default=None, ge=0)
    max: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, max_length=10)

    @model_validator(mode="after")
    def range_is_ordered(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("Salary min cannot exceed max")
        return self


class _JobFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("requirements", mode="before", check_fields=False)
    @classmethod
    def split_requirements(cls, v):
        return to_list(v, "\n")

    @field_validator("skills", mode="before", check_fields=False)
    @classmethod
    def split_skills(cls, v):
        return to_list(v, ",")

    @field_validator("type", mode="before", check_fields=False)
    @classmethod
    def normalize_type(cls, v):
        return to_job_type(v)


class JobCreate(_JobFields):
    title: NonBlank
    location: NonBlank
    description: NonBlank
    requirements: list[str] = Field(min_length=1)
    type: JobType
    salary: Salary | None = None
    application_link: str | None = None
    skills: list[str] = Field(min_length=1)
    experience: NonBlank
    education: NonBlank
    deadline: datetime | None = None
    status: JobStatus = JobStatus.ACTIVE


class JobUpdate(_JobFields):
    """Mutable job fields. company_id is deliberately absent: ownership never changes."""

    title: NonBlank | None = None
    location: NonBlank | None = None
    description: NonBlank | None = None
    requirements: list[str] | None = None
    type: JobType | None = None
    salary: Salary | None = None
    application_link: str | None = None
    skills: list[str] | None = None
    experience: NonBlank | None = None
    education: NonBlank | None = None
    deadline: datetime | None = None
    status: JobStatus | None = None


REQUIRED_JOB_FIELDS = [
    "title", "location", "description", "requirements", "type", "skills", "experience", "education",
]


class CompanySummary(BaseModel):
    id: str
    company_name: str
    location: str | None = None
    industry: str | None = None
    logo: str | None = None

    class Config:
        from_attributes = True


class JobResponse(BaseModel):
    id: str
    company_id: str
    title: str
    location: str
    description: str
    requirements: list[str]
    type: str
    salary: Salary | None = None
    application_link: str | None = None
    skills: list[str]
    experience: str
    education: str
    deadline: datetime | None = None
    status: str
    posted_at: datetime | None = None
    updated_at: datetime | None = None
    company: CompanySummary | None = None

    class Config:
        from_attributes = True


class JobPage(BaseModel):
    items: list[JobResponse]
    total: int
    page: int
    limit: int
    total_pages: int
    search_term: str | None = None
