from enum import Enum

from sqlalchemy import Column, String, Text, DateTime, Float

from app.database import Base, JSONDocument, utcnow


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    REMOTE = "remote"


class JobStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    DRAFT = "draft"


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    # Owning company; set once at creation and never reassigned.
    company_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    location = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSONDocument, nullable=False, default=list)
    type = Column(String, nullable=False, index=True)
    salary_min = Column(Float)
    salary_max = Column(Float)
    salary_currency = Column(String)
    application_link = Column(String)
    skills = Column(JSONDocument, nullable=False, default=list)
    experience = Column(String, nullable=False)
    education = Column(String, nullable=False)
    deadline = Column(DateTime(timezone=True))
    status = Column(String, nullable=False, default=JobStatus.ACTIVE.value, index=True)
    posted_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    @property
    def salary(self) -> dict | None:
        if self.salary_min is None and self.salary_max is None and not self.salary_currency:
            return None
        return {"min": self.salary_min, "max": self.salary_max, "currency": self.salary_currency}
