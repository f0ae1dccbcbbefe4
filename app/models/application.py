from enum import Enum

from sqlalchemy import Column, String, Text, DateTime, UniqueConstraint

from app.database import Base, utcnow


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    INTERVIEWING = "interviewing"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


# Statuses from which the applicant may still withdraw.
WITHDRAWABLE_STATUSES = frozenset({ApplicationStatus.PENDING.value, ApplicationStatus.REVIEWED.value})


class Application(Base):
    """A user's application to a job. company_id is copied from the job at creation."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "user_id", name="uq_applications_job_user"),
    )

    id = Column(String, primary_key=True, index=True)
    job_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    company_id = Column(String, nullable=False, index=True)
    cover_letter = Column(Text)
    resume = Column(String)
    status = Column(String, nullable=False, default=ApplicationStatus.PENDING.value)
    applied_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)
