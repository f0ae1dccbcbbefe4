from app.models.company import Company
from app.models.user import User
from app.models.job import Job, JobStatus, JobType
from app.models.application import Application, ApplicationStatus
from app.models.chat import Chat, ChatMessage

__all__ = [
    "Company",
    "User",
    "Job",
    "JobStatus",
    "JobType",
    "Application",
    "ApplicationStatus",
    "Chat",
    "ChatMessage",
]
