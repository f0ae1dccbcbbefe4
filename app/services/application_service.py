"""
Application workflow.

An application moves pending -> reviewed -> interviewing -> rejected | accepted,
but the owning company may set any of the five statuses directly. The applicant
can withdraw (hard delete) only while the application is pending or reviewed.
Submitting an application also opens its chat, in the same transaction.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import Conflict, Forbidden, InvalidState, NotFound, ValidationError
from app.core.identity import Identity
from app.core.pagination import clamp, page_meta
from app.models.application import WITHDRAWABLE_STATUSES, Application, ApplicationStatus
from app.models.job import Job, JobStatus
from app.repos import application_repo, job_repo
from app.services import chat_service

logger = logging.getLogger(__name__)

APPLICATION_STATUSES = [s.value for s in ApplicationStatus]


def _status_filter(status: str | None) -> str | None:
    return status if status in APPLICATION_STATUSES else None


def _company_owns_job(db: Session, actor: Identity, job_id: str, message: str) -> Job:
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFound("Associated job not found")
    if job.company_id != actor.id:
        raise Forbidden(message)
    return job


def apply(
    db: Session,
    actor: Identity,
    job_id: str,
    cover_letter: str | None = None,
    resume: str | None = None,
) -> tuple[Application, str]:
    """Submit an application for ``actor``. Returns (application, chat_id)."""
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFound("Job not found")
    if job.status != JobStatus.ACTIVE.value:
        raise InvalidState("This job posting is no longer active", job_status=job.status)
    if application_repo.get_for_job_and_user(db, job.id, actor.id):
        raise Conflict("You have already applied for this job")

    try:
        application = application_repo.create(
            db,
            job_id=job.id,
            user_id=actor.id,
            company_id=job.company_id,
            cover_letter=cover_letter,
            resume=resume,
            commit=False,
        )
        chat = chat_service.create_for_application(
            db,
            application_id=application.id,
            user_id=actor.id,
            company_id=job.company_id,
            job_id=job.id,
            job_title=job.title,
            commit=False,
        )
        db.commit()
    except IntegrityError as e:
        # A concurrent apply for the same (job, user) won the unique constraint.
        db.rollback()
        logger.info("Duplicate application rejected by constraint: job=%s user=%s", job_id, actor.id)
        raise Conflict("You have already applied for this job") from e
    except Exception:
        db.rollback()
        raise

    db.refresh(application)
    logger.info("Application submitted: id=%s job=%s user=%s chat=%s", application.id, job.id, actor.id, chat.id)
    return application, chat.id


def list_for_user(
    db: Session,
    actor: Identity,
    status: str | None = None,
    page: int = 1,
    limit: int | None = None,
):
    page, limit, offset = clamp(page, limit)
    rows, total = application_repo.list_for_user(
        db, actor.id, status=_status_filter(status), limit=limit, offset=offset
    )
    return rows, page_meta(total, page, limit)


def list_for_job(
    db: Session,
    actor: Identity,
    job_id: str,
    status: str | None = None,
    page: int = 1,
    limit: int | None = None,
):
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFound("Job not found")
    if job.company_id != actor.id:
        raise Forbidden("Not authorized to view applications for this job")
    page, limit, offset = clamp(page, limit)
    rows, total = application_repo.list_for_job(
        db, job.id, status=_status_filter(status), limit=limit, offset=offset
    )
    return rows, page_meta(total, page, limit)


def get_by_id(db: Session, actor: Identity, application_id: str) -> Application:
    application = application_repo.get_by_id(db, application_id)
    if not application:
        raise NotFound("Application not found")
    if actor.is_company:
        _company_owns_job(db, actor, application.job_id, "You do not have permission to view this application")
    elif application.user_id != actor.id:
        raise Forbidden("You do not have permission to view this application")
    return application


def update_status(db: Session, actor: Identity, application_id: str, new_status: str | None) -> Application:
    if new_status not in APPLICATION_STATUSES:
        raise ValidationError("Invalid status", allowed_values=APPLICATION_STATUSES)
    application = application_repo.get_by_id(db, application_id)
    if not application:
        raise NotFound("Application not found")
    _company_owns_job(db, actor, application.job_id, "Not authorized to update this application")

    previous = application.status
    # Last write wins: concurrent updates are not version-checked.
    application = application_repo.update_status(db, application, new_status)
    logger.info(
        "Application status changed: id=%s company=%s %s -> %s",
        application.id, actor.id, previous, new_status,
    )
    return application


def withdraw(db: Session, actor: Identity, application_id: str) -> None:
    # Someone else's application reads as missing so its existence is not revealed.
    application = application_repo.get_for_user(db, application_id, actor.id)
    if not application:
        raise NotFound("Application not found")
    if application.status not in WITHDRAWABLE_STATUSES:
        raise InvalidState(
            f'Cannot withdraw application with status "{application.status}"',
            current_status=application.status,
        )
    application_repo.delete(db, application)
    logger.info("Application withdrawn: id=%s user=%s", application_id, actor.id)


def company_stats(db: Session, actor: Identity) -> dict:
    counts = application_repo.count_by_status(db, company_id=actor.id)
    return {"total": sum(counts.values()), "by_status": counts}


def job_stats(db: Session, actor: Identity, job_id: str) -> dict:
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFound("Job not found")
    if job.company_id != actor.id:
        raise Forbidden("Not authorized to view statistics for this job")
    counts = application_repo.count_by_status(db, job_id=job.id)
    return {"job_id": job.id, "total": sum(counts.values()), "by_status": counts}
