from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.security import generate_id
from app.models.application import Application, ApplicationStatus
from app.models.company import Company
from app.models.job import Job
from app.models.user import User


def create(
    db: Session,
    *,
    job_id: str,
    user_id: str,
    company_id: str,
    cover_letter: str | None = None,
    resume: str | None = None,
    commit: bool = True,
) -> Application:
    """Insert an application. With commit=False the row is only flushed, so the caller owns the transaction."""
    application = Application(
        id=generate_id(),
        job_id=job_id,
        user_id=user_id,
        company_id=company_id,
        cover_letter=cover_letter,
        resume=resume,
        status=ApplicationStatus.PENDING.value,
    )
    db.add(application)
    if commit:
        db.commit()
        db.refresh(application)
    else:
        db.flush()
    return application


def get_by_id(db: Session, application_id: str) -> Application | None:
    return db.query(Application).filter(Application.id == application_id).first()


def get_for_job_and_user(db: Session, job_id: str, user_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.user_id == user_id)
        .first()
    )


def get_for_user(db: Session, application_id: str, user_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.id == application_id, Application.user_id == user_id)
        .first()
    )


def list_for_user(
    db: Session,
    user_id: str,
    status: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[tuple[Application, Job | None, Company | None]], int]:
    """Applicant's applications, newest first, with job and company joined (either may be gone)."""
    q = (
        db.query(Application, Job, Company)
        .outerjoin(Job, Job.id == Application.job_id)
        .outerjoin(Company, Company.id == Job.company_id)
        .filter(Application.user_id == user_id)
    )
    if status:
        q = q.filter(Application.status == status)
    total = q.count()
    rows = q.order_by(Application.applied_at.desc()).offset(offset).limit(limit).all()
    return [tuple(r) for r in rows], total


def list_for_job(
    db: Session,
    job_id: str,
    status: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[tuple[Application, User | None]], int]:
    q = (
        db.query(Application, User)
        .outerjoin(User, User.id == Application.user_id)
        .filter(Application.job_id == job_id)
    )
    if status:
        q = q.filter(Application.status == status)
    total = q.count()
    rows = q.order_by(Application.applied_at.desc()).offset(offset).limit(limit).all()
    return [tuple(r) for r in rows], total


def update_status(db: Session, application: Application, status: str) -> Application:
    application.status = status
    db.commit()
    db.refresh(application)
    return application


def delete(db: Session, application: Application) -> None:
    db.delete(application)
    db.commit()


def count_by_status(
    db: Session,
    *,
    company_id: str | None = None,
    job_id: str | None = None,
) -> dict[str, int]:
    """Application counts keyed by every status (zero-filled)."""
    q = db.query(Application.status, func.count(Application.id))
    if company_id:
        q = q.filter(Application.company_id == company_id)
    if job_id:
        q = q.filter(Application.job_id == job_id)
    counts = {s.value: 0 for s in ApplicationStatus}
    for status, n in q.group_by(Application.status).all():
        counts[status] = n
    return counts


def list_without_chat(db: Session, limit: int = 500) -> list[Application]:
    """Applications that have no paired chat yet."""
    from app.models.chat import Chat

    chatted = select(Chat.application_id)
    return (
        db.query(Application)
        .filter(~Application.id.in_(chatted))
        .order_by(Application.applied_at.asc())
        .limit(limit)
        .all()
    )
