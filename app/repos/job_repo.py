from functools import reduce
from operator import add

from sqlalchemy import String, case, cast, or_
from sqlalchemy.orm import Session

from app.core.security import generate_id
from app.database import dump_json
from app.models.company import Company
from app.models.job import Job, JobStatus

# Per-word relevance weights for full-text style search.
SEARCH_WEIGHTS = (
    ("title", 3),
    ("skills", 2),
    ("description", 1),
    ("location", 1),
)


def _text(column):
    """Column as text; JSON lists are matched against their serialized form."""
    if column.key in ("skills", "requirements"):
        return cast(column, String)
    return column


def _contains(expr, text: str):
    # Case-insensitive substring match with % and _ taken literally.
    return expr.icontains(text, autoescape=True)


def _skill_filter(skills: list[str]):
    # Serialized element (quotes included) so "go" does not match "django".
    return or_(*[_contains(cast(Job.skills, String), dump_json(s)) for s in skills])


def _relevance(words: list[str]):
    parts = [
        case((_contains(_text(getattr(Job, field)), word), weight), else_=0)
        for word in words
        for field, weight in SEARCH_WEIGHTS
    ]
    return reduce(add, parts)


def get_by_id(db: Session, job_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id).first()


def get_with_company(db: Session, job_id: str) -> tuple[Job, Company | None] | None:
    row = (
        db.query(Job, Company)
        .outerjoin(Company, Company.id == Job.company_id)
        .filter(Job.id == job_id)
        .first()
    )
    return tuple(row) if row else None


def create(db: Session, company_id: str, fields: dict) -> Job:
    job = Job(id=generate_id(), company_id=company_id, **fields)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def update(db: Session, job: Job, fields: dict) -> Job:
    for name, value in fields.items():
        setattr(job, name, value)
    db.commit()
    db.refresh(job)
    return job


def delete(db: Session, job: Job) -> None:
    db.delete(job)
    db.commit()


def list_active(
    db: Session,
    *,
    title: str | None = None,
    location: str | None = None,
    job_type: str | None = None,
    skills: list[str] | None = None,
    company_id: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[tuple[Job, Company | None]], int]:
    """Public listing: active jobs only, newest first. Returns ([(job, company)], total)."""
    q = (
        db.query(Job, Company)
        .outerjoin(Company, Company.id == Job.company_id)
        .filter(Job.status == JobStatus.ACTIVE.value)
    )
    if title and title.strip():
        q = q.filter(_contains(Job.title, title.strip()))
    if location and location.strip():
        q = q.filter(_contains(Job.location, location.strip()))
    if job_type:
        q = q.filter(Job.type == job_type)
    if skills:
        q = q.filter(_skill_filter(skills))
    if company_id:
        q = q.filter(Job.company_id == company_id)
    total = q.count()
    rows = q.order_by(Job.posted_at.desc()).offset(offset).limit(limit).all()
    return [tuple(r) for r in rows], total


def search_active(
    db: Session,
    words: list[str],
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[tuple[Job, Company | None, int]], int]:
    """Relevance-ranked search over active jobs. Returns ([(job, company, score)], total)."""
    score = _relevance(words)
    q = (
        db.query(Job, Company, score.label("score"))
        .outerjoin(Company, Company.id == Job.company_id)
        .filter(Job.status == JobStatus.ACTIVE.value, score > 0)
    )
    total = q.count()
    rows = q.order_by(score.desc(), Job.posted_at.desc()).offset(offset).limit(limit).all()
    return [(job, company, int(s or 0)) for job, company, s in rows], total


def list_for_company(
    db: Session,
    company_id: str,
    status: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Job], int]:
    q = db.query(Job).filter(Job.company_id == company_id)
    if status:
        q = q.filter(Job.status == status)
    total = q.count()
    items = q.order_by(Job.posted_at.desc()).offset(offset).limit(limit).all()
    return items, total


def list_active_for_company(db: Session, company_id: str) -> list[Job]:
    return (
        db.query(Job)
        .filter(Job.company_id == company_id, Job.status == JobStatus.ACTIVE.value)
        .order_by(Job.posted_at.desc())
        .all()
    )
