"""Job registry: creation, listing, search and owner-only mutation of job postings."""

import logging
from typing import Any

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from app.core.errors import Forbidden, NotFound, ValidationError
from app.core.identity import Identity
from app.core.pagination import clamp, page_meta
from app.models.company import Company
from app.models.job import Job, JobStatus
from app.repos import job_repo
from app.schemas.job import REQUIRED_JOB_FIELDS, JobCreate, JobUpdate, to_job_type

logger = logging.getLogger(__name__)

COMPANY_JOB_STATUSES = {s.value for s in JobStatus}
_NULLABLE_COLUMNS = {"salary_min", "salary_max", "salary_currency", "application_link", "deadline"}


def _parse(schema, data: Any):
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except SchemaValidationError as e:
        missing = [str(err["loc"][0]) for err in e.errors() if err["type"] == "missing"]
        if missing:
            raise ValidationError(
                "Missing required fields", required=REQUIRED_JOB_FIELDS, missing=missing
            ) from e
        raise ValidationError(
            "Invalid job data",
            errors=[{"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]} for err in e.errors()],
        ) from e


def _to_columns(fields: dict) -> dict:
    """Map schema fields onto Job columns (salary is stored flat)."""
    columns = dict(fields)
    if "salary" in columns:
        salary = columns.pop("salary")
        if salary is None:
            columns.update(salary_min=None, salary_max=None, salary_currency=None)
        else:
            # Partial salary updates only touch the keys that were sent.
            for key in ("min", "max", "currency"):
                if key in salary:
                    columns[f"salary_{key}"] = salary[key]
    for key in ("type", "status"):
        if key in columns and columns[key] is not None:
            columns[key] = getattr(columns[key], "value", columns[key])
    return columns


def _owned_job(db: Session, actor: Identity, job_id: str) -> Job:
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFound("Job not found")
    if job.company_id != actor.id:
        raise Forbidden("Not authorized to modify this job posting")
    return job


def create_job(db: Session, actor: Identity, data: JobCreate | dict) -> Job:
    payload = _parse(JobCreate, data)
    job = job_repo.create(db, actor.id, _to_columns(payload.model_dump()))
    logger.info("Job created: id=%s company=%s title=%r status=%s", job.id, actor.id, job.title, job.status)
    return job


def list_jobs(
    db: Session,
    *,
    title: str | None = None,
    location: str | None = None,
    job_type: str | None = None,
    skills: list[str] | str | None = None,
    company_id: str | None = None,
    page: int = 1,
    limit: int | None = None,
) -> tuple[list[tuple[Job, Company | None]], dict]:
    """Public listing of active jobs. Returns ([(job, company)], page meta)."""
    page, limit, offset = clamp(page, limit)
    if isinstance(skills, str):
        skills = [s.strip() for s in skills.split(",") if s.strip()]
    rows, total = job_repo.list_active(
        db,
        title=title,
        location=location,
        job_type=to_job_type(job_type) if job_type else None,
        skills=skills or None,
        company_id=company_id,
        limit=limit,
        offset=offset,
    )
    return rows, page_meta(total, page, limit)


def search_jobs(
    db: Session,
    term: str | None,
    page: int = 1,
    limit: int | None = None,
) -> tuple[list[tuple[Job, Company | None, int]], dict]:
    words = (term or "").split()
    if not words:
        raise ValidationError("Search term is required")
    page, limit, offset = clamp(page, limit)
    rows, total = job_repo.search_active(db, words, limit=limit, offset=offset)
    logger.debug("Job search term=%r matched=%d", term, total)
    return rows, page_meta(total, page, limit)


def list_company_jobs(
    db: Session,
    actor: Identity,
    status: str | None = None,
    page: int = 1,
    limit: int | None = None,
) -> tuple[list[Job], dict]:
    """All of the company's own jobs regardless of status; unknown status filters are ignored."""
    page, limit, offset = clamp(page, limit)
    status = status if status in COMPANY_JOB_STATUSES else None
    items, total = job_repo.list_for_company(db, actor.id, status=status, limit=limit, offset=offset)
    return items, page_meta(total, page, limit)


def get_job(db: Session, job_id: str) -> tuple[Job, Company | None]:
    row = job_repo.get_with_company(db, job_id)
    if not row:
        raise NotFound("Job not found")
    return row


def update_job(db: Session, actor: Identity, job_id: str, data: JobUpdate | dict) -> Job:
    job = _owned_job(db, actor, job_id)
    payload = _parse(JobUpdate, data)
    changes = _to_columns(payload.model_dump(exclude_unset=True))
    # Required columns cannot be cleared through an explicit null.
    changes = {k: v for k, v in changes.items() if v is not None or k in _NULLABLE_COLUMNS}
    salary_min = changes.get("salary_min", job.salary_min)
    salary_max = changes.get("salary_max", job.salary_max)
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise ValidationError("Salary min cannot exceed max")
    job = job_repo.update(db, job, changes)
    logger.info("Job updated: id=%s company=%s fields=%s", job.id, actor.id, sorted(changes))
    return job


def delete_job(db: Session, actor: Identity, job_id: str) -> None:
    job = _owned_job(db, actor, job_id)
    job_repo.delete(db, job)
    logger.info("Job deleted: id=%s company=%s", job_id, actor.id)
