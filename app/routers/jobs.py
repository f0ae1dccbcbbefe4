import logging

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.errors import AppError, InternalError
from app.core.identity import Identity
from app.database import get_db
from app.dependencies import require_company
from app.models.company import Company
from app.models.job import Job
from app.schemas.job import CompanySummary, JobPage, JobResponse
from app.services import job_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_response(job: Job, company: Company | None = None) -> JobResponse:
    resp = JobResponse.model_validate(job)
    if company is not None:
        resp.company = CompanySummary.model_validate(company)
    return resp


@router.get("", response_model=JobPage)
def list_jobs(
    title: str | None = None,
    location: str | None = None,
    type: str | None = None,
    skills: str | None = Query(None, description="Comma-separated; matches jobs with any of them"),
    company_id: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    rows, meta = job_service.list_jobs(
        db,
        title=title,
        location=location,
        job_type=type,
        skills=skills,
        company_id=company_id,
        page=page,
        limit=limit,
    )
    return JobPage(items=[_job_response(job, company) for job, company in rows], **meta)


@router.get("/search", response_model=JobPage)
def search_jobs(
    q: str | None = Query(None, description="Words matched against title, skills, description and location"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    rows, meta = job_service.search_jobs(db, q, page=page, limit=limit)
    return JobPage(
        items=[_job_response(job, company) for job, company, _score in rows],
        search_term=q.strip(),
        **meta,
    )


@router.get("/company/myjobs", response_model=JobPage)
def my_jobs(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    jobs, meta = job_service.list_company_jobs(db, actor, status=status, page=page, limit=limit)
    return JobPage(items=[_job_response(job) for job in jobs], **meta)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, db: Session = Depends(get_db)):
    job, company = job_service.get_job(db, job_id)
    return _job_response(job, company)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    try:
        return _job_response(job_service.create_job(db, actor, payload))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Create job failed for company=%s: %s", actor.id, e)
        raise InternalError("Failed to create job", error=str(e)) from e


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    try:
        return _job_response(job_service.update_job(db, actor, job_id, payload))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Update job failed for job=%s company=%s: %s", job_id, actor.id, e)
        raise InternalError("Failed to update job", error=str(e)) from e


@router.delete("/{job_id}")
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    job_service.delete_job(db, actor, job_id)
    return {"message": "Job deleted successfully"}
