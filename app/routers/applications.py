import logging

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.errors import AppError, InternalError
from app.core.identity import Identity
from app.database import get_db
from app.dependencies import get_current_identity, require_company, require_user
from app.repos import job_repo, user_repo
from app.schemas.application import (
    ApplicationDetail,
    ApplicationResponse,
    ApplicationStats,
    ApplicationStatusUpdate,
    ApplyRequest,
    AppliedResult,
    JobApplication,
    JobSummary,
    UserApplication,
)
from app.schemas.job import CompanySummary
from app.schemas.user import UserResponse, UserSummary
from app.services import application_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/applications", tags=["applications"])


class UserApplicationPage(BaseModel):
    items: list[UserApplication]
    total: int
    page: int
    limit: int
    total_pages: int


class JobApplicationPage(BaseModel):
    items: list[JobApplication]
    total: int
    page: int
    limit: int
    total_pages: int


def _job_summary(job, company) -> JobSummary | None:
    if job is None:
        return None
    summary = JobSummary.model_validate(job)
    if company is not None:
        summary.company = CompanySummary.model_validate(company)
    return summary


@router.post("/apply", response_model=AppliedResult, status_code=status.HTTP_201_CREATED)
def apply(
    data: ApplyRequest,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_user),
):
    try:
        application, chat_id = application_service.apply(
            db, actor, data.job_id, cover_letter=data.cover_letter, resume=data.resume
        )
        return AppliedResult(
            message="Application submitted successfully",
            application=ApplicationResponse.model_validate(application),
            chat_id=chat_id,
        )
    except AppError:
        raise
    except Exception as e:
        logger.exception("Apply failed for job=%s user=%s: %s", data.job_id, actor.id, e)
        raise InternalError("Failed to submit application", error=str(e)) from e


@router.get("/user/applications", response_model=UserApplicationPage)
def my_applications(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_user),
):
    rows, meta = application_service.list_for_user(db, actor, status=status, page=page, limit=limit)
    items = []
    for application, job, company in rows:
        item = UserApplication.model_validate(application)
        item.job = _job_summary(job, company)
        items.append(item)
    return UserApplicationPage(items=items, **meta)


@router.delete("/withdraw/{application_id}")
def withdraw(
    application_id: str,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_user),
):
    application_service.withdraw(db, actor, application_id)
    return {"message": "Application withdrawn successfully"}


@router.get("/job/{job_id}", response_model=JobApplicationPage)
def job_applications(
    job_id: str,
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    rows, meta = application_service.list_for_job(db, actor, job_id, status=status, page=page, limit=limit)
    items = []
    for application, user in rows:
        item = JobApplication.model_validate(application)
        item.applicant = UserSummary.model_validate(user) if user else None
        items.append(item)
    return JobApplicationPage(items=items, **meta)


@router.get("/stats/company", response_model=ApplicationStats)
def company_stats(db: Session = Depends(get_db), actor: Identity = Depends(require_company)):
    return application_service.company_stats(db, actor)


@router.get("/stats/job/{job_id}", response_model=ApplicationStats)
def job_stats(job_id: str, db: Session = Depends(get_db), actor: Identity = Depends(require_company)):
    return application_service.job_stats(db, actor, job_id)


@router.get("/{application_id}", response_model=ApplicationDetail)
def get_application(
    application_id: str,
    db: Session = Depends(get_db),
    actor: Identity = Depends(get_current_identity),
):
    application = application_service.get_by_id(db, actor, application_id)
    detail = ApplicationDetail.model_validate(application)
    row = job_repo.get_with_company(db, application.job_id)
    if row:
        detail.job = _job_summary(*row)
    applicant = user_repo.get_by_id(db, application.user_id)
    detail.applicant = UserResponse.model_validate(applicant) if applicant else None
    return detail


@router.put("/{application_id}/status", response_model=ApplicationResponse)
def update_status(
    application_id: str,
    data: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    try:
        return application_service.update_status(db, actor, application_id, data.status)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Status update failed for application=%s: %s", application_id, e)
        raise InternalError("Failed to update application status", error=str(e)) from e
