import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.errors import AppError, InternalError, NotFound
from app.core.identity import Identity
from app.core.pagination import clamp, page_meta
from app.database import get_db
from app.dependencies import require_company
from app.repos import company_repo, job_repo
from app.services import account_service
from app.schemas.auth import CompanyResponse, CompanyUpdate
from app.schemas.job import JobResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/companies", tags=["companies"])


class PublicCompany(BaseModel):
    id: str
    company_name: str
    industry: str
    location: str
    description: str | None = None
    website: str | None = None
    logo: str | None = None

    class Config:
        from_attributes = True


class CompanyPage(BaseModel):
    items: list[PublicCompany]
    total: int
    page: int
    limit: int
    total_pages: int


class CompanyWithJobs(PublicCompany):
    jobs: list[JobResponse]


@router.get("", response_model=CompanyPage)
def list_companies(
    industry: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    page, limit, offset = clamp(page, limit)
    items, total = company_repo.get_all_paginated(db, industry=industry, limit=limit, offset=offset)
    return CompanyPage(items=items, **page_meta(total, page, limit))


@router.get("/profile", response_model=CompanyResponse)
def get_profile(db: Session = Depends(get_db), actor: Identity = Depends(require_company)):
    company = company_repo.get_by_id(db, actor.id)
    if not company:
        raise NotFound("Company not found")
    return company


@router.put("/profile", response_model=CompanyResponse)
def update_profile(
    data: CompanyUpdate,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    try:
        return account_service.update_company(db, actor, data)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Company profile update failed for id=%s: %s", actor.id, e)
        raise InternalError("Failed to update company profile", error=str(e)) from e


@router.get("/{company_id}", response_model=PublicCompany)
def get_company(company_id: str, db: Session = Depends(get_db)):
    company = company_repo.get_by_id(db, company_id)
    if not company:
        raise NotFound("Company not found")
    return company


@router.get("/{company_id}/with-jobs", response_model=CompanyWithJobs)
def get_company_with_jobs(company_id: str, db: Session = Depends(get_db)):
    company = company_repo.get_by_id(db, company_id)
    if not company:
        raise NotFound("Company not found")
    jobs = job_repo.list_active_for_company(db, company.id)
    return CompanyWithJobs(
        **PublicCompany.model_validate(company).model_dump(),
        jobs=[JobResponse.model_validate(j) for j in jobs],
    )
