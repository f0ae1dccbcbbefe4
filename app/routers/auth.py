import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.errors import AppError, AuthenticationRequired, InternalError, NotFound, ValidationError
from app.core.identity import Identity, Role
from app.core.security import create_access_token, verify_password
from app.database import get_db
from app.dependencies import require_company
from app.repos import company_repo
from app.services import account_service
from app.schemas.auth import CompanyRegister, CompanyResponse, CompanyToken, CompanyUpdate, LoginRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _company_token(company, message: str) -> CompanyToken:
    return CompanyToken(
        message=message,
        access_token=create_access_token(company.id, Role.COMPANY),
        company=CompanyResponse.model_validate(company),
    )


@router.post("/register", response_model=CompanyToken, status_code=status.HTTP_201_CREATED)
def register(data: CompanyRegister, db: Session = Depends(get_db)):
    try:
        if company_repo.get_by_email(db, data.email):
            raise ValidationError("Company with this email already exists")
        company = company_repo.create(db, **data.model_dump())
        logger.info("Company registered: id=%s email=%s", company.id, company.email)
        return _company_token(company, "Company registered successfully")
    except AppError:
        raise
    except Exception as e:
        logger.exception("Company register failed for email=%s: %s", data.email, e)
        raise InternalError("Registration failed", error=str(e)) from e


@router.post("/login", response_model=CompanyToken)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    company = company_repo.get_by_email(db, data.email)
    if not company or not verify_password(data.password, company.password_hash):
        logger.info("Company login rejected for email=%s", data.email)
        raise AuthenticationRequired("Invalid email or password")
    logger.info("Company logged in: id=%s", company.id)
    return _company_token(company, "Login successful")


@router.put("/company", response_model=CompanyResponse)
def update_company(
    data: CompanyUpdate,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    try:
        return CompanyResponse.model_validate(account_service.update_company(db, actor, data))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Company update failed for id=%s: %s", actor.id, e)
        raise InternalError("Failed to update company", error=str(e)) from e


@router.delete("/company")
def delete_company(
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_company),
):
    if not company_repo.delete(db, actor.id):
        raise NotFound("Company not found")
    logger.info("Company deleted: id=%s", actor.id)
    return {"message": "Company account deleted successfully"}
