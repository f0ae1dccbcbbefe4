"""Profile updates shared by the auth, companies and users routers."""

import logging

from sqlalchemy.orm import Session

from app.core.errors import NotFound, ValidationError
from app.core.identity import Identity
from app.models.company import Company
from app.models.user import User
from app.repos import company_repo, user_repo
from app.schemas.auth import CompanyUpdate
from app.schemas.user import UserProfileUpdate

logger = logging.getLogger(__name__)


def _ensure_email_free(db: Session, repo, email: str | None, account_id: str) -> None:
    if email is None:
        return
    other = repo.get_by_email(db, email)
    if other and other.id != account_id:
        raise ValidationError("Email already in use")


def update_company(db: Session, actor: Identity, data: CompanyUpdate) -> Company:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    _ensure_email_free(db, company_repo, changes.get("email"), actor.id)
    company = company_repo.update(db, actor.id, **changes)
    if not company:
        raise NotFound("Company not found")
    logger.info("Company profile updated: id=%s fields=%s", actor.id, sorted(changes))
    return company


def update_user(db: Session, actor: Identity, data: UserProfileUpdate) -> User:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    _ensure_email_free(db, user_repo, changes.get("email"), actor.id)
    user = user_repo.update(db, actor.id, **changes)
    if not user:
        raise NotFound("User not found")
    logger.info("User profile updated: id=%s fields=%s", actor.id, sorted(changes))
    return user
