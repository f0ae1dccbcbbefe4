import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.errors import AuthenticationRequired, Forbidden
from app.core.identity import Identity, Role
from app.core.security import decode_access_token
from app.database import get_db
from app.repos import company_repo, user_repo

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_current_identity(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Identity:
    """Resolve the bearer token to a user or company identity."""
    if not credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise AuthenticationRequired("Authentication required")
    identity = decode_access_token(credentials.credentials)
    if not identity:
        logger.info("Auth failed: invalid or expired token")
        raise AuthenticationRequired("Invalid token")
    repo = user_repo if identity.role == Role.USER else company_repo
    if not repo.get_by_id(db, identity.id):
        logger.info("Auth failed: %s from token not found", identity.role.value)
        raise AuthenticationRequired("Invalid token")
    return identity


def require_user(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_user:
        raise Forbidden("Access denied. Not a user account.")
    return identity


def require_company(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_company:
        raise Forbidden("Access denied. Not a company account.")
    return identity
