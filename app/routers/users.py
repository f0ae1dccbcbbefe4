import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.errors import AppError, AuthenticationRequired, InternalError, NotFound, ValidationError
from app.core.identity import Identity, Role
from app.core.security import create_access_token, verify_password
from app.database import get_db
from app.dependencies import require_user
from app.repos import user_repo
from app.services import account_service
from app.schemas.auth import LoginRequest
from app.schemas.user import (
    EducationEntry,
    ExperienceEntry,
    UserProfileUpdate,
    UserRegister,
    UserResponse,
    UserToken,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def _current_user(db: Session, actor: Identity):
    user = user_repo.get_by_id(db, actor.id)
    if not user:
        raise NotFound("User not found")
    return user


def _user_token(user, message: str) -> UserToken:
    return UserToken(
        message=message,
        access_token=create_access_token(user.id, Role.USER),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=UserToken, status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    try:
        if user_repo.get_by_email(db, data.email):
            raise ValidationError("User with this email already exists")
        user = user_repo.create(db, **data.model_dump())
        logger.info("User registered: id=%s email=%s", user.id, user.email)
        return _user_token(user, "User registered successfully")
    except AppError:
        raise
    except Exception as e:
        logger.exception("User register failed for email=%s: %s", data.email, e)
        raise InternalError("Registration failed", error=str(e)) from e


@router.post("/login", response_model=UserToken)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = user_repo.get_by_email(db, data.email)
    if not user or not verify_password(data.password, user.password_hash):
        logger.info("User login rejected for email=%s", data.email)
        raise AuthenticationRequired("Invalid email or password")
    logger.info("User logged in: id=%s", user.id)
    return _user_token(user, "Login successful")


@router.get("/me", response_model=UserResponse)
def get_me(db: Session = Depends(get_db), actor: Identity = Depends(require_user)):
    return _current_user(db, actor)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    data: UserProfileUpdate,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_user),
):
    try:
        return account_service.update_user(db, actor, data)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", actor.id, e)
        raise InternalError("Failed to update profile", error=str(e)) from e


@router.delete("")
def delete_account(db: Session = Depends(get_db), actor: Identity = Depends(require_user)):
    if not user_repo.delete_user(db, actor.id):
        raise NotFound("User not found")
    logger.info("User deleted: id=%s", actor.id)
    return {"message": "User account deleted successfully"}


@router.post("/experience", response_model=UserResponse)
def add_experience(
    data: ExperienceEntry,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_user),
):
    user = user_repo.add_experience(db, actor.id, data.model_dump(mode="json"))
    if not user:
        raise NotFound("User not found")
    logger.info("Experience added: user=%s", actor.id)
    return user


@router.post("/education", response_model=UserResponse)
def add_education(
    data: EducationEntry,
    db: Session = Depends(get_db),
    actor: Identity = Depends(require_user),
):
    user = user_repo.add_education(db, actor.id, data.model_dump(mode="json"))
    if not user:
        raise NotFound("User not found")
    logger.info("Education added: user=%s", actor.id)
    return user
