from sqlalchemy.orm import Session

from app.models.user import User
from app.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(
    db: Session,
    *,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    location: str | None = None,
    bio: str | None = None,
    skills: list[str] | None = None,
) -> User:
    user = User(
        id=generate_id(),
        first_name=first_name,
        last_name=last_name,
        email=email.strip().lower(),
        password_hash=hash_password(password),
        location=location,
        bio=bio,
        skills=list(skills or []),
        experience=[],
        education=[],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
    location: str | None = None,
    bio: str | None = None,
    skills: list[str] | None = None,
    resume: str | None = None,
    profile_image: str | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if first_name is not None:
        user.first_name = first_name
    if last_name is not None:
        user.last_name = last_name
    if email is not None:
        user.email = email.strip().lower()
    if location is not None:
        user.location = location
    if bio is not None:
        user.bio = bio
    if skills is not None:
        user.skills = list(skills)
    if resume is not None:
        user.resume = resume
    if profile_image is not None:
        user.profile_image = profile_image
    db.commit()
    db.refresh(user)
    return user


def add_experience(db: Session, user_id: str, entry: dict) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    # Reassign rather than mutate so the JSON column is flagged dirty.
    user.experience = [*(user.experience or []), entry]
    db.commit()
    db.refresh(user)
    return user


def add_education(db: Session, user_id: str, entry: dict) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    user.education = [*(user.education or []), entry]
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: str) -> bool:
    """Delete the applicant account. Applications and chats are left in place."""
    user = get_by_id(db, user_id)
    if not user:
        return False
    db.delete(user)
    db.commit()
    return True
