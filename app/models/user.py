from sqlalchemy import Column, String, Text, DateTime

from app.database import Base, JSONDocument, utcnow


class User(Base):
    """Applicant account. Experience and education entries are stored as JSON lists."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    location = Column(String)
    bio = Column(Text)
    skills = Column(JSONDocument, nullable=False, default=list)
    experience = Column(JSONDocument, nullable=False, default=list)
    education = Column(JSONDocument, nullable=False, default=list)
    resume = Column(String)  # URL / storage key of the CV document
    profile_image = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)
