from sqlalchemy import Column, String, Text, DateTime

from app.database import Base, utcnow


class Company(Base):
    """Employer account. Owns job postings."""

    __tablename__ = "companies"

    id = Column(String, primary_key=True, index=True)
    company_name = Column(String, nullable=False, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    industry = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False)
    description = Column(Text)
    website = Column(String)
    logo = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)
