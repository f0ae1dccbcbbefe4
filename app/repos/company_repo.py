from sqlalchemy.orm import Session

from app.models.company import Company
from app.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> Company | None:
    return db.query(Company).filter(Company.email == email.strip().lower()).first()


def get_by_id(db: Session, company_id: str) -> Company | None:
    return db.query(Company).filter(Company.id == company_id).first()


def create(
    db: Session,
    *,
    company_name: str,
    email: str,
    password: str,
    industry: str,
    location: str,
    description: str | None = None,
    website: str | None = None,
    logo: str | None = None,
) -> Company:
    company = Company(
        id=generate_id(),
        company_name=company_name,
        email=email.strip().lower(),
        password_hash=hash_password(password),
        industry=industry,
        location=location,
        description=description,
        website=website,
        logo=logo,
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def update(
    db: Session,
    company_id: str,
    *,
    company_name: str | None = None,
    email: str | None = None,
    industry: str | None = None,
    location: str | None = None,
    description: str | None = None,
    website: str | None = None,
    logo: str | None = None,
) -> Company | None:
    company = get_by_id(db, company_id)
    if not company:
        return None
    if company_name is not None:
        company.company_name = company_name
    if email is not None:
        company.email = email.strip().lower()
    if industry is not None:
        company.industry = industry
    if location is not None:
        company.location = location
    if description is not None:
        company.description = description
    if website is not None:
        company.website = website
    if logo is not None:
        company.logo = logo
    db.commit()
    db.refresh(company)
    return company


def get_all_paginated(
    db: Session,
    industry: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Company], int]:
    """List companies alphabetically, optionally by exact industry. Returns (items, total)."""
    q = db.query(Company).order_by(Company.company_name.asc())
    if industry:
        q = q.filter(Company.industry == industry)
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total


def delete(db: Session, company_id: str) -> bool:
    """Delete the company account and close its active postings. Returns True if deleted."""
    from app.models.job import Job, JobStatus

    company = get_by_id(db, company_id)
    if not company:
        return False
    (
        db.query(Job)
        .filter(Job.company_id == company_id, Job.status == JobStatus.ACTIVE.value)
        .update({Job.status: JobStatus.CLOSED.value}, synchronize_session=False)
    )
    db.delete(company)
    db.commit()
    return True
