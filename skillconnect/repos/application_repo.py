import logging
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from skillconnect.core.errors import ErrorKind, ServiceError
from skillconnect.core.security import generate_id
from skillconnect.models.application import Application
from skillconnect.models.job import Job

logger = logging.getLogger(__name__)

APPLICATION_FIELDS = (
    "applicant_name",
    "applicant_email",
    "applicant_phone",
    "cover_letter",
    "experience_summary",
    "expected_salary",
    "available_start_date",
    "additional_info",
    "portfolio_url",
    "linkedin_url",
    "cv_url",
    "cv_filename",
)


def has_applied(db: Session, applicant_id: str, job_id: str) -> bool:
    return (
        db.query(Application.id)
        .filter(Application.applicant_id == applicant_id, Application.job_id == job_id)
        .first()
        is not None
    )


def create(db: Session, applicant_id: str, job_id: str, data: dict) -> Application:
    """
    Insert a pending application. The (applicant_id, job_id) unique constraint
    turns a concurrent duplicate into a CONFLICT instead of a second row.
    """
    application = Application(
        id=generate_id(),
        job_id=job_id,
        applicant_id=applicant_id,
        status="pending",
        **{k: data.get(k) for k in APPLICATION_FIELDS},
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Duplicate application rejected: applicant=%s job=%s", applicant_id, job_id)
        raise ServiceError(ErrorKind.CONFLICT, "You have already applied for this job") from e
    db.refresh(application)
    return application


def get_by_id(db: Session, application_id: str) -> Application | None:
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.id == application_id)
        .first()
    )


def get_owned(db: Session, application_id: str, applicant_id: str) -> Application | None:
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.id == application_id, Application.applicant_id == applicant_id)
        .first()
    )


def get_for_applicant(
    db: Session,
    applicant_id: str,
    status: str | None = None,
    search: str | None = None,
    sort: str = "recent",
    limit: int | None = None,
) -> list[Application]:
    """A seeker's applications with optional status filter, job search and sort order."""
    q = (
        db.query(Application)
        .join(Job, Application.job_id == Job.id)
        .options(joinedload(Application.job))
        .filter(Application.applicant_id == applicant_id)
    )
    if status and status != "all":
        q = q.filter(Application.status == status)
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(or_(Job.title.ilike(term), Job.company.ilike(term), Job.location.ilike(term)))
    if sort == "oldest":
        q = q.order_by(Application.created_at.asc())
    elif sort == "status":
        q = q.order_by(Application.status.asc())
    elif sort == "company":
        q = q.order_by(Job.company.asc())
    else:
        q = q.order_by(Application.created_at.desc())
    if limit:
        q = q.limit(limit)
    return q.all()


def get_for_job(db: Session, job_id: str) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id)
        .order_by(Application.created_at.desc())
        .all()
    )


def stats_for_applicant(db: Session, applicant_id: str) -> dict:
    statuses = [a.status for a in get_for_applicant(db, applicant_id)]
    return {
        "total": len(statuses),
        "pending": statuses.count("pending"),
        "reviewed": statuses.count("reviewed"),
        "shortlisted": statuses.count("shortlisted"),
        "accepted": statuses.count("accepted") + statuses.count("hired"),
        "rejected": statuses.count("rejected"),
    }


def update_status(db: Session, application: Application, status: str) -> Application:
    application.status = status
    db.commit()
    db.refresh(application)
    return application


def delete(db: Session, application: Application) -> None:
    db.delete(application)
    db.commit()


def get_all_paginated(
    db: Session,
    status: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Application], int]:
    q = db.query(Application).options(joinedload(Application.job)).order_by(Application.created_at.desc())
    if status and status != "all":
        q = q.filter(Application.status == status)
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total


def count_since(db: Session, since: datetime) -> int:
    return db.query(Application).filter(Application.created_at >= since).count()
