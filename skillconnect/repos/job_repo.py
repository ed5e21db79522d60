import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from skillconnect.core.security import generate_id
from skillconnect.models.job import Job

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "created_at": Job.created_at,
    "salary_min": Job.salary_min,
    "salary_max": Job.salary_max,
    "title": Job.title,
}

JOB_FIELDS = (
    "title",
    "company",
    "location",
    "type",
    "salary_min",
    "salary_max",
    "description",
    "requirements",
    "benefits",
    "category",
    "experience_level",
    "remote",
    "status",
)


def get_by_id(db: Session, job_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id).first()


def get_active_by_id(db: Session, job_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id, Job.status == "active").first()


def get_active(
    db: Session,
    limit: int | None = None,
    sort_field: str = "created_at",
    descending: bool = True,
) -> list[Job]:
    """Active jobs ordered by sort_field (newest first by default)."""
    column = SORT_FIELDS.get(sort_field, Job.created_at)
    q = db.query(Job).filter(Job.status == "active")
    q = q.order_by(column.desc() if descending else column.asc())
    if limit:
        q = q.limit(limit)
    return q.all()


def get_for_employer(db: Session, employer_id: str) -> list[Job]:
    return (
        db.query(Job)
        .filter(Job.employer_id == employer_id)
        .order_by(Job.created_at.desc())
        .all()
    )


def get_owned(db: Session, job_id: str, employer_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id, Job.employer_id == employer_id).first()


def create(
    db: Session,
    employer_id: str,
    fields: dict,
    *,
    moderation_status: str = "pending",
    moderation_flags: list[str] | None = None,
) -> Job:
    job = Job(
        id=generate_id(),
        employer_id=employer_id,
        moderation_status=moderation_status,
        moderation_flags=moderation_flags or [],
        **{k: v for k, v in fields.items() if k in JOB_FIELDS},
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Job created: id=%s employer=%s moderation=%s", job.id, employer_id, moderation_status)
    return job


def update(
    db: Session,
    job: Job,
    changes: dict,
    *,
    moderation_status: str | None = None,
    moderation_flags: list[str] | None = None,
) -> Job:
    for field, value in changes.items():
        if field in JOB_FIELDS and value is not None:
            setattr(job, field, value)
    if moderation_status is not None:
        job.moderation_status = moderation_status
        job.moderation_flags = moderation_flags or []
    db.commit()
    db.refresh(job)
    return job


def set_status(
    db: Session,
    job_id: str,
    status: str,
    *,
    moderation_status: str | None = None,
) -> Job | None:
    job = get_by_id(db, job_id)
    if not job:
        return None
    job.status = status
    if moderation_status is not None:
        job.moderation_status = moderation_status
    db.commit()
    db.refresh(job)
    return job


def get_all_paginated(
    db: Session,
    status: str | None = None,
    moderation_status: str | None = None,
    search: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Job], int]:
    """List all jobs for admin with optional status and title/company search. Returns (items, total)."""
    q = db.query(Job).order_by(Job.created_at.desc())
    if status and status != "all":
        q = q.filter(Job.status == status)
    if moderation_status and moderation_status != "all":
        q = q.filter(Job.moderation_status == moderation_status)
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(or_(Job.title.ilike(term), Job.company.ilike(term)))
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total


def get_recent(db: Session, limit: int = 100) -> list[Job]:
    return db.query(Job).order_by(Job.created_at.desc()).limit(limit).all()


def distinct_locations(db: Session) -> list[str]:
    rows = db.query(Job.location).filter(Job.status == "active").distinct().all()
    return sorted({r[0] for r in rows if r[0]})


def distinct_companies(db: Session) -> list[str]:
    rows = db.query(Job.company).filter(Job.status == "active").distinct().all()
    return sorted({r[0] for r in rows if r[0]})
