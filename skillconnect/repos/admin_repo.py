"""Admin-specific repository functions for dashboard stats."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from skillconnect.models.user import User
from skillconnect.models.job import Job
from skillconnect.models.application import Application

ACTIVE_USER_DAYS = 7


def system_health(
    total_applications: int,
    pending_applications: int,
    total_jobs: int,
    active_jobs: int,
) -> str:
    """Rate platform health from the share of pending applications and active jobs."""
    pending_ratio = (pending_applications / total_applications) * 100 if total_applications else 0
    active_job_ratio = (active_jobs / total_jobs) * 100 if total_jobs else 0
    if pending_ratio > 80 or active_job_ratio < 20:
        return "critical"
    if pending_ratio > 60 or active_job_ratio < 40:
        return "warning"
    if pending_ratio < 20 and active_job_ratio > 80:
        return "excellent"
    return "good"


def get_stats(db: Session) -> dict:
    """Return admin dashboard stats."""
    active_since = datetime.now(timezone.utc) - timedelta(days=ACTIVE_USER_DAYS)
    user_count = db.query(func.count(User.id)).scalar() or 0
    active_user_count = db.query(func.count(User.id)).filter(User.last_login >= active_since).scalar() or 0
    job_count = db.query(func.count(Job.id)).scalar() or 0
    active_job_count = db.query(func.count(Job.id)).filter(Job.status == "active").scalar() or 0
    flagged_job_count = db.query(func.count(Job.id)).filter(Job.moderation_status == "flagged").scalar() or 0
    application_count = db.query(func.count(Application.id)).scalar() or 0
    pending_count = db.query(func.count(Application.id)).filter(Application.status == "pending").scalar() or 0
    return {
        "users_total": user_count,
        "users_active": active_user_count,
        "jobs_total": job_count,
        "jobs_active": active_job_count,
        "jobs_flagged": flagged_job_count,
        "applications_total": application_count,
        "applications_pending": pending_count,
        "system_health": system_health(application_count, pending_count, job_count, active_job_count),
    }
