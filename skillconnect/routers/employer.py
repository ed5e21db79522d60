import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from skillconnect.database import get_db
from skillconnect.dependencies import require_employer
from skillconnect.models.user import User
from skillconnect.repos.application_repo import get_by_id as get_application, get_for_job, update_status
from skillconnect.repos.job_repo import (
    create as create_job,
    get_for_employer,
    get_owned,
    update as update_job,
)
from skillconnect.schemas.application import ApplicationResponse, ApplicationStatusUpdate
from skillconnect.schemas.job import JobCreate, JobResponse, JobUpdate
from skillconnect.services.job_service import invalidate as invalidate_job_cache
from skillconnect.services.moderation import moderate_job

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employer", tags=["employer"])


def _owned_or_404(db: Session, job_id: str, employer_id: str):
    job = get_owned(db, job_id, employer_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


def _editable_or_error(db: Session, job_id: str, employer_id: str):
    """Owned job that a moderator has not removed; removal is final for the employer."""
    job = _owned_or_404(db, job_id, employer_id)
    if job.status == "removed":
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This job was removed by a moderator")
    return job


@router.get("/jobs", response_model=list[JobResponse])
def list_my_jobs(
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    return get_for_employer(db, user.id)


@router.post("/jobs", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def post_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    """Create a job posting. Postings with suspicious phrases are flagged for admin review."""
    try:
        moderation_status, flags = moderate_job(data.title, data.description)
        if flags:
            logger.warning("Job posting by employer=%s flagged: %s", user.id, ", ".join(flags))
        job = create_job(db, user.id, data.model_dump(), moderation_status=moderation_status, moderation_flags=flags)
        invalidate_job_cache()
        return job
    except Exception as e:
        logger.exception("Create job failed for employer=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create job") from e


@router.patch("/jobs/{job_id}", response_model=JobResponse)
def edit_job(
    job_id: str,
    data: JobUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    try:
        job = _editable_or_error(db, job_id, user.id)
        changes = data.model_dump(exclude_unset=True)
        moderation = {}
        if changes.get("title") or changes.get("description"):
            moderation_status, flags = moderate_job(
                changes.get("title") or job.title, changes.get("description") or job.description
            )
            if flags:
                logger.warning("Edited job=%s flagged: %s", job_id, ", ".join(flags))
            moderation = {"moderation_status": moderation_status, "moderation_flags": flags}
        job = update_job(db, job, changes, **moderation)
        invalidate_job_cache()
        logger.info("Job updated: id=%s employer=%s", job_id, user.id)
        return job
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Update job failed for job=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update job") from e


@router.delete("/jobs/{job_id}")
def close_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    """Close a posting; applications stay attached."""
    job = _editable_or_error(db, job_id, user.id)
    update_job(db, job, {"status": "closed"})
    invalidate_job_cache()
    logger.info("Job closed: id=%s employer=%s", job_id, user.id)
    return {"message": "Job closed"}


@router.get("/jobs/{job_id}/applications", response_model=list[ApplicationResponse])
def list_job_applications(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    _owned_or_404(db, job_id, user.id)
    return get_for_job(db, job_id)


@router.patch("/applications/{application_id}", response_model=ApplicationResponse)
def set_application_status(
    application_id: str,
    data: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    application = get_application(db, application_id)
    if not application or not application.job or application.job.employer_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    application = update_status(db, application, data.status)
    logger.info("Application %s moved to %s by employer=%s", application_id, data.status, user.id)
    return application
