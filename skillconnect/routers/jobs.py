import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from skillconnect.config import settings
from skillconnect.core.errors import ServiceError
from skillconnect.core.session_gate import Session as UserSession, evaluate, login_url
from skillconnect.database import get_db
from skillconnect.dependencies import get_session, require_seeker
from skillconnect.models.user import User
from skillconnect.repos.application_repo import create as create_application, has_applied
from skillconnect.repos.job_repo import get_active_by_id
from skillconnect.repos.user_repo import get_by_id as get_user_by_id
from skillconnect.schemas.application import (
    ApplicationCreate,
    ApplicationJobSummary,
    ApplicationResponse,
    ApplicationSubmitted,
    ApplyFormPrefill,
)
from skillconnect.schemas.job import JobListResponse, JobResponse, JobStats
from skillconnect.services.application_form import build_prefill
from skillconnect.services.job_listing import JobFilters, filter_jobs, next_load_action, paginate
from skillconnect.services.job_service import (
    get_job,
    job_stats,
    list_active_jobs,
    unique_companies,
    unique_locations,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])

APPLICATIONS_PAGE = "/dashboard/seeker/applications"
REDIRECT_AFTER_SUBMIT_SECONDS = 2


def _redirect(target: str) -> RedirectResponse:
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_model=JobListResponse)
def list_jobs(
    search: str = "",
    location: str = "",
    type: str = "",
    salary_min: int | None = None,
    salary_max: int | None = None,
    page: int = 1,
    batch: int = 1,
    db: Session = Depends(get_db),
):
    """Browse active jobs. Filters narrow the fetched batch; page reveals jobs_per_page more each step."""
    try:
        page = max(1, page)
        limit = settings.jobs_fetch_batch * max(1, batch)
        # One extra row tells whether another batch exists
        fetched = list_active_jobs(db, limit + 1)
        jobs = fetched[:limit]
        filters = JobFilters(search=search, location=location, type=type, salary_min=salary_min, salary_max=salary_max)
        filtered = filter_jobs(jobs, filters)
        shown, more_fetched = paginate(filtered, page, settings.jobs_per_page)
        return JobListResponse(
            items=shown,
            total=len(filtered),
            page=page,
            has_more=more_fetched or len(fetched) > limit,
            next_action=next_load_action(len(shown), len(filtered)),
        )
    except Exception as e:
        logger.exception("Job listing failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load jobs") from e


@router.get("/stats", response_model=JobStats)
def get_job_stats(db: Session = Depends(get_db)):
    return job_stats(db)


@router.get("/locations", response_model=list[str])
def get_locations(db: Session = Depends(get_db)):
    return unique_locations(db)


@router.get("/companies", response_model=list[str])
def get_companies(db: Session = Depends(get_db)):
    return unique_companies(db)


@router.get("/{job_id}", response_model=JobResponse)
def get_job_detail(job_id: str, db: Session = Depends(get_db)):
    job = get_job(db, job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


@router.get("/{job_id}/apply-now")
def apply_now(
    job_id: str,
    session: UserSession | None = Depends(get_session),
):
    """'Apply now' button: visitors without a session are sent to signup, everyone else to the form."""
    apply_path = f"/jobs/{job_id}/apply"
    decision = evaluate(session, "seeker", apply_path, missing_goes_to_signup=True)
    if not decision.allowed:
        return _redirect(decision.redirect_to)
    return _redirect(apply_path)


@router.get("/{job_id}/apply", response_model=ApplyFormPrefill)
def apply_form(
    job_id: str,
    db: Session = Depends(get_db),
    session: UserSession | None = Depends(get_session),
):
    """Application page: gate, load the job, stop if already applied, else return the profile prefill."""
    path = f"/jobs/{job_id}/apply"
    decision = evaluate(session, "seeker", path)
    if not decision.allowed:
        return _redirect(decision.redirect_to)
    try:
        user = get_user_by_id(db, session.user_id)
        if not user or (user.status or "active") != "active":
            return _redirect(login_url(path))
        job = get_active_by_id(db, job_id)
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
        if has_applied(db, user.id, job_id):
            logger.info("User=%s already applied to job=%s; redirecting", user.id, job_id)
            return _redirect(f"{APPLICATIONS_PAGE}?error=already_applied")
        return ApplyFormPrefill(job=ApplicationJobSummary.model_validate(job), **build_prefill(user))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Apply form failed for job=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load application form") from e


@router.post("/{job_id}/apply", response_model=ApplicationSubmitted, status_code=status.HTTP_201_CREATED)
def submit_application(
    job_id: str,
    data: ApplicationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_seeker),
):
    try:
        job = get_active_by_id(db, job_id)
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
        if has_applied(db, user.id, job_id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You have already applied for this job")
        application = create_application(db, user.id, job_id, data.model_dump())
        logger.info("Application submitted: user=%s job=%s", user.id, job_id)
        return ApplicationSubmitted(
            application=ApplicationResponse.model_validate(application),
            redirect_to=APPLICATIONS_PAGE,
            redirect_after_seconds=REDIRECT_AFTER_SUBMIT_SECONDS,
        )
    except (HTTPException, ServiceError):
        raise
    except Exception as e:
        logger.exception("Application submit failed for user=%s job=%s: %s", user.id, job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to submit application") from e
