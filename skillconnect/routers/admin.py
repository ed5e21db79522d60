import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from skillconnect.database import get_db
from skillconnect.dependencies import require_admin
from skillconnect.models.application import Application
from skillconnect.models.user import User
from skillconnect.repos.activity_repo import get_recent as get_recent_activity, log_activity
from skillconnect.repos.admin_repo import get_stats
from skillconnect.repos.application_repo import get_all_paginated as get_applications_paginated
from skillconnect.repos.job_repo import get_all_paginated as get_jobs_paginated, set_status as set_job_status
from skillconnect.repos.user_repo import get_all_users, get_all_users_paginated, get_by_id, update as update_user
from skillconnect.schemas.admin import (
    AdminActivityResponse,
    AdminApplicationRow,
    AdminStats,
    AdminUserRow,
    Insight,
    UserStatusAction,
)
from skillconnect.schemas.job import JobModerationAction, JobResponse
from skillconnect.services.csv_export import export_filename, users_to_csv
from skillconnect.services.job_service import invalidate as invalidate_job_cache
from skillconnect.services.moderation import generate_insights

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])

USER_ACTION_STATUS = {"suspend": "suspended", "ban": "banned", "activate": "active"}


def _user_to_response(u: User) -> AdminUserRow:
    return AdminUserRow(
        id=u.id,
        email=u.email,
        name=f"{u.first_name or ''} {u.last_name or ''}".strip(),
        role=u.role,
        status=u.status or "active",
        created_at=u.created_at,
        last_login=u.last_login,
    )


def _application_to_response(a: Application) -> AdminApplicationRow:
    return AdminApplicationRow(
        id=a.id,
        job_id=a.job_id,
        job_title=a.job.title if a.job else None,
        applicant_id=a.applicant_id,
        applicant_name=a.applicant_name,
        applicant_email=a.applicant_email,
        status=a.status,
        created_at=a.created_at,
    )


def _page_bounds(page: int, page_size: int) -> tuple[int, int, int]:
    page = max(1, page)
    page_size = min(max(1, page_size), 100)
    return page, page_size, (page - 1) * page_size


@router.get("/stats", response_model=AdminStats)
def get_admin_stats(
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Return dashboard stats and system health. Admin only."""
    try:
        return get_stats(db)
    except Exception as e:
        logger.exception("Admin stats failed for admin=%s: %s", user.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load admin stats") from e


@router.get("/users")
def list_users(
    search: str | None = None,
    role: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    page: int = 1,
    page_size: int = 20,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """List users with optional name/email search, role and status filters. Admin only."""
    page, page_size, offset = _page_bounds(page, page_size)
    users, total = get_all_users_paginated(
        db, search=search, role=role, status=status_filter, limit=page_size, offset=offset
    )
    return {"items": [_user_to_response(u) for u in users], "total": total}


@router.get("/users/export.csv")
def export_users_csv(
    search: str | None = None,
    role: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Download the filtered user list as CSV. Admin only."""
    try:
        users = get_all_users(db, search=search, role=role, status=status_filter)
        body = users_to_csv(users)
        log_activity(db, user.id, "export_users", details={"count": len(users)})
        return Response(
            content=body,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
        )
    except Exception as e:
        logger.exception("User export failed for admin=%s: %s", user.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to export users") from e


@router.patch("/users/{user_id}/status", response_model=AdminUserRow)
def change_user_status(
    user_id: str,
    data: UserStatusAction,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Suspend, ban or reactivate a user. Admin only; admins cannot change their own status."""
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot change your own status")
    try:
        target = get_by_id(db, user_id)
        if not target:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        new_status = USER_ACTION_STATUS[data.action]
        target = update_user(db, user_id, status=new_status)
        log_activity(db, current_user.id, f"user_{data.action}", "user", user_id, {"status": new_status})
        logger.info("Admin %s set user=%s status=%s", current_user.email, user_id, new_status)
        return _user_to_response(target)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Status change failed for user=%s: %s", user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update user status") from e


@router.get("/jobs")
def list_jobs(
    status_filter: str | None = Query(default=None, alias="status"),
    moderation_status: str | None = None,
    search: str | None = None,
    page: int = 1,
    page_size: int = 20,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """List all jobs with status and moderation filters. Admin only."""
    page, page_size, offset = _page_bounds(page, page_size)
    jobs, total = get_jobs_paginated(
        db,
        status=status_filter,
        moderation_status=moderation_status,
        search=search,
        limit=page_size,
        offset=offset,
    )
    return {"items": [JobResponse.model_validate(j) for j in jobs], "total": total}


@router.patch("/jobs/{job_id}", response_model=JobResponse)
def moderate_job(
    job_id: str,
    data: JobModerationAction,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Approve (re-activate) or remove a job posting. Admin only."""
    try:
        if data.action == "approve":
            job = set_job_status(db, job_id, "active", moderation_status="approved")
        else:
            job = set_job_status(db, job_id, "removed")
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
        invalidate_job_cache()
        log_activity(db, user.id, f"job_{data.action}", "job", job_id, {"status": job.status})
        return job
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Job moderation failed for job=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to moderate job") from e


@router.get("/applications")
def list_applications(
    status_filter: str | None = Query(default=None, alias="status"),
    page: int = 1,
    page_size: int = 20,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    page, page_size, offset = _page_bounds(page, page_size)
    items, total = get_applications_paginated(db, status=status_filter, limit=page_size, offset=offset)
    return {"items": [_application_to_response(a) for a in items], "total": total}


@router.get("/activity", response_model=list[AdminActivityResponse])
def list_activity(
    limit: int = 50,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    return get_recent_activity(db, limit=min(max(1, limit), 200))


@router.get("/insights", response_model=list[Insight])
def get_insights(
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    try:
        return generate_insights(db)
    except Exception as e:
        logger.exception("Insight generation failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate insights") from e
