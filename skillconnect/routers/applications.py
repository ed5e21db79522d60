import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from skillconnect.core.errors import ServiceError
from skillconnect.database import get_db
from skillconnect.dependencies import require_seeker
from skillconnect.models.user import User
from skillconnect.repos.application_repo import (
    delete as delete_application,
    get_for_applicant,
    get_owned,
    stats_for_applicant,
)
from skillconnect.schemas.application import ApplicationResponse, ApplicationStats, CVUploadResponse
from skillconnect.services.cv_storage import CVRejected, store_cv

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("/cv", response_model=CVUploadResponse)
async def upload_cv(
    file: UploadFile = File(..., description="CV as PDF, DOC or DOCX"),
    user: User = Depends(require_seeker),
):
    """Upload a CV ahead of submitting an application. Returns its public URL."""
    try:
        content = await file.read()
        url, filename = store_cv(user.id, file.filename, file.content_type, content)
        return CVUploadResponse(url=url, filename=filename)
    except CVRejected as e:
        logger.info("CV rejected for user=%s: %s", user.id, e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("CV upload failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to upload CV") from e


@router.get("", response_model=list[ApplicationResponse])
def list_my_applications(
    status_filter: str | None = Query(default=None, alias="status"),
    q: str | None = None,
    sort: str = "recent",
    db: Session = Depends(get_db),
    user: User = Depends(require_seeker),
):
    return get_for_applicant(db, user.id, status=status_filter, search=q, sort=sort)


@router.get("/stats", response_model=ApplicationStats)
def my_application_stats(
    db: Session = Depends(get_db),
    user: User = Depends(require_seeker),
):
    return stats_for_applicant(db, user.id)


@router.get("/recent", response_model=list[ApplicationResponse])
def my_recent_applications(
    limit: int = 5,
    db: Session = Depends(get_db),
    user: User = Depends(require_seeker),
):
    return get_for_applicant(db, user.id, limit=min(max(1, limit), 50))


@router.delete("/{application_id}")
def withdraw_application(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_seeker),
):
    application = get_owned(db, application_id, user.id)
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    delete_application(db, application)
    logger.info("Application withdrawn: id=%s user=%s", application_id, user.id)
    return {"message": "Application withdrawn"}
