import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session as DBSession

from skillconnect.config import settings
from skillconnect.core.session_gate import Session, is_expired, parse_session
from skillconnect.database import get_db
from skillconnect.repos.user_repo import get_by_id

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Session | None:
    """Session from the bearer header, falling back to the session cookie. None when absent or invalid."""
    token = credentials.credentials if credentials else request.cookies.get(settings.session_cookie_name)
    return parse_session(token)


def get_current_user(
    db: DBSession = Depends(get_db),
    session: Session | None = Depends(get_session),
) -> "User":
    from skillconnect.models.user import User  # noqa: F401

    if session is None:
        logger.info("Auth failed: missing or invalid session")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    if is_expired(session):
        logger.info("Auth failed: session expired for user=%s", session.user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired. Please log in again.",
        )
    user = get_by_id(db, session.user_id)
    if not user:
        logger.info("Auth failed: user from session not found")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    if (user.status or "active") != "active":
        logger.info("Auth failed: user=%s is %s", user.id, user.status)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Account is {user.status}",
        )
    return user


def _require_role(role: str):
    def dependency(user=Depends(get_current_user)):
        if user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{role.capitalize()} access required",
            )
        return user

    dependency.__name__ = f"require_{role}"
    return dependency


require_seeker = _require_role("seeker")
require_employer = _require_role("employer")
require_admin = _require_role("admin")
