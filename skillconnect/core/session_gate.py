"""
Session gate: decides whether a caller may use a protected page and where to
send them when not. The session itself is a signed token (see core.security),
so role and login time cannot be edited by the client.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from urllib.parse import quote

from skillconnect.config import settings
from skillconnect.core.security import decode_session_token

logger = logging.getLogger(__name__)

DASHBOARDS = {
    "seeker": "/dashboard/seeker",
    "employer": "/dashboard/employer",
    "admin": "/dashboard/admin",
}


@dataclass(frozen=True)
class Session:
    user_id: str
    email: str
    role: str
    login_time: datetime
    last_login: datetime | None = None

    @classmethod
    def from_claims(cls, claims: dict) -> "Session":
        last_login = claims.get("last_login")
        return cls(
            user_id=str(claims["sub"]),
            email=str(claims.get("email") or ""),
            role=str(claims["role"]),
            login_time=datetime.fromtimestamp(int(claims["login_time"]), tz=timezone.utc),
            last_login=datetime.fromtimestamp(int(last_login), tz=timezone.utc) if last_login else None,
        )


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    redirect_to: str | None = None
    reason: str | None = None  # missing | role | expired


def parse_session(token: str | None) -> Session | None:
    """Any unreadable, tampered or expired token counts as not logged in."""
    if not token:
        return None
    claims = decode_session_token(token)
    if not claims:
        return None
    try:
        return Session.from_claims(claims)
    except (KeyError, TypeError, ValueError) as e:
        logger.info("Discarding malformed session claims: %s", e)
        return None


def is_expired(session: Session, now: datetime | None = None, timeout: timedelta | None = None) -> bool:
    if session.last_login is None:
        return True
    now = now or datetime.now(timezone.utc)
    timeout = timeout or timedelta(minutes=settings.session_timeout_minutes)
    return now - session.last_login > timeout


def safe_redirect_path(path: str | None) -> str | None:
    """Only site-relative paths are allowed as redirect targets."""
    if not path or not path.startswith("/") or "\\" in path:
        return None
    # Browsers drop tab/CR/LF inside URLs, so "/\t/host" would become "//host"
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in path):
        return None
    if path.startswith("//"):
        return None
    return path


def login_url(redirect: str | None = None) -> str:
    target = safe_redirect_path(redirect)
    if not target:
        return "/auth/login"
    return f"/auth/login?redirect={quote(target, safe='/')}"


def signup_url(redirect: str | None = None) -> str:
    target = safe_redirect_path(redirect)
    if not target:
        return "/auth/signup"
    return f"/auth/signup?redirect={quote(target, safe='/')}"


def dashboard_for_role(role: str | None) -> str:
    return DASHBOARDS.get(role or "", DASHBOARDS["seeker"])


def post_login_target(role: str, redirect: str | None) -> str:
    return safe_redirect_path(redirect) or dashboard_for_role(role)


def evaluate(
    session: Session | None,
    required_role: str | None,
    path: str,
    now: datetime | None = None,
    missing_goes_to_signup: bool = False,
) -> GateDecision:
    """
    Check a session against a page's role requirement.
    Missing session -> login (or signup); role mismatch or stale session -> login.
    The original path is preserved in the redirect query parameter.
    """
    if session is None:
        target = signup_url(path) if missing_goes_to_signup else login_url(path)
        return GateDecision(allowed=False, redirect_to=target, reason="missing")
    if required_role and session.role != required_role:
        logger.info("Gate: role %s cannot open %s (needs %s)", session.role, path, required_role)
        return GateDecision(allowed=False, redirect_to=login_url(path), reason="role")
    if is_expired(session, now=now):
        logger.info("Gate: session for user=%s expired", session.user_id)
        return GateDecision(allowed=False, redirect_to=login_url(path), reason="expired")
    return GateDecision(allowed=True)
