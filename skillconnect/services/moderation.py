import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from skillconnect.repos.application_repo import count_since
from skillconnect.repos.job_repo import get_recent
from skillconnect.repos.user_repo import get_all_users

logger = logging.getLogger(__name__)

SUSPICIOUS_PHRASES = ("quick money", "earn fast", "work from home", "make money")
INACTIVE_DAYS = 30
HIGH_VOLUME_THRESHOLD = 20


def keyword_flags(*texts: str | None) -> list[str]:
    """Suspicious phrases found in any of the given texts (case-insensitive)."""
    blob = " ".join(t for t in texts if t).lower()
    return [p for p in SUSPICIOUS_PHRASES if p in blob]


def moderate_job(title: str, description: str | None) -> tuple[str, list[str]]:
    """Returns (moderation_status, flags) for a new posting."""
    flags = keyword_flags(title, description)
    return ("flagged" if flags else "approved"), flags


def _is_high_risk(user, now: datetime) -> bool:
    if not (user.bio or "").strip():
        return True
    if user.last_login is None:
        return True
    last_login = user.last_login if user.last_login.tzinfo else user.last_login.replace(tzinfo=timezone.utc)
    return now - last_login > timedelta(days=INACTIVE_DAYS)


def generate_insights(db: Session, now: datetime | None = None) -> list[dict]:
    """Heuristic admin insights: risky accounts, suspicious postings, application spikes."""
    now = now or datetime.now(timezone.utc)
    insights = []

    users = get_all_users(db)
    risky = [u for u in users if u.role != "admin" and _is_high_risk(u, now)]
    if risky:
        insights.append(
            {
                "type": "risk",
                "severity": "high" if len(risky) > 5 else "medium",
                "title": "High-risk users detected",
                "description": f"{len(risky)} users have incomplete profiles or have been inactive for over {INACTIVE_DAYS} days",
                "count": len(risky),
            }
        )

    suspicious = [j for j in get_recent(db) if keyword_flags(j.title, j.description)]
    if suspicious:
        insights.append(
            {
                "type": "content",
                "severity": "medium",
                "title": "Suspicious job postings",
                "description": f"{len(suspicious)} job postings contain potentially misleading content",
                "count": len(suspicious),
            }
        )

    recent_count = count_since(db, now - timedelta(hours=24))
    if recent_count > HIGH_VOLUME_THRESHOLD:
        insights.append(
            {
                "type": "volume",
                "severity": "low",
                "title": "High application volume",
                "description": f"{recent_count} applications in the last 24 hours",
                "count": recent_count,
            }
        )

    logger.info("Generated %d admin insights", len(insights))
    return insights
