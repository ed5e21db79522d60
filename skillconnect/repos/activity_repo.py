import logging

from sqlalchemy.orm import Session

from skillconnect.core.security import generate_id
from skillconnect.models.admin_activity import AdminActivity

logger = logging.getLogger(__name__)


def log_activity(
    db: Session,
    admin_id: str,
    action: str,
    target_type: str | None = None,
    target_id: str | None = None,
    details: dict | None = None,
) -> AdminActivity:
    entry = AdminActivity(
        id=generate_id(),
        admin_id=admin_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        details=details,
    )
    db.add(entry)
    db.commit()
    logger.info("Admin activity: admin=%s action=%s %s=%s", admin_id, action, target_type, target_id)
    return entry


def get_recent(db: Session, limit: int = 50) -> list[AdminActivity]:
    return db.query(AdminActivity).order_by(AdminActivity.created_at.desc()).limit(limit).all()
