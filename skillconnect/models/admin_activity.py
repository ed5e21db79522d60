from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from skillconnect.database import Base


class AdminActivity(Base):
    """Audit trail of moderation actions taken by admins."""

    __tablename__ = "admin_activity_log"

    id = Column(String, primary_key=True, index=True)
    admin_id = Column(String, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    action = Column(String, nullable=False)
    target_type = Column(String)
    target_id = Column(String)
    details = Column(JSONB)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
