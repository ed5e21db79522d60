from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skillconnect.database import Base

JOB_TYPES = ("full-time", "part-time", "contract", "internship")
JOB_STATUSES = ("active", "closed", "draft", "removed")
MODERATION_STATUSES = ("approved", "flagged", "pending")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    employer_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    location = Column(String, nullable=False, default="")
    type = Column(String, nullable=False, default="full-time")
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    description = Column(Text, nullable=False, default="")
    requirements = Column(JSONB)
    benefits = Column(JSONB)
    category = Column(String)
    experience_level = Column(String)
    remote = Column(Boolean, default=False)
    status = Column(String, nullable=False, default="active", index=True)
    moderation_status = Column(String, nullable=False, default="pending")
    moderation_flags = Column(JSONB)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employer = relationship("User", back_populates="jobs")
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
