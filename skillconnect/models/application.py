from sqlalchemy import Column, Date, String, Text, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skillconnect.database import Base

APPLICATION_STATUSES = ("pending", "reviewed", "shortlisted", "accepted", "rejected", "hired")


class Application(Base):
    """A seeker's application to one job. At most one per (applicant, job)."""

    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("applicant_id", "job_id", name="uq_application_applicant_job"),)

    id = Column(String, primary_key=True, index=True)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_name = Column(String, nullable=False)
    applicant_email = Column(String, nullable=False)
    applicant_phone = Column(String)
    cover_letter = Column(Text, nullable=False)
    experience_summary = Column(Text, nullable=False)
    expected_salary = Column(Integer)
    available_start_date = Column(Date)
    additional_info = Column(Text)
    portfolio_url = Column(String)
    linkedin_url = Column(String)
    cv_url = Column(String)
    cv_filename = Column(String)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    job = relationship("Job", back_populates="applications")
    applicant = relationship("User", back_populates="applications")
