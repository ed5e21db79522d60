from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skillconnect.database import Base

ROLES = ("seeker", "employer", "admin")
USER_STATUSES = ("active", "suspended", "banned")


class User(Base):
    """Profile row for every account. Role-specific columns stay NULL for other roles."""

    __tablename__ = "profiles"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False, default="")
    last_name = Column(String, nullable=False, default="")
    phone = Column(String)
    role = Column(String, nullable=False, default="seeker", index=True)
    status = Column(String, nullable=False, default="active")

    # Seeker fields
    skills = Column(JSONB)
    experience = Column(Text)
    education = Column(Text)
    location = Column(String)
    bio = Column(Text)
    portfolio_url = Column(String)
    linkedin_url = Column(String)
    resume_url = Column(String)

    # Employer fields
    company_name = Column(String)
    company_size = Column(String)
    industry = Column(String)
    website = Column(String)
    company_description = Column(Text)

    last_login = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    jobs = relationship("Job", back_populates="employer")
    applications = relationship("Application", back_populates="applicant")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
