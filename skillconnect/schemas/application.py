from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from skillconnect.core.validators import validate_email

ApplicationStatus = Literal["pending", "reviewed", "shortlisted", "accepted", "rejected", "hired"]


class ApplicationCreate(BaseModel):
    applicant_name: str
    applicant_email: str
    applicant_phone: str | None = None
    cover_letter: str
    experience_summary: str
    expected_salary: int | None = Field(default=None, ge=0)
    available_start_date: date | None = None
    additional_info: str | None = None
    portfolio_url: str | None = None
    linkedin_url: str | None = None
    cv_url: str | None = None
    cv_filename: str | None = None

    @field_validator("applicant_name", "cover_letter", "experience_summary")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("This field is required")
        return v

    @field_validator("applicant_email")
    @classmethod
    def email_format(cls, v: str) -> str:
        v = (v or "").strip()
        if not validate_email(v):
            raise ValueError("Please enter a valid email address")
        return v


class ApplicationJobSummary(BaseModel):
    id: str
    title: str
    company: str
    location: str
    type: str
    salary_min: int | None = None
    salary_max: int | None = None

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    applicant_name: str | None = None
    applicant_email: str | None = None
    applicant_phone: str | None = None
    cover_letter: str | None = None
    experience_summary: str | None = None
    expected_salary: int | None = Field(default=None, ge=0)
    available_start_date: date | None = None
    additional_info: str | None = None
    portfolio_url: str | None = None
    linkedin_url: str | None = None
    cv_url: str | None = None
    cv_filename: str | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    job: ApplicationJobSummary | None = None

    class Config:
        from_attributes = True


class ApplicationSubmitted(BaseModel):
    application: ApplicationResponse
    redirect_to: str
    redirect_after_seconds: int


class ApplicationStats(BaseModel):
    total: int = 0
    pending: int = 0
    reviewed: int = 0
    shortlisted: int = 0
    accepted: int = 0
    rejected: int = 0


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplyFormPrefill(BaseModel):
    job: ApplicationJobSummary
    applicant_name: str = ""
    applicant_email: str = ""
    applicant_phone: str = ""
    experience_summary: str = ""
    portfolio_url: str = ""
    linkedin_url: str = ""
    additional_info: str = ""
    cv_url: str = ""
    missing_fields: list[str] = []


class CVUploadResponse(BaseModel):
    url: str
    filename: str
