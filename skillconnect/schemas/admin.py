from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class AdminStats(BaseModel):
    users_total: int
    users_active: int
    jobs_total: int
    jobs_active: int
    jobs_flagged: int
    applications_total: int
    applications_pending: int
    system_health: Literal["excellent", "good", "warning", "critical"]


class UserStatusAction(BaseModel):
    action: Literal["suspend", "ban", "activate"]


class AdminUserRow(BaseModel):
    id: str
    email: str
    name: str
    role: str
    status: str
    created_at: datetime | None = None
    last_login: datetime | None = None


class AdminApplicationRow(BaseModel):
    id: str
    job_id: str
    job_title: str | None = None
    applicant_id: str
    applicant_name: str | None = None
    applicant_email: str | None = None
    status: str
    created_at: datetime | None = None


class AdminActivityResponse(BaseModel):
    id: str
    admin_id: str | None = None
    action: str
    target_type: str | None = None
    target_id: str | None = None
    details: dict | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class Insight(BaseModel):
    type: Literal["risk", "content", "volume"]
    severity: Literal["low", "medium", "high"]
    title: str
    description: str
    count: int
