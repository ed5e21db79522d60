from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

JobType = Literal["full-time", "part-time", "contract", "internship"]


class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1, max_length=200)
    location: str = Field(min_length=1, max_length=200)
    type: JobType = "full-time"
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    description: str = Field(min_length=1, max_length=20000)
    requirements: list[str] = []
    benefits: list[str] = []
    category: str | None = None
    experience_level: str | None = None
    remote: bool = False
    status: Literal["active", "draft"] = "active"

    @model_validator(mode="after")
    def salary_range(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min cannot exceed salary_max")
        return self


class JobUpdate(BaseModel):
    title: str | None = Field(default=None, max_length=200)
    company: str | None = Field(default=None, max_length=200)
    location: str | None = Field(default=None, max_length=200)
    type: JobType | None = None
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    description: str | None = Field(default=None, max_length=20000)
    requirements: list[str] | None = None
    benefits: list[str] | None = None
    category: str | None = None
    experience_level: str | None = None
    remote: bool | None = None
    status: Literal["active", "closed", "draft"] | None = None


class JobResponse(BaseModel):
    id: str
    employer_id: str | None = None
    title: str
    company: str
    location: str
    type: str
    salary_min: int | None = None
    salary_max: int | None = None
    description: str | None = None
    requirements: list[str] | None = None
    benefits: list[str] | None = None
    category: str | None = None
    experience_level: str | None = None
    remote: bool = False
    status: str
    moderation_status: str | None = None
    moderation_flags: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class JobListResponse(BaseModel):
    items: list[JobResponse]
    total: int
    page: int
    has_more: bool
    next_action: Literal["reveal", "fetch"]


class JobStats(BaseModel):
    total: int
    by_type: dict[str, int]
    by_location: dict[str, int]
    average_salary: float | None = None


class JobModerationAction(BaseModel):
    action: Literal["approve", "remove"]
