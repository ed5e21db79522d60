from datetime import datetime
from typing import Literal

from pydantic import BaseModel, field_validator, model_validator

from skillconnect.core.validators import (
    is_valid_password,
    normalize_phone,
    validate_email,
    validate_phone,
)


def _check_email(v: str) -> str:
    v = (v or "").strip().lower()
    if not validate_email(v):
        raise ValueError("Please enter a valid email address")
    return v


class SignupRequest(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    password: str
    confirm_password: str
    role: Literal["seeker", "employer"] = "seeker"
    agree_to_terms: bool = False

    @field_validator("first_name", "last_name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: str) -> str:
        if not validate_phone(v):
            raise ValueError("Please enter a valid Kenyan phone number (e.g. +254712345678 or 0712345678)")
        return normalize_phone(v)

    @field_validator("password")
    @classmethod
    def password_requirements_met(cls, v: str) -> str:
        if not is_valid_password(v):
            raise ValueError("Password does not meet all requirements")
        return v

    @model_validator(mode="after")
    def passwords_match_and_terms(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if not self.agree_to_terms:
            raise ValueError("You must agree to the terms and conditions")
        return self


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return _check_email(v)


class PasswordStrengthRequest(BaseModel):
    password: str


class PasswordStrengthResponse(BaseModel):
    strength: str
    requirements: dict[str, bool]
    valid: bool


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    role: str
    status: str = "active"
    skills: list[str] | None = None
    experience: str | None = None
    education: str | None = None
    location: str | None = None
    bio: str | None = None
    portfolio_url: str | None = None
    linkedin_url: str | None = None
    resume_url: str | None = None
    company_name: str | None = None
    company_size: str | None = None
    industry: str | None = None
    website: str | None = None
    company_description: str | None = None
    last_login: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    skills: list[str] | None = None
    experience: str | None = None
    education: str | None = None
    location: str | None = None
    bio: str | None = None
    portfolio_url: str | None = None
    linkedin_url: str | None = None
    resume_url: str | None = None
    company_name: str | None = None
    company_size: str | None = None
    industry: str | None = None
    website: str | None = None
    company_description: str | None = None

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not validate_phone(v):
            raise ValueError("Please enter a valid Kenyan phone number")
        return normalize_phone(v)


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    redirect_to: str
    user: UserResponse
    password_strength: str | None = None
