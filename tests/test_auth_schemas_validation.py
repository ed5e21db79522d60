import pytest
from pydantic import ValidationError

from skillconnect.schemas.application import ApplicationCreate, ApplicationStatusUpdate
from skillconnect.schemas.auth import LoginRequest, ProfileUpdate, SignupRequest
from skillconnect.schemas.job import JobCreate, JobUpdate


def _signup(**overrides):
    data = {
        "first_name": "Jane",
        "last_name": "Wanjiku",
        "email": "jane@example.com",
        "phone": "0712345678",
        "password": "Abcdef12!",
        "confirm_password": "Abcdef12!",
        "agree_to_terms": True,
    }
    data.update(overrides)
    return SignupRequest(**data)


def test_signup_normalizes_email_and_phone():
    req = _signup(email="  Jane@Example.COM ", phone="+254 712 345 678")
    assert req.email == "jane@example.com"
    assert req.phone == "+254712345678"
    assert req.role == "seeker"


def test_signup_rejections():
    with pytest.raises(ValidationError):
        _signup(first_name="   ")
    with pytest.raises(ValidationError):
        _signup(email="not-an-email")
    with pytest.raises(ValidationError):
        _signup(phone="12345")
    with pytest.raises(ValidationError):
        _signup(password="short", confirm_password="short")
    with pytest.raises(ValidationError):
        _signup(confirm_password="Abcdef12?")
    with pytest.raises(ValidationError):
        _signup(agree_to_terms=False)
    with pytest.raises(ValidationError):
        _signup(role="admin")


def test_login_request_lowercases_email():
    assert LoginRequest(email="USER@Example.com", password="x").email == "user@example.com"
    with pytest.raises(ValidationError):
        LoginRequest(email="nope", password="x")


def test_profile_update_phone_optional_but_validated():
    assert ProfileUpdate(bio="hi").phone is None
    assert ProfileUpdate(phone="0112 345 678").phone == "0112345678"
    with pytest.raises(ValidationError):
        ProfileUpdate(phone="0812345678")


def test_job_create_salary_range_and_type():
    job = JobCreate(title="Dev", company="Acme", location="Nairobi", description="Build things", salary_min=1, salary_max=2)
    assert job.type == "full-time" and job.status == "active"
    with pytest.raises(ValidationError):
        JobCreate(title="Dev", company="Acme", location="Nairobi", description="x", salary_min=5, salary_max=2)
    with pytest.raises(ValidationError):
        JobCreate(title="Dev", company="Acme", location="Nairobi", description="x", type="freelance")
    with pytest.raises(ValidationError):
        JobCreate(title="", company="Acme", location="Nairobi", description="x")
    assert JobUpdate(status="closed").model_dump(exclude_unset=True) == {"status": "closed"}


def test_application_create_required_fields():
    app = ApplicationCreate(
        applicant_name=" Jane ",
        applicant_email="jane@example.com",
        cover_letter="Keen to join",
        experience_summary="3 years",
    )
    assert app.applicant_name == "Jane"
    with pytest.raises(ValidationError):
        ApplicationCreate(applicant_name="Jane", applicant_email="jane@example.com", cover_letter="  ", experience_summary="x")
    with pytest.raises(ValidationError):
        ApplicationCreate(applicant_name="Jane", applicant_email="bad", cover_letter="x", experience_summary="x")


def test_application_status_update_values():
    assert ApplicationStatusUpdate(status="shortlisted").status == "shortlisted"
    with pytest.raises(ValidationError):
        ApplicationStatusUpdate(status="maybe")
