from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from skillconnect.core.rate_limiter import rate_limiter
from skillconnect.database import get_db
from skillconnect.dependencies import get_current_user, require_admin, require_employer, require_seeker
from skillconnect.main import app
from skillconnect.services import job_service


@dataclass
class StubUser:
    id: str = "user-1"
    email: str = "user@example.com"
    role: str = "seeker"
    status: str = "active"
    first_name: str = "Jane"
    last_name: str = "Wanjiku"
    phone: str | None = "0712345678"
    password_hash: str = "hashed-password"
    skills: list = field(default_factory=list)
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
    last_login: datetime | None = field(default_factory=lambda: datetime.now(timezone.utc))
    created_at: datetime | None = field(default_factory=lambda: datetime.now(timezone.utc))


@pytest.fixture(autouse=True)
def _reset_process_state():
    rate_limiter.reset()
    job_service.invalidate()
    yield
    rate_limiter.reset()
    job_service.invalidate()


@pytest.fixture
def seeker() -> StubUser:
    return StubUser()


@pytest.fixture
def employer() -> StubUser:
    return StubUser(id="emp-1", email="hr@acme.co.ke", role="employer", company_name="Acme")


@pytest.fixture
def admin_user() -> StubUser:
    return StubUser(id="admin-1", email="admin@example.com", role="admin")


def _db_override():
    yield object()


def _client_as(user: StubUser | None):
    app.dependency_overrides[get_db] = _db_override
    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user
        role_dep = {"seeker": require_seeker, "employer": require_employer, "admin": require_admin}[user.role]
        app.dependency_overrides[role_dep] = lambda: user
    return TestClient(app)


@pytest.fixture
def client():
    """Anonymous client; database dependency stubbed."""
    yield _client_as(None)
    app.dependency_overrides.clear()


@pytest.fixture
def seeker_client(seeker: StubUser):
    yield _client_as(seeker)
    app.dependency_overrides.clear()


@pytest.fixture
def employer_client(employer: StubUser):
    yield _client_as(employer)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(admin_user: StubUser):
    yield _client_as(admin_user)
    app.dependency_overrides.clear()
