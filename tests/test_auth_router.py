from datetime import datetime, timezone

import skillconnect.routers.auth as auth_mod
from conftest import StubUser
from skillconnect.core.session_gate import parse_session

SIGNUP = {
    "first_name": "Jane",
    "last_name": "Wanjiku",
    "email": " Jane@Example.com ",
    "phone": "0712 345 678",
    "password": "Abcdef12!",
    "confirm_password": "Abcdef12!",
    "role": "seeker",
    "agree_to_terms": True,
}


def test_signup_success_issues_session(monkeypatch, client):
    created = {}

    def _create(db, email, password, **kwargs):
        created.update(email=email, **kwargs)
        return StubUser(id="new1", email=email, role=kwargs["role"], phone=kwargs["phone"])

    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)
    monkeypatch.setattr(auth_mod, "create_user", _create)
    resp = client.post("/auth/signup", json=SIGNUP)
    assert resp.status_code == 201
    body = resp.json()
    assert body["redirect_to"] == "/dashboard/seeker"
    assert body["password_strength"] == "strong"
    assert created["email"] == "jane@example.com"
    assert created["phone"] == "0712345678"
    assert parse_session(body["access_token"]).role == "seeker"
    assert "skillconnect_session" in resp.cookies


def test_signup_employer_with_redirect(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)
    monkeypatch.setattr(
        auth_mod, "create_user", lambda db, email, password, **kw: StubUser(id="e1", email=email, role=kw["role"])
    )
    resp = client.post("/auth/signup?redirect=/jobs/j1/apply", json={**SIGNUP, "role": "employer"})
    assert resp.json()["redirect_to"] == "/jobs/j1/apply"
    resp = client.post("/auth/signup?redirect=https://evil.example", json={**SIGNUP, "role": "employer"})
    assert resp.json()["redirect_to"] == "/dashboard/employer"


def test_signup_rejects_existing_email(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: StubUser())
    resp = client.post("/auth/signup", json=SIGNUP)
    assert resp.status_code == 400
    assert "already" in resp.json()["detail"].lower()


def test_signup_validation_errors(client):
    assert client.post("/auth/signup", json={**SIGNUP, "phone": "0812345678"}).status_code == 422
    assert client.post("/auth/signup", json={**SIGNUP, "confirm_password": "Other12!x"}).status_code == 422
    assert client.post("/auth/signup", json={**SIGNUP, "agree_to_terms": False}).status_code == 422
    assert client.post("/auth/signup", json={**SIGNUP, "password": "weakpass", "confirm_password": "weakpass"}).status_code == 422
    assert client.post("/auth/signup", json={**SIGNUP, "role": "admin"}).status_code == 422


def test_signup_failure_sanitized(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)
    monkeypatch.setattr(auth_mod, "create_user", lambda db, email, password, **kw: (_ for _ in ()).throw(RuntimeError("db")))
    resp = client.post("/auth/signup", json=SIGNUP)
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Signup failed"


def test_login_unknown_email(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)
    resp = client.post("/auth/login", json={"email": "x@example.com", "password": "bad"})
    assert resp.status_code == 401


def test_login_wrong_password(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: StubUser())
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: False)
    resp = client.post("/auth/login", json={"email": "user@example.com", "password": "bad"})
    assert resp.status_code == 401


def test_login_banned_user(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: StubUser(status="banned"))
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: True)
    resp = client.post("/auth/login", json={"email": "user@example.com", "password": "good"})
    assert resp.status_code == 403
    assert "banned" in resp.json()["detail"]


def test_login_success_updates_last_login_and_redirects(monkeypatch, client):
    user = StubUser(role="employer", last_login=None)
    touched = []

    def _touch(db, user_id):
        touched.append(user_id)
        user.last_login = datetime.now(timezone.utc)
        return user

    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: user)
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: True)
    monkeypatch.setattr(auth_mod, "touch_last_login", _touch)
    resp = client.post("/auth/login?redirect=/dashboard/employer/jobs", json={"email": "USER@example.com", "password": "x"})
    assert resp.status_code == 200
    body = resp.json()
    assert touched == ["user-1"]
    assert body["redirect_to"] == "/dashboard/employer/jobs"
    session = parse_session(body["access_token"])
    assert session.role == "employer"
    assert session.last_login is not None


def test_logout_clears_cookie(client):
    resp = client.post("/auth/logout")
    assert resp.status_code == 200
    assert "skillconnect_session" in resp.headers.get("set-cookie", "")


def test_me_and_update_me(monkeypatch, seeker_client, seeker):
    assert seeker_client.get("/auth/me").json()["email"] == "user@example.com"

    def _update(db, user_id, changes):
        for k, v in changes.items():
            setattr(seeker, k, v)
        return seeker

    monkeypatch.setattr(auth_mod, "update_profile", _update)
    resp = seeker_client.patch("/auth/me", json={"bio": "Hello", "skills": ["Excel"], "phone": "+254 712 345 678"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["bio"] == "Hello"
    assert body["skills"] == ["Excel"]
    assert body["phone"] == "+254712345678"


def test_update_me_rejects_bad_phone(seeker_client):
    assert seeker_client.patch("/auth/me", json={"phone": "12345"}).status_code == 422


def test_me_requires_session(client):
    assert client.get("/auth/me").status_code == 401


def test_password_strength_endpoint(client):
    body = client.post("/auth/password-strength", json={"password": "Abcdefgh12!@#456"}).json()
    assert body["strength"] == "very-strong"
    assert body["valid"] is True
    body = client.post("/auth/password-strength", json={"password": "abc def"}).json()
    assert body["strength"] == "weak"
    assert body["requirements"]["has_no_spaces"] is False
    assert body["valid"] is False
