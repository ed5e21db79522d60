import csv
import io
from datetime import datetime, timezone
from types import SimpleNamespace

import skillconnect.routers.admin as admin_mod


def _user(user_id="u1", role="seeker", status="active", first_name="Jane", last_name="Doe"):
    return SimpleNamespace(
        id=user_id,
        email=f"{user_id}@example.com",
        first_name=first_name,
        last_name=last_name,
        role=role,
        status=status,
        created_at=datetime(2026, 1, 2, tzinfo=timezone.utc),
        last_login=None,
    )


def _job(job_id="j1", status="active", moderation_status="flagged"):
    return SimpleNamespace(
        id=job_id,
        title="Earn fast",
        company="Acme",
        location="Nairobi",
        type="contract",
        status=status,
        moderation_status=moderation_status,
    )


STATS = {
    "users_total": 10,
    "users_active": 4,
    "jobs_total": 5,
    "jobs_active": 4,
    "jobs_flagged": 1,
    "applications_total": 20,
    "applications_pending": 3,
    "system_health": "good",
}


def test_admin_stats_success(monkeypatch, admin_client):
    monkeypatch.setattr(admin_mod, "get_stats", lambda db: STATS)
    resp = admin_client.get("/admin/stats")
    assert resp.status_code == 200
    assert resp.json()["system_health"] == "good"


def test_admin_stats_failure_sanitized(monkeypatch, admin_client):
    monkeypatch.setattr(admin_mod, "get_stats", lambda db: (_ for _ in ()).throw(RuntimeError("db fail")))
    resp = admin_client.get("/admin/stats")
    assert resp.status_code == 500
    assert "Failed to load admin stats" in resp.json()["detail"]


def test_admin_routes_require_admin(seeker_client):
    assert seeker_client.get("/admin/stats").status_code == 403


def test_admin_list_users_paginates_and_filters(monkeypatch, admin_client):
    seen = {}

    def _list(db, search, role, status, limit, offset):
        seen.update(search=search, role=role, status=status, limit=limit, offset=offset)
        return [_user()], 1

    monkeypatch.setattr(admin_mod, "get_all_users_paginated", _list)
    resp = admin_client.get("/admin/users?search=jane&role=seeker&status=active&page=2&page_size=500")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 1
    assert body["items"][0]["name"] == "Jane Doe"
    assert seen == {"search": "jane", "role": "seeker", "status": "active", "limit": 100, "offset": 100}


def test_admin_change_user_status(monkeypatch, admin_client):
    target = _user()
    logged = []
    monkeypatch.setattr(admin_mod, "get_by_id", lambda db, user_id: target)

    def _update(db, user_id, status):
        target.status = status
        return target

    monkeypatch.setattr(admin_mod, "update_user", _update)
    monkeypatch.setattr(admin_mod, "log_activity", lambda db, *args: logged.append(args))
    resp = admin_client.patch("/admin/users/u1/status", json={"action": "ban"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "banned"
    assert logged[0][:4] == ("admin-1", "user_ban", "user", "u1")

    resp = admin_client.patch("/admin/users/u1/status", json={"action": "activate"})
    assert resp.json()["status"] == "active"


def test_admin_cannot_change_own_status(admin_client):
    resp = admin_client.patch("/admin/users/admin-1/status", json={"action": "suspend"})
    assert resp.status_code == 400


def test_admin_change_status_user_not_found(monkeypatch, admin_client):
    monkeypatch.setattr(admin_mod, "get_by_id", lambda db, user_id: None)
    resp = admin_client.patch("/admin/users/missing/status", json={"action": "suspend"})
    assert resp.status_code == 404


def test_admin_change_status_rejects_unknown_action(admin_client):
    resp = admin_client.patch("/admin/users/u1/status", json={"action": "delete"})
    assert resp.status_code == 422


def test_admin_export_users_csv(monkeypatch, admin_client):
    users = [_user(), _user("u2", first_name='Kamau "KK"', last_name="Sons, Ltd")]
    monkeypatch.setattr(admin_mod, "get_all_users", lambda db, search, role, status: users)
    monkeypatch.setattr(admin_mod, "log_activity", lambda db, *args, **kwargs: None)
    resp = admin_client.get("/admin/users/export.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "users_export_" in resp.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["Name", "Email", "Role", "Status", "Joined Date", "Last Activity"]
    assert rows[2][0] == 'Kamau "KK" Sons, Ltd'


def test_admin_moderate_job_approve_and_remove(monkeypatch, admin_client):
    job = _job()
    calls = []

    def _set(db, job_id, status, moderation_status=None):
        calls.append((status, moderation_status))
        job.status = status
        if moderation_status:
            job.moderation_status = moderation_status
        return job

    monkeypatch.setattr(admin_mod, "set_job_status", _set)
    monkeypatch.setattr(admin_mod, "log_activity", lambda db, *args: None)
    resp = admin_client.patch("/admin/jobs/j1", json={"action": "approve"})
    assert resp.status_code == 200
    assert resp.json()["moderation_status"] == "approved"
    resp = admin_client.patch("/admin/jobs/j1", json={"action": "remove"})
    assert resp.json()["status"] == "removed"
    assert calls == [("active", "approved"), ("removed", None)]


def test_admin_moderate_missing_job(monkeypatch, admin_client):
    monkeypatch.setattr(admin_mod, "set_job_status", lambda db, job_id, status, moderation_status=None: None)
    resp = admin_client.patch("/admin/jobs/nope", json={"action": "remove"})
    assert resp.status_code == 404


def test_admin_list_jobs(monkeypatch, admin_client):
    monkeypatch.setattr(
        admin_mod, "get_jobs_paginated",
        lambda db, status, moderation_status, search, limit, offset: ([_job()], 1),
    )
    body = admin_client.get("/admin/jobs?moderation_status=flagged").json()
    assert body["total"] == 1
    assert body["items"][0]["id"] == "j1"


def test_admin_list_applications_includes_job_title(monkeypatch, admin_client):
    row = SimpleNamespace(
        id="a1", job_id="j1", applicant_id="s1", applicant_name="Jane", applicant_email="j@x.io",
        status="pending", created_at=None, job=SimpleNamespace(title="Analyst"),
    )
    monkeypatch.setattr(admin_mod, "get_applications_paginated", lambda db, status, limit, offset: ([row], 1))
    body = admin_client.get("/admin/applications").json()
    assert body["items"][0]["job_title"] == "Analyst"


def test_admin_activity_and_insights(monkeypatch, admin_client):
    entry = SimpleNamespace(id="act1", admin_id="admin-1", action="user_ban", target_type="user",
                            target_id="u1", details={"status": "banned"}, created_at=None)
    monkeypatch.setattr(admin_mod, "get_recent_activity", lambda db, limit: [entry])
    monkeypatch.setattr(
        admin_mod, "generate_insights",
        lambda db: [{"type": "volume", "severity": "low", "title": "High application volume",
                     "description": "25 applications in the last 24 hours", "count": 25}],
    )
    assert admin_client.get("/admin/activity").json()[0]["action"] == "user_ban"
    assert admin_client.get("/admin/insights").json()[0]["count"] == 25
