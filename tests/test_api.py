import importlib

import pytest
from werkzeug.security import generate_password_hash

from cafe_backoffice.container import wire
from cafe_backoffice.main import create_app
from cafe_backoffice.users.model import Employee

SETTINGS_MODULE = "cafe_backoffice.config.testing"


@pytest.fixture
def container(employees, attendance_repo, payroll_repo, session_repo, alert_repo, audit_logger, notifier):
    return wire(
        importlib.import_module(SETTINGS_MODULE),
        employees_repo=employees,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        sessions_repo=session_repo,
        alerts_repo=alert_repo,
        audit_logger=audit_logger,
        notifier=notifier,
    )


@pytest.fixture
def client(container):
    app = create_app(container=container, settings_module=SETTINGS_MODULE)
    return app.test_client()


def _login(client, identifier, password):
    return client.post("/api/auth/login", json={"identifier": identifier, "password": password})


def test_login_records_session_with_default_geo(client, session_repo):
    res = _login(client, "ravi", "staff-pass")

    assert res.status_code == 200
    body = res.get_json()
    assert body["employee_id"] == 7
    session = session_repo.get_by_id(body["session_id"])
    assert session.country == "Localhost"
    assert session.ip_address == "127.0.0.1"


def test_login_with_bad_password(client):
    res = _login(client, "ravi", "wrong")

    assert res.status_code == 401
    assert res.get_json() == {"success": False, "message": "Invalid credentials"}


def test_deactivated_account_is_forbidden(client, employees):
    employees.add(
        Employee(
            employee_id=9,
            name="Former",
            email="former@caferepublic.internal",
            role="Staff",
            password_hash=generate_password_hash("old-pass"),
            is_active=False,
        )
    )

    res = _login(client, "former", "old-pass")

    assert res.status_code == 403
    assert res.get_json()["message"] == "Account deactivated or not found"


def test_protected_endpoint_needs_login(client):
    assert client.post("/api/attendance/punch-in").status_code == 401


def test_logout_ends_session(client, session_repo):
    session_id = _login(client, "ravi", "staff-pass").get_json()["session_id"]

    assert client.post("/api/auth/logout").status_code == 200
    assert session_repo.get_by_id(session_id).status.value == "logged_out"
    assert client.post("/api/attendance/punch-out").status_code == 401


def test_punch_in_and_out(client):
    _login(client, "ravi", "staff-pass")

    res = client.post("/api/attendance/punch-in")
    assert res.status_code == 201
    assert client.post("/api/attendance/punch-in").status_code == 400
    assert client.post("/api/attendance/punch-out").status_code == 200


def test_staff_cannot_read_other_summary(client):
    _login(client, "ravi", "staff-pass")

    assert client.get("/api/attendance/summary?employee_id=1&month=2026-03").status_code == 403
    res = client.get("/api/attendance/summary?month=2026-03")
    assert res.status_code == 200
    assert res.get_json()["summary"]["total_days"] == 31


def test_summary_rejects_bad_month(client):
    _login(client, "ravi", "staff-pass")

    assert client.get("/api/attendance/summary?month=March").status_code == 400


def test_override_and_delete_by_super_admin(client, attendance_repo):
    _login(client, "owner", "owner-pass")

    res = client.put(
        "/api/attendance/override",
        json={"employee_id": 7, "date": "2026-01-05", "status": "Leave", "reason": "Approved leave"},
    )
    assert res.status_code == 200
    attendance_id = res.get_json()["attendance_id"]
    assert attendance_repo.get_by_id(attendance_id).status == "Leave"

    res = client.delete(f"/api/attendance/{attendance_id}", json={"reason": "Entered twice"})
    assert res.status_code == 200
    assert attendance_repo.get_by_id(attendance_id) is None


def test_override_forbidden_for_manager(client):
    _login(client, "manager", "manager-pass")

    res = client.put(
        "/api/attendance/override",
        json={"employee_id": 7, "date": "2026-01-05", "status": "Leave", "reason": "Approved leave"},
    )

    assert res.status_code == 403
    assert res.get_json()["message"] == "Only Super Admin can override attendance"


def test_payroll_preview_generate_and_lock(client, payroll_repo, audit_repo):
    _login(client, "owner", "owner-pass")
    payload = {"employee_id": 7, "month": "2026-02", "bonus": "250"}

    preview = client.post("/api/payroll/preview", json=payload).get_json()
    assert preview["working_days"] == 24
    assert preview["breakdown"]["net_pay"] == 30250

    res = client.post("/api/payroll/generate", json=payload)
    assert res.status_code == 201
    payroll_id = res.get_json()["payroll_id"]

    assert client.post(f"/api/payroll/{payroll_id}/lock", json={"reason": "Closed"}).status_code == 200
    assert payroll_repo.get_by_id(payroll_id).is_locked is True
    assert client.post("/api/payroll/generate", json=payload).status_code == 400
    assert client.post(f"/api/payroll/{payroll_id}/unlock").status_code == 200
    assert [e.action.value for e in audit_repo.entries] == ["payroll_generate", "payroll_lock", "payroll_unlock"]


def test_payroll_requires_super_admin(client):
    _login(client, "manager", "manager-pass")

    assert client.post("/api/payroll/preview", json={"employee_id": 7, "month": "2026-02"}).status_code == 403


def test_payroll_unknown_employee(client):
    _login(client, "owner", "owner-pass")

    assert client.post("/api/payroll/preview", json={"employee_id": 404, "month": "2026-02"}).status_code == 404


def test_payroll_bad_amount(client):
    _login(client, "owner", "owner-pass")

    res = client.post("/api/payroll/preview", json={"employee_id": 7, "month": "2026-02", "bonus": "lots"})

    assert res.status_code == 400


def test_force_logout(client, session_repo, audit_repo):
    staff_client = client.application.test_client()
    session_id = _login(staff_client, "ravi", "staff-pass").get_json()["session_id"]

    assert staff_client.post("/api/security/force-logout", json={"session_id": session_id}).status_code == 403

    _login(client, "owner", "owner-pass")
    assert client.post("/api/security/force-logout", json={"session_id": session_id}).status_code == 200
    assert session_repo.get_by_id(session_id).status.value == "logged_out"
    assert audit_repo.entries[-1].action.value == "FORCE_LOGOUT"


def test_audit_recent_is_super_admin_only(client):
    _login(client, "manager", "manager-pass")
    assert client.get("/api/audit/recent").status_code == 403

    _login(client, "owner", "owner-pass")
    res = client.get("/api/audit/recent?limit=5")
    assert res.status_code == 200
    assert res.get_json() == {"success": True, "logs": []}
    assert client.get("/api/audit/recent?action=nope").status_code == 400
