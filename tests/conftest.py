from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from cafe_backoffice.attendance.model import AttendanceRecord
from cafe_backoffice.audit.service import AuditLogger
from cafe_backoffice.core.enums import PaymentStatus, SessionStatus
from cafe_backoffice.payroll.model import PayrollRecord
from cafe_backoffice.security.model import AuthSession
from cafe_backoffice.users.model import Employee, SessionUser


class FakeEmployeeRepo:
    def __init__(self, employees=()):
        self._by_id = {e.employee_id: e for e in employees}

    def add(self, employee):
        self._by_id[employee.employee_id] = employee

    def get_by_id(self, employee_id):
        return self._by_id.get(int(employee_id))

    def get_by_email(self, email):
        for e in self._by_id.values():
            if e.email and e.email.lower() == email.lower():
                return e
        return None

    def list_super_admins(self):
        return [e for e in self._by_id.values() if e.is_super_admin and e.is_active]


class FakeAttendanceRepo:
    def __init__(self, records=()):
        self._next_id = 1
        self.rows: dict[int, AttendanceRecord] = {}
        for r in records:
            self.rows[r.attendance_id] = r
            self._next_id = max(self._next_id, r.attendance_id + 1)

    def get_by_id(self, attendance_id):
        return self.rows.get(int(attendance_id))

    def get_for_employee_and_date(self, employee_id, work_date):
        for r in self.rows.values():
            if r.employee_id == employee_id and r.date == work_date:
                return r
        return None

    def list_for_employee(self, employee_id, *, start_date, end_date):
        return [r for r in self.rows.values() if r.employee_id == employee_id and start_date <= r.date <= end_date]

    def create(self, *, employee_id, work_date, status, outlet_id=None, check_in=None, check_out=None,
               overridden_by=None, override_reason=None, overridden_at=None):
        aid = self._next_id
        self._next_id += 1
        self.rows[aid] = AttendanceRecord(
            attendance_id=aid,
            employee_id=employee_id,
            date=work_date,
            status=status,
            outlet_id=outlet_id,
            check_in=check_in,
            check_out=check_out,
            overridden_by=overridden_by,
            override_reason=override_reason,
            overridden_at=overridden_at,
        )
        return aid

    def update_check_out(self, *, attendance_id, check_out):
        r = self.rows.get(attendance_id)
        if not r or r.is_locked:
            return False
        self.rows[attendance_id] = replace(r, check_out=check_out)
        return True

    def apply_override(self, *, attendance_id, status, check_in, check_out, overridden_by, override_reason, overridden_at):
        r = self.rows.get(attendance_id)
        if not r or r.is_locked:
            return False
        self.rows[attendance_id] = replace(
            r,
            status=status,
            check_in=check_in,
            check_out=check_out,
            overridden_by=overridden_by,
            override_reason=override_reason,
            overridden_at=overridden_at,
        )
        return True

    def delete(self, attendance_id):
        r = self.rows.get(attendance_id)
        if not r or r.is_locked:
            return False
        del self.rows[attendance_id]
        return True


class FakePayrollRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, PayrollRecord] = {}

    def get_by_id(self, payroll_id):
        return self.rows.get(int(payroll_id))

    def _find(self, employee_id, month):
        for r in self.rows.values():
            if r.employee_id == employee_id and r.month == month:
                return r
        return None

    def get_for_employee_and_month(self, employee_id, month):
        return self._find(employee_id, month)

    def upsert(self, *, employee_id, outlet_id, month, breakdown, generated_by):
        existing = self._find(employee_id, month)
        if existing and existing.is_locked:
            return None
        pid = existing.payroll_id if existing else self._next_id
        if not existing:
            self._next_id += 1
        self.rows[pid] = PayrollRecord(
            payroll_id=pid,
            employee_id=employee_id,
            outlet_id=outlet_id,
            month=month,
            breakdown=breakdown,
            payment_status=PaymentStatus.PENDING,
            is_locked=False,
            generated_by=generated_by,
        )
        return pid

    def set_locked(self, payroll_id, *, locked):
        r = self.rows.get(payroll_id)
        if not r:
            return False
        self.rows[payroll_id] = replace(r, is_locked=locked)
        return True


class FakeSessionRepo:
    def __init__(self, sessions=()):
        self._next_id = 1
        self.rows: dict[int, AuthSession] = {}
        for s in sessions:
            self.rows[s.session_id] = s
            self._next_id = max(self._next_id, s.session_id + 1)

    def get_by_id(self, session_id):
        return self.rows.get(int(session_id))

    def get_latest_for_user(self, user_id):
        mine = [s for s in self.rows.values() if s.user_id == user_id]
        return max(mine, key=lambda s: s.login_at) if mine else None

    def create(self, *, user_id, geo, ip_address, device_info, risk_level):
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = AuthSession(
            session_id=sid,
            user_id=user_id,
            login_at=geo.timestamp,
            status=SessionStatus.ACTIVE,
            ip_address=ip_address,
            device_info=device_info,
            country=geo.country,
            region=geo.region,
            city=geo.city,
            latitude=geo.latitude,
            longitude=geo.longitude,
            isp=geo.isp,
            risk_level=risk_level,
        )
        return sid

    def mark_logged_out(self, session_id, *, logout_at):
        s = self.rows.get(session_id)
        if not s:
            return False
        self.rows[session_id] = replace(s, status=SessionStatus.LOGGED_OUT, logout_at=logout_at)
        return True


class FakeAlertRepo:
    def __init__(self):
        self.alerts = []

    def insert(self, alert):
        self.alerts.append(alert)
        return len(self.alerts)


class FakeAuditRepo:
    def __init__(self, *, fail=False):
        self.entries = []
        self._fail = fail

    def insert(self, entry):
        if self._fail:
            raise RuntimeError("permission denied by row-level security")
        self.entries.append(entry)
        return len(self.entries)

    def list_for_entity(self, *, entity_type, entity_id, limit):
        return []

    def list_recent(self, *, outlet_id, limit, action=None):
        return []


class FakeNotifier:
    def __init__(self, *, fail=False):
        self.sent = []
        self._fail = fail

    def send(self, *, recipients, subject, body, html=None):
        if self._fail:
            raise OSError("SMTP unreachable")
        self.sent.append({"recipients": list(recipients), "subject": subject, "body": body, "html": html})


@pytest.fixture
def super_admin():
    return SessionUser(employee_id=1, name="Owner", role="Super Admin", outlet_id=1)


@pytest.fixture
def manager():
    return SessionUser(employee_id=2, name="Floor Manager", role="Manager", outlet_id=1)


@pytest.fixture
def employees():
    return FakeEmployeeRepo(
        [
            Employee(
                employee_id=1,
                name="Owner",
                email="owner@caferepublic.internal",
                role="Super Admin",
                password_hash=generate_password_hash("owner-pass"),
                outlet_id=1,
            ),
            Employee(
                employee_id=2,
                name="Floor Manager",
                email="manager@caferepublic.internal",
                role="Manager",
                password_hash=generate_password_hash("manager-pass"),
                outlet_id=1,
            ),
            Employee(
                employee_id=7,
                name="Ravi Chef",
                email="ravi@caferepublic.internal",
                role="Staff",
                password_hash=generate_password_hash("staff-pass"),
                outlet_id=1,
                base_salary=30000,
                overtime_rate=100,
            ),
        ]
    )


@pytest.fixture
def audit_repo():
    return FakeAuditRepo()


@pytest.fixture
def audit_logger(audit_repo):
    return AuditLogger(audit_repo)


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 15, 10, 30)


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo()


@pytest.fixture
def payroll_repo():
    return FakePayrollRepo()


@pytest.fixture
def session_repo():
    return FakeSessionRepo()


@pytest.fixture
def alert_repo():
    return FakeAlertRepo()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def failing_notifier():
    return FakeNotifier(fail=True)


@pytest.fixture
def failing_audit_logger():
    return AuditLogger(FakeAuditRepo(fail=True))
