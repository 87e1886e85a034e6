from dataclasses import replace
from datetime import date, datetime

import pytest

from cafe_backoffice.attendance.model import AttendanceRecord
from cafe_backoffice.attendance.service import AttendanceService
from cafe_backoffice.core.enums import AuditAction
from cafe_backoffice.core.exceptions import AuthorizationError, NotFoundError, ValidationError


@pytest.fixture
def service(attendance_repo, audit_logger):
    return AttendanceService(attendance_repo, audit_logger)


def _seed(repo, **overrides):
    values = dict(attendance_id=1, employee_id=7, date=date(2026, 3, 10), status="Present", outlet_id=1)
    values.update(overrides)
    record = AttendanceRecord(**values)
    repo.rows[record.attendance_id] = record
    return record


def test_punch_in_creates_present_record(service, attendance_repo, fixed_now):
    attendance_id = service.punch_in(7, outlet_id=1, now=fixed_now)

    record = attendance_repo.get_by_id(attendance_id)
    assert record.date == fixed_now.date()
    assert record.status == "Present"
    assert record.check_in == fixed_now
    assert record.check_out is None


def test_punch_in_twice_is_rejected(service, fixed_now):
    service.punch_in(7, now=fixed_now)

    with pytest.raises(ValidationError, match="already punched in"):
        service.punch_in(7, now=fixed_now)


def test_punch_out_sets_check_out(service, attendance_repo, fixed_now):
    attendance_id = service.punch_in(7, now=fixed_now)
    later = fixed_now.replace(hour=18)

    service.punch_out(7, now=later)

    assert attendance_repo.get_by_id(attendance_id).check_out == later


def test_punch_out_without_punch_in(service, fixed_now):
    with pytest.raises(ValidationError, match="not punched in"):
        service.punch_out(7, now=fixed_now)


def test_punch_out_twice(service, fixed_now):
    service.punch_in(7, now=fixed_now)
    service.punch_out(7, now=fixed_now.replace(hour=18))

    with pytest.raises(ValidationError, match="already punched out"):
        service.punch_out(7, now=fixed_now.replace(hour=19))


def test_monthly_summary_uses_month_rows(service, attendance_repo):
    _seed(attendance_repo, attendance_id=1, date=date(2026, 3, 2), status="Present", overtime_hours=1)
    _seed(attendance_repo, attendance_id=2, date=date(2026, 3, 3), status="Half Day")
    _seed(attendance_repo, attendance_id=3, date=date(2026, 4, 1), status="Present")

    summary = service.monthly_summary(7, date(2026, 3, 1))

    assert summary.total_days == 31
    assert summary.present_days == 1
    assert summary.half_days == 1
    assert summary.overtime_hours == 1


def test_override_updates_existing_and_audits(service, attendance_repo, audit_repo, super_admin, fixed_now):
    _seed(attendance_repo, status="Absent")

    attendance_id = service.save_override(
        actor=super_admin,
        employee_id=7,
        work_date=date(2026, 3, 10),
        status="half day",
        reason="  Came in after lunch  ",
        now=fixed_now,
    )

    record = attendance_repo.get_by_id(attendance_id)
    assert record.status == "Half Day"
    assert record.overridden_by == super_admin.employee_id
    assert record.override_reason == "Came in after lunch"
    assert record.overridden_at == fixed_now

    entry = audit_repo.entries[-1]
    assert entry.action is AuditAction.ATTENDANCE_EDIT
    assert entry.old_value["status"] == "Absent"
    assert entry.new_value["status"] == "Half Day"
    assert entry.reason == "Came in after lunch"


def test_override_creates_missing_day(service, attendance_repo, super_admin, fixed_now):
    check_in = datetime(2026, 3, 11, 9, 0)
    check_out = datetime(2026, 3, 11, 17, 0)

    attendance_id = service.save_override(
        actor=super_admin,
        employee_id=7,
        work_date=date(2026, 3, 11),
        status="Present",
        reason="Forgot to punch",
        check_in=check_in,
        check_out=check_out,
        outlet_id=1,
        now=fixed_now,
    )

    record = attendance_repo.get_by_id(attendance_id)
    assert (record.check_in, record.check_out, record.outlet_id) == (check_in, check_out, 1)


def test_override_requires_super_admin(service, manager, fixed_now):
    with pytest.raises(AuthorizationError, match="Only Super Admin"):
        service.save_override(
            actor=manager, employee_id=7, work_date=date(2026, 3, 10), status="Present", reason="valid reason", now=fixed_now
        )


def test_override_on_locked_record(service, attendance_repo, super_admin, fixed_now):
    _seed(attendance_repo, is_locked=True)

    with pytest.raises(AuthorizationError, match="locked"):
        service.save_override(
            actor=super_admin, employee_id=7, work_date=date(2026, 3, 10), status="Present", reason="valid reason", now=fixed_now
        )


def test_override_for_future_day(service, super_admin, fixed_now):
    with pytest.raises(AuthorizationError, match="beyond today"):
        service.save_override(
            actor=super_admin, employee_id=7, work_date=date(2026, 3, 16), status="Present", reason="valid reason", now=fixed_now
        )


def test_override_short_reason(service, super_admin, fixed_now):
    with pytest.raises(ValidationError, match="min 5 chars"):
        service.save_override(
            actor=super_admin, employee_id=7, work_date=date(2026, 3, 10), status="Present", reason="ok", now=fixed_now
        )


def test_override_unknown_status(service, super_admin, fixed_now):
    with pytest.raises(ValidationError, match="Unknown attendance status"):
        service.save_override(
            actor=super_admin, employee_id=7, work_date=date(2026, 3, 10), status="Sick", reason="valid reason", now=fixed_now
        )


def test_override_check_out_before_check_in(service, super_admin, fixed_now):
    with pytest.raises(ValidationError, match="Check-out"):
        service.save_override(
            actor=super_admin,
            employee_id=7,
            work_date=date(2026, 3, 10),
            status="Present",
            reason="valid reason",
            check_in=datetime(2026, 3, 10, 17, 0),
            check_out=datetime(2026, 3, 10, 9, 0),
            now=fixed_now,
        )


def test_delete_audits_before_removing(service, attendance_repo, audit_repo, super_admin):
    record = _seed(attendance_repo, overtime_hours=1.5)

    service.delete_record(actor=super_admin, attendance_id=record.attendance_id, reason="  Duplicate entry ")

    assert attendance_repo.get_by_id(record.attendance_id) is None
    entry = audit_repo.entries[-1]
    assert entry.reason == "Duplicate entry"
    assert entry.action is AuditAction.ATTENDANCE_DELETE
    assert entry.old_value["date"] == "2026-03-10"
    assert entry.old_value["overtime_hours"] == 1.5
    assert entry.new_value is None


def test_delete_missing_record(service, super_admin):
    with pytest.raises(NotFoundError):
        service.delete_record(actor=super_admin, attendance_id=42, reason="Duplicate entry")


def test_delete_locked_record(service, attendance_repo, audit_repo, super_admin):
    record = _seed(attendance_repo)
    attendance_repo.rows[record.attendance_id] = replace(record, is_locked=True)

    with pytest.raises(AuthorizationError, match="locked"):
        service.delete_record(actor=super_admin, attendance_id=record.attendance_id, reason="Duplicate entry")
    assert audit_repo.entries == []


def test_delete_by_manager(service, attendance_repo, manager):
    record = _seed(attendance_repo)

    with pytest.raises(AuthorizationError, match="delete"):
        service.delete_record(actor=manager, attendance_id=record.attendance_id, reason="Duplicate entry")


def test_delete_needs_reason(service, attendance_repo, super_admin):
    record = _seed(attendance_repo)

    with pytest.raises(ValidationError):
        service.delete_record(actor=super_admin, attendance_id=record.attendance_id, reason="  dup ")
    assert attendance_repo.get_by_id(record.attendance_id) is not None
