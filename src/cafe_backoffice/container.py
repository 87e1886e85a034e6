from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.service import AuditLogger
from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .security.mysql_security_repository import MySQLAlertRepository, MySQLSessionRepository
from .security.notifier import AlertNotifier, SMTPAlertNotifier, SMTPConfig
from .security.repository import AlertRepository, SessionRepository
from .security.service import LoginSecurityService, SecurityAlertService
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository
    sessions_repo: SessionRepository
    alerts_repo: AlertRepository

    audit_logger: AuditLogger
    auth_service: AuthService
    attendance_service: AttendanceService
    payroll_service: PayrollService
    alert_service: SecurityAlertService
    login_security_service: LoginSecurityService

    default_geo: dict


def build_notifier(settings: Any) -> Optional[AlertNotifier]:
    host = getattr(settings, "SMTP_HOST", "")
    if not host:
        return None
    return SMTPAlertNotifier(
        SMTPConfig(
            host=host,
            port=int(getattr(settings, "SMTP_PORT", 587)),
            user=getattr(settings, "SMTP_USER", ""),
            password=getattr(settings, "SMTP_PASSWORD", ""),
            from_address=getattr(settings, "ALERT_FROM_ADDRESS", ""),
        )
    )


def wire(
    settings: Any,
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    payroll_repo: PayrollRepository,
    sessions_repo: SessionRepository,
    alerts_repo: AlertRepository,
    audit_logger: AuditLogger,
    notifier: Optional[AlertNotifier] = None,
) -> Container:
    """Build services on top of any set of repositories (MySQL in production, fakes in tests)."""
    auth_service = AuthService(
        employees_repo,
        internal_domain=getattr(settings, "INTERNAL_EMAIL_DOMAIN", "caferepublic.internal"),
    )
    attendance_service = AttendanceService(attendance_repo, audit_logger)
    payroll_service = PayrollService(
        payroll_repo,
        attendance_repo,
        employees_repo,
        audit_logger,
        calculator=StandardPayrollCalculator(strict=bool(getattr(settings, "STRICT_PAYROLL_VALIDATION", False))),
        late_penalty_rate=float(getattr(settings, "LATE_PENALTY_RATE", 0.5)),
    )
    alert_service = SecurityAlertService(
        alerts_repo,
        employees_repo,
        notifier=notifier,
        app_url=getattr(settings, "APP_URL", "http://localhost:5000"),
    )
    login_security_service = LoginSecurityService(sessions_repo, alert_service, audit_logger)

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        sessions_repo=sessions_repo,
        alerts_repo=alerts_repo,
        audit_logger=audit_logger,
        auth_service=auth_service,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        alert_service=alert_service,
        login_security_service=login_security_service,
        default_geo=dict(getattr(settings, "DEFAULT_GEO", {})),
    )


def build_container(settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))

    return wire(
        settings,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        alerts_repo=MySQLAlertRepository(conn),
        audit_logger=AuditLogger(MySQLAuditRepository(conn)),
        notifier=build_notifier(settings),
    )
