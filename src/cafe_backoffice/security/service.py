from __future__ import annotations

import logging
from datetime import datetime
from html import escape
from typing import Optional

from ..audit.model import AuditLogEntry
from ..audit.service import AuditLogger
from ..common.datetime_utils import now_local
from ..core.enums import AlertSeverity, AuditAction, AuditEntityType, RiskLevel, RiskReason
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import SessionUser
from ..users.repository import EmployeeRepository
from .model import GeoLoginEvent, RiskAssessment, SecurityAlert
from .notifier import AlertNotifier
from .repository import AlertRepository, SessionRepository
from .risk import assess_login_risk

logger = logging.getLogger(__name__)


class SecurityAlertService:
    """Persists security alerts and mails Super Admins about the serious ones."""

    def __init__(
        self,
        alerts: AlertRepository,
        employees: EmployeeRepository,
        *,
        notifier: Optional[AlertNotifier] = None,
        app_url: str = "http://localhost:5000",
    ):
        self._alerts = alerts
        self._employees = employees
        self._notifier = notifier
        self._app_url = app_url.rstrip("/")

    def raise_alert(
        self,
        *,
        session_id: Optional[int],
        user_id: int,
        assessment: RiskAssessment,
        geo: GeoLoginEvent,
        ip_address: str,
        user_agent: Optional[str] = None,
    ) -> int:
        reason = assessment.reason if assessment.reason != RiskReason.NONE else None
        alert = SecurityAlert(
            session_id=session_id,
            user_id=user_id,
            alert_type=reason.value if reason else "high_risk_login",
            severity=AlertSeverity.HIGH if assessment.is_high else AlertSeverity.MEDIUM,
            metadata={"geo": geo.to_dict(), "ip": ip_address, "user_agent": user_agent},
        )
        alert_id = self._alerts.insert(alert)
        logger.warning(
            "Security alert %s: %s for user %s from %s (%s)",
            alert_id,
            alert.alert_type,
            user_id,
            ip_address,
            geo.country,
        )

        if assessment.is_high or reason == RiskReason.IMPOSSIBLE_TRAVEL:
            self._notify_admins(alert, geo=geo, ip_address=ip_address)
        return alert_id

    def _notify_admins(self, alert: SecurityAlert, *, geo: GeoLoginEvent, ip_address: str) -> None:
        if self._notifier is None:
            return

        recipients = [e.email for e in self._employees.list_super_admins() if e.email]
        if not recipients:
            return

        subject, body, html = self._render(alert, geo=geo, ip_address=ip_address)
        try:
            self._notifier.send(recipients=recipients, subject=subject, body=body, html=html)
        except Exception:
            # The alert row is already stored; a mail outage must not fail the login.
            logger.exception("Security alert mail dispatch failed")

    def _render(self, alert: SecurityAlert, *, geo: GeoLoginEvent, ip_address: str) -> tuple[str, str, str]:
        title = alert.alert_type.upper().replace("_", " ")
        reason = alert.alert_type
        location = f"{geo.city or 'Unknown'}, {geo.country or 'Unknown'}"
        link = f"{self._app_url}/admin/security"
        user_ref = str(alert.user_id)[:8]

        subject = f"Security Alert: {title}"
        body = (
            "Suspicious Login Detected\n\n"
            f"A high-risk login event was recorded for user {user_ref}.\n"
            f"Reason: {reason}\n"
            f"Location: {location}\n"
            f"ISP: {geo.isp or 'Unknown'}\n"
            f"IP Address: {ip_address}\n\n"
            f"Open Security Center: {link}\n"
        )
        html = (
            "<h1>Suspicious Login Detected</h1>"
            f"<p>A high-risk login event was recorded for user <strong>{escape(user_ref)}</strong>.</p>"
            f"<p><strong>Reason:</strong> {escape(reason)}</p>"
            f"<p><strong>Location:</strong> {escape(location)}</p>"
            f"<p><strong>ISP:</strong> {escape(geo.isp or 'Unknown')}</p>"
            f"<p><strong>IP Address:</strong> {escape(ip_address)}</p>"
            f'<p><a href="{escape(link)}">Open Security Center</a></p>'
        )
        return subject, body, html


class LoginSecurityService:
    """Use case: record a login session, score its risk and raise alerts."""

    def __init__(self, sessions: SessionRepository, alerts: SecurityAlertService, audit: AuditLogger):
        self._sessions = sessions
        self._alerts = alerts
        self._audit = audit

    def record_login(
        self,
        *,
        user_id: int,
        geo: GeoLoginEvent,
        ip_address: str,
        device_info: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> tuple[int, RiskAssessment]:
        last = self._sessions.get_latest_for_user(user_id)
        assessment = assess_login_risk(last.as_geo_event() if last else None, geo)

        session_id = self._sessions.create(
            user_id=user_id,
            geo=geo,
            ip_address=ip_address,
            device_info=device_info or "Unknown Device",
            risk_level=assessment.level,
        )

        if assessment.level == RiskLevel.HIGH:
            try:
                self._alerts.raise_alert(
                    session_id=session_id,
                    user_id=user_id,
                    assessment=assessment,
                    geo=geo,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            except Exception:
                logger.exception("Failed to raise security alert for session %s", session_id)

        return session_id, assessment

    def end_session(self, session_id: int, *, now: Optional[datetime] = None) -> bool:
        return self._sessions.mark_logged_out(session_id, logout_at=now or now_local())

    def force_logout(self, *, actor: SessionUser, session_id: int, now: Optional[datetime] = None) -> None:
        if not actor.is_super_admin:
            raise AuthorizationError("Access denied")

        if not self._sessions.get_by_id(session_id):
            raise NotFoundError("Session not found")

        self._sessions.mark_logged_out(session_id, logout_at=now or now_local())
        logger.info("Session %s force-logged-out by %s", session_id, actor.employee_id)

        self._audit.log(
            AuditLogEntry(
                action=AuditAction.FORCE_LOGOUT,
                entity_type=AuditEntityType.AUTH_SESSION,
                entity_id=str(session_id),
                new_value={"session_id": session_id},
                performed_by=actor.employee_id,
                outlet_id=actor.outlet_id,
            )
        )
