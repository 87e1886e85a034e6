from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

from ..core.constants import DEFAULT_AUDIT_TRAIL_LIMIT, DEFAULT_RECENT_AUDIT_LIMIT
from ..core.enums import AuditAction, AuditEntityType
from .model import AuditLog, AuditLogEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)

_PAYROLL_ACTIONS = {
    AuditAction.PAYROLL_GENERATE,
    AuditAction.PAYROLL_EDIT,
    AuditAction.PAYROLL_LOCK,
    AuditAction.PAYROLL_UNLOCK,
}


class AuditLogger:
    """Tracks critical changes to attendance, payroll and sessions.

    Writing is best-effort: a failed insert is logged and reported as
    ``False`` so the business operation that triggered it still completes.
    """

    def __init__(self, audit: AuditRepository):
        self._audit = audit

    def log(self, entry: AuditLogEntry) -> bool:
        try:
            self._audit.insert(entry)
        except Exception:
            logger.exception("Failed to write audit entry %s for %s %s", entry.action.value, entry.entity_type.value, entry.entity_id)
            return False
        return True

    def log_attendance_edit(
        self,
        *,
        attendance_id: int,
        old_value: dict,
        new_value: dict,
        reason: str,
        performed_by: int,
        outlet_id: Optional[int] = None,
    ) -> bool:
        return self.log(
            AuditLogEntry(
                action=AuditAction.ATTENDANCE_EDIT,
                entity_type=AuditEntityType.ATTENDANCE,
                entity_id=str(attendance_id),
                old_value=old_value,
                new_value=new_value,
                reason=reason,
                performed_by=performed_by,
                outlet_id=outlet_id,
            )
        )

    def log_attendance_delete(
        self,
        *,
        attendance_id: int,
        attendance_data: dict,
        reason: str,
        performed_by: int,
        outlet_id: Optional[int] = None,
    ) -> bool:
        return self.log(
            AuditLogEntry(
                action=AuditAction.ATTENDANCE_DELETE,
                entity_type=AuditEntityType.ATTENDANCE,
                entity_id=str(attendance_id),
                old_value=attendance_data,
                new_value=None,
                reason=reason,
                performed_by=performed_by,
                outlet_id=outlet_id,
            )
        )

    def log_payroll_action(
        self,
        *,
        action: AuditAction,
        payroll_id: int,
        performed_by: int,
        old_value: Any = None,
        new_value: Any = None,
        reason: Optional[str] = None,
        outlet_id: Optional[int] = None,
    ) -> bool:
        if action not in _PAYROLL_ACTIONS:
            raise ValueError(f"Not a payroll action: {action!r}")
        return self.log(
            AuditLogEntry(
                action=action,
                entity_type=AuditEntityType.PAYROLL,
                entity_id=str(payroll_id),
                old_value=old_value,
                new_value=new_value,
                reason=reason,
                performed_by=performed_by,
                outlet_id=outlet_id,
            )
        )

    def trail(self, *, entity_type: AuditEntityType, entity_id: str, limit: int = DEFAULT_AUDIT_TRAIL_LIMIT) -> Sequence[AuditLog]:
        return self._audit.list_for_entity(entity_type=entity_type.value, entity_id=str(entity_id), limit=limit)

    def recent(
        self,
        *,
        outlet_id: int,
        limit: int = DEFAULT_RECENT_AUDIT_LIMIT,
        action: Optional[AuditAction] = None,
    ) -> Sequence[AuditLog]:
        return self._audit.list_recent(outlet_id=outlet_id, limit=limit, action=action.value if action else None)


def format_audit_log(log: AuditLog) -> str:
    """Multi-line plain text rendering used by the audit screen and exports."""
    action = log.action.replace("_", " ").upper()
    performed_by = log.performed_by_name or "Unknown"
    lines = [action, f"By: {performed_by}", f"At: {log.timestamp:%Y-%m-%d %H:%M:%S}"]

    if log.old_value and log.new_value:
        lines.append(f"Old: {json.dumps(log.old_value, indent=2, default=str)}")
        lines.append(f"New: {json.dumps(log.new_value, indent=2, default=str)}")
    if log.reason:
        lines.append(f"Reason: {log.reason}")

    return "\n".join(lines)
