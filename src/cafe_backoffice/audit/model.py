from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import AuditAction, AuditEntityType


@dataclass(frozen=True)
class AuditLogEntry:
    """What gets written to audit_logs for one critical change."""

    action: AuditAction
    entity_type: AuditEntityType
    entity_id: str
    performed_by: Optional[int]
    old_value: Any = None
    new_value: Any = None
    reason: Optional[str] = None
    outlet_id: Optional[int] = None


@dataclass(frozen=True)
class AuditLog:
    """Read-model of a stored audit row, joined with the performer's name."""

    log_id: int
    action: str
    entity_type: str
    entity_id: str
    timestamp: datetime
    performed_by: Optional[int] = None
    performed_by_name: Optional[str] = None
    old_value: Any = None
    new_value: Any = None
    reason: Optional[str] = None
    outlet_id: Optional[int] = None
