from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AuditLog, AuditLogEntry


class AuditRepository(Protocol):
    def insert(self, entry: AuditLogEntry) -> int:
        raise NotImplementedError

    def list_for_entity(self, *, entity_type: str, entity_id: str, limit: int) -> Sequence[AuditLog]:
        raise NotImplementedError

    def list_recent(self, *, outlet_id: int, limit: int, action: Optional[str] = None) -> Sequence[AuditLog]:
        raise NotImplementedError
