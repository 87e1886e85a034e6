from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee account, including its pay parameters.

    Plain data object (no DB access code).
    """

    employee_id: int
    name: str
    email: Optional[str]
    role: str
    password_hash: str = ""
    outlet_id: Optional[int] = None
    base_salary: float = 0
    overtime_rate: float = 0
    is_active: bool = True

    @property
    def is_super_admin(self) -> bool:
        return Role.is_super_admin(self.role)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login; also the acting user passed to services."""

    employee_id: int
    name: str
    role: str
    outlet_id: Optional[int] = None

    @property
    def is_super_admin(self) -> bool:
        return Role.is_super_admin(self.role)
