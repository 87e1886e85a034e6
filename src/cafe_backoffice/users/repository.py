from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_super_admins(self) -> Sequence[Employee]:
        raise NotImplementedError
