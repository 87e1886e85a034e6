from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_INTERNAL_EMAIL_DOMAIN
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import SessionUser
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository, *, internal_domain: str = DEFAULT_INTERNAL_EMAIL_DOMAIN):
        self._employees = employees
        self._internal_domain = internal_domain

    def resolve_email(self, identifier: str) -> str:
        """Staff may log in with a bare username; it maps onto the internal mail domain."""
        identifier = require_non_empty(identifier, "Identifier")
        if "@" in identifier:
            return identifier
        return f"{identifier.lower()}@{self._internal_domain}"

    def authenticate(self, identifier: str, password: str) -> SessionUser:
        email = self.resolve_email(identifier)
        employee = self._employees.get_by_email(email)
        if not employee:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(employee.password_hash, (password or "").strip())
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        if not employee.is_active:
            logger.info("Login blocked for inactive employee %s", employee.employee_id)
            raise AuthorizationError("Account deactivated or not found")

        return SessionUser(
            employee_id=employee.employee_id,
            name=employee.name,
            role=employee.role,
            outlet_id=employee.outlet_id,
        )
