class DomainError(Exception):
    """Base class for errors a controller can show to the user as-is."""


class ValidationError(DomainError):
    """Bad input: unknown status, short reason, locked payroll month, negative amount."""


class AuthenticationError(DomainError):
    """Login failed (unknown account, wrong password or deactivated employee)."""


class AuthorizationError(DomainError):
    """The acting employee's role does not allow the operation."""


class NotFoundError(DomainError):
    """An employee, attendance row, payroll row or session id does not exist."""
