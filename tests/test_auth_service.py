import pytest
from werkzeug.security import generate_password_hash

from cafe_backoffice.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from cafe_backoffice.users.model import Employee
from cafe_backoffice.users.service import AuthService


@pytest.fixture
def auth(employees):
    return AuthService(employees, internal_domain="caferepublic.internal")


def test_login_with_email(auth):
    user = auth.authenticate("owner@caferepublic.internal", "owner-pass")

    assert user.employee_id == 1
    assert user.is_super_admin


def test_bare_username_maps_to_internal_domain(auth):
    assert auth.resolve_email("Ravi") == "ravi@caferepublic.internal"
    assert auth.authenticate("RAVI", " staff-pass ").employee_id == 7


def test_wrong_password(auth):
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        auth.authenticate("ravi", "nope")


def test_unknown_user(auth):
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        auth.authenticate("ghost", "staff-pass")


def test_blank_identifier(auth):
    with pytest.raises(ValidationError):
        auth.authenticate("   ", "x")


def test_inactive_account(auth, employees):
    employees.add(
        Employee(
            employee_id=9,
            name="Former",
            email="former@caferepublic.internal",
            role="Staff",
            password_hash=generate_password_hash("old-pass"),
            is_active=False,
        )
    )

    with pytest.raises(AuthorizationError, match="deactivated"):
        auth.authenticate("former", "old-pass")


def test_placeholder_hash_never_matches(auth, employees):
    employees.add(Employee(employee_id=10, name="Seeded", email="seeded@x.io", role="Staff", password_hash="CHANGE_ME"))

    with pytest.raises(AuthenticationError):
        auth.authenticate("seeded@x.io", "CHANGE_ME")
