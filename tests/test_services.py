import pytest

from src.restaurant_manager.restaurant_manager.core.enums import Role
from src.restaurant_manager.restaurant_manager.core.exceptions import AuthenticationError, ValidationError
from src.restaurant_manager.restaurant_manager.users.service import AuthService


def test_authenticate_success(users):
    svc = AuthService(users)

    s_user = svc.authenticate("user4@test.local", "secret123")

    assert s_user.user_id == 4
    assert s_user.role == Role.CREW


def test_authenticate_normalizes_email(users):
    assert AuthService(users).authenticate("  USER2@test.local ", "secret123").user_id == 2


def test_authenticate_wrong_password(users):
    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate("user4@test.local", "nope")


def test_authenticate_inactive_user(users):
    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate("user5@test.local", "secret123")


def test_authenticate_requires_email(users):
    with pytest.raises(ValidationError):
        AuthService(users).authenticate("   ", "secret123")
