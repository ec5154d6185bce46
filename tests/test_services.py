from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.academy_system.academy_system.core.enums import Role
from src.academy_system.academy_system.core.exceptions import AuthenticationError, ValidationError
from src.academy_system.academy_system.users.model import User
from src.academy_system.academy_system.users.service import AuthService


@dataclass
class InMemoryUsers:
    users_by_email: dict[str, User]
    users_by_id: dict[int, User]

    def get_by_email(self, email: str) -> Optional[User]:
        return self.users_by_email.get(email)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)


def make_user(*, password="right", password_hash=None, is_active=True, role=Role.ADMIN) -> User:
    return User(
        user_id=1,
        name="Anita Admin",
        email="admin@academy.local",
        phone=None,
        password_hash=password_hash or generate_password_hash(password),
        role=role,
        is_active=is_active,
    )


def auth_for(user: User) -> AuthService:
    return AuthService(InMemoryUsers({user.email: user}, {user.user_id: user}))


def test_auth_success_returns_session_user():
    auth = auth_for(make_user())

    su = auth.authenticate(" Admin@Academy.Local ", "right")

    assert su.user_id == 1
    assert su.role == Role.ADMIN
    assert su.email == "admin@academy.local"


def test_auth_wrong_password_raises():
    auth = auth_for(make_user())

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin@academy.local", "wrong")


def test_auth_unknown_email_and_inactive_user_look_the_same():
    auth = auth_for(make_user(is_active=False))

    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        auth.authenticate("admin@academy.local", "right")
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        auth.authenticate("nobody@academy.local", "right")


def test_auth_placeholder_hash_never_matches():
    auth = auth_for(make_user(password_hash="CHANGE_ME"))

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin@academy.local", "CHANGE_ME")


def test_auth_requires_email():
    auth = auth_for(make_user())

    with pytest.raises(ValidationError):
        auth.authenticate("   ", "right")
