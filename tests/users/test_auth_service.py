from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from time_tracker.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from time_tracker.users.service import JWT_ALGORITHM, AuthService

SECRET = "test-secret"


@pytest.fixture
def auth(users_repo) -> AuthService:
    return AuthService(users_repo, secret=SECRET, token_days=7)


def test_service_requires_secret(users_repo):
    with pytest.raises(ValueError):
        AuthService(users_repo, secret="")


def test_register_stores_hashed_password(auth, users_repo):
    user_id = auth.register(name="Alice", email="alice@example.com", password="secret123")

    user = users_repo.get_by_id(user_id)
    assert user.email == "alice@example.com"
    assert user.password_hash != "secret123"


@pytest.mark.parametrize(
    "name, email, password",
    [
        (None, "a@example.com", "secret123"),
        ("Alice", "", "secret123"),
        ("Alice", "a@example.com", None),
        ("Alice", "a@example.com", "12345"),
        ("   ", "a@example.com", "secret123"),
    ],
)
def test_register_validation(auth, users_repo, name, email, password):
    with pytest.raises(ValidationError):
        auth.register(name=name, email=email, password=password)
    assert users_repo.by_id == {}


def test_register_duplicate_email_conflicts(auth):
    auth.register(name="Alice", email="alice@example.com", password="secret123")

    with pytest.raises(ConflictError):
        auth.register(name="Other", email="alice@example.com", password="another1")


def test_login_returns_verifiable_token(auth):
    user_id = auth.register(name="Alice", email="alice@example.com", password="secret123")

    result = auth.login(email="alice@example.com", password="secret123")

    assert result.user.user_id == user_id
    assert auth.verify_token(result.token) == user_id
    payload = jwt.decode(result.token, SECRET, algorithms=[JWT_ALGORITHM])
    assert payload["email"] == "alice@example.com"
    assert payload["exp"] - payload["iat"] == 7 * 24 * 3600


@pytest.mark.parametrize("email, password", [("alice@example.com", "wrongpass"), ("nobody@example.com", "secret123")])
def test_login_invalid_credentials(auth, email, password):
    auth.register(name="Alice", email="alice@example.com", password="secret123")

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        auth.login(email=email, password=password)


def test_login_requires_both_fields(auth):
    with pytest.raises(ValidationError):
        auth.login(email="alice@example.com", password="")


def test_expired_token_is_rejected(auth):
    auth.register(name="Alice", email="alice@example.com", password="secret123")
    issued = datetime.now(timezone.utc) - timedelta(days=8)

    token = auth.login(email="alice@example.com", password="secret123", now=issued).token

    with pytest.raises(AuthenticationError, match="Token expired"):
        auth.verify_token(token)


def test_token_signed_with_other_secret_is_rejected(auth, users_repo):
    auth.register(name="Alice", email="alice@example.com", password="secret123")
    forged = AuthService(users_repo, secret="other-secret").login(email="alice@example.com", password="secret123").token

    with pytest.raises(AuthenticationError, match="Invalid token"):
        auth.verify_token(forged)


def test_missing_token_is_rejected(auth):
    with pytest.raises(AuthenticationError, match="Access token required"):
        auth.verify_token(None)


def test_get_profile_for_missing_user(auth):
    with pytest.raises(NotFoundError):
        auth.get_profile(99)
