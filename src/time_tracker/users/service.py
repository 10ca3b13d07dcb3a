from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_TOKEN_DAYS, MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

JWT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


class AuthService:
    """Use cases: register, log in, resolve a bearer token to its user id."""

    def __init__(self, users: UserRepository, *, secret: str, token_days: int = DEFAULT_TOKEN_DAYS):
        if not secret:
            raise ValueError("JWT secret must be configured")
        self._users = users
        self._secret = secret
        self._token_days = int(token_days)

    def register(self, *, name: Optional[str], email: Optional[str], password: Optional[str]) -> int:
        if not name or not email or not password:
            raise ValidationError("All fields are required")
        name = require_non_empty(name, "name")
        email = require_non_empty(email, "email")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ConflictError("User already exists")

        return self._users.create_user(name=name, email=email, password_hash=generate_password_hash(password))

    def login(self, *, email: Optional[str], password: Optional[str], now: Optional[datetime] = None) -> LoginResult:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("Invalid credentials")

        return LoginResult(token=self.issue_token(user, now=now), user=user)

    def issue_token(self, user: User, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "userId": user.user_id,
            "email": user.email,
            "iat": now,
            "exp": now + timedelta(days=self._token_days),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: Optional[str]) -> int:
        if not token:
            raise AuthenticationError("Access token required")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired") from None
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token") from None

        user_id = payload.get("userId")
        if not isinstance(user_id, int):
            raise AuthenticationError("Invalid token")
        return user_id

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
