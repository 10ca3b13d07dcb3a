from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..users.service import AuthService


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return None
    return token.strip()


def make_token_required(auth_service: AuthService):
    """Decorator factory: resolve the bearer token into ``g.user_id``.

    The user id carried by a valid token is trusted without another lookup.
    """

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.user_id = auth_service.verify_token(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    return token_required
