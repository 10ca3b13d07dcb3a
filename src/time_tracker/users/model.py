from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access). ``password_hash`` never leaves
    the service layer.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    created_at: Optional[str] = None

    def public_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name, "email": self.email}
