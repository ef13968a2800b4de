from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Identity:
    """Authenticated user as seen by the rest of the app: opaque id + email."""

    user_id: str
    email: str


@dataclass(frozen=True)
class Account:
    user_id: str
    email: str
    password_hash: str

    @property
    def identity(self) -> Identity:
        return Identity(user_id=self.user_id, email=self.email)


@dataclass(frozen=True)
class AuthSession:
    identity: Identity
    access_token: str
    issued_at: datetime
