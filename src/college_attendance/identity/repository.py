from __future__ import annotations

from typing import Optional, Protocol

from .model import Account


class AccountRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[Account]:
        raise NotImplementedError

    def create(self, *, user_id: str, email: str, password_hash: str) -> None:
        raise NotImplementedError
