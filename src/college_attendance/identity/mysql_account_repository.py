from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import AccountRepository


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, email, password_hash FROM accounts WHERE email=%s", (email,))
            r = fetchone(cur)
            if not r:
                return None
            return Account(user_id=r["user_id"], email=r["email"], password_hash=r["password_hash"])

    def get_by_id(self, user_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, email, password_hash FROM accounts WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Account(user_id=r["user_id"], email=r["email"], password_hash=r["password_hash"])

    def create(self, *, user_id: str, email: str, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO accounts(user_id, email, password_hash) VALUES(%s,%s,%s)",
                (user_id, email, password_hash),
            )
