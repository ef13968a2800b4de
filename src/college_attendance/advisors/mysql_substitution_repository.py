from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AdvisorSubstitution
from .repository import SubstitutionRepository

_COLUMNS = "substitution_id, class_id, original_advisor_id, substitute_advisor_id, from_date, to_date, reason"


def _to_substitution(r: dict) -> AdvisorSubstitution:
    return AdvisorSubstitution(
        substitution_id=int(r["substitution_id"]),
        class_id=int(r["class_id"]),
        original_advisor_id=int(r["original_advisor_id"]),
        substitute_advisor_id=int(r["substitute_advisor_id"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        reason=r.get("reason"),
    )


class MySQLSubstitutionRepository(SubstitutionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        class_id: int,
        original_advisor_id: int,
        substitute_advisor_id: int,
        from_date: date,
        to_date: date,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO advisor_substitutions(class_id, original_advisor_id, substitute_advisor_id, from_date, to_date, reason)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(class_id), int(original_advisor_id), int(substitute_advisor_id), from_date, to_date, reason),
            )
            return int(cur.lastrowid)

    def for_class(self, class_id: int) -> Sequence[AdvisorSubstitution]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM advisor_substitutions WHERE class_id=%s ORDER BY from_date DESC",
                (int(class_id),),
            )
            return [_to_substitution(r) for r in fetchall(cur)]

    def active_for_class(self, class_id: int, on_date: date) -> Sequence[AdvisorSubstitution]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM advisor_substitutions
                WHERE class_id=%s AND from_date <= %s AND to_date >= %s
                ORDER BY from_date DESC, substitution_id DESC
                """,
                (int(class_id), on_date, on_date),
            )
            return [_to_substitution(r) for r in fetchall(cur)]

    def active_for_substitute(self, faculty_id: int, on_date: date) -> Sequence[AdvisorSubstitution]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM advisor_substitutions
                WHERE substitute_advisor_id=%s AND from_date <= %s AND to_date >= %s
                ORDER BY from_date DESC, substitution_id DESC
                """,
                (int(faculty_id), on_date, on_date),
            )
            return [_to_substitution(r) for r in fetchall(cur)]
