from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Faculty
from .repository import FacultyRepository

_COLUMNS = "faculty_id, user_id, full_name, email, department, is_class_advisor, advisor_class_id"
_UPDATABLE = ("user_id", "full_name", "email", "department", "is_class_advisor", "advisor_class_id")


def _to_faculty(r: dict) -> Faculty:
    return Faculty(
        faculty_id=int(r["faculty_id"]),
        user_id=r.get("user_id"),
        full_name=r["full_name"],
        email=r.get("email"),
        department=r.get("department"),
        is_class_advisor=bool(r.get("is_class_advisor")),
        advisor_class_id=int(r["advisor_class_id"]) if r.get("advisor_class_id") is not None else None,
    )


class MySQLFacultyRepository(FacultyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, faculty_id: int) -> Optional[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM faculty WHERE faculty_id=%s", (int(faculty_id),))
            r = fetchone(cur)
            return _to_faculty(r) if r else None

    def get_by_user_id(self, user_id: str) -> Optional[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM faculty WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return _to_faculty(r) if r else None

    def get_advisor_for_class(self, class_id: int) -> Optional[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM faculty WHERE advisor_class_id=%s AND is_class_advisor=1 LIMIT 1",
                (int(class_id),),
            )
            r = fetchone(cur)
            return _to_faculty(r) if r else None

    def list_all(self) -> Sequence[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM faculty ORDER BY full_name")
            return [_to_faculty(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: Optional[str],
        full_name: str,
        email: Optional[str],
        department: Optional[str],
        is_class_advisor: bool,
        advisor_class_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO faculty(user_id, full_name, email, department, is_class_advisor, advisor_class_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, full_name, email, department, int(bool(is_class_advisor)), advisor_class_id),
            )
            return int(cur.lastrowid)

    def update(self, faculty_id: int, fields: dict) -> bool:
        cols = [c for c in _UPDATABLE if c in fields]
        if not cols:
            return False
        assignments = ", ".join(f"{c}=%s" for c in cols)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE faculty SET {assignments} WHERE faculty_id=%s",
                tuple(fields[c] for c in cols) + (int(faculty_id),),
            )
            return cur.rowcount > 0

    def delete(self, faculty_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM faculty WHERE faculty_id=%s", (int(faculty_id),))
            return cur.rowcount > 0
