from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassGroup
from .repository import ClassRepository


def _to_class(r: dict) -> ClassGroup:
    return ClassGroup(
        class_id=int(r["class_id"]),
        class_name=r["class_name"],
        year=int(r["year"]),
        section=r["section"],
        department=r["department"],
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT class_id, class_name, year, section, department FROM classes WHERE class_id=%s",
                (int(class_id),),
            )
            r = fetchone(cur)
            return _to_class(r) if r else None

    def list_all(self) -> Sequence[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT class_id, class_name, year, section, department FROM classes ORDER BY year DESC, section ASC"
            )
            return [_to_class(r) for r in fetchall(cur)]

    def create(self, *, class_name: str, year: int, section: str, department: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO classes(class_name, year, section, department) VALUES(%s,%s,%s,%s)",
                (class_name, int(year), section, department),
            )
            return int(cur.lastrowid)
