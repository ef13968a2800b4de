from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimetableEntry
from .repository import TimetableRepository

_COLUMNS = "entry_id, class_id, day_of_week, period_number, subject, faculty_id"


def _to_entry(r: dict) -> TimetableEntry:
    return TimetableEntry(
        entry_id=int(r["entry_id"]),
        class_id=int(r["class_id"]),
        day_of_week=int(r["day_of_week"]),
        period_number=int(r["period_number"]),
        subject=r["subject"],
        faculty_id=int(r["faculty_id"]) if r.get("faculty_id") is not None else None,
    )


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, entry_id: int) -> Optional[TimetableEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM timetable WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def upsert(
        self,
        *,
        class_id: int,
        day_of_week: int,
        period_number: int,
        subject: str,
        faculty_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetable(class_id, day_of_week, period_number, subject, faculty_id)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE subject=VALUES(subject), faculty_id=VALUES(faculty_id)
                """,
                (int(class_id), int(day_of_week), int(period_number), subject, faculty_id),
            )

            # On update lastrowid can be 0; look the slot up.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT entry_id FROM timetable WHERE class_id=%s AND day_of_week=%s AND period_number=%s",
                (int(class_id), int(day_of_week), int(period_number)),
            )
            r = fetchone(cur)
            return int(r["entry_id"]) if r else 0

    def delete(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timetable WHERE entry_id=%s", (int(entry_id),))
            return cur.rowcount > 0

    def for_class(self, class_id: int, *, day_of_week: Optional[int] = None) -> Sequence[TimetableEntry]:
        sql = f"SELECT {_COLUMNS} FROM timetable WHERE class_id=%s"
        params: list[object] = [int(class_id)]
        if day_of_week is not None:
            sql += " AND day_of_week=%s"
            params.append(int(day_of_week))
        sql += " ORDER BY day_of_week, period_number"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_entry(r) for r in fetchall(cur)]

    def for_faculty(self, faculty_id: int) -> Sequence[TimetableEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM timetable WHERE faculty_id=%s ORDER BY day_of_week, period_number",
                (int(faculty_id),),
            )
            return [_to_entry(r) for r in fetchall(cur)]
