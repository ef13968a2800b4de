from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceMark, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, student_id, class_id, faculty_id, date, period_number, subject, status, marked_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        student_id=int(r["student_id"]),
        class_id=int(r["class_id"]),
        faculty_id=int(r["faculty_id"]) if r.get("faculty_id") is not None else None,
        record_date=r["date"],
        period_number=int(r["period_number"]),
        subject=r.get("subject"),
        status=AttendanceStatus(r["status"]),
        marked_at=r.get("marked_at"),
    )


def _date_clauses(start: Optional[date], end: Optional[date]) -> tuple[list[str], list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if start is not None:
        clauses.append("date >= %s")
        params.append(start)
    if end is not None:
        clauses.append("date <= %s")
        params.append(end)
    return clauses, params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        if not marks:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(student_id, class_id, faculty_id, date, period_number, subject, status, marked_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    class_id=VALUES(class_id),
                    faculty_id=VALUES(faculty_id),
                    subject=VALUES(subject),
                    status=VALUES(status),
                    marked_at=VALUES(marked_at)
                """,
                [
                    (
                        int(m.student_id),
                        int(m.class_id),
                        int(m.faculty_id),
                        m.record_date,
                        int(m.period_number),
                        m.subject,
                        m.status.value,
                        m.marked_at,
                    )
                    for m in marks
                ],
            )
            return len(marks)

    def update_status(self, record_id: int, *, status: AttendanceStatus, marked_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s, marked_at=%s WHERE record_id=%s",
                (status.value, marked_at, int(record_id)),
            )
            return cur.rowcount > 0

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def for_student(
        self,
        student_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses, params = _date_clauses(start, end)
        clauses.insert(0, "student_id=%s")
        params.insert(0, int(student_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY date DESC, period_number
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def for_class(
        self,
        class_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        period_number: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses, params = _date_clauses(start, end)
        clauses.insert(0, "class_id=%s")
        params.insert(0, int(class_id))
        if period_number is not None:
            clauses.append("period_number=%s")
            params.append(int(period_number))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY date, period_number, student_id
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def between(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[AttendanceRecord]:
        clauses, params = _date_clauses(start, end)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY date DESC, class_id, period_number
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
