from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One status per (student, date, period)."""

    record_id: int
    student_id: int
    class_id: int
    faculty_id: Optional[int]
    record_date: date
    period_number: int
    subject: Optional[str]
    status: AttendanceStatus
    marked_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "student_id": self.student_id,
            "class_id": self.class_id,
            "faculty_id": self.faculty_id,
            "date": self.record_date.isoformat(),
            "period_number": self.period_number,
            "subject": self.subject,
            "status": self.status.value,
            "marked_at": self.marked_at.isoformat() if self.marked_at else None,
        }


@dataclass(frozen=True)
class AttendanceMark:
    """Write model for the marking upsert; keyed by (student_id, record_date, period_number)."""

    student_id: int
    class_id: int
    faculty_id: int
    record_date: date
    period_number: int
    subject: Optional[str]
    status: AttendanceStatus
    marked_at: datetime

    @property
    def key(self) -> tuple[int, date, int]:
        return (self.student_id, self.record_date, self.period_number)
