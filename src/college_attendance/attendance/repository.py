from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceMark, AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        """Write marks keyed on (student_id, record_date, period_number); an existing row is overwritten."""

        raise NotImplementedError

    def update_status(self, record_id: int, *, status: AttendanceStatus, marked_at: datetime) -> bool:
        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def for_student(
        self,
        student_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest first; both bounds inclusive."""

        raise NotImplementedError

    def for_class(
        self,
        class_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        period_number: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def between(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
