from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import month_bounds, now_local, parse_iso_date
from ..common.validators import require_in_range
from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD, DEFAULT_PERIODS_PER_DAY
from ..core.enums import AttendanceStatus, GroupBy, Role
from ..core.exceptions import AuthorizationError, UpsertConflictError, ValidationError
from ..profiles.repository import StudentRepository
from .aggregator import AggregateResult, AttendanceStats, aggregate, daily_summary, filter_by_date, summarize
from .model import AttendanceMark, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _parse_status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid attendance status: {value}")


def _as_id(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def _as_date(value, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


class AttendanceService:
    """Use case: mark attendance for a class period and read it back.

    Marking is an upsert keyed on (student, date, period): re-marking a
    period overwrites the previous status instead of adding a row.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        threshold: float = DEFAULT_ATTENDANCE_THRESHOLD,
        periods_per_day: int = DEFAULT_PERIODS_PER_DAY,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._threshold = float(threshold)
        self._periods_per_day = int(periods_per_day)
        self._clock = clock

    @property
    def threshold(self) -> float:
        return self._threshold

    def mark_attendance(
        self,
        *,
        current_role: Role,
        faculty_id: int,
        class_id: int,
        attendance_date,
        period_number,
        subject: Optional[str],
        entries: Iterable[Mapping],
    ) -> int:
        if current_role != Role.FACULTY:
            raise AuthorizationError("Only faculty can mark attendance")

        day = _as_date(attendance_date, "Date")
        if day is None:
            raise UpsertConflictError("Attendance date is required")
        if period_number is None or period_number == "":
            raise UpsertConflictError("Period number is required")
        period = require_in_range(period_number, "Period number", 1, self._periods_per_day)

        try:
            entries = list(entries or [])
        except TypeError:
            raise ValidationError("Attendance entries must be a list")
        if not entries:
            raise ValidationError("No attendance entries to save")

        class_id = _as_id(class_id, "Class id")
        roster = {s.student_id for s in self._students.list_by_class(class_id)}

        # Last status wins for a student listed twice in one batch.
        statuses: dict[int, AttendanceStatus] = {}
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise ValidationError("Every attendance entry must be an object")
            student_id = entry.get("student_id")
            if student_id is None or student_id == "":
                raise UpsertConflictError("Every attendance entry needs a student id")
            student_id = _as_id(student_id, "Student id")
            if student_id not in roster:
                raise ValidationError(f"Student {student_id} is not in this class")
            statuses[student_id] = _parse_status(entry.get("status"))

        marked_at = self._clock()
        subject = (subject or "").strip() or None
        marks = [
            AttendanceMark(
                student_id=student_id,
                class_id=class_id,
                faculty_id=int(faculty_id),
                record_date=day,
                period_number=period,
                subject=subject,
                status=status,
                marked_at=marked_at,
            )
            for student_id, status in statuses.items()
        ]

        saved = self._attendance.upsert_many(marks)
        logger.info(
            "Attendance saved: class=%s date=%s period=%s rows=%s by faculty=%s",
            class_id,
            day.isoformat(),
            period,
            saved,
            faculty_id,
        )
        return saved

    def correct_record(
        self,
        *,
        current_role: Role,
        record_id: int,
        status,
        faculty_id: Optional[int] = None,
    ) -> AttendanceRecord:
        """Change the status of one record.

        Faculty may only correct records they marked; admins may correct any.
        """
        if current_role not in (Role.FACULTY, Role.ADMIN):
            raise AuthorizationError("Only faculty or admins can correct attendance")

        record = self._attendance.get_by_id(_as_id(record_id, "Record id"))
        if not record:
            raise ValidationError("Attendance record not found")
        if current_role == Role.FACULTY and record.faculty_id != faculty_id:
            raise AuthorizationError("You can only correct attendance you marked")

        self._attendance.update_status(record.record_id, status=_parse_status(status), marked_at=self._clock())
        return self._attendance.get_by_id(record.record_id)

    # student views

    def records_for_student(self, student_id: int, start=None, end=None) -> Sequence[AttendanceRecord]:
        # date bounds applied in memory
        start, end = self.date_range(start, end)
        return filter_by_date(self._attendance.for_student(int(student_id)), start, end)

    def records_for_student_on(self, student_id: int, day) -> Sequence[AttendanceRecord]:
        day = _as_date(day, "Date") or self._clock().date()
        records = self._attendance.for_student(int(student_id), start=day, end=day)
        return sorted(records, key=lambda r: r.period_number)

    def student_stats(self, student_id: int, start=None, end=None) -> AttendanceStats:
        return summarize(self.records_for_student(student_id, start, end))

    def student_subject_stats(self, student_id: int, start=None, end=None) -> AggregateResult:
        return aggregate(self.records_for_student(student_id, start, end), GroupBy.SUBJECT)

    def monthly_summary(self, student_id: int, year: int, month: int) -> list[AttendanceStats]:
        month = require_in_range(month, "Month", 1, 12)
        year = require_in_range(year, "Year", 1900, 9999)
        first, last = month_bounds(year, month)
        return daily_summary(self._attendance.for_student(int(student_id), start=first, end=last))

    # class / admin views

    def records_for_class_on(self, class_id: int, day, period_number=None) -> Sequence[AttendanceRecord]:
        day = _as_date(day, "Date")
        if day is None:
            raise ValidationError("Date is required")
        period = None
        if period_number not in (None, ""):
            period = require_in_range(period_number, "Period number", 1, self._periods_per_day)
        return self._attendance.for_class(int(class_id), start=day, end=day, period_number=period)

    def records_for_class(self, class_id: int, start=None, end=None) -> Sequence[AttendanceRecord]:
        start, end = self.date_range(start, end)
        return self._attendance.for_class(int(class_id), start=start, end=end)

    def class_stats(self, class_id: int, start=None, end=None) -> AggregateResult:
        return aggregate(self.records_for_class(class_id, start, end), GroupBy.SUBJECT)

    def records_between(self, start=None, end=None) -> Sequence[AttendanceRecord]:
        start, end = self.date_range(start, end)
        return self._attendance.between(start=start, end=end)

    def overall_stats(self, *, current_role: Role, start=None, end=None) -> AttendanceStats:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can view institution statistics")
        return summarize(self.records_between(start, end))

    def date_range(self, start, end) -> tuple[Optional[date], Optional[date]]:
        start = _as_date(start, "Start date")
        end = _as_date(end, "End date")
        if start and end and start > end:
            raise ValidationError("Start date must be on or before end date")
        return start, end
