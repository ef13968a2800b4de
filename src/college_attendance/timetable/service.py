from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_in_range, require_non_empty
from ..core.constants import DEFAULT_PERIODS_PER_DAY
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import StudentRepository
from .model import TimetableEntry
from .repository import TimetableRepository


def _optional_day(day_of_week) -> Optional[int]:
    if day_of_week in (None, ""):
        return None
    return require_in_range(day_of_week, "Day of week", 1, 7)


class TimetableService:
    def __init__(
        self,
        timetable: TimetableRepository,
        students: StudentRepository,
        *,
        periods_per_day: int = DEFAULT_PERIODS_PER_DAY,
    ):
        self._timetable = timetable
        self._students = students
        self._periods_per_day = int(periods_per_day)

    def set_entry(
        self,
        *,
        current_role: Role,
        class_id: int,
        day_of_week: int,
        period_number: int,
        subject: str,
        faculty_id: Optional[int] = None,
    ) -> int:
        if current_role not in (Role.FACULTY, Role.ADMIN):
            raise AuthorizationError("You do not have permission to edit the timetable")

        if int(class_id) <= 0:
            raise ValidationError("Invalid class")

        return self._timetable.upsert(
            class_id=int(class_id),
            day_of_week=require_in_range(day_of_week, "Day of week", 1, 7),
            period_number=require_in_range(period_number, "Period number", 1, self._periods_per_day),
            subject=require_non_empty(subject, "Subject"),
            faculty_id=int(faculty_id) if faculty_id else None,
        )

    def delete_entry(self, *, current_role: Role, entry_id: int) -> None:
        if current_role not in (Role.FACULTY, Role.ADMIN):
            raise AuthorizationError("You do not have permission to edit the timetable")

        if not self._timetable.delete(int(entry_id)):
            raise ValidationError("Timetable entry not found")

    def for_class(self, class_id: int, day_of_week=None) -> Sequence[TimetableEntry]:
        return self._timetable.for_class(int(class_id), day_of_week=_optional_day(day_of_week))

    def for_faculty(self, faculty_id: int) -> Sequence[TimetableEntry]:
        return self._timetable.for_faculty(int(faculty_id))

    def assigned_classes(self, faculty_id: int) -> list[int]:
        """Class ids the faculty teaches, in first-seen timetable order."""
        return list(dict.fromkeys(e.class_id for e in self.for_faculty(faculty_id)))

    def for_student(self, student_id: int, day_of_week=None) -> Sequence[TimetableEntry]:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise ValidationError("Student not found")
        if not student.class_id:
            raise ValidationError("Student class not found")
        return self.for_class(student.class_id, day_of_week)
