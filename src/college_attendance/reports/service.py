from __future__ import annotations

from typing import Optional

from ..advisors.service import AdvisorService
from ..attendance.aggregator import aggregate, build_roster_report
from ..attendance.service import AttendanceService
from ..core.enums import GroupBy
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ClassRepository, FacultyRepository, StudentRepository
from .model import ClassReport, StudentReport


class ReportService:
    """Builds report structures; rendering lives in `reports.pdf`."""

    def __init__(
        self,
        attendance: AttendanceService,
        students: StudentRepository,
        classes: ClassRepository,
        faculty: FacultyRepository,
        advisors: AdvisorService,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._faculty = faculty
        self._advisors = advisors

    def student_report(self, student_id: int, start=None, end=None) -> StudentReport:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise ValidationError("Student not found")

        records = self._attendance.records_for_student(student.student_id, start, end)
        result = aggregate(records, GroupBy.SUBJECT)
        first, last = self._attendance.date_range(start, end)
        return StudentReport(
            student=student,
            class_group=self._classes.get_by_id(student.class_id) if student.class_id else None,
            overall=result.overall,
            subjects=list(result.groups.values()),
            threshold=self._attendance.threshold,
            start=first,
            end=last,
        )

    def class_report(self, class_id: int, start=None, end=None, on_date=None) -> ClassReport:
        group = self._classes.get_by_id(int(class_id))
        if not group:
            raise ValidationError("Class not found")

        roster = self._students.list_by_class(group.class_id)
        records = self._attendance.records_for_class(group.class_id, start, end)
        first, last = self._attendance.date_range(start, end)
        advisor = self._advisors.effective_advisor(group.class_id, on_date)
        return ClassReport(
            class_group=group,
            roster=build_roster_report(roster, records, self._attendance.threshold),
            start=first,
            end=last,
            advisor_name=advisor.full_name if advisor else None,
        )

    def advised_class_id(self, faculty_id: int, on_date=None, class_id: Optional[int] = None) -> int:
        """The class the faculty may report on as advisor (own or substitute)."""
        faculty = self._faculty.get_by_id(int(faculty_id))
        if not faculty:
            raise ValidationError("Faculty not found")

        class_ids = self._advisors.advised_class_ids(faculty, on_date)
        if not class_ids:
            raise AuthorizationError("You are not a class advisor")
        if class_id is None:
            return class_ids[0]
        if int(class_id) not in class_ids:
            raise AuthorizationError("You are not the advisor of this class")
        return int(class_id)

    def advisor_class_report(
        self,
        faculty_id: int,
        on_date=None,
        start=None,
        end=None,
        class_id: Optional[int] = None,
    ) -> ClassReport:
        return self.class_report(self.advised_class_id(faculty_id, on_date, class_id), start, end, on_date)

    def advisor_student_report(self, faculty_id: int, student_id: int, on_date=None, start=None, end=None) -> StudentReport:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise ValidationError("Student not found")
        if not student.class_id:
            raise ValidationError("Student class not found")
        self.advised_class_id(faculty_id, on_date, student.class_id)
        return self.student_report(student.student_id, start, end)
