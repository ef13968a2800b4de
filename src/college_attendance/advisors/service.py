from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.model import Faculty
from ..profiles.repository import ClassRepository, FacultyRepository, StudentRepository
from .model import AdvisorSubstitution
from .repository import SubstitutionRepository

logger = logging.getLogger(__name__)


def _to_date(value, field_name: str) -> date:
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


class AdvisorService:
    """Who advises a class on a given day, taking substitutions into account."""

    def __init__(
        self,
        substitutions: SubstitutionRepository,
        faculty: FacultyRepository,
        students: StudentRepository,
        classes: ClassRepository,
    ):
        self._substitutions = substitutions
        self._faculty = faculty
        self._students = students
        self._classes = classes

    def create_substitution(
        self,
        *,
        current_role: Role,
        class_id: int,
        original_advisor_id: int,
        substitute_advisor_id: int,
        from_date,
        to_date,
        reason: Optional[str] = None,
    ) -> int:
        if current_role not in (Role.FACULTY, Role.ADMIN):
            raise AuthorizationError("You do not have permission to assign a substitute advisor")

        start = _to_date(from_date, "From date")
        end = _to_date(to_date, "To date")
        if start > end:
            raise ValidationError("From date must be on or before to date")
        if int(original_advisor_id) == int(substitute_advisor_id):
            raise ValidationError("Substitute advisor must differ from the original advisor")

        if not self._classes.get_by_id(int(class_id)):
            raise ValidationError("Class not found")
        for faculty_id in (original_advisor_id, substitute_advisor_id):
            if not self._faculty.get_by_id(int(faculty_id)):
                raise ValidationError(f"Faculty {faculty_id} not found")

        substitution_id = self._substitutions.create(
            class_id=int(class_id),
            original_advisor_id=int(original_advisor_id),
            substitute_advisor_id=int(substitute_advisor_id),
            from_date=start,
            to_date=end,
            reason=(reason or "").strip() or None,
        )
        logger.info(
            "Substitute advisor %s for class %s from %s to %s",
            substitute_advisor_id,
            class_id,
            start.isoformat(),
            end.isoformat(),
        )
        return substitution_id

    def for_class(self, class_id: int) -> Sequence[AdvisorSubstitution]:
        return self._substitutions.for_class(int(class_id))

    def active_for_class(self, class_id: int, on_date=None) -> Sequence[AdvisorSubstitution]:
        day = _to_date(on_date, "Date") if on_date else now_local().date()
        return self._substitutions.active_for_class(int(class_id), day)

    def effective_advisor(self, class_id: int, on_date=None) -> Optional[Faculty]:
        active = self.active_for_class(class_id, on_date)
        if active:
            return self._faculty.get_by_id(active[0].substitute_advisor_id)
        return self._faculty.get_advisor_for_class(int(class_id))

    def advised_class_ids(self, faculty: Faculty, on_date=None) -> list[int]:
        """Own advisor class first, then classes covered as an active substitute.

        The own class is left out while someone else substitutes for it.
        """
        day = _to_date(on_date, "Date") if on_date else now_local().date()

        class_ids = []
        own = faculty.advisor_class_id if faculty.is_class_advisor else None
        if own and not self._substitutions.active_for_class(own, day):
            class_ids.append(own)
        for sub in self._substitutions.active_for_substitute(faculty.faculty_id, day):
            class_ids.append(sub.class_id)
        return list(dict.fromkeys(class_ids))

    def class_advisor(self, student_id: int, on_date=None) -> Optional[Faculty]:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise ValidationError("Student not found")
        if not student.class_id:
            return None
        return self.effective_advisor(student.class_id, on_date)
