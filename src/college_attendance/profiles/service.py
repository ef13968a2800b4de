from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_in_range, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import ClassGroup, Faculty, Student
from .repository import ClassRepository, FacultyRepository, StudentRepository

_STUDENT_FIELDS = ("user_id", "roll_number", "full_name", "email", "class_id")
_FACULTY_FIELDS = ("user_id", "full_name", "email", "department", "is_class_advisor", "advisor_class_id")


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Only admins can manage profiles")


def _clean(value) -> Optional[str]:
    if isinstance(value, str):
        value = value.strip()
    return value or None


class ProfileService:
    """Use case: manage classes, students and faculty (admin) and roster lookups."""

    def __init__(self, classes: ClassRepository, students: StudentRepository, faculty: FacultyRepository):
        self._classes = classes
        self._students = students
        self._faculty = faculty

    # classes

    def list_classes(self) -> Sequence[ClassGroup]:
        return self._classes.list_all()

    def get_class(self, class_id: int) -> ClassGroup:
        group = self._classes.get_by_id(int(class_id))
        if not group:
            raise ValidationError("Class not found")
        return group

    def create_class(self, *, current_role: Role, class_name: str, year: int, section: str, department: str) -> int:
        _require_admin(current_role)
        return self._classes.create(
            class_name=require_non_empty(class_name, "Class name"),
            year=require_in_range(year, "Year", 1, 6),
            section=require_non_empty(section, "Section").upper(),
            department=require_non_empty(department, "Department"),
        )

    # students

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise ValidationError("Student not found")
        return student

    def students_in_class(self, class_id: int) -> Sequence[Student]:
        return self._students.list_by_class(int(class_id))

    def classmates(self, student_id: int) -> Sequence[Student]:
        student = self.get_student(student_id)
        if not student.class_id:
            raise ValidationError("Student class not found")
        return [s for s in self._students.list_by_class(student.class_id) if s.student_id != student.student_id]

    def _check_user_link(self, user_id: Optional[str], *, student_id: int = 0, faculty_id: int = 0) -> None:
        """One identity maps to exactly one profile table."""
        if not user_id:
            return
        linked_student = self._students.get_by_user_id(user_id)
        if linked_student and linked_student.student_id != student_id:
            raise ValidationError("This account is already linked to a student profile")
        linked_faculty = self._faculty.get_by_user_id(user_id)
        if linked_faculty and linked_faculty.faculty_id != faculty_id:
            raise ValidationError("This account is already linked to a faculty profile")

    def _check_class(self, class_id: Optional[int]) -> Optional[int]:
        if class_id in (None, "", 0):
            return None
        if not self._classes.get_by_id(int(class_id)):
            raise ValidationError("Class not found")
        return int(class_id)

    def create_student(
        self,
        *,
        current_role: Role,
        roll_number: str,
        full_name: str,
        email: Optional[str] = None,
        class_id: Optional[int] = None,
        user_id: Optional[str] = None,
    ) -> int:
        _require_admin(current_role)
        user_id = _clean(user_id)
        self._check_user_link(user_id)
        return self._students.create(
            user_id=user_id,
            roll_number=require_non_empty(roll_number, "Roll number").upper(),
            full_name=require_non_empty(full_name, "Full name"),
            email=_clean(email),
            class_id=self._check_class(class_id),
        )

    def update_student(self, *, current_role: Role, student_id: int, updates: dict) -> Student:
        _require_admin(current_role)
        student = self.get_student(student_id)

        fields = {k: v for k, v in updates.items() if k in _STUDENT_FIELDS}
        if "user_id" in fields:
            fields["user_id"] = _clean(fields["user_id"])
            self._check_user_link(fields["user_id"], student_id=student.student_id)
        if "roll_number" in fields:
            fields["roll_number"] = require_non_empty(fields["roll_number"], "Roll number").upper()
        if "full_name" in fields:
            fields["full_name"] = require_non_empty(fields["full_name"], "Full name")
        if "email" in fields:
            fields["email"] = _clean(fields["email"])
        if "class_id" in fields:
            fields["class_id"] = self._check_class(fields["class_id"])

        if not fields:
            raise ValidationError("Nothing to update")
        self._students.update(student.student_id, fields)
        return self.get_student(student.student_id)

    def delete_student(self, *, current_role: Role, student_id: int) -> None:
        _require_admin(current_role)
        if not self._students.delete(int(student_id)):
            raise ValidationError("Student not found")

    # faculty

    def list_faculty(self) -> Sequence[Faculty]:
        return self._faculty.list_all()

    def get_faculty(self, faculty_id: int) -> Faculty:
        faculty = self._faculty.get_by_id(int(faculty_id))
        if not faculty:
            raise ValidationError("Faculty not found")
        return faculty

    def create_faculty(
        self,
        *,
        current_role: Role,
        full_name: str,
        email: Optional[str] = None,
        department: Optional[str] = None,
        is_class_advisor: bool = False,
        advisor_class_id: Optional[int] = None,
        user_id: Optional[str] = None,
    ) -> int:
        _require_admin(current_role)
        user_id = _clean(user_id)
        self._check_user_link(user_id)

        advisor_class_id = self._check_class(advisor_class_id)
        if is_class_advisor and not advisor_class_id:
            raise ValidationError("A class advisor needs an advisor class")

        return self._faculty.create(
            user_id=user_id,
            full_name=require_non_empty(full_name, "Full name"),
            email=_clean(email),
            department=_clean(department),
            is_class_advisor=bool(is_class_advisor),
            advisor_class_id=advisor_class_id,
        )

    def update_faculty(self, *, current_role: Role, faculty_id: int, updates: dict) -> Faculty:
        _require_admin(current_role)
        faculty = self.get_faculty(faculty_id)

        fields = {k: v for k, v in updates.items() if k in _FACULTY_FIELDS}
        if "user_id" in fields:
            fields["user_id"] = _clean(fields["user_id"])
            self._check_user_link(fields["user_id"], faculty_id=faculty.faculty_id)
        if "full_name" in fields:
            fields["full_name"] = require_non_empty(fields["full_name"], "Full name")
        for key in ("email", "department"):
            if key in fields:
                fields[key] = _clean(fields[key])
        if "advisor_class_id" in fields:
            fields["advisor_class_id"] = self._check_class(fields["advisor_class_id"])
        if "is_class_advisor" in fields:
            fields["is_class_advisor"] = bool(fields["is_class_advisor"])

        advisor = fields.get("is_class_advisor", faculty.is_class_advisor)
        advisor_class = fields.get("advisor_class_id", faculty.advisor_class_id)
        if advisor and not advisor_class:
            raise ValidationError("A class advisor needs an advisor class")

        if not fields:
            raise ValidationError("Nothing to update")
        self._faculty.update(faculty.faculty_id, fields)
        return self.get_faculty(faculty.faculty_id)

    def delete_faculty(self, *, current_role: Role, faculty_id: int) -> None:
        _require_admin(current_role)
        if not self._faculty.delete(int(faculty_id)):
            raise ValidationError("Faculty not found")
