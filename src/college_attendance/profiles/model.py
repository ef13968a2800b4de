from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class ClassGroup:
    """A class (year + section + department) that students enrol in."""

    class_id: int
    class_name: str
    year: int
    section: str
    department: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Student:
    student_id: int
    user_id: Optional[str]
    roll_number: str
    full_name: str
    email: Optional[str]
    class_id: Optional[int]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Faculty:
    faculty_id: int
    user_id: Optional[str]
    full_name: str
    email: Optional[str]
    department: Optional[str]
    is_class_advisor: bool = False
    advisor_class_id: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class StudentProfile:
    student: Student
    class_group: Optional[ClassGroup]

    @property
    def role(self) -> Role:
        return Role.STUDENT

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "class": self.class_group.to_dict() if self.class_group else None,
        }


@dataclass(frozen=True)
class FacultyProfile:
    faculty: Faculty
    advisor_class: Optional[ClassGroup]

    @property
    def role(self) -> Role:
        return Role.FACULTY

    def to_dict(self) -> dict:
        return {
            "faculty": self.faculty.to_dict(),
            "advisor_class": self.advisor_class.to_dict() if self.advisor_class else None,
        }


Profile = Union[StudentProfile, FacultyProfile]


@dataclass(frozen=True)
class Resolution:
    """Outcome of role resolution; both fields are None when no profile matched."""

    role: Optional[Role]
    profile: Optional[Profile]

    @property
    def has_role(self) -> bool:
        return self.role is not None


NO_ROLE = Resolution(role=None, profile=None)
