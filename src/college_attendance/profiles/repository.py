from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassGroup, Faculty, Student


class ClassRepository(Protocol):
    def get_by_id(self, class_id: int) -> Optional[ClassGroup]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ClassGroup]:
        """Newest year first, then section."""

        raise NotImplementedError

    def create(self, *, class_name: str, year: int, section: str, department: str) -> int:
        raise NotImplementedError


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_class(self, class_id: int) -> Sequence[Student]:
        """Roster of a class ordered by roll number."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: Optional[str],
        roll_number: str,
        full_name: str,
        email: Optional[str],
        class_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update(self, student_id: int, fields: dict) -> bool:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError


class FacultyRepository(Protocol):
    def get_by_id(self, faculty_id: int) -> Optional[Faculty]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: str) -> Optional[Faculty]:
        raise NotImplementedError

    def get_advisor_for_class(self, class_id: int) -> Optional[Faculty]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Faculty]:
        """Ordered by full name."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: Optional[str],
        full_name: str,
        email: Optional[str],
        department: Optional[str],
        is_class_advisor: bool,
        advisor_class_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update(self, faculty_id: int, fields: dict) -> bool:
        raise NotImplementedError

    def delete(self, faculty_id: int) -> bool:
        raise NotImplementedError
