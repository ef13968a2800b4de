from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import NotAuthenticatedError, PersistenceError, ProfileLoadError
from ..identity.model import Identity
from .model import NO_ROLE, ClassGroup, FacultyProfile, Resolution, StudentProfile
from .repository import ClassRepository, FacultyRepository, StudentRepository

logger = logging.getLogger(__name__)


class RoleResolver:
    """Use case: work out which portal an identity belongs to and load its profile.

    The role is not stored anywhere; it is whichever profile table holds a row
    for the identity. Students are looked up first, then faculty. An identity
    with neither is not an error: it has simply not been onboarded yet.
    """

    def __init__(self, students: StudentRepository, faculty: FacultyRepository, classes: ClassRepository):
        self._students = students
        self._faculty = faculty
        self._classes = classes

    def _class(self, class_id: Optional[int]) -> Optional[ClassGroup]:
        return self._classes.get_by_id(class_id) if class_id else None

    def resolve(self, identity: Optional[Identity]) -> Resolution:
        if identity is None:
            raise NotAuthenticatedError("No authenticated identity")

        try:
            student = self._students.get_by_user_id(identity.user_id)
            if student:
                return Resolution(
                    role=Role.STUDENT,
                    profile=StudentProfile(student=student, class_group=self._class(student.class_id)),
                )

            faculty = self._faculty.get_by_user_id(identity.user_id)
            if faculty:
                return Resolution(
                    role=Role.FACULTY,
                    profile=FacultyProfile(faculty=faculty, advisor_class=self._class(faculty.advisor_class_id)),
                )
        except PersistenceError as e:
            raise ProfileLoadError("Failed to load profile") from e

        logger.info("No student or faculty profile for %s", identity.email)
        return NO_ROLE
