from __future__ import annotations

import pytest

from college_attendance.core.enums import Role
from college_attendance.core.exceptions import NotAuthenticatedError, ProfileLoadError
from college_attendance.identity.model import Identity
from college_attendance.profiles.model import NO_ROLE, FacultyProfile, Student, StudentProfile
from college_attendance.profiles.resolver import RoleResolver
from fakes import CSE_A, CSE_B, JOHN, MICHAEL, SARAH, FakeClassRepo, FakeFacultyRepo, FakeStudentRepo


def make_resolver(students=(JOHN,), faculty=(SARAH, MICHAEL)):
    student_repo = FakeStudentRepo(students)
    faculty_repo = FakeFacultyRepo(faculty)
    return RoleResolver(student_repo, faculty_repo, FakeClassRepo([CSE_A, CSE_B])), student_repo, faculty_repo


def test_student_identity_resolves_to_student():
    resolver, _, _ = make_resolver()

    result = resolver.resolve(Identity("s-john", JOHN.email))

    assert result.role == Role.STUDENT
    assert result.profile == StudentProfile(student=JOHN, class_group=CSE_A)


def test_faculty_only_identity_resolves_to_faculty():
    resolver, _, _ = make_resolver()

    result = resolver.resolve(Identity("f-michael", MICHAEL.email))

    assert result.role == Role.FACULTY
    assert result.profile == FacultyProfile(faculty=MICHAEL, advisor_class=None)


def test_student_table_is_checked_first():
    both = Student(9, "f-sarah", "21CS009", "Sarah Johnson", SARAH.email, 2)
    resolver, _, _ = make_resolver(students=(both,))

    result = resolver.resolve(Identity("f-sarah", SARAH.email))

    assert result.role == Role.STUDENT
    assert result.profile.class_group == CSE_B


def test_unknown_identity_has_no_role():
    resolver, _, _ = make_resolver()

    result = resolver.resolve(Identity("u-new", "new@college.edu"))

    assert result == NO_ROLE
    assert not result.has_role


def test_missing_identity_is_not_authenticated():
    resolver, _, _ = make_resolver()
    with pytest.raises(NotAuthenticatedError):
        resolver.resolve(None)


@pytest.mark.parametrize("failing", ["students", "faculty"])
def test_lookup_failure_raises_profile_load_error(failing):
    resolver, students, faculty = make_resolver()
    (students if failing == "students" else faculty).fail = True

    with pytest.raises(ProfileLoadError):
        resolver.resolve(Identity("f-michael", MICHAEL.email))
