from __future__ import annotations

import pytest

from college_attendance.core.enums import Role
from college_attendance.core.exceptions import AuthorizationError, ValidationError
from college_attendance.profiles.service import ProfileService
from fakes import CSE_A, CSE_B, JANE, JOHN, MICHAEL, MIKE, SARAH, FakeClassRepo, FakeFacultyRepo, FakeStudentRepo


def make_service():
    return ProfileService(
        FakeClassRepo([CSE_A, CSE_B]),
        FakeStudentRepo([JOHN, JANE, MIKE]),
        FakeFacultyRepo([SARAH, MICHAEL]),
    )


def test_writes_require_admin():
    svc = make_service()
    with pytest.raises(AuthorizationError):
        svc.create_class(current_role=Role.FACULTY, class_name="X", year=1, section="a", department="CS")
    with pytest.raises(AuthorizationError):
        svc.delete_student(current_role=Role.STUDENT, student_id=1)


def test_create_class_normalizes_section_and_checks_year():
    svc = make_service()

    class_id = svc.create_class(current_role=Role.ADMIN, class_name="1st Year ECE A", year=1, section="a", department="ECE")

    assert svc.get_class(class_id).section == "A"
    with pytest.raises(ValidationError):
        svc.create_class(current_role=Role.ADMIN, class_name="Bad", year=9, section="A", department="ECE")


def test_create_student_in_existing_class():
    svc = make_service()

    student_id = svc.create_student(
        current_role=Role.ADMIN,
        roll_number=" 21cs010 ",
        full_name="Ravi Kumar",
        email="",
        class_id=2,
    )

    student = svc.get_student(student_id)
    assert student.roll_number == "21CS010"
    assert student.email is None
    assert student.class_id == 2


def test_create_student_rejects_unknown_class():
    svc = make_service()
    with pytest.raises(ValidationError):
        svc.create_student(current_role=Role.ADMIN, roll_number="21CS011", full_name="X", class_id=42)


def test_account_cannot_be_linked_to_both_profile_tables():
    svc = make_service()

    with pytest.raises(ValidationError):
        svc.create_student(current_role=Role.ADMIN, roll_number="21CS012", full_name="X", user_id="f-sarah")
    with pytest.raises(ValidationError):
        svc.create_faculty(current_role=Role.ADMIN, full_name="Y", user_id="s-john")
    with pytest.raises(ValidationError):
        svc.update_student(current_role=Role.ADMIN, student_id=MIKE.student_id, updates={"user_id": "f-michael"})


def test_relinking_same_profile_is_allowed():
    svc = make_service()

    student = svc.update_student(
        current_role=Role.ADMIN,
        student_id=JOHN.student_id,
        updates={"user_id": "s-john", "full_name": "John A. Doe"},
    )

    assert student.full_name == "John A. Doe"


def test_update_ignores_unknown_fields_and_rejects_empty_update():
    svc = make_service()
    with pytest.raises(ValidationError):
        svc.update_student(current_role=Role.ADMIN, student_id=1, updates={"student_id": 99})


def test_class_advisor_needs_advisor_class():
    svc = make_service()

    with pytest.raises(ValidationError):
        svc.create_faculty(current_role=Role.ADMIN, full_name="Z", is_class_advisor=True)
    with pytest.raises(ValidationError):
        svc.update_faculty(current_role=Role.ADMIN, faculty_id=MICHAEL.faculty_id, updates={"is_class_advisor": True})

    faculty = svc.update_faculty(
        current_role=Role.ADMIN,
        faculty_id=MICHAEL.faculty_id,
        updates={"is_class_advisor": True, "advisor_class_id": 2},
    )
    assert faculty.advisor_class_id == 2


def test_classmates_exclude_the_student():
    svc = make_service()
    assert [s.student_id for s in svc.classmates(JOHN.student_id)] == [JANE.student_id]


def test_delete_missing_faculty_fails():
    svc = make_service()
    svc.delete_faculty(current_role=Role.ADMIN, faculty_id=2)
    with pytest.raises(ValidationError):
        svc.delete_faculty(current_role=Role.ADMIN, faculty_id=2)
