from __future__ import annotations

from datetime import date

import pytest

from college_attendance.advisors.service import AdvisorService
from college_attendance.core.enums import Role
from college_attendance.core.exceptions import AuthorizationError, ValidationError
from fakes import CSE_A, CSE_B, JOHN, MICHAEL, MIKE, SARAH, FakeClassRepo, FakeFacultyRepo, FakeStudentRepo, FakeSubstitutionRepo


def make_service():
    return AdvisorService(
        FakeSubstitutionRepo(),
        FakeFacultyRepo([SARAH, MICHAEL]),
        FakeStudentRepo([JOHN, MIKE]),
        FakeClassRepo([CSE_A, CSE_B]),
    )


def substitute(svc, from_date="2026-03-10", to_date="2026-03-20", **overrides):
    kwargs = dict(
        current_role=Role.FACULTY,
        class_id=CSE_A.class_id,
        original_advisor_id=SARAH.faculty_id,
        substitute_advisor_id=MICHAEL.faculty_id,
        from_date=from_date,
        to_date=to_date,
        reason="Conference",
    )
    kwargs.update(overrides)
    return svc.create_substitution(**kwargs)


def test_effective_advisor_switches_only_within_inclusive_dates():
    svc = make_service()
    substitute(svc)

    assert svc.effective_advisor(CSE_A.class_id, date(2026, 3, 9)) == SARAH
    assert svc.effective_advisor(CSE_A.class_id, date(2026, 3, 10)) == MICHAEL
    assert svc.effective_advisor(CSE_A.class_id, date(2026, 3, 20)) == MICHAEL
    assert svc.effective_advisor(CSE_A.class_id, date(2026, 3, 21)) == SARAH


def test_active_for_class_uses_date():
    svc = make_service()
    substitute(svc)

    assert len(svc.active_for_class(CSE_A.class_id, "2026-03-15")) == 1
    assert svc.active_for_class(CSE_A.class_id, "2026-04-01") == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"from_date": "2026-03-21", "to_date": "2026-03-20"},
        {"substitute_advisor_id": SARAH.faculty_id},
        {"class_id": 99},
        {"substitute_advisor_id": 42},
        {"from_date": None},
        {"to_date": "20-03-2026"},
    ],
)
def test_invalid_substitutions_are_rejected(overrides):
    svc = make_service()
    with pytest.raises(ValidationError):
        substitute(svc, **overrides)


def test_students_cannot_create_substitutions():
    svc = make_service()
    with pytest.raises(AuthorizationError):
        substitute(svc, current_role=Role.STUDENT)


def test_advised_class_ids_follow_active_substitutions():
    svc = make_service()
    substitute(svc)

    assert svc.advised_class_ids(SARAH, date(2026, 3, 9)) == [CSE_A.class_id]
    assert svc.advised_class_ids(SARAH, date(2026, 3, 15)) == []
    assert svc.advised_class_ids(SARAH, date(2026, 3, 21)) == [CSE_A.class_id]
    assert svc.advised_class_ids(MICHAEL, date(2026, 3, 15)) == [CSE_A.class_id]
    assert svc.advised_class_ids(MICHAEL, date(2026, 3, 25)) == []


def test_class_advisor_for_student():
    svc = make_service()
    substitute(svc)

    assert svc.class_advisor(JOHN.student_id, "2026-03-01") == SARAH
    assert svc.class_advisor(JOHN.student_id, "2026-03-12") == MICHAEL
    assert svc.class_advisor(MIKE.student_id, "2026-03-12") is None
