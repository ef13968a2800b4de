from __future__ import annotations

from datetime import date

import pytest

from college_attendance.core.enums import Role
from college_attendance.core.exceptions import AuthorizationError, ValidationError
from college_attendance.reports.pdf import render_class_report, render_student_report
from fakes import CSE_A, JANE, JOHN, MICHAEL, MIKE, SARAH, build_fake_container


@pytest.fixture()
def container():
    c = build_fake_container()
    repo = c.attendance_repo
    for period, status in enumerate(["present", "present", "absent", "onduty"], start=1):
        repo.add(JOHN.student_id, 1, date(2026, 3, 2), period, "Math", status)
    repo.add(JOHN.student_id, 1, date(2026, 3, 3), 1, None, "leave")
    repo.add(MIKE.student_id, 2, date(2026, 3, 2), 1, "OS", "present")
    return c


def test_student_report_overall_and_subjects(container):
    report = container.report_service.student_report(JOHN.student_id)

    assert report.class_group == CSE_A
    assert report.overall.total == 5
    assert report.overall.effective_present == 3
    assert report.overall.percentage == pytest.approx(60.0)
    assert [s.label for s in report.subjects] == ["Math", "Unknown"]
    assert not report.above_threshold


def test_student_report_date_range(container):
    report = container.report_service.student_report(JOHN.student_id, "2026-03-02", "2026-03-02")

    assert report.overall.percentage == 75.0
    assert report.above_threshold
    assert report.to_dict()["period"] == {"start": "2026-03-02", "end": "2026-03-02"}


def test_class_report_covers_whole_roster(container):
    report = container.report_service.class_report(CSE_A.class_id)

    rows = {row.student.student_id: row for row in report.roster.students}
    assert set(rows) == {JOHN.student_id, JANE.student_id}
    assert rows[JANE.student_id].stats.total == 0
    assert report.roster.class_average == pytest.approx(30.0)
    assert report.roster.below_threshold_count == 2
    assert report.advisor_name == SARAH.full_name


def test_unknown_class_is_rejected(container):
    with pytest.raises(ValidationError):
        container.report_service.class_report(99)


def test_advisor_gets_own_class_report(container):
    report = container.report_service.advisor_class_report(SARAH.faculty_id, on_date="2026-03-05")
    assert report.class_group == CSE_A


def test_non_advisor_is_refused(container):
    with pytest.raises(AuthorizationError, match="not a class advisor"):
        container.report_service.advisor_class_report(MICHAEL.faculty_id, on_date="2026-03-05")


def test_substitute_advisor_can_report_while_active(container):
    container.advisor_service.create_substitution(
        current_role=Role.FACULTY,
        class_id=CSE_A.class_id,
        original_advisor_id=SARAH.faculty_id,
        substitute_advisor_id=MICHAEL.faculty_id,
        from_date="2026-03-01",
        to_date="2026-03-10",
    )

    report = container.report_service.advisor_class_report(MICHAEL.faculty_id, on_date="2026-03-05")

    assert report.class_group == CSE_A
    assert report.advisor_name == MICHAEL.full_name

    with pytest.raises(AuthorizationError, match="not a class advisor"):
        container.report_service.advisor_class_report(SARAH.faculty_id, on_date="2026-03-05")

    after = container.report_service.advisor_class_report(SARAH.faculty_id, on_date="2026-03-11")
    assert after.class_group == CSE_A
    assert after.advisor_name == SARAH.full_name
    with pytest.raises(AuthorizationError):
        container.report_service.advisor_class_report(MICHAEL.faculty_id, on_date="2026-03-11")


def test_advisor_student_report_limited_to_advised_class(container):
    report = container.report_service.advisor_student_report(SARAH.faculty_id, JOHN.student_id, on_date="2026-03-05")
    assert report.student == JOHN

    with pytest.raises(AuthorizationError):
        container.report_service.advisor_student_report(SARAH.faculty_id, MIKE.student_id, on_date="2026-03-05")


def test_pdf_rendering_produces_pdf_documents(container):
    today = date(2026, 3, 31)
    class_pdf = render_class_report(container.report_service.class_report(CSE_A.class_id), generated_on=today)
    student_pdf = render_student_report(container.report_service.student_report(JOHN.student_id), generated_on=today)

    assert class_pdf.startswith(b"%PDF")
    assert student_pdf.startswith(b"%PDF")
