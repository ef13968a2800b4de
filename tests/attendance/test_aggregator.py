from __future__ import annotations

from datetime import date

import pytest

from college_attendance.attendance.aggregator import (
    AttendanceStats,
    aggregate,
    build_roster_report,
    class_average,
    daily_summary,
    filter_by_date,
    is_above_threshold,
    summarize,
)
from college_attendance.attendance.model import AttendanceRecord
from college_attendance.core.enums import AttendanceStatus, GroupBy
from college_attendance.profiles.model import Student


def rec(status, subject="Math", student_id=1, day=date(2026, 3, 2), period=1):
    return AttendanceRecord(
        record_id=0,
        student_id=student_id,
        class_id=1,
        faculty_id=1,
        record_date=day,
        period_number=period,
        subject=subject,
        status=AttendanceStatus(status),
    )


def student(student_id, name):
    return Student(student_id, None, f"R{student_id:03d}", name, None, 1)


def test_empty_group_is_zero_percent():
    stats = summarize([])
    assert stats.total == 0
    assert stats.percentage == 0.0


def test_onduty_counts_as_present_for_percentage():
    records = [rec("present"), rec("present"), rec("absent"), rec("onduty")]

    result = aggregate(records, GroupBy.SUBJECT)
    math = result.groups["Math"]

    assert (math.total, math.present, math.absent, math.leave, math.onduty) == (4, 2, 1, 0, 1)
    assert math.effective_present == 3
    assert math.percentage == 75.0
    assert is_above_threshold(math.percentage)


def test_leave_counts_in_total_but_not_as_attended():
    stats = summarize([rec("present"), rec("leave")])
    assert stats.total == 2
    assert stats.effective_present == 1
    assert stats.percentage == 50.0


def test_blank_and_missing_subjects_go_to_unknown():
    records = [rec("present", subject=None), rec("absent", subject="  "), rec("present", subject="Physics")]

    result = aggregate(records)

    assert set(result.groups) == {"Physics", "Unknown"}
    assert result.groups["Unknown"].total == 2


def test_subject_groups_partition_the_records():
    records = [
        rec("present", "Math"),
        rec("absent", "Physics"),
        rec("leave", "Math"),
        rec("onduty", None),
        rec("present", "Chemistry"),
    ]

    result = aggregate(records)

    assert sum(g.total for g in result.groups.values()) == len(records) == result.overall.total
    assert list(result.groups) == sorted(result.groups)


def test_group_by_none_yields_single_group():
    records = [rec("present", "Math"), rec("absent", "Physics")]

    result = aggregate(records, GroupBy.NONE)

    assert len(result.groups) == 1
    only = next(iter(result.groups.values()))
    assert only == result.overall
    assert only.total == 2


@pytest.mark.parametrize(
    "statuses",
    [
        [],
        ["absent"],
        ["present", "onduty"],
        ["leave", "leave", "present"],
        ["present", "absent", "leave", "onduty"],
    ],
)
def test_percentage_stays_within_bounds(statuses):
    stats = summarize([rec(s) for s in statuses])
    assert 0 <= stats.effective_present <= stats.total
    assert 0.0 <= stats.percentage <= 100.0


def test_aggregate_is_idempotent():
    records = [rec("present", "Math"), rec("absent", "Physics"), rec("onduty", "Math")]
    assert aggregate(records) == aggregate(records)


def test_class_average_of_empty_roster_is_zero():
    assert class_average([]) == 0.0


def test_class_average_of_uniform_roster_is_that_value():
    assert class_average([82.5, 82.5, 82.5]) == pytest.approx(82.5)


def test_roster_report_average_and_threshold_counts():
    a, b = student(1, "A"), student(2, "B")
    records = [rec("present", student_id=1, period=p) for p in range(1, 5)] + [rec("absent", student_id=1, period=5)]
    records += [rec("present", student_id=2, period=p) for p in range(1, 4)]
    records += [rec("absent", student_id=2, period=p) for p in range(4, 6)]

    report = build_roster_report([a, b], records, threshold=75.0)

    assert [row.stats.percentage for row in report.students] == [pytest.approx(80.0), pytest.approx(60.0)]
    assert report.class_average == pytest.approx(70.0)
    assert report.above_threshold_count == 1
    assert report.below_threshold_count == 1


def test_roster_report_includes_students_without_records():
    a, b = student(1, "A"), student(2, "B")
    records = [rec("present", student_id=1), rec("present", student_id=99)]

    report = build_roster_report([a, b], records)

    assert [row.student.student_id for row in report.students] == [1, 2]
    assert report.students[1].stats.total == 0
    assert report.class_average == pytest.approx(50.0)
    assert report.below_threshold_count == 1


def test_threshold_is_inclusive():
    assert is_above_threshold(75.0, 75.0)
    assert not is_above_threshold(74.99, 75.0)


def test_filter_by_date_is_inclusive():
    records = [rec("present", day=date(2026, 3, d)) for d in (1, 2, 3, 4)]

    kept = filter_by_date(records, start=date(2026, 3, 2), end=date(2026, 3, 3))

    assert [r.record_date.day for r in kept] == [2, 3]
    assert filter_by_date(records) == records


def test_daily_summary_sorted_by_date():
    records = [
        rec("absent", day=date(2026, 3, 3)),
        rec("present", day=date(2026, 3, 2), period=1),
        rec("present", day=date(2026, 3, 2), period=2),
    ]

    days = daily_summary(records)

    assert [d.label for d in days] == ["2026-03-02", "2026-03-03"]
    assert (days[0].total, days[0].present) == (2, 2)
    assert (days[1].total, days[1].absent) == (1, 1)


def test_stats_to_dict_rounds_percentage():
    stats = AttendanceStats(label="X", total=3, present=1)
    assert stats.to_dict()["percentage"] == 33.33
