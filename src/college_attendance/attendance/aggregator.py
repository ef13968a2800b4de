"""Attendance aggregation.

Pure functions over already-fetched records: no I/O, no hidden state. The
same input always produces the same output.

Effective presence counts `onduty` as attended; `leave` is not attended but
still counts in the total. A group with no records is 0%, never NaN.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from functools import reduce
from typing import Callable, Iterable, Optional, Sequence

from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD, OVERALL_LABEL, UNKNOWN_SUBJECT
from ..core.enums import AttendanceStatus, GroupBy


@dataclass(frozen=True)
class AttendanceStats:
    label: str
    total: int = 0
    present: int = 0
    absent: int = 0
    leave: int = 0
    onduty: int = 0

    @property
    def effective_present(self) -> int:
        return self.present + self.onduty

    @property
    def percentage(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.effective_present * 100 / self.total

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "leave": self.leave,
            "onduty": self.onduty,
            "effective_present": self.effective_present,
            "percentage": round(self.percentage, 2),
        }


@dataclass(frozen=True)
class AggregateResult:
    overall: AttendanceStats
    groups: dict[str, AttendanceStats] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "overall": self.overall.to_dict(),
            "groups": [g.to_dict() for g in self.groups.values()],
        }


def _stats_from_counter(label: str, counts: Counter) -> AttendanceStats:
    return AttendanceStats(
        label=label,
        total=sum(counts.values()),
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        leave=counts[AttendanceStatus.LEAVE],
        onduty=counts[AttendanceStatus.ONDUTY],
    )


def subject_key(record) -> str:
    subject = (getattr(record, "subject", None) or "").strip()
    return subject or UNKNOWN_SUBJECT


def _tally(records: Iterable, key: Callable[[object], object]) -> dict[object, Counter]:
    def step(acc: dict[object, Counter], record) -> dict[object, Counter]:
        acc.setdefault(key(record), Counter())[AttendanceStatus(record.status)] += 1
        return acc

    return reduce(step, records, {})


def summarize(records: Iterable, label: str = OVERALL_LABEL) -> AttendanceStats:
    counts = Counter(AttendanceStatus(r.status) for r in records)
    return _stats_from_counter(label, counts)


def aggregate(records: Iterable, group_by: GroupBy = GroupBy.SUBJECT) -> AggregateResult:
    """Per-group and overall counts for a student or a whole roster."""
    records = list(records)
    overall = summarize(records, OVERALL_LABEL)

    if GroupBy(group_by) == GroupBy.NONE:
        return AggregateResult(overall=overall, groups={OVERALL_LABEL: overall})

    tallies = _tally(records, subject_key)
    groups = {label: _stats_from_counter(label, tallies[label]) for label in sorted(tallies)}
    return AggregateResult(overall=overall, groups=groups)


def is_above_threshold(percentage: float, threshold: float = DEFAULT_ATTENDANCE_THRESHOLD) -> bool:
    return percentage >= threshold


def class_average(percentages: Iterable[float]) -> float:
    values = list(percentages)
    if not values:
        return 0.0
    return sum(values) / len(values)


def filter_by_date(records: Iterable, start: Optional[date] = None, end: Optional[date] = None) -> list:
    """Inclusive on both ends; a missing bound is open."""
    return [
        r
        for r in records
        if (start is None or r.record_date >= start) and (end is None or r.record_date <= end)
    ]


def daily_summary(records: Iterable) -> list[AttendanceStats]:
    tallies = _tally(records, lambda r: r.record_date)
    return [_stats_from_counter(day.isoformat(), tallies[day]) for day in sorted(tallies)]


@dataclass(frozen=True)
class StudentAttendance:
    student: object
    stats: AttendanceStats
    above_threshold: bool


@dataclass(frozen=True)
class RosterReport:
    students: list[StudentAttendance]
    class_average: float
    above_threshold_count: int
    below_threshold_count: int
    threshold: float


def build_roster_report(
    students: Sequence,
    records: Iterable,
    threshold: float = DEFAULT_ATTENDANCE_THRESHOLD,
) -> RosterReport:
    """Roll records up per roster student.

    Every roster student appears, including those with no records (0%), and
    they all count toward the class average. Records of students outside the
    roster are ignored.
    """
    tallies = _tally(records, lambda r: r.student_id)

    rows = []
    for student in students:
        stats = _stats_from_counter(student.full_name, tallies.get(student.student_id, Counter()))
        rows.append(
            StudentAttendance(
                student=student,
                stats=stats,
                above_threshold=is_above_threshold(stats.percentage, threshold),
            )
        )

    above = sum(1 for r in rows if r.above_threshold)
    return RosterReport(
        students=rows,
        class_average=class_average(r.stats.percentage for r in rows),
        above_threshold_count=above,
        below_threshold_count=len(rows) - above,
        threshold=threshold,
    )
