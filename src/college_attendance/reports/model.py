from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.aggregator import AttendanceStats, RosterReport, is_above_threshold
from ..profiles.model import ClassGroup, Student


def _period(start: Optional[date], end: Optional[date]) -> dict:
    return {
        "start": start.isoformat() if start else None,
        "end": end.isoformat() if end else None,
    }


def _student_dict(student: Student) -> dict:
    return {
        "student_id": student.student_id,
        "roll_number": student.roll_number,
        "full_name": student.full_name,
        "class_id": student.class_id,
    }


@dataclass(frozen=True)
class StudentReport:
    student: Student
    class_group: Optional[ClassGroup]
    overall: AttendanceStats
    subjects: list[AttendanceStats]
    threshold: float
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def above_threshold(self) -> bool:
        return is_above_threshold(self.overall.percentage, self.threshold)

    def to_dict(self) -> dict:
        return {
            "student": _student_dict(self.student),
            "class_name": self.class_group.class_name if self.class_group else None,
            "overall": self.overall.to_dict(),
            "subjects": [s.to_dict() for s in self.subjects],
            "threshold": self.threshold,
            "above_threshold": self.above_threshold,
            "period": _period(self.start, self.end),
        }


@dataclass(frozen=True)
class ClassReport:
    class_group: ClassGroup
    roster: RosterReport
    start: Optional[date] = None
    end: Optional[date] = None
    advisor_name: Optional[str] = field(default=None)

    def to_dict(self) -> dict:
        return {
            "class_id": self.class_group.class_id,
            "class_name": self.class_group.class_name,
            "advisor": self.advisor_name,
            "total_students": len(self.roster.students),
            "class_average": round(self.roster.class_average, 2),
            "threshold": self.roster.threshold,
            "above_threshold": self.roster.above_threshold_count,
            "below_threshold": self.roster.below_threshold_count,
            "students": [
                {
                    **_student_dict(row.student),
                    **row.stats.to_dict(),
                    "above_threshold": row.above_threshold,
                }
                for row in self.roster.students
            ],
            "period": _period(self.start, self.end),
        }
