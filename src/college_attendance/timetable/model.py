from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TimetableEntry:
    """Subject taught in a class at (day_of_week, period_number); day is ISO (1=Monday)."""

    entry_id: int
    class_id: int
    day_of_week: int
    period_number: int
    subject: str
    faculty_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "class_id": self.class_id,
            "day_of_week": self.day_of_week,
            "period_number": self.period_number,
            "subject": self.subject,
            "faculty_id": self.faculty_id,
        }
