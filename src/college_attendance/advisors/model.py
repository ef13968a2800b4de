from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class AdvisorSubstitution:
    """Temporary advisor for a class; active while from_date <= day <= to_date."""

    substitution_id: int
    class_id: int
    original_advisor_id: int
    substitute_advisor_id: int
    from_date: date
    to_date: date
    reason: Optional[str] = None

    def is_active_on(self, day: date) -> bool:
        return self.from_date <= day <= self.to_date

    def to_dict(self) -> dict:
        return {
            "substitution_id": self.substitution_id,
            "class_id": self.class_id,
            "original_advisor_id": self.original_advisor_id,
            "substitute_advisor_id": self.substitute_advisor_id,
            "from_date": self.from_date.isoformat(),
            "to_date": self.to_date.isoformat(),
            "reason": self.reason,
        }
