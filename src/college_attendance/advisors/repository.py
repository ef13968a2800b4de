from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AdvisorSubstitution


class SubstitutionRepository(Protocol):
    def create(
        self,
        *,
        class_id: int,
        original_advisor_id: int,
        substitute_advisor_id: int,
        from_date: date,
        to_date: date,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def for_class(self, class_id: int) -> Sequence[AdvisorSubstitution]:
        """Most recent first."""

        raise NotImplementedError

    def active_for_class(self, class_id: int, on_date: date) -> Sequence[AdvisorSubstitution]:
        raise NotImplementedError

    def active_for_substitute(self, faculty_id: int, on_date: date) -> Sequence[AdvisorSubstitution]:
        raise NotImplementedError
