from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TimetableEntry


class TimetableRepository(Protocol):
    def get_by_id(self, entry_id: int) -> Optional[TimetableEntry]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        class_id: int,
        day_of_week: int,
        period_number: int,
        subject: str,
        faculty_id: Optional[int],
    ) -> int:
        """Create or replace the entry of a (class, day, period) slot.

        Returns entry_id.
        """

        raise NotImplementedError

    def delete(self, entry_id: int) -> bool:
        raise NotImplementedError

    def for_class(self, class_id: int, *, day_of_week: Optional[int] = None) -> Sequence[TimetableEntry]:
        """Ordered by day, then period."""

        raise NotImplementedError

    def for_faculty(self, faculty_id: int) -> Sequence[TimetableEntry]:
        raise NotImplementedError
