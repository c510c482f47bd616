from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import SlotDraft, TimetableSlot


class TimetableRepository(Protocol):
    def list_slots(
        self,
        *,
        dept_id: Optional[int] = None,
        semester: Optional[int] = None,
        section: Optional[str] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[TimetableSlot]:
        """Slots ordered by day then start time."""

        raise NotImplementedError

    def list_for_day_overlapping(self, *, day_of_week: int, start_time: time, end_time: time) -> Sequence[TimetableSlot]:
        """Slots on ``day_of_week`` whose interval touches [start_time, end_time]."""

        raise NotImplementedError

    def create(self, draft: SlotDraft) -> int:
        raise NotImplementedError

    def delete(self, *, slot_id: int) -> bool:
        raise NotImplementedError
