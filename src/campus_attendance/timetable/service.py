from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import SlotConflict, SlotDraft, TimetableSlot
from .repository import TimetableRepository

logger = logging.getLogger(__name__)


def find_conflicts(draft: SlotDraft, candidates: Sequence[TimetableSlot]) -> list[SlotConflict]:
    """Clashes between ``draft`` and slots already overlapping it on the same day.

    Each of a shared teacher, a shared room, and the same section in the
    same semester is reported as its own conflict.
    """

    out: list[SlotConflict] = []
    for slot in candidates:
        if slot.day_of_week != draft.day_of_week:
            continue
        if slot.start_time > draft.end_time or slot.end_time < draft.start_time:
            continue

        if draft.teacher_id is not None and slot.teacher_id == draft.teacher_id:
            out.append(SlotConflict(kind="teacher", slot=slot))
        if draft.room and slot.room == draft.room:
            out.append(SlotConflict(kind="room", slot=slot))
        if draft.section and slot.section == draft.section and slot.semester == draft.semester:
            out.append(SlotConflict(kind="section", slot=slot))
    return out


class TimetableService:
    def __init__(self, slots: TimetableRepository):
        self._slots = slots

    def list_slots(
        self,
        *,
        dept_id: Optional[int] = None,
        semester: Optional[int] = None,
        section: Optional[str] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[TimetableSlot]:
        return self._slots.list_slots(dept_id=dept_id, semester=semester, section=section, teacher_id=teacher_id)

    def create(self, draft: SlotDraft) -> int:
        if not 0 <= int(draft.day_of_week) <= 6:
            raise ValidationError("day_of_week must be between 0 and 6")
        if draft.end_time <= draft.start_time:
            raise ValidationError("end_time must be after start_time")

        candidates = self._slots.list_for_day_overlapping(
            day_of_week=draft.day_of_week,
            start_time=draft.start_time,
            end_time=draft.end_time,
        )
        conflicts = find_conflicts(draft, candidates)
        if conflicts:
            logger.info("Rejected slot on day %s: %d conflict(s)", draft.day_of_week, len(conflicts))
            raise ConflictError("Scheduling Conflict", conflicts=[c.to_dict() for c in conflicts])

        return self._slots.create(draft)

    def delete(self, slot_id: int) -> None:
        if not self._slots.delete(slot_id=int(slot_id)):
            raise NotFoundError("Timetable slot not found")
