from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.datetime_utils import iso_or_none

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class TimetableSlot:
    """A recurring weekly class slot. ``day_of_week`` is 0 (Monday) to 6 (Sunday)."""

    slot_id: int
    subject_id: int
    day_of_week: int
    start_time: time
    end_time: time
    teacher_id: Optional[int] = None
    dept_id: Optional[int] = None
    room: Optional[str] = None
    section: Optional[str] = None
    semester: Optional[int] = None

    subject_code: Optional[str] = None
    subject_name: Optional[str] = None
    teacher_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.slot_id,
            "subject_id": self.subject_id,
            "teacher_id": self.teacher_id,
            "department_id": self.dept_id,
            "day_of_week": self.day_of_week,
            "day_name": DAY_NAMES[self.day_of_week],
            "start_time": iso_or_none(self.start_time),
            "end_time": iso_or_none(self.end_time),
            "room": self.room,
            "section": self.section,
            "semester": self.semester,
            "subject": {"code": self.subject_code, "name": self.subject_name},
            "teacher_name": self.teacher_name,
        }


@dataclass(frozen=True)
class SlotDraft:
    subject_id: int
    day_of_week: int
    start_time: time
    end_time: time
    teacher_id: Optional[int] = None
    dept_id: Optional[int] = None
    room: Optional[str] = None
    section: Optional[str] = None
    semester: Optional[int] = None


@dataclass(frozen=True)
class SlotConflict:
    kind: str
    slot: TimetableSlot

    def to_dict(self) -> dict:
        return {"type": self.kind, "slot": self.slot.to_dict()}
