from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Allocation:
    """A teacher assigned to teach a subject to one section in an academic year."""

    allocation_id: int
    teacher_id: int
    subject_id: int
    section: str
    academic_year: str
    batch: str = ""
    teacher_name: Optional[str] = None
    subject_code: Optional[str] = None
    subject_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.allocation_id,
            "teacher_id": self.teacher_id,
            "subject_id": self.subject_id,
            "section": self.section,
            "batch": self.batch or None,
            "academic_year": self.academic_year,
            "teacher_name": self.teacher_name,
            "subject": {"code": self.subject_code, "name": self.subject_name},
        }
