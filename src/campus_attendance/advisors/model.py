from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClassAdvisor:
    """An advisor's class: one department, semester and section per user."""

    advisor_id: int
    user_id: int
    dept_id: Optional[int] = None
    semester: Optional[int] = None
    section: Optional[str] = None
    academic_year: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.advisor_id,
            "user_id": self.user_id,
            "department_id": self.dept_id,
            "semester": self.semester,
            "section": self.section,
            "academic_year": self.academic_year,
            "full_name": self.full_name,
            "email": self.email,
        }
