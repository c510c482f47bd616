from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Subject:
    subject_id: int
    code: str
    name: str
    dept_id: Optional[int] = None
    semester: Optional[int] = None
    credits: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.subject_id,
            "code": self.code,
            "name": self.name,
            "department_id": self.dept_id,
            "semester": self.semester,
            "credits": self.credits,
        }


@dataclass(frozen=True)
class SubjectDraft:
    """A subject row from an import, keyed by code."""

    code: str
    name: str
    dept_id: Optional[int] = None
    semester: Optional[int] = None
    credits: Optional[int] = None
