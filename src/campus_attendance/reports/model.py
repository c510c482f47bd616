from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..subjects.model import Subject


@dataclass(frozen=True)
class Defaulter:
    student_id: int
    roll_number: str
    name: str
    email: str
    semester: Optional[int]
    section: Optional[str]
    batch: Optional[str]
    department: Optional[str]
    department_code: Optional[str]
    total_classes: int
    attended: int
    percentage: int

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "roll_number": self.roll_number,
            "name": self.name,
            "email": self.email,
            "semester": self.semester,
            "section": self.section,
            "batch": self.batch,
            "department": self.department,
            "department_code": self.department_code,
            "total_classes": self.total_classes,
            "attended": self.attended,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class DefaulterReport:
    total_students: int
    threshold: int
    defaulters: list[Defaulter] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_students": self.total_students,
            "defaulters_count": len(self.defaulters),
            "threshold": self.threshold,
            "defaulters": [d.to_dict() for d in self.defaulters],
        }


@dataclass(frozen=True)
class RiskReport:
    total_students: int
    threshold: int
    students: list[Defaulter] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "threshold": self.threshold,
            "total_students": self.total_students,
            "at_risk_count": len(self.students),
            "students": [dict(s.to_dict(), at_risk=True) for s in self.students],
        }


@dataclass(frozen=True)
class AttendanceCell:
    total: int = 0
    present: int = 0
    percentage: Optional[int] = None

    def to_dict(self) -> dict:
        return {"total": self.total, "present": self.present, "percentage": self.percentage}


@dataclass(frozen=True)
class CompiledRow:
    student_id: int
    roll_number: str
    name: str
    section: Optional[str]
    batch: Optional[str]
    cells: dict[int, AttendanceCell]
    overall: AttendanceCell

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "roll_number": self.roll_number,
            "name": self.name,
            "section": self.section,
            "batch": self.batch,
            # JSON object keys are strings
            "subject_attendance": {str(k): v.to_dict() for k, v in self.cells.items()},
            "overall": self.overall.to_dict(),
        }


@dataclass(frozen=True)
class CompiledReport:
    """Per-student, per-subject attendance for one semester."""

    semester: int
    subjects: list[Subject] = field(default_factory=list)
    rows: list[CompiledRow] = field(default_factory=list)
    generated_on: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return not self.subjects or not self.rows

    def to_dict(self) -> dict:
        if self.is_empty:
            return {"students": 0, "subjects": [], "matrix": []}
        return {
            "students": len(self.rows),
            "subjects": [{"id": s.subject_id, "code": s.code, "name": s.name} for s in self.subjects],
            "matrix": [r.to_dict() for r in self.rows],
        }
