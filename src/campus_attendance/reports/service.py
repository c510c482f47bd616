from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..attendance.repository import RecordRepository
from ..attendance.statistics import ATTENDED, attended_percentage
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_DEFAULTER_THRESHOLD
from ..core.exceptions import ValidationError
from ..subjects.repository import SubjectRepository
from ..users.model import Student
from ..users.repository import StudentRepository
from .model import AttendanceCell, CompiledReport, CompiledRow, Defaulter, DefaulterReport, RiskReport


def _cell(present: int, total: int) -> AttendanceCell:
    return AttendanceCell(
        total=total,
        present=present,
        percentage=attended_percentage(present, total) if total > 0 else None,
    )


class DefaulterReportService:
    """Students whose attended share (present + late) is under a threshold."""

    def __init__(
        self,
        students: StudentRepository,
        records: RecordRepository,
        *,
        default_threshold: int = DEFAULT_DEFAULTER_THRESHOLD,
    ):
        self._students = students
        self._records = records
        self._default_threshold = int(default_threshold)

    def _threshold(self, threshold: Optional[int]) -> int:
        threshold = self._default_threshold if threshold is None else int(threshold)
        if not 0 <= threshold <= 100:
            raise ValidationError("threshold must be between 0 and 100")
        return threshold

    def _below(self, students: Sequence[Student], threshold: int) -> list[Defaulter]:
        totals: dict[int, int] = defaultdict(int)
        attended: dict[int, int] = defaultdict(int)
        for r in self._records.list_statuses_for_students(student_ids=[s.student_id for s in students]):
            totals[r.student_id] += 1
            if r.status in ATTENDED:
                attended[r.student_id] += 1

        out: list[Defaulter] = []
        for s in students:
            total = totals.get(s.student_id, 0)
            if total == 0:
                # nothing recorded yet, not a defaulter
                continue
            percentage = attended_percentage(attended[s.student_id], total)
            if percentage < threshold:
                out.append(
                    Defaulter(
                        student_id=s.student_id,
                        roll_number=s.roll_number,
                        name=s.full_name or "Unknown",
                        email=s.email or "",
                        semester=s.semester,
                        section=s.section,
                        batch=s.batch,
                        department=s.dept_name,
                        department_code=s.dept_code,
                        total_classes=total,
                        attended=attended[s.student_id],
                        percentage=percentage,
                    )
                )

        out.sort(key=lambda d: d.percentage)
        return out

    def build(
        self,
        *,
        threshold: Optional[int] = None,
        semester: Optional[int] = None,
        dept_id: Optional[int] = None,
        section: Optional[str] = None,
    ) -> DefaulterReport:
        threshold = self._threshold(threshold)
        students = self._students.list_students(semester=semester, dept_id=dept_id, section=section)
        if not students:
            return DefaulterReport(total_students=0, threshold=threshold)
        return DefaulterReport(
            total_students=len(students),
            threshold=threshold,
            defaulters=self._below(students, threshold),
        )

    def at_risk(self, *, threshold: Optional[int] = None) -> RiskReport:
        """Same tally as ``build`` over every student on record."""
        threshold = self._threshold(threshold)
        students = self._students.list_students()
        if not students:
            return RiskReport(total_students=0, threshold=threshold)
        return RiskReport(
            total_students=len(students),
            threshold=threshold,
            students=self._below(students, threshold),
        )


class CompiledReportService:
    def __init__(
        self,
        students: StudentRepository,
        subjects: SubjectRepository,
        records: RecordRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._students = students
        self._subjects = subjects
        self._records = records
        self._clock = clock

    def build(
        self,
        *,
        semester: Optional[int],
        dept_id: Optional[int] = None,
        section: Optional[str] = None,
    ) -> CompiledReport:
        if semester is None:
            raise ValidationError("Semester is required")

        subjects = list(self._subjects.list_subjects(dept_id=dept_id, semester=semester))
        students = list(self._students.list_students(semester=semester, dept_id=dept_id, section=section))
        today = self._clock().date()
        if not subjects or not students:
            return CompiledReport(semester=semester, generated_on=today)

        totals: dict[tuple[int, int], int] = defaultdict(int)
        present: dict[tuple[int, int], int] = defaultdict(int)
        for r in self._records.list_subject_statuses(
            student_ids=[s.student_id for s in students],
            subject_ids=[s.subject_id for s in subjects],
        ):
            key = (r.student_id, r.subject_id)
            totals[key] += 1
            if r.status in ATTENDED:
                present[key] += 1

        rows: list[CompiledRow] = []
        for st in students:
            cells: dict[int, AttendanceCell] = {}
            for sub in subjects:
                key = (st.student_id, sub.subject_id)
                cells[sub.subject_id] = _cell(present[key], totals[key])
            rows.append(
                CompiledRow(
                    student_id=st.student_id,
                    roll_number=st.roll_number,
                    name=st.full_name or "Unknown",
                    section=st.section,
                    batch=st.batch,
                    cells=cells,
                    overall=_cell(sum(c.present for c in cells.values()), sum(c.total for c in cells.values())),
                )
            )

        return CompiledReport(semester=semester, subjects=subjects, rows=rows, generated_on=today)
