from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..core.constants import NO_STUDENTS_TO_PROMOTE
from ..core.exceptions import ValidationError
from ..users.model import Student
from ..users.repository import StudentRepository
from .model import PromotionResult

logger = logging.getLogger(__name__)


def partition_cohort(students: Iterable[Student], retain_ids: Iterable[int]) -> tuple[list[int], set[int]]:
    """Split a cohort into ids to promote and the retain set."""
    retain = {int(i) for i in retain_ids}
    promote = [s.student_id for s in students if s.student_id not in retain]
    return promote, retain


class PromotionService:
    """Bulk semester promotion with a held-back list."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def promote(self, *, from_semester: int, to_semester: int, retain_ids: Sequence[int] = ()) -> PromotionResult:
        if from_semester <= 0 or to_semester <= 0:
            raise ValidationError("Semesters must be positive integers")

        cohort = self._students.list_students(semester=from_semester)
        promote_ids, retain = partition_cohort(cohort, retain_ids)

        # Reported as the raw size of the caller's retain list, even for ids
        # outside this cohort.
        retained = len(retain)
        outside = retain - {s.student_id for s in cohort}
        if outside:
            logger.warning(
                "Retain list names %d student(s) not in semester %s: %s",
                len(outside), from_semester, sorted(outside),
            )

        if not promote_ids:
            return PromotionResult(promoted=0, retained=retained, message=NO_STUDENTS_TO_PROMOTE)

        self._students.set_semester(student_ids=promote_ids, semester=to_semester)
        logger.info(
            "Promoted %d student(s) from semester %s to %s (retained %d)",
            len(promote_ids), from_semester, to_semester, retained,
        )
        return PromotionResult(promoted=len(promote_ids), retained=retained)
