from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..auth.model import AuthContext
from ..common.validators import require_int
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import Student
from ..users.repository import StudentRepository, TeacherRepository, UserRepository
from .model import ClassAdvisor
from .repository import AdvisorRepository

logger = logging.getLogger(__name__)


class AdvisorService:
    def __init__(
        self,
        advisors: AdvisorRepository,
        users: UserRepository,
        students: StudentRepository,
        teachers: TeacherRepository,
    ):
        self._advisors = advisors
        self._users = users
        self._students = students
        self._teachers = teachers

    def list_advisors(self) -> Sequence[ClassAdvisor]:
        return self._advisors.list_all()

    def assign(
        self,
        *,
        user_id,
        dept_id: Optional[int] = None,
        semester: Optional[int] = None,
        section: Optional[str] = None,
        academic_year: Optional[str] = None,
    ) -> ClassAdvisor:
        """Give ``user_id`` a class, replacing any earlier one, and make them an advisor."""
        user_id = require_int(user_id, "user_id")
        if semester is not None and semester <= 0:
            raise ValidationError("Semester must be a positive integer")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.role != Role.ADVISOR:
            self._users.set_role(user_id=user_id, role=Role.ADVISOR)
            logger.info("User %s promoted from %s to advisor", user_id, user.role.value)

        self._advisors.upsert(
            user_id=user_id,
            dept_id=dept_id,
            semester=semester,
            section=(section or "").strip() or None,
            academic_year=(academic_year or "").strip() or None,
        )
        return self._advisors.get_by_user_id(user_id)

    def remove(self, advisor_id: int) -> None:
        if not self._advisors.delete(advisor_id=advisor_id):
            raise NotFoundError("Advisor assignment not found")

    def roster_for(self, ctx: AuthContext) -> Sequence[Student]:
        """Students in the caller's class.

        Without an assignment a teacher sees their department; everyone else
        sees every student.
        """
        assignment = self._advisors.get_by_user_id(ctx.user_id)
        if assignment:
            return self._students.list_students(
                semester=assignment.semester,
                dept_id=assignment.dept_id,
                section=assignment.section,
            )

        teacher = self._teachers.get_by_user_id(ctx.user_id)
        return self._students.list_students(dept_id=teacher.dept_id if teacher else None)
