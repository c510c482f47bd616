from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from ..attendance.model import AttendanceSession
from ..attendance.repository import SessionRepository
from ..common.datetime_utils import now_local
from ..core.exceptions import NotFoundError
from ..subjects.allocation_model import Allocation
from ..subjects.allocation_repository import AllocationRepository
from ..users.repository import TeacherRepository


@dataclass(frozen=True)
class TeacherClasses:
    allocations: list[Allocation] = field(default_factory=list)
    sessions: list[AttendanceSession] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "allocations": [a.to_dict() for a in self.allocations],
            "sessions": [s.to_dict() for s in self.sessions],
        }


class TeacherClassService:
    """What a teacher teaches and what is on today."""

    def __init__(
        self,
        teachers: TeacherRepository,
        allocations: AllocationRepository,
        sessions: SessionRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._teachers = teachers
        self._allocations = allocations
        self._sessions = sessions
        self._clock = clock

    def classes_for(self, user_id: int) -> TeacherClasses:
        teacher = self._teachers.get_by_user_id(user_id)
        if not teacher:
            raise NotFoundError("Teacher profile not found")

        today = self._clock().date()
        return TeacherClasses(
            allocations=list(self._allocations.list_allocations(teacher_id=teacher.teacher_id)),
            sessions=list(self._sessions.list_sessions(teacher_id=teacher.teacher_id, session_date=today)),
        )
