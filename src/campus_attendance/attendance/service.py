from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Callable, Optional, Sequence

from ..auth.model import AuthContext
from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus, Role, SessionStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import Student
from ..users.repository import StudentRepository
from .model import (
    AttendanceRecord,
    AttendanceSession,
    AttendanceStatistics,
    HistoryEntry,
    RecordMark,
    SessionExportRow,
    StudentRecordRow,
)
from .repository import RecordRepository, SessionRepository
from .statistics import compute_statistics, merge_history, summarize_by_subject

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        sessions: SessionRepository,
        records: RecordRepository,
        students: StudentRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._sessions = sessions
        self._records = records
        self._students = students
        self._clock = clock

    # -- access ---------------------------------------------------------

    def ensure_can_view_student(self, ctx: AuthContext, student_id: int) -> None:
        """Students may only read their own attendance; staff may read anyone's."""
        if ctx.role != Role.STUDENT:
            return
        own = self._students.get_by_user_id(ctx.user_id)
        if not own or own.student_id != int(student_id):
            raise AuthorizationError("Forbidden")

    # -- student views --------------------------------------------------

    def student_statistics(
        self,
        *,
        student_id: int,
        subject_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> tuple[Sequence[StudentRecordRow], AttendanceStatistics]:
        rows = self._records.list_for_student(
            student_id=student_id,
            subject_id=subject_id,
            start_date=start_date,
            end_date=end_date,
        )
        return rows, compute_statistics(rows)

    def history(self, *, subject_id: int, student_id: int) -> list[HistoryEntry]:
        sessions = self._sessions.list_sessions(subject_id=subject_id)
        session_ids = [s.session_id for s in sessions]
        records = self._records.list_for_student_in_sessions(student_id=student_id, session_ids=session_ids)
        return merge_history(sessions, records)

    def my_summary(self, *, user_id: int) -> dict:
        student: Optional[Student] = self._students.get_by_user_id(user_id)
        if not student:
            raise AuthorizationError("Student profile not found")

        rows = self._records.list_for_student(student_id=student.student_id)
        overall, subjects = summarize_by_subject(rows)
        return {
            "student": {
                "id": student.student_id,
                "roll_number": student.roll_number,
                "semester": student.semester,
            },
            "overall": overall.to_dict(),
            "subjects": [s.to_dict() for s in subjects],
        }

    # -- sessions -------------------------------------------------------

    def list_sessions(
        self,
        *,
        teacher_id: Optional[int] = None,
        subject_id: Optional[int] = None,
        session_date: Optional[date] = None,
        status: Optional[SessionStatus] = None,
    ) -> Sequence[AttendanceSession]:
        return self._sessions.list_sessions(
            teacher_id=teacher_id,
            subject_id=subject_id,
            session_date=session_date,
            status=status,
        )

    def get_session(self, session_id: int) -> AttendanceSession:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Session not found")
        return session

    def create_session(
        self,
        *,
        subject_id: int,
        session_date: date,
        teacher_id: Optional[int] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        room: Optional[str] = None,
        status: SessionStatus = SessionStatus.SCHEDULED,
    ) -> AttendanceSession:
        if start_time and end_time and end_time <= start_time:
            raise ValidationError("end_time must be after start_time")

        session_id = self._sessions.create(
            subject_id=subject_id,
            session_date=session_date,
            teacher_id=teacher_id,
            start_time=start_time,
            end_time=end_time,
            room=(room or "").strip() or None,
            status=status,
        )
        return self.get_session(session_id)

    def update_session_status(self, *, session_id: int, status: SessionStatus) -> AttendanceSession:
        self.get_session(session_id)
        self._sessions.update_status(session_id=session_id, status=status)
        return self.get_session(session_id)

    # -- records --------------------------------------------------------

    def list_records(self, *, session_id: Optional[int] = None, student_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._records.list_records(session_id=session_id, student_id=student_id)

    def mark(self, *, session_id: int, student_id: int, status: AttendanceStatus, notes: Optional[str] = None) -> AttendanceRecord:
        saved = self.mark_many(session_id=session_id, marks=[RecordMark(student_id=student_id, status=status, notes=notes)])
        return saved[0]

    def mark_many(self, *, session_id: int, marks: Sequence[RecordMark]) -> Sequence[AttendanceRecord]:
        self.get_session(session_id)
        if not marks:
            return []

        # last mark for a student wins within one request
        by_student = {int(m.student_id): m for m in marks}
        saved = self._records.upsert_many(
            session_id=session_id,
            marks=list(by_student.values()),
            marked_at=self._clock(),
        )
        logger.info("Marked %d record(s) for session %s", len(saved), session_id)
        return saved

    def edit_record_status(self, *, session_id: int, record_id: int, status: AttendanceStatus) -> AttendanceRecord:
        record = self._records.update_status(
            record_id=record_id,
            session_id=session_id,
            status=status,
            marked_at=self._clock(),
        )
        if not record:
            raise NotFoundError("Record not found for this session")
        logger.info("Record %s in session %s set to %s", record_id, session_id, status.value)
        return record

    def export_session(self, *, session_id: int) -> tuple[AttendanceSession, Sequence[SessionExportRow]]:
        session = self.get_session(session_id)
        return session, self._records.export_rows(session_id=session_id)
