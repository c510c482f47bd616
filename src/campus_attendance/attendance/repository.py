from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, SessionStatus
from .model import (
    AttendanceRecord,
    AttendanceSession,
    RecordMark,
    SessionExportRow,
    StudentRecordRow,
    SubjectStatusRow,
)


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def list_sessions(
        self,
        *,
        teacher_id: Optional[int] = None,
        subject_id: Optional[int] = None,
        session_date: Optional[date] = None,
        status: Optional[SessionStatus] = None,
    ) -> Sequence[AttendanceSession]:
        """Sessions joined with subject code/name, newest date first."""

        raise NotImplementedError

    def create(
        self,
        *,
        subject_id: int,
        session_date: date,
        teacher_id: Optional[int] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        room: Optional[str] = None,
        status: SessionStatus = SessionStatus.SCHEDULED,
    ) -> int:
        raise NotImplementedError

    def update_status(self, *, session_id: int, status: SessionStatus) -> bool:
        raise NotImplementedError


class RecordRepository(Protocol):
    def list_records(
        self,
        *,
        session_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(
        self,
        *,
        student_id: int,
        subject_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[StudentRecordRow]:
        """Records joined with session + subject, newest session first."""

        raise NotImplementedError

    def list_for_student_in_sessions(self, *, student_id: int, session_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_statuses_for_students(self, *, student_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_subject_statuses(
        self,
        *,
        student_ids: Sequence[int],
        subject_ids: Sequence[int],
    ) -> Sequence[SubjectStatusRow]:
        """Statuses of ``student_ids`` in sessions of ``subject_ids``."""

        raise NotImplementedError

    def upsert_many(self, *, session_id: int, marks: Sequence[RecordMark], marked_at: datetime) -> Sequence[AttendanceRecord]:
        """Insert or overwrite one record per (session, student)."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        record_id: int,
        session_id: int,
        status: AttendanceStatus,
        marked_at: datetime,
    ) -> Optional[AttendanceRecord]:
        """Update a record only if it belongs to ``session_id``."""

        raise NotImplementedError

    def export_rows(self, *, session_id: int) -> Sequence[SessionExportRow]:
        raise NotImplementedError
