from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import iso_or_none
from ..core.enums import AttendanceStatus, SessionStatus


@dataclass(frozen=True)
class AttendanceSession:
    """A scheduled occurrence of a subject's class.

    ``subject_code``/``subject_name`` are filled when the row was read joined
    with ``subjects``; they stay ``None`` otherwise.
    """

    session_id: int
    subject_id: int
    session_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    room: Optional[str] = None
    status: SessionStatus = SessionStatus.SCHEDULED
    teacher_id: Optional[int] = None
    subject_code: Optional[str] = None
    subject_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "subject_id": self.subject_id,
            "teacher_id": self.teacher_id,
            "session_date": iso_or_none(self.session_date),
            "start_time": iso_or_none(self.start_time),
            "end_time": iso_or_none(self.end_time),
            "room": self.room,
            "status": self.status.value,
            "subject": {"code": self.subject_code, "name": self.subject_name},
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's attendance status for one session."""

    record_id: int
    session_id: int
    student_id: int
    status: AttendanceStatus
    marked_at: Optional[datetime] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "session_id": self.session_id,
            "student_id": self.student_id,
            "status": self.status.value,
            "marked_at": iso_or_none(self.marked_at),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class StudentRecordRow:
    """Read-model: a record joined with its session and subject."""

    record: AttendanceRecord
    session: AttendanceSession
    subject_semester: Optional[int] = None

    @property
    def status(self) -> AttendanceStatus:
        return self.record.status

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["session"] = self.session.to_dict()
        return out


@dataclass(frozen=True)
class RecordMark:
    """Input for marking one student in a session."""

    student_id: int
    status: AttendanceStatus
    notes: Optional[str] = None


@dataclass(frozen=True)
class SessionExportRow:
    roll_number: str
    full_name: str
    email: str
    status: AttendanceStatus
    marked_at: Optional[datetime]


@dataclass(frozen=True)
class SubjectStatusRow:
    """A record status keyed by student and subject."""

    student_id: int
    subject_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceStatistics:
    total_sessions: int
    present_count: int
    absent_count: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "present_count": self.present_count,
            "absent_count": self.absent_count,
            "attendance_rate": self.attendance_rate,
        }


@dataclass(frozen=True)
class HistoryEntry:
    session_id: int
    date: Optional[date]
    time: Optional[time]
    subject_code: Optional[str]
    subject_name: Optional[str]
    status: Optional[AttendanceStatus]
    marked_at: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "date": iso_or_none(self.date),
            "time": iso_or_none(self.time),
            "subject_code": self.subject_code,
            "subject_name": self.subject_name,
            "status": self.status.value if self.status else None,
            "marked_at": iso_or_none(self.marked_at),
        }


@dataclass
class SubjectSummary:
    subject_id: int
    subject_code: Optional[str]
    subject_name: Optional[str]
    semester: Optional[int]
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    percentage: int = 0

    def to_dict(self) -> dict:
        return {
            "subject_id": self.subject_id,
            "subject_code": self.subject_code,
            "subject_name": self.subject_name,
            "semester": self.semester,
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class OverallSummary:
    total_classes: int
    attended: int
    percentage: int

    def to_dict(self) -> dict:
        return {"total_classes": self.total_classes, "attended": self.attended, "percentage": self.percentage}
