from __future__ import annotations

from datetime import date, datetime, time

import pytest

from campus_attendance.attendance.model import AttendanceRecord, RecordMark
from campus_attendance.attendance.service import AttendanceService
from campus_attendance.auth.model import AuthContext
from campus_attendance.core.enums import AttendanceStatus, Role, SessionStatus
from campus_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


@pytest.fixture
def service(repos, fixed_now):
    return AttendanceService(repos.sessions, repos.records, repos.students, clock=lambda: fixed_now)


def test_mark_many_upserts_and_last_mark_wins(service, repos, fixed_now):
    saved = service.mark_many(
        session_id=10,
        marks=[
            RecordMark(student_id=1, status=AttendanceStatus.ABSENT),
            RecordMark(student_id=2, status=AttendanceStatus.PRESENT),
            RecordMark(student_id=1, status=AttendanceStatus.LATE),
        ],
    )

    assert len(saved) == 2
    by_student = {r.student_id: r for r in repos.records.list_records(session_id=10)}
    assert by_student[1].status == AttendanceStatus.LATE
    assert by_student[1].marked_at == fixed_now

    # re-marking overwrites instead of duplicating
    service.mark(session_id=10, student_id=1, status=AttendanceStatus.PRESENT)
    records = repos.records.list_records(session_id=10)
    assert len(records) == 2
    assert {r.student_id: r.status for r in records}[1] == AttendanceStatus.PRESENT


def test_mark_unknown_session_raises(service):
    with pytest.raises(NotFoundError):
        service.mark(session_id=999, student_id=1, status=AttendanceStatus.PRESENT)


def test_edit_record_must_belong_to_session(service, repos):
    repos.records.items[1] = AttendanceRecord(record_id=1, session_id=10, student_id=1, status=AttendanceStatus.ABSENT)

    with pytest.raises(NotFoundError):
        service.edit_record_status(session_id=11, record_id=1, status=AttendanceStatus.PRESENT)

    updated = service.edit_record_status(session_id=10, record_id=1, status=AttendanceStatus.PRESENT)
    assert updated.status == AttendanceStatus.PRESENT
    assert updated.marked_at == datetime(2026, 2, 2, 8, 25, 0)


def test_create_session_rejects_inverted_times(service):
    with pytest.raises(ValidationError):
        service.create_session(
            subject_id=5,
            session_date=date(2026, 2, 3),
            start_time=time(11, 0),
            end_time=time(10, 0),
        )


def test_create_and_update_session_status(service):
    session = service.create_session(subject_id=5, session_date=date(2026, 2, 3), room=" Lab 1 ")
    assert session.status == SessionStatus.SCHEDULED
    assert session.room == "Lab 1"

    updated = service.update_session_status(session_id=session.session_id, status=SessionStatus.COMPLETED)
    assert updated.status == SessionStatus.COMPLETED


def test_history_covers_every_session_of_subject(service, repos):
    repos.sessions.create(subject_id=5, session_date=date(2026, 2, 4))
    repos.records.items[1] = AttendanceRecord(record_id=1, session_id=10, student_id=1, status=AttendanceStatus.PRESENT)

    history = service.history(subject_id=5, student_id=1)

    assert [h.session_id for h in history] == [11, 10]
    assert history[0].status is None
    assert history[1].status == AttendanceStatus.PRESENT


def test_student_statistics_filters_by_date(service, repos):
    repos.records.items[1] = AttendanceRecord(record_id=1, session_id=10, student_id=1, status=AttendanceStatus.PRESENT)

    rows, stats = service.student_statistics(student_id=1, start_date=date(2026, 3, 1))
    assert rows == []
    assert stats.total_sessions == 0

    rows, stats = service.student_statistics(student_id=1)
    assert len(rows) == 1
    assert stats.attendance_rate == 100.0


def test_students_can_only_view_themselves(service):
    own = AuthContext(user_id=101, role=Role.STUDENT)
    service.ensure_can_view_student(own, 1)

    with pytest.raises(AuthorizationError):
        service.ensure_can_view_student(own, 2)

    service.ensure_can_view_student(AuthContext(user_id=2, role=Role.ADVISOR), 2)


def test_my_summary_requires_student_profile(service):
    with pytest.raises(AuthorizationError):
        service.my_summary(user_id=3)

    summary = service.my_summary(user_id=101)
    assert summary["student"] == {"id": 1, "roll_number": "CSE-001", "semester": 2}
    assert summary["overall"]["total_classes"] == 0


def test_export_rows_sorted_by_roll_number(service):
    service.mark_many(
        session_id=10,
        marks=[
            RecordMark(student_id=2, status=AttendanceStatus.ABSENT),
            RecordMark(student_id=1, status=AttendanceStatus.PRESENT),
        ],
    )

    session, rows = service.export_session(session_id=10)

    assert session.subject_code == "CS101"
    assert [r.roll_number for r in rows] == ["CSE-001", "CSE-002"]
