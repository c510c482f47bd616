from __future__ import annotations

from datetime import date, datetime, time

from campus_attendance.attendance.model import AttendanceRecord, AttendanceSession, StudentRecordRow
from campus_attendance.attendance.statistics import compute_statistics, merge_history, summarize_by_subject
from campus_attendance.core.enums import AttendanceStatus


def _rec(record_id: int, session_id: int, status: AttendanceStatus, student_id: int = 1) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=record_id,
        session_id=session_id,
        student_id=student_id,
        status=status,
        marked_at=datetime(2026, 2, 1, 9, 5),
    )


def _session(session_id: int, day: int, *, subject_id: int = 5, code="CS101", name="Programming") -> AttendanceSession:
    return AttendanceSession(
        session_id=session_id,
        subject_id=subject_id,
        session_date=date(2026, 2, day),
        start_time=time(9, 0),
        subject_code=code,
        subject_name=name,
    )


def test_statistics_two_of_three_present():
    records = [
        _rec(1, 1, AttendanceStatus.PRESENT),
        _rec(2, 2, AttendanceStatus.PRESENT),
        _rec(3, 3, AttendanceStatus.ABSENT),
    ]

    stats = compute_statistics(records)

    assert stats.total_sessions == 3
    assert stats.present_count == 2
    assert stats.absent_count == 1
    assert stats.attendance_rate == 66.67


def test_statistics_empty_is_all_zero():
    stats = compute_statistics([])
    assert stats.to_dict() == {"total_sessions": 0, "present_count": 0, "absent_count": 0, "attendance_rate": 0}


def test_statistics_late_and_excused_count_as_not_present():
    records = [
        _rec(1, 1, AttendanceStatus.PRESENT),
        _rec(2, 2, AttendanceStatus.LATE),
        _rec(3, 3, AttendanceStatus.EXCUSED),
        _rec(4, 4, AttendanceStatus.PRESENT),
    ]

    stats = compute_statistics(records)

    assert stats.present_count + stats.absent_count == stats.total_sessions
    assert stats.absent_count == 2
    assert stats.attendance_rate == 50.0


def test_statistics_rounds_half_up():
    # 1/8 = 12.5%
    records = [_rec(1, 1, AttendanceStatus.PRESENT)] + [_rec(i, i, AttendanceStatus.ABSENT) for i in range(2, 9)]
    assert compute_statistics(records).attendance_rate == 12.5

    # 1/3 = 33.333...
    records = [_rec(1, 1, AttendanceStatus.PRESENT), _rec(2, 2, AttendanceStatus.ABSENT), _rec(3, 3, AttendanceStatus.ABSENT)]
    assert compute_statistics(records).attendance_rate == 33.33


def test_history_keeps_session_order_and_fills_gaps():
    sessions = [_session(3, 5), _session(2, 4), _session(1, 3)]
    records = [_rec(11, 1, AttendanceStatus.PRESENT), _rec(13, 3, AttendanceStatus.LATE)]

    history = merge_history(sessions, records)

    assert [h.session_id for h in history] == [3, 2, 1]
    assert history[0].status == AttendanceStatus.LATE
    assert history[1].status is None
    assert history[1].marked_at is None
    assert history[2].status == AttendanceStatus.PRESENT
    assert history[0].date == date(2026, 2, 5)
    assert history[0].time == time(9, 0)


def test_history_first_record_wins_for_duplicates():
    sessions = [_session(1, 3)]
    records = [_rec(1, 1, AttendanceStatus.ABSENT), _rec(2, 1, AttendanceStatus.PRESENT)]

    history = merge_history(sessions, records)

    assert len(history) == 1
    assert history[0].status == AttendanceStatus.ABSENT


def test_history_missing_subject_metadata_propagates_as_none():
    sessions = [_session(1, 3, code=None, name=None)]

    entry = merge_history(sessions, [])[0].to_dict()

    assert entry["subject_code"] is None
    assert entry["subject_name"] is None
    assert entry["status"] is None


def test_history_with_no_sessions_is_empty():
    assert merge_history([], [_rec(1, 1, AttendanceStatus.PRESENT)]) == []


def test_summary_counts_late_as_attended_per_subject():
    s1 = _session(1, 2)
    s2 = _session(2, 3)
    s3 = _session(3, 4, subject_id=6, code="CS102", name="Data Structures")
    rows = [
        StudentRecordRow(record=_rec(1, 1, AttendanceStatus.PRESENT), session=s1, subject_semester=2),
        StudentRecordRow(record=_rec(2, 2, AttendanceStatus.LATE), session=s2, subject_semester=2),
        StudentRecordRow(record=_rec(3, 3, AttendanceStatus.ABSENT), session=s3, subject_semester=2),
    ]

    overall, subjects = summarize_by_subject(rows)

    assert overall.total_classes == 3
    assert overall.attended == 2
    assert overall.percentage == 67

    by_code = {s.subject_code: s for s in subjects}
    assert by_code["CS101"].total == 2
    assert by_code["CS101"].present == 1
    assert by_code["CS101"].late == 1
    assert by_code["CS101"].percentage == 100
    assert by_code["CS102"].absent == 1
    assert by_code["CS102"].percentage == 0


def test_summary_skips_rows_without_subject():
    rows = [StudentRecordRow(record=_rec(1, 1, AttendanceStatus.PRESENT), session=_session(1, 2, code=None, name=None))]

    overall, subjects = summarize_by_subject(rows)

    assert subjects == []
    assert overall.total_classes == 1


def test_summary_of_nothing():
    overall, subjects = summarize_by_subject([])
    assert overall.to_dict() == {"total_classes": 0, "attended": 0, "percentage": 0}
    assert subjects == []
