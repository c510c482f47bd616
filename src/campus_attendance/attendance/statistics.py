"""Pure aggregation over already-fetched attendance rows.

Filtering (by student, subject, date range) happens in the store queries;
nothing here touches the database.
"""
from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..common.datetime_utils import round_half_up
from ..core.enums import AttendanceStatus
from .model import (
    AttendanceRecord,
    AttendanceSession,
    AttendanceStatistics,
    HistoryEntry,
    OverallSummary,
    StudentRecordRow,
    SubjectSummary,
)


class HasStatus(Protocol):
    status: AttendanceStatus


ATTENDED = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


def compute_statistics(records: Iterable[HasStatus]) -> AttendanceStatistics:
    """Totals for a filtered record set.

    Everything that is not ``present`` (absent, late, excused) is counted as
    absent here.
    """
    total = 0
    present = 0
    for r in records:
        total += 1
        if r.status == AttendanceStatus.PRESENT:
            present += 1

    rate = round_half_up(present / total * 100, 2) if total > 0 else 0
    return AttendanceStatistics(
        total_sessions=total,
        present_count=present,
        absent_count=total - present,
        attendance_rate=rate,
    )


def merge_history(
    sessions: Sequence[AttendanceSession],
    records: Iterable[AttendanceRecord],
) -> list[HistoryEntry]:
    """Left-join sessions with one student's records, keeping session order."""
    by_session: dict[int, AttendanceRecord] = {}
    for r in records:
        # first record wins if the store ever holds duplicates
        by_session.setdefault(r.session_id, r)

    history: list[HistoryEntry] = []
    for s in sessions:
        rec: Optional[AttendanceRecord] = by_session.get(s.session_id)
        history.append(
            HistoryEntry(
                session_id=s.session_id,
                date=s.session_date,
                time=s.start_time,
                subject_code=s.subject_code,
                subject_name=s.subject_name,
                status=rec.status if rec else None,
                marked_at=rec.marked_at if rec else None,
            )
        )
    return history


def attended_percentage(attended: int, total: int) -> int:
    return round_half_up(attended / total * 100) if total > 0 else 0


def summarize_by_subject(rows: Iterable[StudentRecordRow]) -> tuple[OverallSummary, list[SubjectSummary]]:
    """Per-subject breakdown for a student's dashboard.

    Unlike ``compute_statistics``, late counts as attended.
    """
    by_subject: dict[int, SubjectSummary] = {}
    total = 0
    attended = 0

    for row in rows:
        total += 1
        if row.status in ATTENDED:
            attended += 1

        session = row.session
        if session.subject_code is None:
            # subject row missing from the join
            continue

        stat = by_subject.get(session.subject_id)
        if stat is None:
            stat = SubjectSummary(
                subject_id=session.subject_id,
                subject_code=session.subject_code,
                subject_name=session.subject_name,
                semester=row.subject_semester,
            )
            by_subject[session.subject_id] = stat

        stat.total += 1
        if row.status == AttendanceStatus.PRESENT:
            stat.present += 1
        elif row.status == AttendanceStatus.ABSENT:
            stat.absent += 1
        elif row.status == AttendanceStatus.LATE:
            stat.late += 1

    for stat in by_subject.values():
        stat.percentage = attended_percentage(stat.present + stat.late, stat.total)

    overall = OverallSummary(total_classes=total, attended=attended, percentage=attended_percentage(attended, total))
    return overall, list(by_subject.values())
