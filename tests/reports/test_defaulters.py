from __future__ import annotations

import pytest

from campus_attendance.attendance.model import AttendanceRecord
from campus_attendance.core.enums import AttendanceStatus, Role
from campus_attendance.core.exceptions import ValidationError
from campus_attendance.reports.service import DefaulterReportService

from fakes import InMemoryRecords, InMemorySessions, InMemoryStudents, make_student


def _records(students, marks: dict[int, list[AttendanceStatus]]) -> InMemoryRecords:
    repo = InMemoryRecords(InMemorySessions(), students)
    rid = 0
    for student_id, statuses in marks.items():
        for i, status in enumerate(statuses):
            rid += 1
            repo.items[rid] = AttendanceRecord(record_id=rid, session_id=i + 1, student_id=student_id, status=status)
    return repo


P, A, L = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE


def test_defaulters_sorted_ascending_and_skip_students_without_records():
    students = InMemoryStudents([make_student(1), make_student(2), make_student(3), make_student(4)])
    records = _records(
        students,
        {
            1: [P, P, P, A],  # 75, not below
            2: [P, A, A, A],  # 25
            3: [L, P, A],  # 67, late counts as attended
        },
    )

    report = DefaulterReportService(students, records).build()

    data = report.to_dict()
    assert data["total_students"] == 4
    assert data["threshold"] == 75
    assert data["defaulters_count"] == 2
    assert [(d["id"], d["percentage"]) for d in data["defaulters"]] == [(2, 25), (3, 67)]


def test_custom_threshold_and_filters():
    students = InMemoryStudents([make_student(1, section="A"), make_student(2, section="B")])
    records = _records(students, {1: [P, A], 2: [A, A]})

    report = DefaulterReportService(students, records).build(threshold=60, section="B")

    assert report.total_students == 1
    assert [d.student_id for d in report.defaulters] == [2]


def test_threshold_out_of_range():
    students = InMemoryStudents()
    with pytest.raises(ValidationError):
        DefaulterReportService(students, _records(students, {})).build(threshold=120)


def test_report_route_for_advisor(login_as, repos):
    repos.records.items[1] = AttendanceRecord(record_id=1, session_id=10, student_id=1, status=AttendanceStatus.ABSENT)

    res = login_as(2, Role.ADVISOR).get("/api/reports/defaulters?threshold=50")

    body = res.get_json()
    assert res.status_code == 200
    assert body["defaulters_count"] == 1
    assert body["defaulters"][0]["roll_number"] == "CSE-001"


def test_report_route_forbidden_for_students(login_as):
    assert login_as(101, Role.STUDENT).get("/api/reports/defaulters").status_code == 403
