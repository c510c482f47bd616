from __future__ import annotations

from datetime import date

from campus_attendance.attendance.model import AttendanceSession
from campus_attendance.core.enums import Role


def test_teacher_classes_lists_allocations_and_todays_sessions(login_as, repos):
    repos.allocations.create(teacher_id=1, subject_id=5, section="A", batch="", academic_year="2025-26")
    repos.allocations.create(teacher_id=9, subject_id=5, section="B", batch="", academic_year="2025-26")
    repos.sessions.items[11] = AttendanceSession(session_id=11, subject_id=5, teacher_id=1, session_date=date(2026, 2, 3))

    res = login_as(3, Role.TEACHER).get("/api/teacher/classes")

    body = res.get_json()
    assert res.status_code == 200
    assert [a["section"] for a in body["allocations"]] == ["A"]
    assert [s["id"] for s in body["sessions"]] == [10]


def test_teacher_classes_without_profile(login_as):
    res = login_as(4, Role.TEACHER).get("/api/teacher/classes")

    assert res.status_code == 404
    assert res.get_json() == {"error": "Teacher profile not found"}


def test_teacher_classes_is_teacher_only(login_as):
    assert login_as(1, Role.ADMIN).get("/api/teacher/classes").status_code == 403
