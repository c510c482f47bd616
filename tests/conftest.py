from __future__ import annotations

from datetime import date, datetime, time
from types import SimpleNamespace

import pytest

from campus_attendance import create_app
from campus_attendance.attendance.model import AttendanceSession
from campus_attendance.container import wire
from campus_attendance.core.enums import Role
from campus_attendance.departments.model import Department
from campus_attendance.subjects.model import Subject
from campus_attendance.users.model import Teacher

from fakes import (
    InMemoryAdvisors,
    InMemoryAllocations,
    InMemoryDepartments,
    InMemoryRecords,
    InMemorySessions,
    InMemoryStats,
    InMemoryStudents,
    InMemorySubjects,
    InMemoryTeachers,
    InMemoryTimetable,
    InMemoryUsers,
    make_student,
    make_user,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 25, 0)


@pytest.fixture
def repos():
    users = InMemoryUsers(
        [
            make_user(1, Role.ADMIN),
            make_user(2, Role.ADVISOR),
            make_user(3, Role.TEACHER),
            make_user(101, Role.STUDENT),
            make_user(102, Role.STUDENT),
        ]
    )
    students = InMemoryStudents([make_student(1), make_student(2)])
    sessions = InMemorySessions(
        [
            AttendanceSession(
                session_id=10,
                subject_id=5,
                session_date=date(2026, 2, 2),
                start_time=time(9, 0),
                end_time=time(10, 0),
                teacher_id=1,
                subject_code="CS101",
                subject_name="Programming",
            ),
        ]
    )
    departments = InMemoryDepartments([Department(dept_id=1, code="CSE", name="Computer Science")])
    subjects = InMemorySubjects([Subject(subject_id=5, code="CS101", name="Programming", dept_id=1, semester=2)])
    allocations = InMemoryAllocations()
    return SimpleNamespace(
        users=users,
        students=students,
        teachers=InMemoryTeachers([Teacher(teacher_id=1, user_id=3, employee_id="EMP-001", dept_id=1)]),
        departments=departments,
        subjects=subjects,
        allocations=allocations,
        timetable=InMemoryTimetable(),
        sessions=sessions,
        records=InMemoryRecords(sessions, students),
        advisors=InMemoryAdvisors(users),
        stats=InMemoryStats(users, departments, subjects, allocations),
    )


@pytest.fixture
def container(repos, fixed_now):
    return wire(
        users_repo=repos.users,
        students_repo=repos.students,
        teachers_repo=repos.teachers,
        departments_repo=repos.departments,
        subjects_repo=repos.subjects,
        allocations_repo=repos.allocations,
        timetable_repo=repos.timetable,
        sessions_repo=repos.sessions,
        records_repo=repos.records,
        advisors_repo=repos.advisors,
        stats_repo=repos.stats,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id: int, role: Role):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role.value
            sess["name"] = f"user {user_id}"
        return client

    return _login
