from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from campus_attendance.core.enums import Role
from campus_attendance.core.exceptions import AuthenticationError, ConflictError, ValidationError
from campus_attendance.users.model import User
from campus_attendance.users.service import AuthService, StudentService, UserService

from fakes import InMemoryStudents, InMemoryTeachers, InMemoryUsers, make_student, make_user


def test_auth_wrong_password_raises():
    users = InMemoryUsers([make_user(1, Role.ADMIN, email="a@campus.test", password="right-pw")])
    auth = AuthService(users)

    with pytest.raises(AuthenticationError):
        auth.authenticate("a@campus.test", "wrong")


def test_auth_normalizes_email():
    users = InMemoryUsers([make_user(1, Role.TEACHER, email="t@campus.test", password="pw123456")])

    s_user = AuthService(users).authenticate("  T@Campus.TEST ", "pw123456")

    assert s_user.user_id == 1
    assert s_user.role == Role.TEACHER


def test_auth_inactive_or_placeholder_hash_is_rejected():
    users = InMemoryUsers(
        [
            User(user_id=1, email="x@campus.test", full_name="X", password_hash="CHANGE_ME", role=Role.ADMIN),
            User(
                user_id=2,
                email="y@campus.test",
                full_name="Y",
                password_hash=make_user(2, Role.ADMIN).password_hash,
                role=Role.ADMIN,
                is_active=False,
            ),
        ]
    )
    auth = AuthService(users)

    with pytest.raises(AuthenticationError):
        auth.authenticate("x@campus.test", "CHANGE_ME")
    with pytest.raises(AuthenticationError):
        auth.authenticate("y@campus.test", "secret123")


def test_profile_includes_student_row():
    users = InMemoryUsers([make_user(101, Role.STUDENT)])
    students = InMemoryStudents([make_student(1)])

    profile = AuthService(users, students, InMemoryTeachers()).get_profile(101)

    assert profile["user"]["role"] == "student"
    assert profile["student"]["roll_number"] == "CSE-001"
    assert profile["teacher"] is None


def test_create_account_validates_and_hashes():
    users = InMemoryUsers()
    svc = UserService(users)

    with pytest.raises(ValidationError):
        svc.create_account(email="n@campus.test", full_name="N", password="123", role=Role.TEACHER)

    user_id = svc.create_account(email="N@campus.test", full_name="N", password="123456", role=Role.TEACHER)
    assert users.get_by_id(user_id).email == "n@campus.test"
    assert check_password_hash(users.get_by_id(user_id).password_hash, "123456")

    with pytest.raises(ConflictError):
        svc.create_account(email="n@campus.test", full_name="N2", password="123456", role=Role.TEACHER)


def test_register_student_defaults():
    students = InMemoryStudents()
    svc = StudentService(students)

    student_id = svc.register(email="s@campus.test", full_name="S", roll_number="ECE-009")

    assert students.get_by_id(student_id).semester == 1

    with pytest.raises(ValidationError):
        svc.register(email="t@campus.test", full_name="T", roll_number="ECE-010", semester=0)
