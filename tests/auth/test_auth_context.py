from __future__ import annotations

import dataclasses

import pytest

from campus_attendance.auth.model import AuthContext
from campus_attendance.core.enums import Role


def test_context_carries_only_identity_and_role():
    assert [f.name for f in dataclasses.fields(AuthContext)] == ["user_id", "role"]
    assert not hasattr(AuthContext(user_id=1, role=Role.ADMIN), "is_staff")


@pytest.mark.parametrize(
    "role, roles, expected",
    [
        (Role.STUDENT, (), True),
        (Role.ADVISOR, (Role.ADMIN, Role.ADVISOR), True),
        (Role.TEACHER, (Role.ADMIN, Role.ADVISOR), False),
    ],
)
def test_allows_matches_listed_roles(role, roles, expected):
    assert AuthContext(user_id=7, role=role).allows(*roles) is expected


def test_role_guard_is_the_only_staff_check(login_as):
    client = login_as(3, Role.TEACHER)
    assert client.get("/api/reports/defaulters").status_code == 403
    assert client.get("/api/teacher/classes").status_code != 403
