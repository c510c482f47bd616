from __future__ import annotations

from campus_attendance.core.enums import Role

from fakes import make_user


def test_login_sets_session_and_profile(client, repos):
    repos.users.users[50] = make_user(50, Role.TEACHER, email="t50@campus.test", password="pw123456")

    res = client.post("/api/auth/login", json={"email": "t50@campus.test", "password": "pw123456"})
    assert res.status_code == 200
    assert res.get_json()["user"]["role"] == "teacher"

    profile = client.get("/api/auth/profile")
    assert profile.status_code == 200
    assert profile.get_json()["user"]["email"] == "t50@campus.test"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/profile").status_code == 401


def test_login_failure(client):
    res = client.post("/api/auth/login", json={"email": "nobody@campus.test", "password": "x"})
    assert res.status_code == 401
    assert res.get_json() == {"error": "Invalid email or password"}


def test_users_admin_only(login_as):
    assert login_as(3, Role.TEACHER).get("/api/users").status_code == 403


def test_create_user_duplicate_email_is_conflict(login_as):
    client = login_as(1, Role.ADMIN)
    payload = {"email": "new@campus.test", "full_name": "New", "password": "123456", "role": "advisor"}

    assert client.post("/api/users", json=payload).status_code == 201
    assert client.post("/api/users", json=payload).status_code == 409


def test_create_user_missing_fields(login_as):
    res = login_as(1, Role.ADMIN).post("/api/users", json={"email": "x@campus.test"})
    assert res.status_code == 400


def test_list_students_with_filters(login_as):
    res = login_as(2, Role.ADVISOR).get("/api/students?semester=2&section=A")
    assert [s["roll_number"] for s in res.get_json()["students"]] == ["CSE-001", "CSE-002"]


def test_list_teachers(login_as):
    res = login_as(1, Role.ADMIN).get("/api/teachers")
    assert res.get_json()["teachers"][0]["employee_id"] == "EMP-001"


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}
