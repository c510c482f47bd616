from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.csv_import import ImportResult, department_lookup, read_csv_rows
from ..common.validators import optional_int, require_min_length, require_non_empty
from ..core.constants import DEFAULT_SEMESTER, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, DomainError, NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from .model import Student, Teacher, User
from .repository import StudentRepository, TeacherRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login) and load the caller's profile.

    ``users`` is expected to run on the privileged store connection so the
    role can be read regardless of per-account grants.
    """

    def __init__(
        self,
        users: UserRepository,
        students: Optional[StudentRepository] = None,
        teachers: Optional[TeacherRepository] = None,
    ):
        self._users = users
        self._students = students
        self._teachers = teachers

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        user = self._users.get_by_email(email) if email else None
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)

    def get_profile(self, user_id: int) -> dict:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Profile not found")

        out = {"user": user.to_dict(), "student": None, "teacher": None}
        if user.role == Role.STUDENT and self._students:
            student = self._students.get_by_user_id(user.user_id)
            out["student"] = student.to_dict() if student else None
        if user.role == Role.TEACHER and self._teachers:
            teacher = self._teachers.get_by_user_id(user.user_id)
            out["teacher"] = teacher.to_dict() if teacher else None
        return out


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(self, *, email: str, full_name: str, password: str, role: Role) -> int:
        email = require_non_empty(email, "Email").lower()
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ConflictError("A user with this email already exists")

        user_id = self._users.create_user(
            email=email,
            full_name=full_name,
            password_hash=generate_password_hash(password),
            role=role,
        )
        logger.info("Created %s account %s (user_id=%s)", role.value, email, user_id)
        return user_id

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        return self._users.list_users(role=role)


class StudentService:
    def __init__(
        self,
        students: StudentRepository,
        teachers: Optional[TeacherRepository] = None,
        departments: Optional[DepartmentRepository] = None,
    ):
        self._students = students
        self._teachers = teachers
        self._departments = departments

    def list_students(
        self,
        *,
        semester: Optional[int] = None,
        dept_id: Optional[int] = None,
        section: Optional[str] = None,
    ) -> Sequence[Student]:
        return self._students.list_students(semester=semester, dept_id=dept_id, section=section)

    def list_teachers(self) -> Sequence[Teacher]:
        return self._teachers.list_teachers() if self._teachers else []

    def register(
        self,
        *,
        email: str,
        full_name: str,
        roll_number: str,
        password: Optional[str] = None,
        dept_id: Optional[int] = None,
        semester: Optional[int] = None,
        section: Optional[str] = None,
        batch: Optional[str] = None,
    ) -> int:
        """Create a student login and profile.

        The initial password defaults to the roll number.
        """
        email = require_non_empty(email, "Email").lower()
        full_name = require_non_empty(full_name, "Full name")
        roll_number = require_non_empty(roll_number, "Roll number")
        password = password or roll_number

        semester = DEFAULT_SEMESTER if semester is None else int(semester)
        if semester <= 0:
            raise ValidationError("Semester must be a positive integer")

        student_id = self._students.create_student(
            email=email,
            full_name=full_name,
            password_hash=generate_password_hash(password),
            roll_number=roll_number,
            dept_id=dept_id,
            semester=semester,
            section=(section or "").strip() or None,
            batch=(batch or "").strip() or None,
        )
        logger.info("Registered student %s (student_id=%s)", roll_number, student_id)
        return student_id

    def import_csv(self, text: str) -> ImportResult:
        """Register every roster row; a bad row is reported and skipped."""
        rows = read_csv_rows(text, ("email", "full_name", "roll_number"))
        dept_ids = department_lookup(self._departments.list_all()) if self._departments else {}

        created = 0
        errors: list[str] = []
        for number, row in rows:
            if not row.get("email") or not row.get("full_name") or not row.get("roll_number"):
                errors.append(f"Row {number}: Missing required fields")
                continue
            try:
                self.register(
                    email=row["email"],
                    full_name=row["full_name"],
                    roll_number=row["roll_number"],
                    password=row.get("password") or None,
                    dept_id=dept_ids.get(row.get("department", "").lower()),
                    semester=optional_int(row.get("semester"), "semester"),
                    section=row.get("section"),
                    batch=row.get("batch"),
                )
            except DomainError as exc:
                errors.append(f"Row {number}: {exc}")
                continue
            created += 1

        logger.info("Student import: %d created, %d rejected", created, len(errors))
        return ImportResult(count=created, errors=errors)
