from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Student, Teacher, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, email: str, full_name: str, password_hash: str, role: Role) -> int:
        raise NotImplementedError

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        raise NotImplementedError

    def set_role(self, *, user_id: int, role: Role) -> bool:
        raise NotImplementedError


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_students(
        self,
        *,
        semester: Optional[int] = None,
        dept_id: Optional[int] = None,
        section: Optional[str] = None,
    ) -> Sequence[Student]:
        """Students joined with user name/email and department."""

        raise NotImplementedError

    def create_student(
        self,
        *,
        email: str,
        full_name: str,
        password_hash: str,
        roll_number: str,
        dept_id: Optional[int],
        semester: Optional[int],
        section: Optional[str],
        batch: Optional[str],
    ) -> int:
        """Create the login and the student profile in one transaction."""

        raise NotImplementedError

    def set_semester(self, *, student_ids: Sequence[int], semester: int) -> int:
        """Bulk update in one statement. Returns the number of rows touched."""

        raise NotImplementedError


class TeacherRepository(Protocol):
    def get_by_user_id(self, user_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def list_teachers(self) -> Sequence[Teacher]:
        raise NotImplementedError
