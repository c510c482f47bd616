from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Note: Plain data object, no DB access code.
    """

    user_id: int
    email: str
    full_name: str
    password_hash: str
    role: Role
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role.value,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class Student:
    student_id: int
    user_id: int
    roll_number: str
    dept_id: Optional[int] = None
    semester: Optional[int] = None
    section: Optional[str] = None
    batch: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    dept_name: Optional[str] = None
    dept_code: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "user_id": self.user_id,
            "roll_number": self.roll_number,
            "department_id": self.dept_id,
            "semester": self.semester,
            "section": self.section,
            "batch": self.batch,
            "full_name": self.full_name,
            "email": self.email,
            "department": self.dept_name,
            "department_code": self.dept_code,
        }


@dataclass(frozen=True)
class Teacher:
    teacher_id: int
    user_id: int
    employee_id: Optional[str] = None
    dept_id: Optional[int] = None
    full_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.teacher_id,
            "user_id": self.user_id,
            "employee_id": self.employee_id,
            "department_id": self.dept_id,
            "full_name": self.full_name,
        }
