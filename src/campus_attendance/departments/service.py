from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Department
from .repository import DepartmentRepository


class DepartmentService:
    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    def list_all(self) -> Sequence[Department]:
        return self._departments.list_all()

    def get(self, dept_id: int) -> Department:
        dept = self._departments.get_by_id(dept_id)
        if not dept:
            raise NotFoundError("Department not found")
        return dept

    def create(self, *, code: Optional[str], name: Optional[str], description: Optional[str] = None) -> Department:
        code = require_non_empty(code, "Department code").upper()
        name = require_non_empty(name, "Department name")
        dept_id = self._departments.create(code=code, name=name, description=(description or "").strip() or None)
        return self.get(dept_id)

    def update(
        self,
        *,
        dept_id: int,
        code: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Department:
        current = self.get(dept_id)
        self._departments.update(
            dept_id=dept_id,
            code=(code or current.code).strip().upper(),
            name=(name or current.name).strip(),
            description=description if description is not None else current.description,
        )
        return self.get(dept_id)

    def delete(self, dept_id: int) -> None:
        if not self._departments.delete(dept_id=dept_id):
            raise NotFoundError("Department not found")
