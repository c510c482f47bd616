from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    dept_id: int
    code: str
    name: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.dept_id, "code": self.code, "name": self.name, "description": self.description}
