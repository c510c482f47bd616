from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemStats:
    users: int = 0
    departments: int = 0
    subjects: int = 0
    allocations: int = 0

    def to_dict(self) -> dict:
        return {
            "users": self.users,
            "departments": self.departments,
            "subjects": self.subjects,
            "allocations": self.allocations,
        }
