from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassAdvisor


class AdvisorRepository(Protocol):
    def list_all(self) -> Sequence[ClassAdvisor]:
        """Assignments joined with the advisor's name and email, newest first."""

        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[ClassAdvisor]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: int,
        dept_id: Optional[int],
        semester: Optional[int],
        section: Optional[str],
        academic_year: Optional[str],
    ) -> None:
        """Create the user's assignment or replace the existing one."""

        raise NotImplementedError

    def delete(self, *, advisor_id: int) -> bool:
        raise NotImplementedError
