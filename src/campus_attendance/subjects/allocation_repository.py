from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .allocation_model import Allocation


class AllocationRepository(Protocol):
    def list_allocations(
        self,
        *,
        academic_year: Optional[str] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[Allocation]:
        raise NotImplementedError

    def exists(self, *, teacher_id: int, subject_id: int, section: str, batch: str, academic_year: str) -> bool:
        raise NotImplementedError

    def create(self, *, teacher_id: int, subject_id: int, section: str, batch: str, academic_year: str) -> int:
        raise NotImplementedError

    def delete(self, *, allocation_id: int) -> bool:
        raise NotImplementedError
