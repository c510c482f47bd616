from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject, SubjectDraft


class SubjectRepository(Protocol):
    def list_subjects(self, *, dept_id: Optional[int] = None, semester: Optional[int] = None) -> Sequence[Subject]:
        raise NotImplementedError

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def create(
        self,
        *,
        code: str,
        name: str,
        dept_id: Optional[int] = None,
        semester: Optional[int] = None,
        credits: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def delete(self, *, subject_id: int) -> bool:
        raise NotImplementedError

    def update(self, subject: Subject) -> bool:
        raise NotImplementedError

    def upsert_many(self, drafts: Sequence[SubjectDraft]) -> int:
        """Insert new codes and overwrite existing ones. Returns the number of drafts written."""

        raise NotImplementedError
