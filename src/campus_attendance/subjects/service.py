from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.csv_import import ImportResult, department_lookup, read_csv_rows
from ..common.validators import optional_int, require_int, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .allocation_model import Allocation
from .allocation_repository import AllocationRepository
from ..departments.repository import DepartmentRepository
from .model import Subject, SubjectDraft
from .repository import SubjectRepository

logger = logging.getLogger(__name__)


class SubjectService:
    def __init__(self, subjects: SubjectRepository, departments: Optional[DepartmentRepository] = None):
        self._subjects = subjects
        self._departments = departments

    def list_subjects(self, *, dept_id: Optional[int] = None, semester: Optional[int] = None) -> Sequence[Subject]:
        return self._subjects.list_subjects(dept_id=dept_id, semester=semester)

    def get(self, subject_id: int) -> Subject:
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise NotFoundError("Subject not found")
        return subject

    def create(
        self,
        *,
        code: Optional[str],
        name: Optional[str],
        dept_id: Optional[int] = None,
        semester: Optional[int] = None,
        credits: Optional[int] = None,
    ) -> Subject:
        code = require_non_empty(code, "Subject code").upper()
        name = require_non_empty(name, "Subject name")
        if semester is not None and int(semester) <= 0:
            raise ValidationError("Semester must be a positive integer")

        subject_id = self._subjects.create(code=code, name=name, dept_id=dept_id, semester=semester, credits=credits)
        logger.info("Created subject %s (subject_id=%s)", code, subject_id)
        return self.get(subject_id)

    def update(self, subject_id: int, changes: Mapping[str, Any]) -> Subject:
        """Apply only the fields present in ``changes``.

        Keys are ``code``, ``name``, ``dept_id``, ``semester`` and ``credits``.
        """
        current = self.get(subject_id)
        updated = replace(current, **changes)

        code = require_non_empty(updated.code, "Subject code").upper()
        name = require_non_empty(updated.name, "Subject name")
        if updated.semester is not None and updated.semester <= 0:
            raise ValidationError("Semester must be a positive integer")

        self._subjects.update(replace(updated, code=code, name=name))
        logger.info("Updated subject %s (%s)", subject_id, ", ".join(sorted(changes)) or "no changes")
        return self.get(subject_id)

    def import_csv(self, text: str) -> ImportResult:
        """Upsert subjects by code from an uploaded CSV."""
        rows = read_csv_rows(text, ("code", "name"))
        dept_ids = department_lookup(self._departments.list_all()) if self._departments else {}

        drafts: list[SubjectDraft] = []
        errors: list[str] = []
        for number, row in rows:
            if not row.get("code") or not row.get("name"):
                errors.append(f"Row {number}: Missing code or name")
                continue
            try:
                semester = optional_int(row.get("semester"), "semester")
                credits = optional_int(row.get("credits"), "credits")
            except ValidationError as exc:
                errors.append(f"Row {number}: {exc}")
                continue

            dept_id = None
            if row.get("department"):
                dept_id = dept_ids.get(row["department"].lower())
                if dept_id is None:
                    # still imported, just without a department
                    errors.append(f'Row {number}: Unknown department "{row["department"]}"')

            drafts.append(
                SubjectDraft(
                    code=row["code"].upper(),
                    name=row["name"],
                    dept_id=dept_id,
                    semester=semester,
                    credits=credits,
                )
            )

        if not drafts:
            raise ValidationError("No valid subjects to import", details=errors)

        imported = self._subjects.upsert_many(drafts)
        logger.info("Subject import: %d written, %d row errors", imported, len(errors))
        return ImportResult(count=imported, errors=errors)

    def delete(self, subject_id: int) -> None:
        if not self._subjects.delete(subject_id=subject_id):
            raise NotFoundError("Subject not found")


class AllocationService:
    """Teacher-to-subject assignments per section and academic year."""

    def __init__(self, allocations: AllocationRepository):
        self._allocations = allocations

    def list_allocations(
        self,
        *,
        academic_year: Optional[str] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[Allocation]:
        return self._allocations.list_allocations(academic_year=academic_year, teacher_id=teacher_id)

    def create(
        self,
        *,
        teacher_id,
        subject_id,
        section: Optional[str],
        academic_year: Optional[str],
        batch: Optional[str] = None,
    ) -> int:
        teacher_id = require_int(teacher_id, "teacher_id")
        subject_id = require_int(subject_id, "subject_id")
        section = require_non_empty(section, "section")
        academic_year = require_non_empty(academic_year, "academic_year")
        batch = (batch or "").strip()

        if self._allocations.exists(
            teacher_id=teacher_id,
            subject_id=subject_id,
            section=section,
            batch=batch,
            academic_year=academic_year,
        ):
            raise ConflictError("This allocation already exists")

        allocation_id = self._allocations.create(
            teacher_id=teacher_id,
            subject_id=subject_id,
            section=section,
            batch=batch,
            academic_year=academic_year,
        )
        logger.info("Allocated subject %s to teacher %s (section %s, %s)", subject_id, teacher_id, section, academic_year)
        return allocation_id

    def delete(self, allocation_id: int) -> None:
        if not self._allocations.delete(allocation_id=allocation_id):
            raise NotFoundError("Allocation not found")
