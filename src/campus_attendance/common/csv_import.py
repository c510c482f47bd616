from __future__ import annotations

import csv
from dataclasses import dataclass, field
from typing import Iterable

from ..core.exceptions import ValidationError


def read_csv_rows(text: str, required: Iterable[str]) -> list[tuple[int, dict[str, str]]]:
    """Parse an uploaded CSV into ``(row_number, {column: value})`` pairs.

    Blank lines are dropped before numbering, so row 1 is always the header.
    Column names are trimmed and lower-cased, values trimmed, missing trailing
    cells read as ``""``.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise ValidationError("CSV must have header and at least one data row")

    parsed = list(csv.reader(lines))
    header = [h.strip().lower() for h in parsed[0]]
    missing = [name for name in required if name not in header]
    if missing:
        raise ValidationError(f"Missing required columns: {', '.join(missing)}")

    rows: list[tuple[int, dict[str, str]]] = []
    for number, values in enumerate(parsed[1:], start=2):
        cells = [v.strip() for v in values]
        rows.append((number, {h: cells[i] if i < len(cells) else "" for i, h in enumerate(header)}))
    return rows


def department_lookup(departments: Iterable) -> dict[str, int]:
    """Department code (lower-cased) to id."""
    return {d.code.lower(): d.dept_id for d in departments}


@dataclass(frozen=True)
class ImportResult:
    count: int
    errors: list[str] = field(default_factory=list)
