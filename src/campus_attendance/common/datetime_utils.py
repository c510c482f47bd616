from __future__ import annotations

from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()


def iso_or_none(value: Optional[date | datetime | time]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def round_half_up(value: float, digits: int = 0) -> float | int:
    """Round like a calculator: 0.5 goes up, float noise is ignored.

    ``round()`` uses banker's rounding, which would report 62.5% as 62.
    """
    exp = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(exp, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)
