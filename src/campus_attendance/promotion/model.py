from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PromotionResult:
    promoted: int
    retained: int
    message: Optional[str] = None

    def to_dict(self) -> dict:
        if self.message:
            return {"promoted": self.promoted, "retained": self.retained, "message": self.message}
        return {"success": True, "promoted": self.promoted, "retained": self.retained}
