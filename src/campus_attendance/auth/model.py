from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class AuthContext:
    """Resolved caller for one request."""

    user_id: int
    role: Role

    def allows(self, *roles: Role) -> bool:
        return not roles or self.role in roles
