from __future__ import annotations

from typing import Protocol

from .model import SystemStats


class StatsRepository(Protocol):
    def count_rows(self) -> SystemStats:
        raise NotImplementedError
