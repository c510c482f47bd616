from __future__ import annotations

from .model import SystemStats
from .repository import StatsRepository


class AdminStatsService:
    """Dashboard counters for administrators."""

    def __init__(self, stats: StatsRepository):
        self._stats = stats

    def overview(self) -> SystemStats:
        return self._stats.count_rows()
