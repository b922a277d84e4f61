"""Adapters for platforms without a public, free API.

They never touch the network and return a zeroed snapshot asking the
user to enter stats manually.
"""

from __future__ import annotations

from typing import Any

from services.models import PlatformSnapshot
from services.platforms.base import PlatformAdapter, stub_snapshot


class ManualEntryAdapter(PlatformAdapter):
    """Deterministic stub adapter."""

    label: str
    zeroed_stats: dict[str, Any]

    async def collect(self, handle: str) -> PlatformSnapshot | None:
        return stub_snapshot(
            self.zeroed_stats,
            handle,
            f"Add {self.label} stats manually or wait for API support.",
        )


class CodeChefAdapter(ManualEntryAdapter):
    platform = "codechef"
    label = "CodeChef"
    zeroed_stats = {"rating": 0, "stars": "N/A", "problemsSolved": 0}


class HackerRankAdapter(ManualEntryAdapter):
    platform = "hackerrank"
    label = "HackerRank"
    zeroed_stats = {"badges": 0, "certificates": 0}
