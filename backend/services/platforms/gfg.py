"""GeeksForGeeks Platform Adapter.

GeeksForGeeks has no official API; a community statistics endpoint is
used instead. Its field names have changed over time, so each stat is
read from several candidate keys.
"""

from __future__ import annotations

from typing import Any

from app.exceptions import DevRadarError, PlatformAPIError
from services.models import PlatformSnapshot, coerce_int
from services.platforms.base import PlatformAdapter, stub_snapshot

UNREACHABLE_MESSAGE = "Could not fetch GFG data. Please check your username."

ZEROED_STATS = {
    "totalSolved": 0,
    "easySolved": 0,
    "mediumSolved": 0,
    "hardSolved": 0,
    "score": 0,
    "instituteRank": "N/A",
}


class GFGAdapter(PlatformAdapter):
    """Adapter for geeksforgeeks.org profiles."""

    platform = "gfg"

    async def collect(self, handle: str) -> PlatformSnapshot | None:
        data = await self._get_json(
            self.settings.gfg_stats_api_url, params={"userName": handle}
        )
        if not isinstance(data, dict):
            raise PlatformAPIError(
                self.platform, "gfg stats payload is not an object", reason="payload"
            )

        institute_rank = data.get("instituteRank") or "N/A"
        return PlatformSnapshot(
            stats={
                "totalSolved": coerce_int(data.get("totalProblemsSolved")),
                "easySolved": _first_of(data, "Easy", "school"),
                "mediumSolved": _first_of(data, "Medium", "basic"),
                "hardSolved": _first_of(data, "Hard"),
                "score": coerce_int(data.get("codingScore")),
                "instituteRank": institute_rank,
            },
            profile={"username": handle, "instituteRank": institute_rank},
        )

    def on_failure(self, handle: str, exc: DevRadarError) -> PlatformSnapshot | None:
        # A clean non-2xx answer means "not connected"; anything else degrades.
        if isinstance(exc, PlatformAPIError) and exc.reason != "status":
            return stub_snapshot(ZEROED_STATS, handle, UNREACHABLE_MESSAGE)
        return None


def _first_of(data: dict[str, Any], *keys: str) -> int:
    for key in keys:
        value = coerce_int(data.get(key))
        if value:
            return value
    return 0
