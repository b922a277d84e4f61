"""Codeforces Platform Adapter.

Combines three public Codeforces API calls: user info, contest rating
history and the most recent submissions. Solved problems and topic tags
are derived from accepted submissions only, so both are bounded by the
submission page size.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from app.logging_config import get_logger
from services.models import PlatformSnapshot
from services.platforms.base import PlatformAdapter, top_tags

logger = get_logger(__name__)

ACCEPTED = "OK"


class CodeforcesAdapter(PlatformAdapter):
    """Adapter for codeforces.com profiles."""

    platform = "codeforces"

    async def collect(self, handle: str) -> PlatformSnapshot | None:
        base = self.settings.codeforces_api_base
        info = await self._get_json(f"{base}/user.info", params={"handles": handle})
        if not _is_ok(info) or not info.get("result"):
            logger.info("codeforces_user_info_rejected")
            return None
        user = info["result"][0]

        rating = await self._get_optional(
            f"{base}/user.rating", default={}, params={"handle": handle}
        )
        status = await self._get_optional(
            f"{base}/user.status",
            default={},
            params={
                "handle": handle,
                "from": 1,
                "count": self.settings.codeforces_submission_count,
            },
        )
        contests = rating["result"] if _is_ok(rating) else []
        submissions = status["result"] if _is_ok(status) else []

        history = contests[-self.settings.codeforces_rating_history:] if contests else []

        return PlatformSnapshot(
            stats={
                "rating": user.get("rating") or 0,
                "maxRating": user.get("maxRating") or 0,
                "rank": user.get("rank") or "unrated",
                "contestsParticipated": len(contests),
                "problemsSolved": len(solved_problem_ids(submissions)),
            },
            tags=top_tags(accepted_tag_counts(submissions)),
            rating_history=[_normalize_contest(c) for c in history],
            profile={
                "handle": user.get("handle"),
                "avatar": user.get("titlePhoto"),
                "rank": user.get("rank"),
                "maxRank": user.get("maxRank"),
            },
        )


def solved_problem_ids(submissions: list[dict[str, Any]]) -> set[str]:
    """Distinct ``{contestId}-{index}`` identities of accepted submissions."""
    solved: set[str] = set()
    for sub in submissions:
        if sub.get("verdict") != ACCEPTED:
            continue
        problem = sub.get("problem") or {}
        solved.add(f"{problem.get('contestId')}-{problem.get('index')}")
    return solved


def accepted_tag_counts(submissions: list[dict[str, Any]]) -> dict[str, int]:
    """Count problem tags across accepted submissions."""
    counts: dict[str, int] = {}
    for sub in submissions:
        if sub.get("verdict") != ACCEPTED:
            continue
        for tag in (sub.get("problem") or {}).get("tags") or []:
            counts[tag] = counts.get(tag, 0) + 1
    return counts


def _is_ok(body: Any) -> bool:
    return isinstance(body, dict) and body.get("status") == "OK"


def _normalize_contest(contest: dict[str, Any]) -> dict[str, Any]:
    updated = contest.get("ratingUpdateTimeSeconds")
    date = (
        datetime.fromtimestamp(updated, UTC).date().isoformat()
        if isinstance(updated, (int, float))
        else None
    )
    return {
        "contestName": contest.get("contestName"),
        "newRating": contest.get("newRating"),
        "oldRating": contest.get("oldRating"),
        "rank": contest.get("rank"),
        "date": date,
    }
