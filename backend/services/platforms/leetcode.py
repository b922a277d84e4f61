"""LeetCode Platform Adapter.

Queries the public LeetCode GraphQL endpoint for accepted submissions by
difficulty and per-topic solved counts.
"""

from __future__ import annotations

from typing import Any

from app.logging_config import get_logger
from services.models import PlatformSnapshot
from services.platforms.base import PlatformAdapter, top_tags

logger = get_logger(__name__)

USER_PROFILE_QUERY = """
query userProfile($username: String!) {
  matchedUser(username: $username) {
    username
    profile { ranking realName aboutMe reputation }
    submitStatsGlobal {
      acSubmissionNum { difficulty count }
    }
    tagProblemCounts {
      advanced { tagName problemsSolved }
      fundamental { tagName problemsSolved }
    }
  }
  allQuestionsCount { difficulty count }
}
"""

TAG_BUCKETS = ("fundamental", "advanced")


class LeetCodeAdapter(PlatformAdapter):
    """Adapter for leetcode.com profiles."""

    platform = "leetcode"

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "Accept": "application/json"}

    async def collect(self, handle: str) -> PlatformSnapshot | None:
        body = await self._post_json(
            self.settings.leetcode_graphql_url,
            {"query": USER_PROFILE_QUERY, "variables": {"username": handle}},
        )
        data = (body or {}).get("data") or {}
        user = data.get("matchedUser")
        if not user:
            logger.info("leetcode_user_missing")
            return None

        submissions = (user.get("submitStatsGlobal") or {}).get("acSubmissionNum") or []
        easy = _count_for(submissions, "Easy")
        medium = _count_for(submissions, "Medium")
        hard = _count_for(submissions, "Hard")
        profile = user.get("profile") or {}

        return PlatformSnapshot(
            stats={
                "totalSolved": easy + medium + hard,
                "easySolved": easy,
                "mediumSolved": medium,
                "hardSolved": hard,
                "ranking": profile.get("ranking") or 0,
                "totalQuestions": _count_for(data.get("allQuestionsCount") or [], "All"),
            },
            tags=top_tags(flatten_tag_buckets(user.get("tagProblemCounts") or {})),
            profile={
                "username": user.get("username"),
                "realName": profile.get("realName"),
                "aboutMe": profile.get("aboutMe"),
                "reputation": profile.get("reputation"),
            },
        )


def flatten_tag_buckets(tag_counts: dict[str, Any]) -> list[tuple[str, int]]:
    """Concatenate the fundamental and advanced topic groups.

    A name listed in both groups stays as two entries; cross-platform
    merging sums them later.
    """
    pairs: list[tuple[str, int]] = []
    for bucket in TAG_BUCKETS:
        for tag in tag_counts.get(bucket) or []:
            name = tag.get("tagName")
            if name:
                pairs.append((name, tag.get("problemsSolved") or 0))
    return pairs


def _count_for(rows: list[dict[str, Any]], difficulty: str) -> int:
    for row in rows:
        if row.get("difficulty") == difficulty:
            return row.get("count") or 0
    return 0
