"""Rule-based activity insights.

Produces short coaching notes from a flat list of timestamped activity
records (GitHub events and practice-platform entries). Deterministic
except for the closing recommendation, which is drawn from an injectable
``random.Random`` so callers and tests can seed it.
"""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Sequence

from app.logging_config import get_logger
from services.models import ActivityRecord

logger = get_logger(__name__)

NO_ACTIVITY_MESSAGE = (
    "No activity data available yet. Start coding and come back to see "
    "personalized insights!"
)

CLOSING_RECOMMENDATIONS = (
    "📚 Recommendation: Try contributing to an open-source project this week. "
    "It's the fastest way to learn from experienced developers.",
    "🎯 Recommendation: Set a weekly goal of 5 commits and 3 problems solved "
    "to maintain steady growth.",
    "💻 Recommendation: Write a README.md for your most recent project. "
    "Documentation skills are highly valued by employers.",
    "🔄 Recommendation: Review someone else's code on GitHub. Teaching and "
    "reviewing accelerates your own learning.",
    "🏗️ Recommendation: Try building a full-stack project with a technology "
    "you haven't used before to expand your skill set.",
)


class InsightGenerator:
    """Turns activity records into a paragraph-separated insight text."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def generate(self, activities: Sequence[ActivityRecord]) -> str:
        if not activities:
            return NO_ACTIVITY_MESSAGE

        insights: list[str] = []
        insights.append(self._volume(len(activities)))
        insights.extend(self._event_mix(activities))

        repo_note = self._repo_breadth(activities)
        if repo_note:
            insights.append(repo_note)

        day_note = self._active_days(activities)
        if day_note:
            insights.append(day_note)

        insights.extend(self._practice_balance(activities))
        insights.append(self.rng.choice(CLOSING_RECOMMENDATIONS))

        logger.debug("insights_generated", activity_count=len(activities), notes=len(insights))
        return "\n\n".join(insights)

    @staticmethod
    def _volume(total: int) -> str:
        if total > 20:
            return (
                "🔥 You've been incredibly active! Consistency is the key to "
                "mastery, keep this momentum going."
            )
        if total > 10:
            return (
                "👍 Good activity level. Try to push a few more commits or solve "
                "1-2 more problems daily to accelerate growth."
            )
        return (
            "📈 Your activity is on the lighter side. Aim for at least 1 commit "
            "or 1 problem solved per day to build a strong habit."
        )

    @staticmethod
    def _event_mix(activities: Sequence[ActivityRecord]) -> list[str]:
        counts = Counter(a.type or "Unknown" for a in activities)
        notes: list[str] = []
        if counts["PushEvent"] > 0 and counts["PullRequestEvent"] == 0:
            notes.append(
                "💡 You're pushing code but not opening Pull Requests. PRs are "
                "essential for code review skills, try contributing to open-source projects."
            )
        if counts["PullRequestEvent"] > 3:
            notes.append(
                "🤝 Great collaboration! You're actively participating in code "
                "reviews through Pull Requests."
            )
        if counts["IssuesEvent"] > 2:
            notes.append(
                "🐛 Active issue tracker. This shows strong project management awareness."
            )
        if counts["CreateEvent"] > 3:
            notes.append(
                "🚀 You're creating multiple repositories. Make sure to follow through "
                "and develop them rather than starting too many at once."
            )
        return notes

    @staticmethod
    def _repo_breadth(activities: Sequence[ActivityRecord]) -> str | None:
        repos = {a.repo_name for a in activities if a.repo_name and a.repo_name != "Unknown"}
        if len(repos) > 5:
            return (
                f"🌐 You work across {len(repos)} repositories, great breadth! "
                "Consider deepening expertise in 2-3 key projects."
            )
        if len(repos) >= 2:
            return (
                f"📂 You're working on {len(repos)} repos. This is a healthy balance "
                "between focus and exploration."
            )
        if len(repos) == 1:
            return (
                "🎯 You're very focused on a single repository. Consider exploring "
                "other projects to broaden your skills."
            )
        return None

    @staticmethod
    def _active_days(activities: Sequence[ActivityRecord]) -> str | None:
        days = {a.timestamp.date() for a in activities if a.timestamp is not None}
        if len(days) >= 5:
            return (
                f"✅ Active on {len(days)} different days, excellent consistency! "
                "Daily coding practice is the #1 predictor of skill growth."
            )
        if len(days) >= 2:
            return (
                f"📅 Active on {len(days)} days. Try to code every day, even if it's "
                "just 15 minutes, to build muscle memory."
            )
        return None

    @staticmethod
    def _practice_balance(activities: Sequence[ActivityRecord]) -> list[str]:
        practice = sum(1 for a in activities if a.platform != "GitHub")
        github = len(activities) - practice
        notes: list[str] = []
        if practice == 0 and github > 5:
            notes.append(
                "⚡ You're building projects but not solving algorithmic problems. "
                "Practice platforms like LeetCode or HackerRank can sharpen your "
                "problem-solving skills for interviews."
            )
        if practice > 5:
            notes.append(
                "🧠 Great problem-solving practice! Make sure to also apply these "
                "skills in real projects on GitHub."
            )
        return notes
