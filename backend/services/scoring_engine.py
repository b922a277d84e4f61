"""Skill Scoring Engine.

Turns a platform data set into a SkillAnalysis: four sub-scores
(problem solving, project building, consistency, collaboration), a
weighted overall score, strengths and weaknesses, employer matches and
prioritized DSA improvements.

Every rule is a tiered threshold on one platform statistic; points are
summed per dimension. Pure and deterministic: no I/O, no randomness.
Missing platforms and missing stats contribute nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from app.logging_config import get_logger
from app.metrics import SCORING_DURATION
from services.models import (
    PLATFORM_LABELS,
    SOLVED_STAT_KEYS,
    SOURCE_HOST,
    DsaImprovement,
    PlatformSnapshot,
    SkillAnalysis,
    coerce_int,
)
from services.tag_aggregator import build_skill_distribution, merge_tags
from services.topic_classifier import (
    build_recommendations,
    classify_topics,
    match_companies,
    prioritize_improvements,
    round_half_up,
)

logger = get_logger(__name__)

OVERALL_WEIGHTS = {
    "problem_solving": 0.35,
    "project_building": 0.25,
    "consistency": 0.25,
    "collaboration": 0.15,
}
BASELINE_CREDIT = 10

SYNC_RECOMMENDATION = (
    "Connect your coding profiles and sync to see your skill analysis."
)


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def overall_score(
    problem_solving: int,
    project_building: int,
    consistency: int,
    collaboration: int,
) -> int:
    """Weighted overall score with the unconditional baseline credit."""
    weighted = (
        problem_solving * OVERALL_WEIGHTS["problem_solving"]
        + project_building * OVERALL_WEIGHTS["project_building"]
        + consistency * OVERALL_WEIGHTS["consistency"]
        + collaboration * OVERALL_WEIGHTS["collaboration"]
        + BASELINE_CREDIT
    )
    return _clamp(round_half_up(weighted))


@dataclass
class _Tally:
    """Mutable accumulator used while one analysis is being built."""

    problem_solving: int = 0
    project_building: int = 0
    consistency: int = 0
    collaboration: int = 0
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    improvements: list[DsaImprovement] = field(default_factory=list)


class ScoringEngine:
    """Multi-platform skill scoring and classification engine."""

    @SCORING_DURATION.time()
    def analyze(self, dataset: Mapping[str, PlatformSnapshot | None]) -> SkillAnalysis:
        """Score a platform data set.

        Args:
            dataset: Platform key -> snapshot (None = not connected)

        Returns:
            Immutable SkillAnalysis
        """
        connected = {k: v for k, v in dataset.items() if v is not None}
        if not connected:
            logger.info("skill_analysis_no_platforms")
            return SkillAnalysis(
                overall_score=overall_score(0, 0, 0, 0),
                recommendations=[SYNC_RECOMMENDATION],
            )

        tags = merge_tags(connected)
        breakdown = self._platform_breakdown(connected)
        total_solved = sum(breakdown.values())
        tally = _Tally()

        self._score_total_solved(tally, total_solved)
        self._score_breadth(tally, len(breakdown) + (1 if SOURCE_HOST in connected else 0))
        if SOURCE_HOST in connected:
            self._score_github(tally, connected[SOURCE_HOST])
        if "leetcode" in connected:
            self._score_leetcode(tally, connected["leetcode"])
        if "codeforces" in connected:
            self._score_codeforces(tally, connected["codeforces"])
        if "gfg" in connected:
            self._score_gfg(tally, connected["gfg"])

        topics = classify_topics(tags)
        tally.improvements.extend(topics.improvements)
        strength = topics.strength_text()
        if strength:
            tally.strengths.append(strength)
        weakness = topics.weakness_text()
        if weakness:
            tally.weaknesses.append(weakness)

        companies = match_companies(tags, topics.strong_names)
        recommendations = build_recommendations(
            problem_solving=tally.problem_solving,
            project_building=tally.project_building,
            consistency=tally.consistency,
            weak_topics=topics.weak_names,
            company_matches=companies,
            total_solved=total_solved,
            initial=tally.recommendations,
        )

        analysis = SkillAnalysis(
            overall_score=overall_score(
                tally.problem_solving,
                tally.project_building,
                tally.consistency,
                tally.collaboration,
            ),
            problem_solving_score=_clamp(tally.problem_solving),
            project_building_score=_clamp(tally.project_building),
            consistency_score=_clamp(tally.consistency),
            collaboration_score=_clamp(tally.collaboration),
            total_problems_solved=total_solved,
            platform_breakdown=breakdown,
            skill_distribution=build_skill_distribution(connected, tags),
            dsa_skills=dict(tags),
            strengths=tally.strengths,
            weaknesses=tally.weaknesses,
            recommendations=recommendations,
            company_matches=companies,
            dsa_improvements=prioritize_improvements(tally.improvements),
        )

        logger.info(
            "skill_analysis_complete",
            platforms=len(connected),
            overall_score=analysis.overall_score,
            total_solved=total_solved,
            company_matches=len(companies),
        )
        return analysis

    @staticmethod
    def _platform_breakdown(connected: Mapping[str, PlatformSnapshot]) -> dict[str, int]:
        """Solved count per judge, only for judges with something solved."""
        breakdown: dict[str, int] = {}
        for key, stat in SOLVED_STAT_KEYS.items():
            snapshot = connected.get(key)
            if snapshot is None:
                continue
            solved = snapshot.stat_int(stat)
            if solved > 0:
                breakdown[PLATFORM_LABELS[key]] = solved
        return breakdown

    def _score_total_solved(self, tally: _Tally, total: int) -> None:
        if total >= 500:
            tally.strengths.append(
                f"🔥 Elite problem-solver: {total} problems solved across all platforms"
            )
            tally.problem_solving += 15
        elif total >= 300:
            tally.strengths.append(
                f"💪 Excellent: {total} total problems solved across platforms"
            )
            tally.problem_solving += 10
        elif total >= 100:
            tally.strengths.append(f"📈 Solid: {total} total problems solved across platforms")
            tally.problem_solving += 5
        elif total > 0:
            tally.weaknesses.append(
                f"Only {total} total problems solved across all platforms, "
                "aim for 100+ to be interview-ready"
            )

    def _score_breadth(self, tally: _Tally, active: int) -> None:
        if active >= 4:
            tally.strengths.append(
                f"Active on {active} coding platforms, shows well-rounded practice"
            )
        elif active == 1:
            tally.weaknesses.append(
                "Only active on 1 platform, diversify across LeetCode, Codeforces, and GFG"
            )

    def _score_github(self, tally: _Tally, github: PlatformSnapshot) -> None:
        repos = github.stat_int("totalRepos")
        if repos >= 10:
            tally.strengths.append(f"Strong project portfolio with {repos} repositories")
            tally.project_building += 40
        elif repos >= 5:
            tally.strengths.append("Growing project portfolio")
            tally.project_building += 25
        else:
            tally.weaknesses.append("Limited number of public GitHub projects")
            tally.recommendations.append(
                "Build more projects on GitHub: aim for 10+ repos to stand out to recruiters."
            )

        languages = [str(lang) for lang in github.stats.get("topLanguages") or []]
        if len(languages) >= 3:
            tally.strengths.append("Multi-language developer: " + ", ".join(languages))

        activity = github.stat_int("recentActivity")
        if activity >= 20:
            tally.consistency += 40
            tally.strengths.append("Highly active on GitHub recently")
        elif activity >= 10:
            tally.consistency += 25
        else:
            tally.weaknesses.append("Low recent GitHub activity")

        if coerce_int(github.profile.get("followers")) >= 10:
            tally.collaboration += 30

    def _score_leetcode(self, tally: _Tally, leetcode: PlatformSnapshot) -> None:
        total = leetcode.stat_int("totalSolved")
        hard = leetcode.stat_int("hardSolved")

        if total >= 200:
            tally.problem_solving += 45
            tally.strengths.append(f"Exceptional: {total} LeetCode problems solved")
        elif total >= 100:
            tally.problem_solving += 35
            tally.strengths.append(f"Strong: {total} LeetCode problems solved")
        elif total >= 30:
            tally.problem_solving += 20
        else:
            tally.weaknesses.append(f"Limited LeetCode practice ({total} solved)")

        if hard >= 10:
            tally.strengths.append("Can solve Hard-level algorithmic problems")
            tally.problem_solving += 15
        elif total > 20 and hard < 3:
            tally.improvements.append(
                DsaImprovement(
                    topic="Hard Problems",
                    reason=(
                        f"Only {hard} hard problems solved. Attempt more for "
                        "top-tier company interviews."
                    ),
                    priority="high",
                )
            )

    def _score_codeforces(self, tally: _Tally, codeforces: PlatformSnapshot) -> None:
        rating = codeforces.stat_int("rating")
        if rating >= 1600:
            tally.problem_solving += 40
            tally.strengths.append(f"Expert competitive programmer (CF Rating: {rating})")
        elif rating >= 1200:
            tally.problem_solving += 25
            tally.strengths.append(f"Intermediate competitive programmer (CF: {rating})")
        elif rating > 0:
            tally.problem_solving += 10

        if codeforces.stat_int("contestsParticipated") >= 20:
            tally.consistency += 20

    def _score_gfg(self, tally: _Tally, gfg: PlatformSnapshot) -> None:
        total = gfg.stat_int("totalSolved")
        if total >= 100:
            tally.problem_solving += 20
            tally.strengths.append(f"Strong GFG practice: {total} problems solved")
        elif total >= 30:
            tally.problem_solving += 10

        score = gfg.stat_int("score")
        if score >= 500:
            tally.strengths.append(f"High GFG coding score: {score}")
