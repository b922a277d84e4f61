"""DSA Topic Classification & Recommendations.

Classifies the merged tag vector against fixed topic tiers, matches the
result against per-company interview topic profiles and turns everything
into improvement items and free-text recommendations.

Judges spell some topics differently ("dp" vs "dynamic programming",
"graph" vs "graphs"). Each spelling is its own entry in the tier and
company tables and is looked up by its raw tag count, so a profile
tagged only "dp" still leaves "dynamic programming" weak.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from services.models import CompanyMatch, DsaImprovement, TagVector

# Only "critical" and "important" drive classification; the other tiers
# are informational.
TOPIC_TIERS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "critical": (
            "dynamic programming", "dp", "arrays", "trees", "graphs", "graph",
            "binary search", "string",
        ),
        "important": (
            "greedy", "linked lists", "sorting", "hash table", "two pointers",
            "bfs and dfs", "dfs and similar", "math", "number theory", "stack",
        ),
        "intermediate": (
            "backtracking", "bit manipulation", "heap", "sliding window", "recursion",
            "divide and conquer", "trie", "segment tree", "union find", "combinatorics",
        ),
        "foundational": (
            "implementation", "brute force", "constructive algorithms",
            "data structures", "sortings", "binary trees",
        ),
    }
)

# (strong at >=, weak below, improvement priority)
TIER_THRESHOLDS: Mapping[str, tuple[int, int, str]] = MappingProxyType(
    {
        "critical": (15, 5, "high"),
        "important": (10, 3, "medium"),
    }
)

# Interview topic profile per company, most important first.
COMPANY_TOPICS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Google": (
            "dynamic programming", "graphs", "binary search", "trees", "greedy",
            "bfs and dfs", "string", "dp", "graph", "dfs and similar",
        ),
        "Amazon": (
            "arrays", "trees", "dynamic programming", "greedy", "linked lists",
            "string", "sorting", "hash table", "two pointers", "dp",
        ),
        "Microsoft": (
            "arrays", "dynamic programming", "trees", "graphs", "string",
            "binary search", "linked lists", "dp", "math", "sorting",
        ),
        "Meta (Facebook)": (
            "arrays", "string", "dynamic programming", "graphs", "binary search",
            "trees", "dp", "hash table", "bfs and dfs", "two pointers",
        ),
        "Apple": (
            "arrays", "trees", "linked lists", "dynamic programming", "string",
            "sorting", "dp", "binary search",
        ),
        "Netflix": (
            "system design", "dynamic programming", "graphs", "dp", "greedy",
            "trees", "string",
        ),
        "Adobe": (
            "dynamic programming", "arrays", "trees", "greedy", "sorting",
            "string", "dp", "math",
        ),
        "Flipkart": (
            "arrays", "dynamic programming", "greedy", "trees", "graphs", "dp",
            "sorting", "string",
        ),
        "Walmart": (
            "arrays", "trees", "dynamic programming", "string", "sorting", "dp", "greedy",
        ),
        "Goldman Sachs": (
            "dynamic programming", "math", "arrays", "number theory", "dp",
            "greedy", "sorting",
        ),
        "Morgan Stanley": (
            "math", "dynamic programming", "arrays", "string", "dp", "number theory",
        ),
        "Uber": (
            "graphs", "dynamic programming", "arrays", "string", "dp", "greedy",
            "binary search", "bfs and dfs",
        ),
        "Atlassian": ("arrays", "dynamic programming", "string", "design", "dp", "greedy"),
        "Razorpay": ("arrays", "dynamic programming", "greedy", "string", "dp", "trees"),
        "PhonePe": ("arrays", "dynamic programming", "trees", "string", "dp", "sorting"),
    }
)

COMPANY_MATCH_COUNT = 8
COMPANY_MIN_SCORE = 30
RAW_MATCH_COUNT = 8
MAX_STRENGTH_TOPICS = 5
MAX_WEAKNESS_TOPICS = 4
MAX_IMPROVEMENTS = 6

# Weak critical topic spellings -> targeted recommendation
TOPIC_RECOMMENDATIONS: tuple[tuple[frozenset[str], str], ...] = (
    (
        frozenset({"dynamic programming", "dp"}),
        "🎯 Focus on Dynamic Programming: it appears in 40%+ of FAANG interviews. "
        "Start with Fibonacci, Knapsack, LIS and Coin Change.",
    ),
    (
        frozenset({"graphs", "graph"}),
        "🎯 Strengthen Graph skills: practice BFS, DFS, Dijkstra and Topological Sort. "
        "Essential for Google, Uber and Meta.",
    ),
    (
        frozenset({"trees"}),
        "🎯 Practice Tree problems: Binary Trees, BSTs and traversals are asked "
        "in almost every tech interview.",
    ),
)

FALLBACK_RECOMMENDATION = (
    "🌟 Great progress! Keep solving problems and building projects to stay sharp."
)


@dataclass(frozen=True)
class TopicStanding:
    topic: str
    count: int
    tier: str


@dataclass
class TopicClassification:
    strong: list[TopicStanding] = field(default_factory=list)
    weak: list[TopicStanding] = field(default_factory=list)
    improvements: list[DsaImprovement] = field(default_factory=list)

    @property
    def strong_names(self) -> set[str]:
        return {t.topic for t in self.strong}

    @property
    def weak_names(self) -> set[str]:
        return {t.topic for t in self.weak}

    def strength_text(self) -> str | None:
        if not self.strong:
            return None
        names = [t.topic for t in self.strong[:MAX_STRENGTH_TOPICS]]
        return "Strong DSA topics: " + ", ".join(names)

    def weakness_text(self) -> str | None:
        critical = [t.topic for t in self.weak if t.tier == "critical"]
        if not critical:
            return None
        return "Weak in critical DSA: " + ", ".join(critical[:MAX_WEAKNESS_TOPICS])


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (not banker's rounding)."""
    return math.floor(value + 0.5)


def topic_count(tags: TagVector, name: str) -> int:
    """Raw solved count for one exact topic spelling."""
    return tags.get(name, 0)


def _display(topic: str) -> str:
    return topic[:1].upper() + topic[1:]


def classify_topics(tags: TagVector) -> TopicClassification:
    """Split critical and important topics into strong and weak."""
    result = TopicClassification()
    for tier, (strong_at, weak_below, priority) in TIER_THRESHOLDS.items():
        for topic in TOPIC_TIERS[tier]:
            count = topic_count(tags, topic)
            standing = TopicStanding(topic, count, tier)
            if count >= strong_at:
                result.strong.append(standing)
            elif count < weak_below:
                result.weak.append(standing)
                result.improvements.append(
                    DsaImprovement(
                        topic=_display(topic),
                        reason=_weak_reason(tier, count),
                        priority=priority,
                    )
                )
    return result


def _weak_reason(tier: str, count: int) -> str:
    if tier == "critical":
        if count == 0:
            return "No problems solved in this critical topic."
        return f"Only {count} problems solved, needs significant improvement."
    return (
        f"Underexplored topic ({count} solved). "
        "Important for well-rounded DSA knowledge."
    )


def match_companies(tags: TagVector, strong_topics: set[str]) -> list[CompanyMatch]:
    """Rank companies by weighted overlap with the user's topic profile.

    Earlier topics in a company's list weigh more (``len - index``). A
    topic matches if it is strong or has at least RAW_MATCH_COUNT solved.
    """
    matches: list[CompanyMatch] = []
    for company, topics in COMPANY_TOPICS.items():
        total_weight = 0
        matched_weight = 0
        matched: list[str] = []
        for idx, topic in enumerate(topics):
            weight = len(topics) - idx
            total_weight += weight
            if topic in strong_topics or topic_count(tags, topic) >= RAW_MATCH_COUNT:
                matched_weight += weight
                matched.append(topic)
        score = round_half_up(100 * matched_weight / total_weight) if total_weight else 0
        if score >= COMPANY_MIN_SCORE:
            matches.append(
                CompanyMatch(company=company, score=score, matched_topics=matched)
            )

    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[:COMPANY_MATCH_COUNT]


def build_recommendations(
    *,
    problem_solving: int,
    project_building: int,
    consistency: int,
    weak_topics: set[str],
    company_matches: list[CompanyMatch],
    total_solved: int,
    initial: Iterable[str] = (),
) -> list[str]:
    """Run the ordered recommendation rules.

    ``initial`` carries recommendations already produced while scoring;
    the generic encouragement is only added if nothing at all fired.
    """
    recs = list(initial)

    if problem_solving < 20 and project_building > 20:
        recs.append(
            "You build great projects but lack algorithmic skills. Companies like "
            "Google and Amazon heavily test DSA, so invest time in LeetCode and Codeforces."
        )
    if problem_solving > 30 and project_building < 15:
        recs.append(
            "Strong problem-solver but few projects. Build real-world apps to "
            "showcase on your resume."
        )
    if consistency < 20:
        recs.append(
            "Consistency matters! Aim for at least 1 problem + 1 commit daily. "
            "Use streaks to stay motivated."
        )

    for spellings, message in TOPIC_RECOMMENDATIONS:
        if spellings & weak_topics:
            recs.append(message)

    if company_matches:
        top = company_matches[0]
        focus = ", ".join(top.matched_topics[:3])
        recs.append(f"🏢 Best fit: {top.company} ({top.score}% match). Focus on: {focus}.")

    if total_solved < 50:
        recs.append(
            f"📌 You have {total_solved} total problems solved. Target 50+ to clear "
            "basic coding rounds, 150+ for competitive placements."
        )
    elif total_solved < 150:
        recs.append(
            f"📌 {total_solved} problems solved, good start! Push to 150+ and focus on "
            "medium/hard difficulty to crack product companies."
        )
    elif total_solved >= 300:
        recs.append(
            f"🌟 {total_solved} problems solved, impressive! Now focus on contest "
            "performance and system design to reach the next level."
        )

    if not recs:
        recs.append(FALLBACK_RECOMMENDATION)
    return recs


def prioritize_improvements(items: Iterable[DsaImprovement]) -> list[DsaImprovement]:
    """High priority first (stable), capped at MAX_IMPROVEMENTS."""
    ordered = sorted(items, key=lambda i: 0 if i.priority == "high" else 1)
    return ordered[:MAX_IMPROVEMENTS]
