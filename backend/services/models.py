"""Shared data models for platform snapshots and skill analysis.

Attributes are snake_case in Python; the JSON contract consumed by the
dashboard and persistence layer uses camelCase aliases, so serialize with
``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Canonical platform order. Merging and scoring iterate in this order so
# results never depend on which adapter finished first.
PLATFORM_KEYS: tuple[str, ...] = (
    "github",
    "leetcode",
    "codeforces",
    "codechef",
    "hackerrank",
    "gfg",
)

SOURCE_HOST = "github"

PLATFORM_LABELS = MappingProxyType(
    {
        "github": "GitHub",
        "leetcode": "LeetCode",
        "codeforces": "Codeforces",
        "codechef": "CodeChef",
        "hackerrank": "HackerRank",
        "gfg": "GeeksForGeeks",
    }
)

# Stat carrying the solved-problem total on each judge that reports one.
SOLVED_STAT_KEYS = MappingProxyType(
    {
        "leetcode": "totalSolved",
        "codeforces": "problemsSolved",
        "gfg": "totalSolved",
        "codechef": "problemsSolved",
    }
)

MAX_TAGS = 15


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FetchStatus(str, Enum):
    """Outcome of one platform adapter run."""

    SUCCESS = "success"
    STUB = "stub"
    FAILED = "failed"


class TagCount(_CamelModel):
    """Solved-problem count for one topic tag."""

    tag_name: str
    problems_solved: int = 0


class PlatformSnapshot(_CamelModel):
    """Normalized statistics for one user on one platform."""

    stats: dict[str, Any] = Field(default_factory=dict)
    tags: list[TagCount] = Field(default_factory=list)
    profile: dict[str, Any] = Field(default_factory=dict)
    repos: list[dict[str, Any]] = Field(default_factory=list)
    events: list[dict[str, Any]] = Field(default_factory=list)
    rating_history: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def is_stub(self) -> bool:
        """Whether this snapshot is a placeholder asking for manual entry."""
        return bool(self.profile.get("message"))

    def stat_int(self, key: str) -> int:
        """Read a numeric stat, coercing absent or malformed values to 0."""
        return coerce_int(self.stats.get(key))


PlatformDataSet = dict[str, PlatformSnapshot | None]
TagVector = dict[str, int]


class AggregationResult(_CamelModel):
    """Platform data set plus the per-platform fetch outcome."""

    platform_data: dict[str, PlatformSnapshot | None] = Field(default_factory=dict)
    outcomes: dict[str, FetchStatus] = Field(default_factory=dict)


class CompanyMatch(_CamelModel):
    model_config = ConfigDict(frozen=True)

    company: str
    score: int = Field(ge=0, le=100)
    matched_topics: list[str] = Field(default_factory=list)


class DsaImprovement(_CamelModel):
    model_config = ConfigDict(frozen=True)

    topic: str
    reason: str
    priority: Literal["high", "medium"]


class SkillAnalysis(_CamelModel):
    """Complete skill profile derived from a platform data set."""

    model_config = ConfigDict(frozen=True)

    overall_score: int = 0
    problem_solving_score: int = 0
    project_building_score: int = 0
    consistency_score: int = 0
    collaboration_score: int = 0
    total_problems_solved: int = 0
    platform_breakdown: dict[str, int] = Field(default_factory=dict)
    skill_distribution: dict[str, int] = Field(default_factory=dict)
    dsa_skills: dict[str, int] = Field(default_factory=dict)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    company_matches: list[CompanyMatch] = Field(default_factory=list)
    dsa_improvements: list[DsaImprovement] = Field(default_factory=list)


class ActivityRecord(_CamelModel):
    """Timestamped activity item consumed by the insight generator."""

    type: str = "Unknown"
    repo_name: str | None = None
    timestamp: datetime | None = None
    platform: str = "GitHub"


def coerce_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
