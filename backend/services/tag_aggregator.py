"""Unified skill-tag vector across platforms.

Real tag breakdowns (LeetCode topics, Codeforces problem tags) are merged
case-insensitively. Judges that only report a solved total get a fixed
estimated topic split instead.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType

from services.models import (
    PLATFORM_KEYS,
    SOLVED_STAT_KEYS,
    SOURCE_HOST,
    PlatformSnapshot,
    TagVector,
)

# Share of a bare solved total attributed to each topic.
ESTIMATED_TOPIC_SHARE = MappingProxyType(
    {
        "arrays": 0.2,
        "string": 0.1,
        "trees": 0.1,
        "dynamic programming": 0.08,
        "sorting": 0.08,
        "math": 0.07,
    }
)

LANGUAGE_WEIGHT = 15


def _ordered(dataset: Mapping[str, PlatformSnapshot | None]) -> list[tuple[str, PlatformSnapshot]]:
    """Connected snapshots in canonical platform order."""
    known = [k for k in PLATFORM_KEYS if k in dataset]
    extra = sorted(k for k in dataset if k not in PLATFORM_KEYS)
    return [(k, dataset[k]) for k in known + extra if dataset[k] is not None]


def merge_tags(dataset: Mapping[str, PlatformSnapshot | None]) -> TagVector:
    """Merge per-platform topic counts into one lower-cased tag vector."""
    merged: TagVector = {}
    for key, snapshot in _ordered(dataset):
        if snapshot.tags:
            for tag in snapshot.tags:
                name = tag.tag_name.strip().lower()
                if name:
                    merged[name] = merged.get(name, 0) + max(tag.problems_solved, 0)
            continue

        if key == SOURCE_HOST or key not in SOLVED_STAT_KEYS:
            continue
        total = snapshot.stat_int(SOLVED_STAT_KEYS[key])
        if total > 0:
            for topic, share in ESTIMATED_TOPIC_SHARE.items():
                merged[topic] = merged.get(topic, 0) + math.floor(total * share)
    return merged


def build_skill_distribution(
    dataset: Mapping[str, PlatformSnapshot | None], tags: TagVector
) -> dict[str, int]:
    """Tag vector plus source-host programming languages at a fixed weight."""
    distribution = dict(tags)
    github = dataset.get(SOURCE_HOST)
    if github is not None:
        for lang in github.stats.get("topLanguages") or []:
            distribution[lang] = distribution.get(lang, 0) + LANGUAGE_WEIGHT
    return distribution
