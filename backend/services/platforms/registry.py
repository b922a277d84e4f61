"""Platform adapter registry.

Maps each supported platform key to its adapter class.
"""

from __future__ import annotations

from types import MappingProxyType

from app.config import Settings
from services.platforms.base import PlatformAdapter
from services.platforms.codeforces import CodeforcesAdapter
from services.platforms.gfg import GFGAdapter
from services.platforms.github import GitHubAdapter
from services.platforms.leetcode import LeetCodeAdapter
from services.platforms.stubs import CodeChefAdapter, HackerRankAdapter

ADAPTERS = MappingProxyType(
    {
        "github": GitHubAdapter,
        "leetcode": LeetCodeAdapter,
        "codeforces": CodeforcesAdapter,
        "codechef": CodeChefAdapter,
        "hackerrank": HackerRankAdapter,
        "gfg": GFGAdapter,
    }
)


def build_adapters(settings: Settings | None = None) -> dict[str, PlatformAdapter]:
    """Instantiate one adapter per supported platform."""
    return {key: adapter_cls(settings) for key, adapter_cls in ADAPTERS.items()}
