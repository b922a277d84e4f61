"""GitHub Platform Adapter.

Fetches the public profile, recently updated repositories and the public
event feed from the GitHub REST API (v3). A configured token is sent as a
bearer credential to lift the anonymous rate limit.

The event feed is capped by page size, so ``recentActivity`` counts the
fetched events rather than a true day window.
"""

from __future__ import annotations

from typing import Any

from app.logging_config import get_logger
from services.models import PlatformSnapshot
from services.platforms.base import PlatformAdapter

logger = get_logger(__name__)

TOP_LANGUAGES = 5
REPOS_IN_SNAPSHOT = 10


class GitHubAdapter(PlatformAdapter):
    """Adapter for github.com profiles."""

    platform = "github"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.settings.github_token:
            headers["Authorization"] = (
                f"Bearer {self.settings.github_token.get_secret_value()}"
            )
        return headers

    async def collect(self, handle: str) -> PlatformSnapshot | None:
        base = self.settings.github_api_base
        user = await self._get_json(f"{base}/users/{handle}")
        if not isinstance(user, dict):
            return None

        repos = await self._get_optional(
            f"{base}/users/{handle}/repos",
            default=[],
            params={"sort": "updated", "per_page": self.settings.github_repos_per_page},
        )
        events = await self._get_optional(
            f"{base}/users/{handle}/events/public",
            default=[],
            params={"per_page": self.settings.github_events_per_page},
        )
        if not isinstance(repos, list):
            repos = []
        if not isinstance(events, list):
            events = []

        logger.info(
            "github_profile_fetched",
            repo_count=len(repos),
            event_count=len(events),
        )

        return PlatformSnapshot(
            profile={
                "avatar_url": user.get("avatar_url"),
                "html_url": user.get("html_url"),
                "name": user.get("name") or handle,
                "bio": user.get("bio"),
                "public_repos": user.get("public_repos") or 0,
                "followers": user.get("followers") or 0,
                "following": user.get("following") or 0,
            },
            stats={
                "totalRepos": user.get("public_repos") or 0,
                "totalCommits": count_push_commits(events),
                "topLanguages": top_languages(repos),
                "recentActivity": len(events),
            },
            repos=[_normalize_repo(r) for r in repos[:REPOS_IN_SNAPSHOT]],
            events=[_normalize_event(e) for e in events],
        )


def count_push_commits(events: list[dict[str, Any]]) -> int:
    """Count commits carried by PushEvents in an event feed."""
    return sum(
        len((e.get("payload") or {}).get("commits") or [])
        for e in events
        if e.get("type") == "PushEvent"
    )


def top_languages(repos: list[dict[str, Any]], limit: int = TOP_LANGUAGES) -> list[str]:
    """Primary languages ranked by number of repositories using them."""
    lang_counts: dict[str, int] = {}
    for repo in repos:
        lang = repo.get("language")
        if lang:
            lang_counts[lang] = lang_counts.get(lang, 0) + 1
    ranked = sorted(lang_counts.items(), key=lambda x: x[1], reverse=True)
    return [lang for lang, _ in ranked[:limit]]


def _normalize_repo(repo: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": repo.get("name", ""),
        "description": repo.get("description"),
        "language": repo.get("language"),
        "stars": repo.get("stargazers_count") or 0,
        "forks": repo.get("forks_count") or 0,
        "url": repo.get("html_url"),
        "updatedAt": repo.get("updated_at"),
    }


def _normalize_event(event: dict[str, Any]) -> dict[str, Any]:
    payload = event.get("payload") or {}
    commits = payload.get("commits") or []
    message = (commits[0].get("message") if commits else None) or payload.get("action") or ""
    return {
        "id": event.get("id"),
        "type": event.get("type"),
        "repo": (event.get("repo") or {}).get("name"),
        "message": message,
        "createdAt": event.get("created_at"),
    }
