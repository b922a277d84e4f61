"""Platform Adapter Base Class.

Every supported coding platform is served by one PlatformAdapter subclass.
Adapters resolve a handle, call the platform's public API and normalize the
response into a PlatformSnapshot.

Adapters never raise: upstream failures are logged and reported as None,
which scoring treats as "platform not connected".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Optional

import httpx

from app.config import Settings, get_settings
from app.exceptions import DevRadarError, PlatformAPIError, PlatformUserNotFoundError
from app.logging_config import get_logger
from app.metrics import PLATFORM_API_CALLS, PLATFORM_API_DURATION, PLATFORM_FETCH_OUTCOMES
from services.handles import extract_handle
from services.models import MAX_TAGS, FetchStatus, PlatformSnapshot, TagCount

logger = get_logger(__name__)


class PlatformAdapter(ABC):
    """Abstract base class for all platform adapters."""

    platform: str

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    async def fetch(self, profile_url: str | None) -> PlatformSnapshot | None:
        """Fetch and normalize one user's data from this platform.

        Args:
            profile_url: Profile URL or bare handle as entered by the user

        Returns:
            PlatformSnapshot, or None if there is no handle or the
            platform could not be reached
        """
        handle = extract_handle(profile_url, self.platform)
        if not handle:
            return None

        try:
            snapshot = await self.collect(handle)
        except DevRadarError as exc:
            logger.warning(
                "platform_fetch_failed",
                platform=self.platform,
                code=exc.code,
                error=exc.message,
            )
            snapshot = self.on_failure(handle, exc)
        except Exception:
            logger.exception("platform_fetch_unexpected_error", platform=self.platform)
            snapshot = None

        outcome = self.outcome_of(snapshot)
        PLATFORM_FETCH_OUTCOMES.labels(platform=self.platform, outcome=outcome.value).inc()
        return snapshot

    @abstractmethod
    async def collect(self, handle: str) -> PlatformSnapshot | None:
        """Fetch raw platform data for a handle and normalize it.

        May raise PlatformAPIError / PlatformUserNotFoundError; fetch()
        converts them via on_failure().
        """
        ...

    def on_failure(self, handle: str, exc: DevRadarError) -> PlatformSnapshot | None:
        """Snapshot to report when collect() failed. Default: not connected."""
        return None

    @staticmethod
    def outcome_of(snapshot: PlatformSnapshot | None) -> FetchStatus:
        if snapshot is None:
            return FetchStatus.FAILED
        if snapshot.is_stub:
            return FetchStatus.STUB
        return FetchStatus.SUCCESS

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def _get_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("GET", url, params=params)

    async def _post_json(self, url: str, payload: dict[str, Any]) -> Any:
        return await self._request("POST", url, json=payload)

    async def _get_optional(
        self,
        url: str,
        default: Any,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """GET a secondary resource, falling back to ``default`` on failure."""
        try:
            return await self._get_json(url, params=params)
        except DevRadarError as exc:
            logger.info(
                "platform_secondary_fetch_skipped",
                platform=self.platform,
                endpoint=url.rsplit("/", 1)[-1],
                code=exc.code,
            )
            return default

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Make one read-only request to the platform API.

        404 raises PlatformUserNotFoundError; any other non-2xx status,
        transport error or undecodable body raises PlatformAPIError.
        """
        async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
            with PLATFORM_API_DURATION.labels(platform=self.platform).time():
                try:
                    response = await client.request(
                        method,
                        url,
                        headers=self._headers(),
                        params=params,
                        json=json,
                    )
                except httpx.RequestError as exc:
                    PLATFORM_API_CALLS.labels(platform=self.platform, status="error").inc()
                    raise PlatformAPIError(
                        self.platform,
                        f"{self.platform} API connection failed",
                        reason="transport",
                    ) from exc

        status = response.status_code
        PLATFORM_API_CALLS.labels(platform=self.platform, status=str(status)).inc()

        if status == 404:
            raise PlatformUserNotFoundError(self.platform)
        if not response.is_success:
            raise PlatformAPIError(
                self.platform,
                f"{self.platform} API returned status {status}",
                status_code=status,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise PlatformAPIError(
                self.platform,
                f"{self.platform} API returned malformed JSON",
                reason="payload",
            ) from exc


def top_tags(
    counts: dict[str, int] | Iterable[tuple[str, int]], limit: int = MAX_TAGS
) -> list[TagCount]:
    """Drop empty tags, sort descending by count and keep the top ``limit``.

    Accepts a mapping or (name, count) pairs; pairs may repeat a name.
    """
    pairs = counts.items() if isinstance(counts, dict) else counts
    ranked = sorted(
        ((name, count) for name, count in pairs if count > 0),
        key=lambda x: x[1],
        reverse=True,
    )
    return [TagCount(tag_name=name, problems_solved=count) for name, count in ranked[:limit]]


def stub_snapshot(stats: dict[str, Any], username: str, message: str) -> PlatformSnapshot:
    """Zeroed snapshot for platforms without a usable public API."""
    return PlatformSnapshot(
        stats=dict(stats),
        profile={"username": username, "message": message},
    )
