"""Multi-platform aggregation.

Runs the adapter of every linked platform concurrently and collects
whatever snapshots come back into one platform data set.

Platforms with an empty link are absent from the result; platforms that
were attempted but could not be reached are present with value None.
No timeout is imposed here: wrap the call in ``asyncio.timeout()`` if a
bounded latency is needed.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping

from app.config import Settings
from app.logging_config import get_logger
from app.metrics import AGGREGATION_DURATION
from services.models import AggregationResult, FetchStatus, PlatformDataSet, PlatformSnapshot
from services.platforms.base import PlatformAdapter
from services.platforms.registry import build_adapters

logger = get_logger(__name__)


class PlatformAggregator:
    """Concurrent fan-out over platform adapters."""

    def __init__(
        self,
        adapters: Mapping[str, PlatformAdapter] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.adapters = dict(adapters) if adapters is not None else build_adapters(settings)

    async def fetch_all(self, links: Mapping[str, str | None]) -> PlatformDataSet:
        """Fetch every linked platform and return the platform data set."""
        result = await self.aggregate(links)
        return result.platform_data

    async def aggregate(self, links: Mapping[str, str | None]) -> AggregationResult:
        """Fetch every linked platform, keeping per-platform outcomes.

        Args:
            links: Platform key -> profile URL or bare handle

        Returns:
            AggregationResult with the data set and a FetchStatus for
            every attempted platform
        """
        targets: list[tuple[str, str]] = []
        for key, url in links.items():
            if not url or not url.strip():
                continue
            if key not in self.adapters:
                logger.warning("unknown_platform_skipped", platform=key)
                continue
            targets.append((key, url))

        start = time.perf_counter()
        with AGGREGATION_DURATION.time():
            settled = await asyncio.gather(
                *(self.adapters[key].fetch(url) for key, url in targets),
                return_exceptions=True,
            )

        platform_data: dict[str, PlatformSnapshot | None] = {}
        outcomes: dict[str, FetchStatus] = {}
        for (key, _), snapshot in zip(targets, settled):
            if isinstance(snapshot, BaseException):
                logger.error(
                    "platform_adapter_raised",
                    platform=key,
                    error=repr(snapshot),
                )
                snapshot = None
            platform_data[key] = snapshot
            outcomes[key] = PlatformAdapter.outcome_of(snapshot)

        logger.info(
            "platforms_aggregated",
            attempted=len(targets),
            succeeded=sum(1 for o in outcomes.values() if o == FetchStatus.SUCCESS),
            failed=sum(1 for o in outcomes.values() if o == FetchStatus.FAILED),
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return AggregationResult(platform_data=platform_data, outcomes=outcomes)
