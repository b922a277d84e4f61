"""Tests for the multi-platform aggregator."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from services.aggregator import PlatformAggregator
from services.models import FetchStatus, PlatformSnapshot
from services.platforms.base import PlatformAdapter


class _SlowAdapter(PlatformAdapter):
    """Adapter that records overlap with its siblings."""

    platform = "slow"
    running = 0
    peak = 0

    def __init__(self, settings, delay: float) -> None:
        super().__init__(settings)
        self.delay = delay

    async def collect(self, handle: str) -> PlatformSnapshot | None:
        cls = type(self)
        cls.running += 1
        cls.peak = max(cls.peak, cls.running)
        await asyncio.sleep(self.delay)
        cls.running -= 1
        return PlatformSnapshot(stats={"handle": handle})


def _mock_adapter(result=None, side_effect=None) -> AsyncMock:
    adapter = AsyncMock(spec=PlatformAdapter)
    adapter.fetch.return_value = result
    if side_effect is not None:
        adapter.fetch.side_effect = side_effect
    return adapter


@pytest.mark.asyncio
class TestPlatformAggregator:
    """Test suite for PlatformAggregator."""

    async def test_empty_links_give_empty_dataset(self, test_settings):
        aggregator = PlatformAggregator(settings=test_settings)
        result = await aggregator.aggregate({})
        assert result.platform_data == {}
        assert result.outcomes == {}

    async def test_blank_links_are_not_attempted(self):
        github = _mock_adapter(PlatformSnapshot())
        aggregator = PlatformAggregator(adapters={"github": github})

        data = await aggregator.fetch_all({"github": "  ", "leetcode": None})

        assert data == {}
        github.fetch.assert_not_called()

    async def test_unknown_platform_skipped(self):
        github = _mock_adapter(PlatformSnapshot())
        aggregator = PlatformAggregator(adapters={"github": github})

        data = await aggregator.fetch_all({"github": "octo", "myspace": "tom"})

        assert list(data) == ["github"]

    async def test_failed_platform_present_as_none(self):
        snapshot = PlatformSnapshot(stats={"totalSolved": 10})
        adapters = {
            "github": _mock_adapter(None),
            "leetcode": _mock_adapter(snapshot),
        }
        aggregator = PlatformAggregator(adapters=adapters)

        result = await aggregator.aggregate({"github": "octo", "leetcode": "alice"})

        assert result.platform_data == {"github": None, "leetcode": snapshot}
        assert result.outcomes == {
            "github": FetchStatus.FAILED,
            "leetcode": FetchStatus.SUCCESS,
        }

    async def test_raising_adapter_does_not_abort_others(self):
        snapshot = PlatformSnapshot(stats={"rating": 1500})
        adapters = {
            "codeforces": _mock_adapter(side_effect=RuntimeError("boom")),
            "gfg": _mock_adapter(snapshot),
        }
        aggregator = PlatformAggregator(adapters=adapters)

        result = await aggregator.aggregate({"codeforces": "x", "gfg": "y"})

        assert result.platform_data["codeforces"] is None
        assert result.platform_data["gfg"] is snapshot
        assert result.outcomes["codeforces"] == FetchStatus.FAILED

    async def test_stub_outcome(self):
        stub = PlatformSnapshot(profile={"username": "d", "message": "Add stats manually"})
        aggregator = PlatformAggregator(adapters={"codechef": _mock_adapter(stub)})

        result = await aggregator.aggregate({"codechef": "d"})

        assert result.outcomes["codechef"] == FetchStatus.STUB

    async def test_links_passed_through_to_adapters(self):
        github = _mock_adapter(PlatformSnapshot())
        aggregator = PlatformAggregator(adapters={"github": github})

        await aggregator.aggregate({"github": "https://github.com/octo"})

        github.fetch.assert_awaited_once_with("https://github.com/octo")

    async def test_adapters_run_concurrently(self, test_settings):
        _SlowAdapter.running = 0
        _SlowAdapter.peak = 0
        adapters = {
            "github": _SlowAdapter(test_settings, 0.05),
            "leetcode": _SlowAdapter(test_settings, 0.05),
            "gfg": _SlowAdapter(test_settings, 0.05),
        }
        aggregator = PlatformAggregator(adapters=adapters)

        data = await aggregator.fetch_all({"github": "a", "leetcode": "b", "gfg": "c"})

        assert _SlowAdapter.peak == 3
        assert {k: v.stats["handle"] for k, v in data.items()} == {
            "github": "a",
            "leetcode": "b",
            "gfg": "c",
        }

    async def test_default_adapters_cover_all_platforms(self, test_settings):
        aggregator = PlatformAggregator(settings=test_settings)
        assert set(aggregator.adapters) == {
            "github", "leetcode", "codeforces", "codechef", "hackerrank", "gfg",
        }
