"""Tests for the analysis API endpoint."""

from unittest.mock import AsyncMock

import pytest

from app.dependencies import get_aggregator
from services.aggregator import PlatformAggregator
from services.platforms.base import PlatformAdapter


def _mock_adapter(result) -> AsyncMock:
    adapter = AsyncMock(spec=PlatformAdapter)
    adapter.fetch.return_value = result
    return adapter


@pytest.mark.asyncio
class TestAnalyzeEndpoint:
    """Test suite for POST /api/v1/public/analyze."""

    async def test_analyze_success(self, app, client, github_snapshot, leetcode_snapshot):
        adapters = {
            "github": _mock_adapter(github_snapshot),
            "leetcode": _mock_adapter(leetcode_snapshot),
            "codeforces": _mock_adapter(None),
        }
        app.dependency_overrides[get_aggregator] = lambda: PlatformAggregator(adapters=adapters)

        response = await client.post(
            "/api/v1/public/analyze",
            json={
                "profiles": {
                    "github": "https://github.com/testuser",
                    "leetcode": "https://leetcode.com/u/testuser/",
                    "codeforces": "tourist",
                    "gfg": "",
                }
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert set(data["platformData"]) == {"github", "leetcode", "codeforces"}
        assert data["platformData"]["codeforces"] is None
        assert data["platformData"]["leetcode"]["tags"][0] == {
            "tagName": "dynamic programming",
            "problemsSolved": 20,
        }
        assert data["outcomes"] == {
            "github": "success",
            "leetcode": "success",
            "codeforces": "failed",
        }
        analysis = data["skillAnalysis"]
        assert analysis["totalProblemsSolved"] == 250
        assert analysis["platformBreakdown"] == {"LeetCode": 250}
        assert analysis["projectBuildingScore"] == 40
        assert 0 <= analysis["overallScore"] <= 100
        assert "X-Request-ID" in response.headers

    async def test_analyze_no_profiles(self, app, client):
        app.dependency_overrides[get_aggregator] = lambda: PlatformAggregator(adapters={})

        response = await client.post("/api/v1/public/analyze", json={"profiles": {}})

        assert response.status_code == 200
        data = response.json()
        assert data["platformData"] == {}
        assert data["skillAnalysis"]["overallScore"] == 10
        assert len(data["skillAnalysis"]["recommendations"]) == 1

    async def test_analyze_unknown_platform(self, client):
        response = await client.post(
            "/api/v1/public/analyze",
            json={"profiles": {"myspace": "tom"}},
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["unsupported"] == ["myspace"]

    async def test_analyze_link_too_long(self, client):
        response = await client.post(
            "/api/v1/public/analyze",
            json={"profiles": {"github": "x" * 301}},
        )
        assert response.status_code == 422

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["platforms"] == [
            "github", "leetcode", "codeforces", "codechef", "hackerrank", "gfg",
        ]
        assert body["githubAuthenticated"] in (True, False)

    async def test_request_id_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
