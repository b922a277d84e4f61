"""Shared test fixtures for the Dev Radar backend."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr

from app.config import Environment, Settings
from app.main import create_app
from services.models import PlatformSnapshot, TagCount


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings with safe defaults."""
    return Settings(
        environment=Environment.TESTING,
        debug=True,
        github_token=SecretStr("ghp_test_token_fake_value"),
        cors_origins=["http://localhost:3000"],
        http_timeout=5.0,
    )


@pytest.fixture
def anonymous_settings() -> Settings:
    """Settings without a GitHub token."""
    return Settings(environment=Environment.TESTING)


@pytest.fixture
async def app(test_settings):
    """Create a test application instance."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator:
    """Provide an async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def github_snapshot() -> PlatformSnapshot:
    """A well-populated GitHub snapshot."""
    return PlatformSnapshot(
        profile={"name": "Test User", "followers": 15, "public_repos": 12},
        stats={
            "totalRepos": 12,
            "totalCommits": 40,
            "topLanguages": ["Go", "Rust", "Python"],
            "recentActivity": 25,
        },
    )


@pytest.fixture
def leetcode_snapshot() -> PlatformSnapshot:
    """A LeetCode snapshot with a real tag breakdown."""
    return PlatformSnapshot(
        stats={
            "totalSolved": 250,
            "easySolved": 120,
            "mediumSolved": 115,
            "hardSolved": 15,
        },
        tags=[TagCount(tag_name="dynamic programming", problems_solved=20)],
        profile={"username": "testuser"},
    )
