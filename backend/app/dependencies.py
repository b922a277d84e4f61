"""Application-level dependencies.

Provides the aggregation, scoring and insight services as FastAPI
dependencies so route handlers can be tested with overrides.
"""

from __future__ import annotations

from fastapi import Depends

from app.config import Settings, get_settings
from services.aggregator import PlatformAggregator
from services.insight_generator import InsightGenerator
from services.scoring_engine import ScoringEngine


def get_aggregator(settings: Settings = Depends(get_settings)) -> PlatformAggregator:
    """Fresh aggregator per request; adapters hold no state between calls."""
    return PlatformAggregator(settings=settings)


def get_scoring_engine() -> ScoringEngine:
    return ScoringEngine()


def get_insight_generator() -> InsightGenerator:
    return InsightGenerator()
