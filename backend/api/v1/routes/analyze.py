"""Profile analysis endpoint.

POST /api/v1/public/analyze - Aggregate linked platforms and score them
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.dependencies import get_aggregator, get_scoring_engine
from app.exceptions import ValidationError
from app.logging_config import get_logger
from services.aggregator import PlatformAggregator
from services.models import PLATFORM_KEYS
from services.scoring_engine import ScoringEngine

logger = get_logger(__name__)
router = APIRouter()

MAX_LINK_LENGTH = 300


class AnalyzeRequest(BaseModel):
    """Profile links to aggregate, keyed by platform."""

    profiles: dict[str, str | None] = Field(default_factory=dict)

    @field_validator("profiles")
    @classmethod
    def validate_links(cls, v: dict[str, str | None]) -> dict[str, str | None]:
        for value in v.values():
            if value and len(value) > MAX_LINK_LENGTH:
                raise ValueError(f"profile links must be at most {MAX_LINK_LENGTH} characters")
        return v


class AnalyzeResponse(BaseModel):
    """Aggregated platform data and the derived skill analysis."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    platform_data: dict[str, Any]
    outcomes: dict[str, str]
    skill_analysis: dict[str, Any]


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_profiles(
    request: AnalyzeRequest,
    aggregator: PlatformAggregator = Depends(get_aggregator),
    engine: ScoringEngine = Depends(get_scoring_engine),
) -> AnalyzeResponse:
    """Fetch every linked platform concurrently and score the result.

    Unreachable platforms are reported as null in ``platformData`` and
    ``failed`` in ``outcomes``; the analysis uses whatever succeeded.
    """
    unknown = sorted(set(request.profiles) - set(PLATFORM_KEYS))
    if unknown:
        raise ValidationError(
            "Unsupported platform keys",
            details={"unsupported": unknown, "supported": list(PLATFORM_KEYS)},
        )

    result = await aggregator.aggregate(request.profiles)
    analysis = engine.analyze(result.platform_data)

    logger.info(
        "profiles_analyzed",
        platforms=len(result.platform_data),
        overall_score=analysis.overall_score,
    )
    return AnalyzeResponse(
        platform_data={
            key: snapshot.model_dump(by_alias=True) if snapshot is not None else None
            for key, snapshot in result.platform_data.items()
        },
        outcomes={key: status.value for key, status in result.outcomes.items()},
        skill_analysis=analysis.model_dump(by_alias=True),
    )
