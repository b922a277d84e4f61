"""Activity insights endpoint.

POST /api/v1/public/insights - Rule-based coaching notes for recent activity
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.dependencies import get_insight_generator
from app.logging_config import get_logger
from services.insight_generator import InsightGenerator
from services.models import ActivityRecord

logger = get_logger(__name__)
router = APIRouter()

# Only the most recent activities are summarized.
INSIGHT_WINDOW = 10


class InsightsRequest(BaseModel):
    activities: list[ActivityRecord] = Field(default_factory=list, max_length=500)


class InsightsResponse(BaseModel):
    insight: str


@router.post("/insights", response_model=InsightsResponse)
async def generate_insights(
    request: InsightsRequest,
    generator: InsightGenerator = Depends(get_insight_generator),
) -> InsightsResponse:
    """Summarize the first activities of the feed into insight text."""
    insight = generator.generate(request.activities[:INSIGHT_WINDOW])
    return InsightsResponse(insight=insight)
