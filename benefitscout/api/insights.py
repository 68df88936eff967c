"""
Advisory Insights Endpoint

Turns a user profile into structured insights via the text generation
service. Every failure is answered with a non-2xx status and a
`{success: false, error, details}` body (see the app's error handlers).
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from benefitscout.errors import GenerationError
from benefitscout.insights import InsightsService, UserProfile
from benefitscout.insights.generator import AdvisoryGenerator
from benefitscout.api.dependencies import get_advisory_generator
from benefitscout.api.models import (
    InsightsErrorResponse, InsightsModel, InsightsResponse, UserProfileRequest,
)


logger = logging.getLogger(__name__)

INSIGHTS_PATH = "/api/ai-insights"

router = APIRouter(prefix="/api", tags=["insights"])


@router.post(
    "/ai-insights",
    response_model=InsightsResponse,
    responses={
        422: {"model": InsightsErrorResponse},
        500: {"model": InsightsErrorResponse},
    },
)
async def generate_insights(
    payload: UserProfileRequest,
    generator: AdvisoryGenerator = Depends(get_advisory_generator)
) -> InsightsResponse:
    """
    Generate advisory insights for a user profile.

    Args:
        payload: Cards, totals, spending categories and recent transactions
        generator: Advisory text generator

    Returns:
        Parsed insights with the generation timestamp

    Raises:
        GenerationError: If generation fails for any reason
    """
    try:
        profile = UserProfile.from_dict(payload.model_dump())
        record = await InsightsService(generator).generate_insights(profile)
    except GenerationError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while generating insights")
        raise GenerationError("Advisory generation failed", str(e)) from e

    return InsightsResponse(
        success=True,
        insights=InsightsModel(**record.to_dict()),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
