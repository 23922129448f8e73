"""
Trailing twelve months (TTM) API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Query

from api.schemas import (
    QuarterlyRequest,
    TTMCalculationResponse,
    TTMDataOut,
    TTMGrowthOut,
    TTMSeriesResponse,
    TTMTrendOut,
    TTMValidationResponse,
)
from config.logging_config import get_logger
from config.settings import settings
from engine.ttm import analyze_ttm_trends, create_ttm_data_series
from quality.ttm_checks import validate_ttm_data

logger = get_logger(__name__)

router = APIRouter()


@router.post("/series", response_model=TTMSeriesResponse)
async def get_ttm_series(
    request: QuarterlyRequest,
    periods: Optional[int] = Query(None, ge=1, le=settings.max_ttm_periods),
):
    """
    Build a rolling TTM series, most recent window first.

    Each window carries margins and ratios; growth vs the prior TTM is
    included when 8 quarters are available from the window's start.
    """
    quarters = request.to_engine()
    series = create_ttm_data_series(quarters, periods or settings.default_ttm_periods)

    return TTMSeriesResponse(
        periods=[TTMDataOut.model_validate(window) for window in series],
    )


@router.post("/analyze", response_model=TTMCalculationResponse)
async def analyze_ttm(request: QuarterlyRequest):
    """Current vs previous TTM with growth and trend direction."""
    result = analyze_ttm_trends(request.to_engine())

    return TTMCalculationResponse(
        current=TTMDataOut.model_validate(result.current) if result.current else None,
        previous=TTMDataOut.model_validate(result.previous) if result.previous else None,
        growth=TTMGrowthOut.model_validate(result.growth),
        trend=TTMTrendOut.model_validate(result.trend),
    )


@router.post("/validate", response_model=TTMValidationResponse)
async def validate_ttm(request: QuarterlyRequest):
    """Data quality report for quarterly TTM input."""
    validation = validate_ttm_data(request.to_engine())

    return TTMValidationResponse(
        is_valid=validation.is_valid,
        warnings=validation.warnings,
        data_completeness=validation.data_completeness,
    )
