"""
Historical trend analysis API endpoints.
"""

from fastapi import APIRouter

from api.schemas import (
    CAGRRequest,
    CAGRResponse,
    ClassificationResponse,
    DataPointOut,
    GrowthPatternOut,
    SeasonalityResponse,
    SeriesRequest,
    TrendAnalysisOut,
    TrendAnalysisRequest,
    TrendAnalysisResponse,
    TrendClassificationOut,
    TrendStrengthOut,
)
from config.logging_config import get_logger
from engine.growth import cagr, volatility
from engine.historical import analyze_historical_trends
from engine.seasonality import quarterly_pattern, seasonal_adjust
from engine.trend import classify_trend, trend_strength

logger = get_logger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=TrendAnalysisResponse)
async def analyze_trends(request: TrendAnalysisRequest):
    """
    Analyze a company's historical trends.

    Returns 1/3/5/10-year CAGR, trend classification, quarterly growth
    pattern and a 0-100 trend score.
    """
    analysis_input = request.to_engine()
    result = analyze_historical_trends(analysis_input)

    company_name = request.company_info.name if request.company_info else None
    logger.info(
        f"Trend analysis for {company_name or 'unnamed company'}: "
        f"{result.trend_direction}/{result.trend_strength}, score {result.trend_score:.1f}"
    )

    return TrendAnalysisResponse(
        company_name=company_name,
        analysis=TrendAnalysisOut.model_validate(result),
    )


@router.post("/classify", response_model=ClassificationResponse)
async def classify_series(request: SeriesRequest):
    """Classify the direction and strength of a single series."""
    series = request.to_engine()

    return ClassificationResponse(
        classification=TrendClassificationOut.model_validate(classify_trend(series)),
        strength_metrics=TrendStrengthOut.model_validate(trend_strength(series)),
        volatility=volatility(series),
    )


@router.post("/seasonality", response_model=SeasonalityResponse)
async def analyze_seasonality(request: SeriesRequest):
    """Quarterly growth pattern and seasonally adjusted series."""
    series = request.to_engine()
    adjustment = seasonal_adjust(series)

    return SeasonalityResponse(
        pattern=GrowthPatternOut.model_validate(quarterly_pattern(series)),
        seasonal_indices=adjustment.seasonal_indices,
        adjusted_data=[DataPointOut.model_validate(p) for p in adjustment.adjusted_data],
    )


@router.post("/cagr", response_model=CAGRResponse)
async def compute_cagr(request: CAGRRequest):
    """Compound annual growth rate between two values."""
    return CAGRResponse(
        cagr=cagr(request.end_value or 0.0, request.start_value or 0.0, request.years)
    )
