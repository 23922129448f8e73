"""
Historical trend analysis.

Combines multi-horizon CAGR, trend classification and quarterly
seasonality into one result per company, plus a 0-100 composite score:

    growth (<= 50) + consistency (<= 30) + data completeness (<= 20)
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Literal, Optional

from config.logging_config import get_logger
from engine.growth import cagr
from engine.seasonality import EXPECTED_QUARTERS, GrowthPattern, quarterly_pattern
from engine.series import DataPoint, ensure_sequence
from engine.trend import TrendDirection, TrendStrength, classify_trend

logger = get_logger(__name__)

EXPECTED_ANNUAL_PERIODS = 12

# Completeness credited to the quarterly half when no quarterly data is given
QUARTERLY_PLACEHOLDER = 0.5

CAGR_HORIZONS = (1, 3, 5, 10)


@dataclass
class CompanyInfo:
    """Descriptive company metadata carried alongside the series."""

    name: str = ""
    sector: str = ""
    type: Literal["finance", "non_finance"] = "non_finance"


@dataclass
class TrendAnalysisInput:
    """Annual (and optionally quarterly) history of one metric for one company."""

    annual_data: Sequence[DataPoint]
    quarterly_data: Sequence[DataPoint] = ()
    company_info: Optional[CompanyInfo] = None


@dataclass
class TrendAnalysisResult:
    """Comprehensive historical trend result for one company."""

    cagr_1y: float = 0.0
    cagr_3y: float = 0.0
    cagr_5y: float = 0.0
    cagr_10y: float = 0.0

    trend_direction: TrendDirection = "stable"
    trend_strength: TrendStrength = "weak"
    trend_consistency: float = 0.0

    growth_pattern: GrowthPattern = field(default_factory=GrowthPattern)

    trend_score: float = 0.0
    data_completeness: float = 0.0


def horizon_cagr(annual_data: Sequence[DataPoint], years: int) -> float:
    """CAGR from the latest point to the one `years` back, 0 if history is too short."""
    if len(annual_data) <= years:
        return 0.0
    return cagr(annual_data[0].value, annual_data[years].value, years)


def trend_score(cagr_5y: float, consistency: float, data_completeness: float) -> float:
    growth_score = max(0.0, min(cagr_5y * 5, 0.5)) * 100
    consistency_score = consistency * 30
    data_quality_score = data_completeness * 20
    return min(growth_score + consistency_score + data_quality_score, 100.0)


def analyze_historical_trends(analysis_input: TrendAnalysisInput) -> TrendAnalysisResult:
    """
    Comprehensive historical trend analysis.

    Args:
        analysis_input: Annual and quarterly series for one company

    Returns:
        TrendAnalysisResult (zeroed and 'stable' when there is no annual data)
    """
    annual_data = ensure_sequence(analysis_input.annual_data, "annual_data")
    quarterly_data = ensure_sequence(analysis_input.quarterly_data, "quarterly_data")

    if not annual_data:
        name = analysis_input.company_info.name if analysis_input.company_info else "?"
        logger.debug(f"No annual data for {name}; returning empty trend analysis")
        return TrendAnalysisResult()

    cagr_1y, cagr_3y, cagr_5y, cagr_10y = (
        horizon_cagr(annual_data, years) for years in CAGR_HORIZONS
    )

    classification = classify_trend(annual_data)
    growth_pattern = quarterly_pattern(quarterly_data)

    annual_completeness = min(len(annual_data) / EXPECTED_ANNUAL_PERIODS, 1.0)
    if quarterly_data:
        quarterly_completeness = min(len(quarterly_data) / EXPECTED_QUARTERS, 1.0)
    else:
        quarterly_completeness = QUARTERLY_PLACEHOLDER
    data_completeness = (annual_completeness + quarterly_completeness) / 2

    return TrendAnalysisResult(
        cagr_1y=cagr_1y,
        cagr_3y=cagr_3y,
        cagr_5y=cagr_5y,
        cagr_10y=cagr_10y,
        trend_direction=classification.primary,
        trend_strength=classification.strength,
        trend_consistency=classification.consistency,
        growth_pattern=growth_pattern,
        trend_score=trend_score(cagr_5y, classification.consistency, data_completeness),
        data_completeness=data_completeness,
    )


def analyze_many(inputs: Iterable[TrendAnalysisInput]) -> list[TrendAnalysisResult]:
    """Run the historical analysis over a batch of companies."""
    return [analyze_historical_trends(item) for item in inputs]
