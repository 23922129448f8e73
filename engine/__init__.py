"""Historical trend and TTM computation engine module."""

from engine.series import DataPoint, Quarter, QuarterlyFinancialData
from engine.growth import cagr, volatility
from engine.seasonality import (
    GrowthPattern,
    SeasonalAdjustment,
    quarterly_pattern,
    seasonal_adjust,
)
from engine.trend import (
    TrendClassification,
    TrendStrengthMetrics,
    classify_trend,
    trend_strength,
)
from engine.historical import (
    CompanyInfo,
    TrendAnalysisInput,
    TrendAnalysisResult,
    analyze_historical_trends,
    analyze_many,
)
from engine.ttm import (
    TTMCalculationResult,
    TTMData,
    analyze_ttm_trends,
    create_ttm_data_series,
    ttm_growth,
    ttm_margins,
    ttm_metrics,
    ttm_ratios,
)

__all__ = [
    "DataPoint",
    "Quarter",
    "QuarterlyFinancialData",
    "cagr",
    "volatility",
    "GrowthPattern",
    "SeasonalAdjustment",
    "quarterly_pattern",
    "seasonal_adjust",
    "TrendClassification",
    "TrendStrengthMetrics",
    "classify_trend",
    "trend_strength",
    "CompanyInfo",
    "TrendAnalysisInput",
    "TrendAnalysisResult",
    "analyze_historical_trends",
    "analyze_many",
    "TTMCalculationResult",
    "TTMData",
    "analyze_ttm_trends",
    "create_ttm_data_series",
    "ttm_growth",
    "ttm_margins",
    "ttm_metrics",
    "ttm_ratios",
]
