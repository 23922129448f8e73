"""
Quarterly growth pattern and seasonality engine.

Buckets quarterly observations by calendar quarter to measure how far the
average quarter deviates from the overall mean, and deseasonalizes a series
using the resulting per-quarter indices (1.0 = average quarter).
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from config.logging_config import get_logger
from engine.growth import volatility
from engine.series import (
    DataPoint,
    Quarter,
    ensure_sequence,
    growth_rates,
    mean,
    population_stdev,
    population_variance,
    quarter_of,
)

logger = get_logger(__name__)

# 12 quarterly deltas plus the anchor quarter they are measured from
EXPECTED_QUARTERS = 13


@dataclass
class GrowthPattern:
    """Seasonality and quarter-over-quarter growth summary."""

    seasonality_score: float = 0.0
    quarterly_averages: dict[str, float] = field(default_factory=dict)
    quarterly_growth_rates: list[float] = field(default_factory=list)
    growth_variance: float = 0.0
    data_completeness: float = 0.0
    volatility: float = 0.0


@dataclass
class SeasonalAdjustment:
    """Deseasonalized series and the indices used to produce it."""

    adjusted_data: list[DataPoint]
    seasonal_indices: dict[str, float]


def quarter_averages(series: Sequence[DataPoint]) -> dict[str, float]:
    """
    Average value per calendar quarter.

    Points whose quarter cannot be determined are left out. A quarter with
    no points averages to 0.
    """
    totals = {q.value: 0.0 for q in Quarter}
    counts = {q.value: 0 for q in Quarter}

    for point in series:
        quarter = quarter_of(point)
        if quarter is None:
            continue
        totals[quarter.value] += point.value
        counts[quarter.value] += 1

    return {
        q: (totals[q] / counts[q] if counts[q] > 0 else 0.0)
        for q in totals
    }


def quarterly_pattern(series: Sequence[DataPoint]) -> GrowthPattern:
    """
    Calculate quarterly growth pattern and seasonality.

    Args:
        series: Quarterly data points ordered most-recent-first

    Returns:
        GrowthPattern (all zero for fewer than 2 points)
    """
    series = ensure_sequence(series)
    if len(series) < 2:
        return GrowthPattern()

    rates = growth_rates(series)
    averages = quarter_averages(series)

    # Coefficient of variation across the four quarter averages
    values = list(averages.values())
    centre = mean(values)
    if centre > 0:
        seasonality_score = min(max(population_stdev(values) / centre, 0.0), 1.0)
    else:
        logger.debug("Quarter averages sum to zero; seasonality score set to 0")
        seasonality_score = 0.0

    return GrowthPattern(
        seasonality_score=seasonality_score,
        quarterly_averages=averages,
        quarterly_growth_rates=rates,
        growth_variance=population_variance(rates),
        data_completeness=min(len(series) / EXPECTED_QUARTERS, 1.0),
        volatility=volatility(series),
    )


def seasonal_adjust(series: Sequence[DataPoint]) -> SeasonalAdjustment:
    """
    Deseasonalize a quarterly series.

    Each value is divided by its quarter's seasonal index, where the index
    is the quarter average over the mean of the four quarter averages.

    Args:
        series: Quarterly data points ordered most-recent-first

    Returns:
        SeasonalAdjustment; with fewer than 4 points the data is returned
        unchanged and every index is 1.0
    """
    series = ensure_sequence(series)
    if len(series) < 4:
        return SeasonalAdjustment(
            adjusted_data=list(series),
            seasonal_indices={q.value: 1.0 for q in Quarter},
        )

    averages = quarter_averages(series)
    overall_average = sum(averages.values()) / len(averages)

    indices = {
        q: (avg / overall_average if overall_average > 0 else 1.0)
        for q, avg in averages.items()
    }

    adjusted = []
    for point in series:
        quarter = quarter_of(point)
        index = indices[quarter.value] if quarter is not None else 1.0
        value = point.value / index if index != 0 else point.value
        adjusted.append(DataPoint(period=point.period, value=value, quarter=point.quarter))

    return SeasonalAdjustment(adjusted_data=adjusted, seasonal_indices=indices)
