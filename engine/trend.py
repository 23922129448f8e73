"""
Trend strength and direction classification.

Strength summarizes a series' growth-rate sequence as:
- magnitude: how large the typical period-over-period move is
- consistency: how steady the growth rate is
- acceleration: whether growth is speeding up or slowing down

Direction comes from the end-to-end CAGR, with a +/-2% dead zone treated
as stable.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from config.logging_config import get_logger
from engine.growth import cagr
from engine.series import DataPoint, ensure_sequence, growth_rates, mean, population_variance

logger = get_logger(__name__)

TrendDirection = Literal["upward", "downward", "stable"]
TrendStrength = Literal["weak", "moderate", "strong"]

DIRECTION_THRESHOLD = 0.02

# (magnitude, consistency) floors, strongest first
STRENGTH_THRESHOLDS: tuple[tuple[TrendStrength, float, float], ...] = (
    ("strong", 0.8, 0.7),
    ("moderate", 0.5, 0.6),
)


@dataclass
class TrendStrengthMetrics:
    """Magnitude, consistency and acceleration of a growth-rate series."""

    magnitude: float = 0.0
    consistency: float = 0.0
    acceleration: float = 0.0


@dataclass
class TrendClassification:
    """Direction, strength and confidence of a trend."""

    primary: TrendDirection = "stable"
    strength: TrendStrength = "weak"
    confidence: float = 0.0
    consistency: float = 0.0


def trend_strength(series: Sequence[DataPoint]) -> TrendStrengthMetrics:
    """
    Calculate trend strength metrics.

    Args:
        series: Data points ordered most-recent-first

    Returns:
        TrendStrengthMetrics (all zero for fewer than 2 usable points)
    """
    series = ensure_sequence(series)
    if len(series) < 2:
        return TrendStrengthMetrics()

    rates = growth_rates(series)
    if not rates:
        logger.debug("No usable growth rates (all base values zero)")
        return TrendStrengthMetrics()

    # Scaled so ~10% average moves land at the top of the range
    magnitude = min(mean([abs(rate) for rate in rates]) * 10, 1.0)
    consistency = max(0.0, 1 - population_variance(rates) ** 0.5)

    acceleration = 0.0
    if len(rates) >= 2:
        half = len(rates) // 2
        acceleration = mean(rates[half:]) - mean(rates[:half])

    return TrendStrengthMetrics(
        magnitude=magnitude,
        consistency=consistency,
        acceleration=acceleration,
    )


def classify_trend(series: Sequence[DataPoint]) -> TrendClassification:
    """
    Classify trend direction and strength.

    Args:
        series: Data points ordered most-recent-first

    Returns:
        TrendClassification
    """
    series = ensure_sequence(series)
    if len(series) < 2:
        return TrendClassification()

    overall_cagr = cagr(series[0].value, series[-1].value, len(series) - 1)
    metrics = trend_strength(series)

    primary: TrendDirection = "stable"
    if overall_cagr > DIRECTION_THRESHOLD:
        primary = "upward"
    elif overall_cagr < -DIRECTION_THRESHOLD:
        primary = "downward"

    strength: TrendStrength = "weak"
    for label, min_magnitude, min_consistency in STRENGTH_THRESHOLDS:
        if metrics.magnitude > min_magnitude and metrics.consistency > min_consistency:
            strength = label
            break

    return TrendClassification(
        primary=primary,
        strength=strength,
        confidence=min(metrics.consistency + metrics.magnitude * 0.3, 1.0),
        consistency=metrics.consistency,
    )
