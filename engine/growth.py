"""
Growth computation engine.

Computes CAGR and period-over-period volatility for financial metrics.

Both functions are total: degenerate inputs (zero bases, sign flips,
short series) resolve to documented sentinel values instead of raising.
"""

from collections.abc import Sequence

from config.logging_config import get_logger
from engine.series import DataPoint, ensure_sequence, growth_rates, population_stdev

logger = get_logger(__name__)


def cagr(end_value: float, start_value: float, years: float) -> float:
    """
    Compute Compound Annual Growth Rate (CAGR).

    CAGR = (End Value / Start Value)^(1/years) - 1

    Sentinels:
    - -1 when the metric declined to exactly zero from a positive start
    - 0 for a zero/missing start, non-positive horizon, or no change
    - 0 for a sign change over more than one period

    Args:
        end_value: Most recent value
        start_value: Value at the start of the horizon
        years: Number of periods between the two values

    Returns:
        CAGR as a fraction (0.10 = 10%)
    """
    if not end_value or not start_value or years <= 0:
        if end_value == 0 and start_value and start_value > 0:
            return -1.0  # Complete decline
        return 0.0

    if end_value == start_value:
        return 0.0

    # Negative values: only a one-period relative change is meaningful
    if start_value < 0 or end_value < 0:
        if years == 1:
            return (end_value - start_value) / abs(start_value)
        logger.debug(
            f"CAGR undefined across sign change ({start_value} -> {end_value}, {years}y)"
        )
        return 0.0

    return (end_value / start_value) ** (1 / years) - 1


def volatility(series: Sequence[DataPoint]) -> float:
    """
    Standard deviation of period-over-period growth rates.

    Args:
        series: Data points ordered most-recent-first

    Returns:
        Population standard deviation of growth (0 for fewer than 2 points)
    """
    series = ensure_sequence(series)
    if len(series) < 2:
        return 0.0

    return population_stdev(growth_rates(series))
