"""
Data quality checks for quarterly TTM input.

Flags gaps and implausible values before TTM figures are shown. Checks never
raise; every issue is reported as a warning and the input is scored.

Checks:
- at least 4 quarters for a full TTM window
- required fields present and non-zero in the latest 4 quarters
- no negative revenue
- positive shareholders' equity in every quarter of the window
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from config.logging_config import get_logger
from engine.series import QuarterlyFinancialData, amount, ensure_sequence
from engine.ttm import TTM_QUARTERS

logger = get_logger(__name__)

REQUIRED_FIELDS = (
    "revenue",
    "net_profit",
    "operating_profit",
    "total_assets",
    "shareholders_equity",
)

# Completeness (%) below which a warning is raised / the data is rejected
COMPLETENESS_WARNING = 80.0
COMPLETENESS_MINIMUM = 50.0


@dataclass
class TTMValidation:
    is_valid: bool = False
    warnings: list[str] = field(default_factory=list)
    data_completeness: float = 0.0  # %


def field_completeness(quarters: Sequence[QuarterlyFinancialData]) -> float:
    """Percentage of required fields that are present and non-zero."""
    total_fields = 0
    filled = 0
    for quarter in quarters:
        for field_name in REQUIRED_FIELDS:
            total_fields += 1
            if getattr(quarter, field_name):
                filled += 1
    return filled / total_fields * 100 if total_fields > 0 else 0.0


def validate_ttm_data(quarters: Sequence[QuarterlyFinancialData]) -> TTMValidation:
    """
    Validate TTM data quality.

    Args:
        quarters: Quarterly data ordered most-recent-first

    Returns:
        TTMValidation with warnings and a 0-100 completeness score
    """
    quarters = ensure_sequence(quarters, "quarters")
    if not quarters:
        logger.warning("No quarterly data provided")
        return TTMValidation(is_valid=False, warnings=["No quarterly data provided"])

    warnings = []

    if len(quarters) < TTM_QUARTERS:
        warnings.append(
            f"Only {len(quarters)} quarters available. TTM requires {TTM_QUARTERS} quarters."
        )

    latest = quarters[:TTM_QUARTERS]
    completeness = field_completeness(latest)

    if completeness < COMPLETENESS_WARNING:
        warnings.append(
            f"Data completeness is {completeness:.1f}%. Some calculations may be inaccurate."
        )

    if any(amount(q.revenue) < 0 for q in latest):
        warnings.append("Negative revenue detected in quarterly data.")

    if not all(amount(q.shareholders_equity) > 0 for q in latest):
        warnings.append("Inconsistent shareholders equity data across quarters.")

    for message in warnings:
        logger.warning(message)

    return TTMValidation(
        is_valid=len(quarters) >= TTM_QUARTERS and completeness >= COMPLETENESS_MINIMUM,
        warnings=warnings,
        data_completeness=completeness,
    )
