"""
Trailing Twelve Months (TTM) computation engine.

Computes TTM values by summing the last 4 quarters.

For balance sheet items (stock items), use the latest quarter's values or the
average across the TTM window. For P&L and cash flow items (flow items), sum
the last 4 quarters.

All quarterly input is ordered most-recent-first.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal, Optional

from config.logging_config import get_logger
from engine.series import QuarterlyFinancialData, amount, ensure_sequence

logger = get_logger(__name__)

TTM_QUARTERS = 4
GROWTH_QUARTERS = 2 * TTM_QUARTERS

# Fields that are flow items (sum over periods)
FLOW_FIELDS = (
    "revenue",
    "gross_profit",
    "operating_profit",
    "net_profit",
    "operating_cash_flow",
    "capex",
    "interest",
    "depreciation",
    "tax",
)

# Stock items averaged over the TTM window; debt stays point-in-time
STOCK_FIELDS = (
    "total_assets",
    "shareholders_equity",
)

ProfitType = Literal["net", "operating", "gross"]

PROFIT_FIELDS = {
    "net": "net_profit",
    "operating": "operating_profit",
    "gross": "gross_profit",
}


@dataclass
class TTMMetrics:
    ttm_revenue: float = 0.0
    ttm_gross_profit: float = 0.0
    ttm_operating_profit: float = 0.0
    ttm_net_profit: float = 0.0
    ttm_operating_cash_flow: float = 0.0
    ttm_capex: float = 0.0
    ttm_free_cash_flow: float = 0.0
    ttm_interest: float = 0.0
    ttm_depreciation: float = 0.0
    ttm_tax: float = 0.0


@dataclass
class TTMMargins:
    """Margins as a percentage of TTM revenue."""

    gross_profit_margin: float = 0.0
    operating_profit_margin: float = 0.0
    net_profit_margin: float = 0.0
    operating_cash_flow_margin: float = 0.0
    free_cash_flow_margin: float = 0.0


@dataclass
class TTMRatios:
    roe: float = 0.0  # Return on Equity, %
    roa: float = 0.0  # Return on Assets, %
    asset_turnover: float = 0.0
    debt_to_equity: float = 0.0
    interest_coverage: float = 0.0
    cash_conversion: float = 0.0  # %
    capex_to_revenue: float = 0.0  # %


@dataclass
class TTMGrowth:
    """Percentage change of the current TTM against the prior TTM."""

    revenue_growth: float = 0.0
    profit_growth: float = 0.0
    operating_profit_growth: float = 0.0
    cash_flow_growth: float = 0.0
    asset_growth: float = 0.0


@dataclass
class TTMData:
    """One rolling TTM snapshot."""

    period: str  # e.g. "TTM Q4 FY24"
    end_period: str  # latest quarter's period label
    ttm_revenue: float
    ttm_net_profit: float
    ttm_operating_profit: float
    ttm_gross_profit: float
    ttm_operating_cash_flow: float
    ttm_free_cash_flow: float
    margins: TTMMargins
    ratios: TTMRatios
    growth: Optional[TTMGrowth] = None
    quarters: list[str] = field(default_factory=list)


@dataclass
class TTMTrend:
    direction: Literal["improving", "declining", "stable"] = "stable"
    strength: float = 0.0  # 0-100
    consistency: float = 0.0  # 0-100


@dataclass
class TTMCalculationResult:
    current: Optional[TTMData] = None
    previous: Optional[TTMData] = None
    growth: TTMGrowth = field(default_factory=TTMGrowth)
    trend: TTMTrend = field(default_factory=TTMTrend)


def _window(quarters: Sequence[QuarterlyFinancialData]) -> Sequence[QuarterlyFinancialData]:
    """The most recent (up to) 4 quarters."""
    return ensure_sequence(quarters, "quarters")[:TTM_QUARTERS]


def _sum(quarters: Sequence[QuarterlyFinancialData], field_name: str) -> float:
    return sum(amount(getattr(q, field_name)) for q in quarters)


def _average(quarters: Sequence[QuarterlyFinancialData], field_name: str) -> float:
    if not quarters:
        return 0.0
    return _sum(quarters, field_name) / len(quarters)


def _pct_change(current: float, previous: float) -> float:
    """Percentage change, 0 unless the prior value is positive."""
    if previous > 0:
        return (current - previous) / previous * 100
    return 0.0


def ttm_revenue(quarters: Sequence[QuarterlyFinancialData]) -> float:
    """Sum of revenue over the latest 4 quarters."""
    return _sum(_window(quarters), "revenue")


def ttm_profit(quarters: Sequence[QuarterlyFinancialData], profit_type: ProfitType) -> float:
    """Sum of net, operating or gross profit over the latest 4 quarters."""
    field_name = PROFIT_FIELDS.get(profit_type)
    if field_name is None:
        logger.debug(f"Unknown profit type: {profit_type}")
        return 0.0
    return _sum(_window(quarters), field_name)


def ttm_metrics(quarters: Sequence[QuarterlyFinancialData]) -> TTMMetrics:
    """
    Compute TTM flow items by summing up to the latest 4 quarters.

    Fewer than 4 quarters are summed as-is; missing values count as zero.

    Args:
        quarters: Quarterly data ordered most-recent-first

    Returns:
        TTMMetrics
    """
    window = _window(quarters)
    if not window:
        return TTMMetrics()

    totals = {name: _sum(window, name) for name in FLOW_FIELDS}

    return TTMMetrics(
        ttm_revenue=totals["revenue"],
        ttm_gross_profit=totals["gross_profit"],
        ttm_operating_profit=totals["operating_profit"],
        ttm_net_profit=totals["net_profit"],
        ttm_operating_cash_flow=totals["operating_cash_flow"],
        ttm_capex=totals["capex"],
        ttm_free_cash_flow=totals["operating_cash_flow"] - totals["capex"],
        ttm_interest=totals["interest"],
        ttm_depreciation=totals["depreciation"],
        ttm_tax=totals["tax"],
    )


def ttm_margins(quarters: Sequence[QuarterlyFinancialData]) -> TTMMargins:
    """
    Compute TTM margins as a percentage of TTM revenue.

    All margins are 0 when TTM revenue is 0.
    """
    metrics = ttm_metrics(quarters)
    revenue = metrics.ttm_revenue

    if revenue == 0:
        return TTMMargins()

    return TTMMargins(
        gross_profit_margin=metrics.ttm_gross_profit / revenue * 100,
        operating_profit_margin=metrics.ttm_operating_profit / revenue * 100,
        net_profit_margin=metrics.ttm_net_profit / revenue * 100,
        operating_cash_flow_margin=metrics.ttm_operating_cash_flow / revenue * 100,
        free_cash_flow_margin=metrics.ttm_free_cash_flow / revenue * 100,
    )


def ttm_ratios(quarters: Sequence[QuarterlyFinancialData]) -> TTMRatios:
    """
    Compute TTM-based financial ratios.

    ROE, ROA and asset turnover divide TTM flows by the AVERAGE balance sheet
    over the same quarters. Debt to equity uses the latest quarter's
    point-in-time figures. Zero denominators give 0.

    Args:
        quarters: Quarterly data ordered most-recent-first

    Returns:
        TTMRatios
    """
    window = _window(quarters)
    if not window:
        return TTMRatios()

    metrics = ttm_metrics(window)

    averages = {name: _average(window, name) for name in STOCK_FIELDS}
    avg_total_assets = averages["total_assets"]
    avg_equity = averages["shareholders_equity"]

    latest = window[0]
    debt = amount(latest.debt)
    equity = amount(latest.shareholders_equity)
    revenue = metrics.ttm_revenue

    return TTMRatios(
        roe=metrics.ttm_net_profit / avg_equity * 100 if avg_equity > 0 else 0.0,
        roa=metrics.ttm_net_profit / avg_total_assets * 100 if avg_total_assets > 0 else 0.0,
        asset_turnover=revenue / avg_total_assets if avg_total_assets > 0 else 0.0,
        debt_to_equity=debt / equity if equity > 0 else 0.0,
        interest_coverage=(
            metrics.ttm_operating_profit / metrics.ttm_interest
            if metrics.ttm_interest > 0
            else 0.0
        ),
        cash_conversion=metrics.ttm_operating_cash_flow / revenue * 100 if revenue > 0 else 0.0,
        capex_to_revenue=metrics.ttm_capex / revenue * 100 if revenue > 0 else 0.0,
    )


def ttm_growth(quarters: Sequence[QuarterlyFinancialData]) -> TTMGrowth:
    """
    Compute TTM growth rates vs the previous TTM.

    Current TTM is quarters 0-3, previous TTM is quarters 4-7. Asset growth
    compares the point-in-time total assets of quarter 0 and quarter 4.

    Args:
        quarters: Quarterly data ordered most-recent-first

    Returns:
        TTMGrowth in percent (all zero with fewer than 8 quarters)
    """
    quarters = ensure_sequence(quarters, "quarters")
    if len(quarters) < GROWTH_QUARTERS:
        logger.debug(f"Only {len(quarters)} quarters available; TTM growth needs {GROWTH_QUARTERS}")
        return TTMGrowth()

    current = ttm_metrics(quarters[:TTM_QUARTERS])
    previous = ttm_metrics(quarters[TTM_QUARTERS:GROWTH_QUARTERS])

    return TTMGrowth(
        revenue_growth=_pct_change(current.ttm_revenue, previous.ttm_revenue),
        profit_growth=_pct_change(current.ttm_net_profit, previous.ttm_net_profit),
        operating_profit_growth=_pct_change(
            current.ttm_operating_profit, previous.ttm_operating_profit
        ),
        cash_flow_growth=_pct_change(
            current.ttm_operating_cash_flow, previous.ttm_operating_cash_flow
        ),
        asset_growth=_pct_change(
            amount(quarters[0].total_assets),
            amount(quarters[TTM_QUARTERS].total_assets),
        ),
    )


def create_ttm_data_series(
    quarters: Sequence[QuarterlyFinancialData],
    num_periods: int = 4,
) -> list[TTMData]:
    """
    Create a rolling TTM data series.

    Window i covers quarters[i:i + 4]. A window carries growth figures only
    when at least 8 quarters remain from its start.

    Args:
        quarters: Quarterly data ordered most-recent-first
        num_periods: Maximum number of TTM snapshots to build

    Returns:
        TTM snapshots, most recent first (empty with fewer than 4 quarters)
    """
    quarters = ensure_sequence(quarters, "quarters")
    if len(quarters) < TTM_QUARTERS:
        logger.warning(f"Only {len(quarters)} quarters available for TTM series")
        return []

    series = []
    for i in range(min(num_periods, len(quarters) - TTM_QUARTERS + 1)):
        quarter_set = quarters[i:i + TTM_QUARTERS]
        metrics = ttm_metrics(quarter_set)

        growth = None
        if len(quarters) - i >= GROWTH_QUARTERS:
            growth = ttm_growth(quarters[i:])

        series.append(
            TTMData(
                period=f"TTM {quarter_set[0].quarter}",
                end_period=quarter_set[0].period,
                ttm_revenue=metrics.ttm_revenue,
                ttm_net_profit=metrics.ttm_net_profit,
                ttm_operating_profit=metrics.ttm_operating_profit,
                ttm_gross_profit=metrics.ttm_gross_profit,
                ttm_operating_cash_flow=metrics.ttm_operating_cash_flow,
                ttm_free_cash_flow=metrics.ttm_free_cash_flow,
                margins=ttm_margins(quarter_set),
                ratios=ttm_ratios(quarter_set),
                growth=growth,
                quarters=[q.quarter for q in quarter_set],
            )
        )

    return series


def analyze_ttm_trends(quarters: Sequence[QuarterlyFinancialData]) -> TTMCalculationResult:
    """
    Comprehensive TTM analysis.

    Direction follows TTM revenue growth (beyond +/-5% is improving or
    declining). Consistency drops 10 points per point of net margin change
    between the current and previous TTM.

    Args:
        quarters: Quarterly data ordered most-recent-first

    Returns:
        TTMCalculationResult; current is None with fewer than 4 quarters
    """
    quarters = ensure_sequence(quarters, "quarters")
    if len(quarters) < TTM_QUARTERS:
        logger.warning(
            f"Insufficient data for TTM analysis: {len(quarters)} quarters, need {TTM_QUARTERS}"
        )
        return TTMCalculationResult()

    series = create_ttm_data_series(quarters, 2)
    current = series[0]
    previous = series[1] if len(series) > 1 else None

    growth = ttm_growth(quarters)
    revenue_growth = growth.revenue_growth

    if revenue_growth > 5:
        trend = TTMTrend(direction="improving", strength=min(revenue_growth * 2, 100.0))
    elif revenue_growth < -5:
        trend = TTMTrend(direction="declining", strength=min(abs(revenue_growth) * 2, 100.0))
    else:
        trend = TTMTrend(direction="stable", strength=50 - abs(revenue_growth) * 5)

    margin_variation = 0.0
    if previous is not None:
        margin_variation = abs(
            current.margins.net_profit_margin - previous.margins.net_profit_margin
        )
    trend.consistency = max(0.0, 100 - margin_variation * 10)

    return TTMCalculationResult(
        current=current,
        previous=previous,
        growth=growth,
        trend=trend,
    )
