"""
Period value series.

Shared data model for the trend and TTM engines:
- DataPoint: one observation of a single metric (annual or quarterly)
- QuarterlyFinancialData: the wider per-quarter record used for TTM work

All series are ordered most-recent-first, as supplied by the loading layer.
The engine never reorders or mutates them.
"""

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional

from config.logging_config import get_logger

logger = get_logger(__name__)


class Quarter(str, Enum):
    """Calendar quarter used for seasonal bucketing."""

    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"


# Month tokens in period labels ("Mar 2024", "Dec 2023"), checked in order
QUARTER_TOKENS = (
    ("Mar", Quarter.Q1),
    ("Jun", Quarter.Q2),
    ("Sep", Quarter.Q3),
    ("Dec", Quarter.Q4),
)

_TOKEN_PATTERNS = tuple((re.compile(token), quarter) for token, quarter in QUARTER_TOKENS)


def parse_quarter(label: Optional[str]) -> Optional[Quarter]:
    """
    Infer the calendar quarter from a period label.

    Fallback for loaders that only supply labels. A label that carries no
    quarter-end month yields None, which excludes the point from seasonal
    buckets but nothing else.

    Args:
        label: Period label such as "Mar 2024"

    Returns:
        Quarter or None
    """
    if not label:
        return None
    for pattern, quarter in _TOKEN_PATTERNS:
        if pattern.search(label):
            return quarter
    return None


def to_float(value: Any) -> Optional[float]:
    """Coerce a loader value to float, None when missing or unparsable."""
    if value is None:
        return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def amount(value: Optional[float]) -> float:
    """Monetary value for summation; missing counts as zero."""
    return value if value else 0.0


@dataclass(frozen=True)
class DataPoint:
    """A single observation of one financial metric."""

    period: str
    value: float
    quarter: Optional[Quarter] = None

    def __post_init__(self):
        # Missing or unparsable values count as zero
        object.__setattr__(self, "value", to_float(self.value) or 0.0)

        if self.quarter is not None and not isinstance(self.quarter, Quarter):
            try:
                quarter = Quarter(self.quarter)
            except ValueError:
                logger.debug(f"Unrecognised quarter {self.quarter!r} for {self.period}; using period label")
                quarter = None
            object.__setattr__(self, "quarter", quarter)

    @classmethod
    def from_dict(cls, data: dict) -> "DataPoint":
        """Create a DataPoint from a dictionary, treating a missing value as 0."""
        return cls(
            period=str(data.get("period", "")),
            value=data.get("value"),
            quarter=data.get("quarter") or None,
        )


def quarter_of(point: DataPoint) -> Optional[Quarter]:
    """Structured quarter if the loader set one, else parsed from the label."""
    if point.quarter is not None:
        return point.quarter
    return parse_quarter(point.period)


@dataclass
class QuarterlyFinancialData:
    """One quarter of P&L, balance sheet and cash flow figures."""

    quarter: str = ""  # e.g. "Q4 FY24"
    quarter_index: int = 0
    period: str = ""  # e.g. "Mar 2024"

    # P&L (flow items)
    revenue: Optional[float] = None
    gross_profit: Optional[float] = None
    operating_profit: Optional[float] = None
    net_profit: Optional[float] = None
    interest: Optional[float] = None
    depreciation: Optional[float] = None
    tax: Optional[float] = None

    # Balance sheet (stock items)
    total_assets: Optional[float] = None
    shareholders_equity: Optional[float] = None
    debt: Optional[float] = None
    working_capital: Optional[float] = None

    # Cash flow (flow items)
    operating_cash_flow: Optional[float] = None
    capex: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> "QuarterlyFinancialData":
        """Create QuarterlyFinancialData from a dictionary."""
        # Map common field name variations
        field_aliases = {
            "quarter_index": ["quarter_index", "quarterIndex"],
            "gross_profit": ["gross_profit", "grossProfit"],
            "operating_profit": ["operating_profit", "operatingProfit", "ebitda"],
            "net_profit": ["net_profit", "netProfit", "pat", "profit_for_period"],
            "total_assets": ["total_assets", "totalAssets"],
            "shareholders_equity": [
                "shareholders_equity",
                "shareholdersEquity",
                "total_equity",
            ],
            "debt": ["debt", "total_borrowings"],
            "interest": ["interest", "interest_expense", "finance_costs"],
            "tax": ["tax", "tax_expense"],
            "operating_cash_flow": ["operating_cash_flow", "operatingCashFlow", "cfo"],
            "working_capital": ["working_capital", "workingCapital"],
        }

        processed: dict[str, Any] = {}
        for f in fields(cls):
            value = None
            for alias in field_aliases.get(f.name, [f.name]):
                if data.get(alias) is not None:
                    value = data[alias]
                    break

            if f.name in ("quarter", "period"):
                processed[f.name] = str(value) if value is not None else ""
            elif f.name == "quarter_index":
                index = to_float(value)
                processed[f.name] = int(index) if index is not None else 0
            else:
                processed[f.name] = to_float(value)

        return cls(**processed)


def ensure_sequence(obj: Any, name: str = "series") -> Sequence:
    """
    Validate the shape of an input series.

    None is treated as an empty series. Anything that is not a list-like
    sequence is a caller bug and raises immediately.
    """
    if obj is None:
        return ()
    if isinstance(obj, (str, bytes)) or not isinstance(obj, Sequence):
        raise TypeError(f"{name} must be a sequence, got {type(obj).__name__}")
    return obj


def growth_rates(series: Sequence[DataPoint]) -> list[float]:
    """
    Period-over-period relative growth for a most-recent-first series.

    Pairs whose older value is zero are skipped.
    """
    rates = []
    for i in range(1, len(series)):
        current = series[i - 1].value
        previous = series[i].value
        if previous:
            rates.append((current - previous) / previous)
    return rates


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_variance(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    centre = mean(values)
    return sum((v - centre) ** 2 for v in values) / len(values)


def population_stdev(values: Sequence[float]) -> float:
    return math.sqrt(population_variance(values))
