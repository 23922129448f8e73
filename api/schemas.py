"""
Pydantic request and response models for the API.

All responses include a data_timestamp for freshness checking.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from config.settings import settings
from engine.historical import CompanyInfo, TrendAnalysisInput
from engine.series import DataPoint, Quarter, QuarterlyFinancialData


class TimestampedResponse(BaseModel):
    """Base response with timestamp."""
    data_timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When this result was computed",
    )


# ============ Request Models ============

class DataPointIn(BaseModel):
    """Single observation of a metric."""
    period: str
    value: Optional[float] = None
    quarter: Optional[Quarter] = Field(
        default=None,
        description="Calendar quarter; parsed from the period label when omitted",
    )

    def to_engine(self) -> DataPoint:
        return DataPoint(period=self.period, value=self.value or 0.0, quarter=self.quarter)


class CompanyInfoIn(BaseModel):
    """Company metadata."""
    name: str = ""
    sector: str = ""
    type: Literal["finance", "non_finance"] = "non_finance"


class SeriesRequest(BaseModel):
    """A single series ordered most-recent-first."""
    data: list[DataPointIn] = Field(default_factory=list, max_length=settings.max_series_length)

    def to_engine(self) -> list[DataPoint]:
        return [point.to_engine() for point in self.data]


class TrendAnalysisRequest(BaseModel):
    """Historical trend analysis request body."""
    annual_data: list[DataPointIn] = Field(
        default_factory=list, max_length=settings.max_series_length
    )
    quarterly_data: list[DataPointIn] = Field(
        default_factory=list, max_length=settings.max_series_length
    )
    company_info: Optional[CompanyInfoIn] = None

    def to_engine(self) -> TrendAnalysisInput:
        company = None
        if self.company_info is not None:
            company = CompanyInfo(**self.company_info.model_dump())
        return TrendAnalysisInput(
            annual_data=[point.to_engine() for point in self.annual_data],
            quarterly_data=[point.to_engine() for point in self.quarterly_data],
            company_info=company,
        )


class CAGRRequest(BaseModel):
    """CAGR request body."""
    end_value: Optional[float] = None
    start_value: Optional[float] = None
    years: float


class QuarterIn(BaseModel):
    """One quarter of financial data. Missing figures may be null."""
    quarter: str = ""
    quarter_index: int = 0
    period: str = ""
    revenue: Optional[float] = None
    gross_profit: Optional[float] = None
    operating_profit: Optional[float] = None
    net_profit: Optional[float] = None
    total_assets: Optional[float] = None
    shareholders_equity: Optional[float] = None
    debt: Optional[float] = None
    interest: Optional[float] = None
    depreciation: Optional[float] = None
    tax: Optional[float] = None
    operating_cash_flow: Optional[float] = None
    capex: Optional[float] = None
    working_capital: Optional[float] = None


class QuarterlyRequest(BaseModel):
    """Quarterly financials ordered most-recent-first."""
    quarters: list[QuarterIn] = Field(default_factory=list, max_length=settings.max_series_length)

    def to_engine(self) -> list[QuarterlyFinancialData]:
        return [QuarterlyFinancialData.from_dict(q.model_dump()) for q in self.quarters]


# ============ Trend Models ============

class DataPointOut(BaseModel):
    period: str
    value: float

    class Config:
        from_attributes = True


class GrowthPatternOut(BaseModel):
    """Seasonality and quarter-over-quarter growth."""
    seasonality_score: float
    quarterly_averages: dict[str, float]
    quarterly_growth_rates: list[float]
    growth_variance: float
    data_completeness: float
    volatility: float

    class Config:
        from_attributes = True


class TrendAnalysisOut(BaseModel):
    """Historical trend analysis for one company."""
    cagr_1y: float
    cagr_3y: float
    cagr_5y: float
    cagr_10y: float
    trend_direction: str
    trend_strength: str
    trend_consistency: float
    growth_pattern: GrowthPatternOut
    trend_score: float
    data_completeness: float

    class Config:
        from_attributes = True


class TrendAnalysisResponse(TimestampedResponse):
    """Historical trend analysis response."""
    company_name: Optional[str] = None
    analysis: TrendAnalysisOut


class TrendClassificationOut(BaseModel):
    primary: str
    strength: str
    confidence: float
    consistency: float

    class Config:
        from_attributes = True


class TrendStrengthOut(BaseModel):
    magnitude: float
    consistency: float
    acceleration: float

    class Config:
        from_attributes = True


class ClassificationResponse(TimestampedResponse):
    """Trend classification response."""
    classification: TrendClassificationOut
    strength_metrics: TrendStrengthOut
    volatility: float


class SeasonalityResponse(TimestampedResponse):
    """Seasonality and seasonal adjustment response."""
    pattern: GrowthPatternOut
    seasonal_indices: dict[str, float]
    adjusted_data: list[DataPointOut]


class CAGRResponse(TimestampedResponse):
    cagr: float


# ============ TTM Models ============

class TTMMarginsOut(BaseModel):
    gross_profit_margin: float
    operating_profit_margin: float
    net_profit_margin: float
    operating_cash_flow_margin: float
    free_cash_flow_margin: float

    class Config:
        from_attributes = True


class TTMRatiosOut(BaseModel):
    roe: float
    roa: float
    asset_turnover: float
    debt_to_equity: float
    interest_coverage: float
    cash_conversion: float
    capex_to_revenue: float

    class Config:
        from_attributes = True


class TTMGrowthOut(BaseModel):
    revenue_growth: float
    profit_growth: float
    operating_profit_growth: float
    cash_flow_growth: float
    asset_growth: float

    class Config:
        from_attributes = True


class TTMDataOut(BaseModel):
    """One rolling TTM snapshot."""
    period: str
    end_period: str
    ttm_revenue: float
    ttm_net_profit: float
    ttm_operating_profit: float
    ttm_gross_profit: float
    ttm_operating_cash_flow: float
    ttm_free_cash_flow: float
    margins: TTMMarginsOut
    ratios: TTMRatiosOut
    growth: Optional[TTMGrowthOut] = None
    quarters: list[str]

    class Config:
        from_attributes = True


class TTMSeriesResponse(TimestampedResponse):
    """Rolling TTM series response."""
    periods: list[TTMDataOut]


class TTMTrendOut(BaseModel):
    direction: str
    strength: float
    consistency: float

    class Config:
        from_attributes = True


class TTMCalculationResponse(TimestampedResponse):
    """TTM analysis response."""
    current: Optional[TTMDataOut] = None
    previous: Optional[TTMDataOut] = None
    growth: TTMGrowthOut
    trend: TTMTrendOut


class TTMValidationResponse(TimestampedResponse):
    """TTM data quality response."""
    is_valid: bool
    warnings: list[str]
    data_completeness: float


# ============ Generic Models ============

class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
