from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class KeyMetricsSummary(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    total_metrics: int
    passed_count: int
    failed_count: int
    pass_rate: str
    sis_score: float | int | None
    ssis_score: float | int | None
    qualitative_rating: float | int | None
    passed_metrics: list[str] = []
    failed_metrics: list[str] = []


class AnalysisReportContent(BaseModel):
    """Sections the model must return."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    overall_score: float = Field(ge=0, le=100)
    recommendation: Literal["Buy", "Watchlist", "Avoid"]
    financial_health: str = Field(min_length=50)
    valuation: str = Field(min_length=50)
    future_growth: str = Field(min_length=50)
    competitive_advantage: str = Field(min_length=50)
    management_quality: str = Field(min_length=50)
    risk_factors: str = Field(min_length=50)
    technical_trend: str = Field(min_length=50)
    portfolio_fit: str = Field(min_length=50)
    time_horizon: str = Field(min_length=50)
    ai_summary: str = Field(min_length=100)
    final_verdict: str = Field(min_length=50)


class ReportMetadata(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )

    stock_symbol: str | None
    stock_name: str | None
    analysis_date: str
    as_of_date: str | None
    key_metrics: KeyMetricsSummary | None
    model_used: str
    version: str


REPORT_SECTIONS = [
    "financialHealth",
    "valuation",
    "futureGrowth",
    "competitiveAdvantage",
    "managementQuality",
    "riskFactors",
    "technicalTrend",
    "portfolioFit",
    "timeHorizon",
    "aiSummary",
    "finalVerdict",
]
