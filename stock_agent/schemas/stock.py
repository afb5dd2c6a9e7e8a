"""Input document schema: one security's metric snapshot."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    # wire names only; flags and scores are not coerced from strings
    model_config = ConfigDict(alias_generator=to_camel)


class Metric(_CamelModel):
    name: str
    value: StrictFloat | str | None = None
    threshold: str | None = None
    threshold_range: str | None = None
    pass_: StrictBool | None = Field(None, alias="pass")
    actual: StrictFloat | str | None = None
    points: StrictFloat | None = None
    result: str | None = None
    weighted_score: StrictFloat | None = None

    @model_validator(mode="after")
    def _value_or_actual(self):
        if self.value is None and self.actual is None:
            raise ValueError("Either 'value' or 'actual' must be provided")
        return self


class StockIdentity(_CamelModel):
    symbol: str
    name: str
    as_of: str
    overall_result: str


class MetricGroup(_CamelModel):
    overall: str
    metrics: list[Metric]


class Signal(_CamelModel):
    name: str
    pass_: StrictBool = Field(alias="pass")


class RiskSensitivityAlignment(_CamelModel):
    overall: str
    signals: list[Signal]


class Quantitative(_CamelModel):
    fundamental_resilience: MetricGroup
    asymmetric_risk_reward: MetricGroup
    technical_confirmation: MetricGroup
    risk_sensitivity_alignment: RiskSensitivityAlignment


class SisStock(_CamelModel):
    symbol: str
    name: str
    sis_score: StrictFloat
    metrics: list[Metric]


class Sis(_CamelModel):
    overall: StrictFloat
    stocks: list[SisStock]


class SsisPeer(_CamelModel):
    symbol: str
    name: str
    overall_score: StrictFloat
    metrics: list[Metric]


class Ssis(_CamelModel):
    overall: StrictFloat
    peers: list[SsisPeer]


class Criterion(_CamelModel):
    name: str
    score: StrictFloat
    notes: str | None


class Qualitative(_CamelModel):
    overall_rating: StrictFloat
    criteria: list[Criterion]


class Peer(_CamelModel):
    name: str
    symbol: str
    metrics: dict[str, str]


class PeerComparison(_CamelModel):
    base_symbol: str
    peers: list[Peer]


class StockInput(_CamelModel):
    stock: StockIdentity
    quantitative: Quantitative
    sis: Sis
    ssis: Ssis
    qualitative: Qualitative
    peer_comparison: PeerComparison
