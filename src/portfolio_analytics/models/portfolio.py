from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from portfolio_analytics.models.risk import BenchmarkEntry, RiskMetrics

FEED_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class Holding(BaseModel):
    model_config = FEED_CONFIG

    symbol: str = Field(min_length=1)
    name: str
    shares: int = Field(gt=0)
    current_value: float = Field(ge=0)
    return_rate: float
    profit_loss: float
    sector: str
    region: str = ""
    asset_type: str = Field(default="", alias="type")

    @property
    def is_gain(self) -> bool:
        return self.return_rate >= 0


class PortfolioSummary(BaseModel):
    model_config = FEED_CONFIG

    total_investment: float
    total_profit: float
    total_return: float
    exchange_rate: float | None = None
    last_updated: date | None = None


class PortfolioFeed(BaseModel):
    """Static snapshot consumed by the aggregator.

    Accepts the camelCase layout of the dashboard data file, e.g.
    ``{"summary": {"totalInvestment": ...}, "holdings": [...],
    "risk": {...}, "benchmarks": {"SP500": {"return": 8.2, ...}}}``.
    """

    model_config = FEED_CONFIG

    summary: PortfolioSummary
    holdings: list[Holding] = []
    risk: RiskMetrics
    benchmarks: dict[str, BenchmarkEntry] = {}

    @field_validator("holdings")
    @classmethod
    def _unique_symbols(cls, holdings: list[Holding]) -> list[Holding]:
        seen: set[str] = set()
        for h in holdings:
            if h.symbol in seen:
                raise ValueError(f"duplicate holding symbol: {h.symbol}")
            seen.add(h.symbol)
        return holdings

    @model_validator(mode="after")
    def _correlation_pairs_labelled(self) -> "PortfolioFeed":
        for pair in self.risk.correlation:
            if "-" not in pair:
                raise ValueError(f"correlation key must be 'A-B', got {pair!r}")
        return self

    @property
    def total_value(self) -> float:
        return sum(h.current_value for h in self.holdings)
