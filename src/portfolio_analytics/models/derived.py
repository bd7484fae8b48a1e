from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from portfolio_analytics.models.portfolio import PortfolioSummary

FROZEN = ConfigDict(frozen=True)


class Direction(StrEnum):
    GAIN = "gain"
    LOSS = "loss"

    @staticmethod
    def from_return(value: float) -> "Direction":
        return Direction.GAIN if value >= 0 else Direction.LOSS


class GroupTotal(BaseModel):
    model_config = FROZEN

    label: str
    total_value: float


class GroupWeight(BaseModel):
    """Share of a group in the grand total. ``weight`` is None when undefined."""

    model_config = FROZEN

    label: str
    total_value: float
    weight: float | None


class HoldingWeight(BaseModel):
    model_config = FROZEN

    symbol: str
    name: str
    current_value: float
    weight: float | None
    return_rate: float
    direction: Direction


class BenchmarkDelta(BaseModel):
    model_config = FROZEN

    name: str
    benchmark_return: float
    delta: float

    @property
    def outperforming(self) -> bool:
        return self.delta > 0


class RadarScore(BaseModel):
    model_config = FROZEN

    metric: str
    label: str
    raw: float
    score: float


class ComparisonBar(BaseModel):
    """A return and the clamped width used to draw it as a progress bar."""

    model_config = FROZEN

    label: str
    return_rate: float
    width: float


class CorrelationPair(BaseModel):
    model_config = FROZEN

    pair: str
    coefficient: float


class FlagKind(StrEnum):
    POSITION = "position"
    STOCK = "stock"
    REGION = "region"


class ConcentrationFlag(BaseModel):
    model_config = FROZEN

    kind: FlagKind
    label: str
    weight: float
    threshold: float


class ReconciliationReport(BaseModel):
    model_config = FROZEN

    reported_profit: float
    holdings_profit: float
    reported_investment: float
    holdings_value: float
    tolerance: float

    @property
    def profit_gap(self) -> float:
        return self.reported_profit - self.holdings_profit

    @property
    def investment_gap(self) -> float:
        return self.reported_investment - self.holdings_value

    @property
    def reconciled(self) -> bool:
        return (
            abs(self.profit_gap) <= self.tolerance
            and abs(self.investment_gap) <= self.tolerance
        )


class DashboardView(BaseModel):
    model_config = FROZEN

    summary: PortfolioSummary
    total_value: float
    holdings: list[HoldingWeight] = []
    sectors: list[GroupWeight] = []
    regions: list[GroupWeight] = []
    asset_types: list[GroupWeight] = []
    portfolio_bar: ComparisonBar
    benchmark_bars: list[ComparisonBar] = []
    benchmark_deltas: list[BenchmarkDelta] = []
    radar: list[RadarScore] = []
    top_correlations: list[CorrelationPair] = []
    max_correlation: float | None = None
    flags: list[ConcentrationFlag] = []
    reconciliation: ReconciliationReport
