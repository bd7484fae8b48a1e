from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ZeroTotalPolicy(StrEnum):
    UNDEFINED = "undefined"
    ZERO = "zero"
    RAISE = "raise"


class RadarCoefficient(BaseModel):
    """Affine transform ``(offset + orientation * raw) * multiplier``."""

    model_config = ConfigDict(frozen=True)

    multiplier: float
    offset: float = 0.0


RADAR_METRICS: tuple[str, ...] = (
    "beta",
    "sharpe_ratio",
    "volatility",
    "var95",
    "max_drawdown",
)

RADAR_LABELS: dict[str, str] = {
    "beta": "Beta",
    "sharpe_ratio": "Sharpe Ratio",
    "volatility": "Volatility (inv)",
    "var95": "VaR 95% (inv)",
    "max_drawdown": "Max Drawdown (inv)",
}

DEFAULT_RADAR_COEFFICIENTS: dict[str, RadarCoefficient] = {
    "beta": RadarCoefficient(multiplier=20),
    "sharpe_ratio": RadarCoefficient(multiplier=20),
    "volatility": RadarCoefficient(multiplier=2, offset=100),
    "var95": RadarCoefficient(multiplier=2, offset=100),
    "max_drawdown": RadarCoefficient(multiplier=2, offset=100),
}


class DisplayConfig(BaseModel):
    scale_factor: float = Field(default=8.0, ge=0)
    scale_cap: float = Field(default=100.0, ge=0)


class ConcentrationThresholds(BaseModel):
    max_position_weight: float = 0.40
    max_stock_weight: float = 0.10
    max_region_weight: float = 0.80
    stock_type: str = "Stock"


class AnalyticsConfig(BaseModel):
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    thresholds: ConcentrationThresholds = Field(
        default_factory=ConcentrationThresholds
    )
    radar: dict[str, RadarCoefficient] = Field(
        default_factory=lambda: {
            k: v.model_copy() for k, v in DEFAULT_RADAR_COEFFICIENTS.items()
        }
    )
    zero_weight: ZeroTotalPolicy = ZeroTotalPolicy.UNDEFINED
    correlation_limit: int = 5
    reconciliation_tolerance: float = 0.0
