from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RiskMetrics(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    beta: float
    sharpe_ratio: float
    var95: float
    max_drawdown: float
    volatility: float
    correlation: dict[str, float] = {}

    @field_validator("correlation")
    @classmethod
    def _coefficients_in_range(cls, value: dict[str, float]) -> dict[str, float]:
        for pair, coef in value.items():
            if not -1.0 <= coef <= 1.0:
                raise ValueError(f"correlation {pair}={coef} outside [-1, 1]")
        return value

    @field_validator("correlation")
    @classmethod
    def _pairs_unordered(cls, value: dict[str, float]) -> dict[str, float]:
        # Symbols may contain "-" themselves, so try every split point
        seen: set[str] = set()
        for pair in value:
            for i, ch in enumerate(pair):
                if ch != "-":
                    continue
                reversed_pair = f"{pair[i + 1:]}-{pair[:i]}"
                if reversed_pair != pair and reversed_pair in seen:
                    raise ValueError(
                        f"correlation pair {pair} duplicates {reversed_pair}"
                    )
            seen.add(pair)
        return value


class BenchmarkEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    return_: float = Field(alias="return")
    volatility: float | None = None
