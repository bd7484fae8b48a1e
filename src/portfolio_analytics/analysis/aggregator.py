"""Pure aggregation over an immutable holdings snapshot.

Every function here takes already-parsed models and returns new derived
models. Nothing reads the clock, the filesystem or global state.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from portfolio_analytics.config import (
    RADAR_LABELS,
    RADAR_METRICS,
    RadarCoefficient,
    ZeroTotalPolicy,
)
from portfolio_analytics.exceptions import (
    DivisionByZeroError,
    InvalidInputError,
    UnknownMetricKeyError,
)
from portfolio_analytics.models.derived import (
    BenchmarkDelta,
    Direction,
    GroupTotal,
    GroupWeight,
    HoldingWeight,
    RadarScore,
)
from portfolio_analytics.models.portfolio import Holding
from portfolio_analytics.models.risk import BenchmarkEntry, RiskMetrics

logger = logging.getLogger(__name__)

GROUP_KEYS = {
    "sector": "sector",
    "region": "region",
    "type": "asset_type",
}

# +1: larger raw value is better, -1: larger raw value is worse.
# VaR and drawdown arrive as negative percentages, so they are already +1.
RADAR_ORIENTATION: dict[str, int] = {
    "beta": 1,
    "sharpe_ratio": 1,
    "volatility": -1,
    "var95": 1,
    "max_drawdown": 1,
}


def _check_holding(h: Holding) -> None:
    if h.shares <= 0:
        raise InvalidInputError(f"{h.symbol}: shares must be positive, got {h.shares}")
    if h.current_value < 0:
        raise InvalidInputError(
            f"{h.symbol}: current value must be non-negative, got {h.current_value}"
        )


def rollup_by(holdings: Iterable[Holding], key: str) -> list[GroupTotal]:
    """Sum ``current_value`` per classification label, first-seen order.

    ``key`` is one of ``sector``, ``region`` or ``type``. Labels are matched
    exactly (case-sensitive, no trimming).
    """
    if key not in GROUP_KEYS:
        raise InvalidInputError(
            f"Unknown grouping key '{key}', expected one of {sorted(GROUP_KEYS)}"
        )
    attr = GROUP_KEYS[key]

    totals: dict[str, float] = {}
    for h in holdings:
        _check_holding(h)
        label = getattr(h, attr)
        totals[label] = totals.get(label, 0.0) + h.current_value

    logger.debug("Rolled up %d %s group(s)", len(totals), key)
    return [GroupTotal(label=k, total_value=v) for k, v in totals.items()]


def rollup_by_sector(holdings: Iterable[Holding]) -> list[GroupTotal]:
    return rollup_by(holdings, "sector")


def _fraction(
    part: float, grand_total: float, on_zero: ZeroTotalPolicy
) -> float | None:
    if grand_total == 0:
        if on_zero is ZeroTotalPolicy.RAISE:
            raise DivisionByZeroError(grand_total)
        return 0.0 if on_zero is ZeroTotalPolicy.ZERO else None
    return part / grand_total


def compute_weights(
    rollup: Sequence[GroupTotal],
    grand_total: float,
    on_zero: ZeroTotalPolicy = ZeroTotalPolicy.UNDEFINED,
) -> list[GroupWeight]:
    """Fractional weight of each group in ``grand_total``.

    With a zero grand total every weight becomes the ``on_zero`` marker:
    ``None`` (UNDEFINED), ``0.0`` (ZERO), or DivisionByZeroError (RAISE).
    """
    if grand_total < 0:
        raise InvalidInputError(f"Grand total must be non-negative, got {grand_total}")
    if grand_total == 0 and rollup:
        logger.warning("Grand total is zero, weights resolved as %s", on_zero.value)

    return [
        GroupWeight(
            label=g.label,
            total_value=g.total_value,
            weight=_fraction(g.total_value, grand_total, on_zero),
        )
        for g in rollup
    ]


def holding_weights(
    holdings: Sequence[Holding],
    on_zero: ZeroTotalPolicy = ZeroTotalPolicy.UNDEFINED,
) -> list[HoldingWeight]:
    """Per-position allocation, in holdings order."""
    for h in holdings:
        _check_holding(h)
    grand_total = sum(h.current_value for h in holdings)
    if grand_total == 0 and holdings:
        logger.warning("Holdings total is zero, weights resolved as %s", on_zero.value)

    return [
        HoldingWeight(
            symbol=h.symbol,
            name=h.name,
            current_value=h.current_value,
            weight=_fraction(h.current_value, grand_total, on_zero),
            return_rate=h.return_rate,
            direction=Direction.from_return(h.return_rate),
        )
        for h in holdings
    ]


def scale_for_display(value: float, k: float, max_: float) -> float:
    """Clamp ``value * k`` into ``[0, max_]`` (e.g. a progress bar width)."""
    if k < 0:
        raise InvalidInputError(f"Scale factor must be non-negative, got {k}")
    if max_ < 0:
        raise InvalidInputError(f"Scale cap must be non-negative, got {max_}")
    return float(max(0.0, min(value * k, max_)))


def benchmark_deltas(
    total_return: float, benchmarks: Mapping[str, BenchmarkEntry]
) -> list[BenchmarkDelta]:
    """Signed portfolio-minus-benchmark return, in the mapping's order."""
    return [
        BenchmarkDelta(
            name=name,
            benchmark_return=entry.return_,
            delta=total_return - entry.return_,
        )
        for name, entry in benchmarks.items()
    ]


def rank_deltas(deltas: Sequence[BenchmarkDelta]) -> list[BenchmarkDelta]:
    """Best-first ordering; ties keep their input order."""
    return sorted(deltas, key=lambda d: -d.delta)


def normalize_risk_for_radar(
    risk: RiskMetrics, coefficients: Mapping[str, RadarCoefficient]
) -> list[RadarScore]:
    """Orient every risk metric so that a larger score always means better.

    Per metric: ``score = (offset + orientation * raw) * multiplier`` where
    orientation is fixed by RADAR_ORIENTATION and offset/multiplier come from
    ``coefficients``. Output order follows RADAR_METRICS.
    """
    for metric in RADAR_METRICS:
        if metric not in coefficients:
            raise UnknownMetricKeyError(metric)
        if coefficients[metric].multiplier <= 0:
            raise InvalidInputError(
                f"Radar multiplier for '{metric}' must be positive, "
                f"got {coefficients[metric].multiplier}"
            )

    scores: list[RadarScore] = []
    for metric in RADAR_METRICS:
        coef = coefficients[metric]
        raw = getattr(risk, metric)
        score = (coef.offset + RADAR_ORIENTATION[metric] * raw) * coef.multiplier
        scores.append(
            RadarScore(
                metric=metric,
                label=RADAR_LABELS.get(metric, metric),
                raw=raw,
                score=score,
            )
        )
    return scores
