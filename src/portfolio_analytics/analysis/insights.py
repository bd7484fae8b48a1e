import logging
from collections.abc import Sequence

from portfolio_analytics.analysis.aggregator import (
    compute_weights,
    holding_weights,
    rollup_by,
)
from portfolio_analytics.config import ConcentrationThresholds, ZeroTotalPolicy
from portfolio_analytics.models.derived import (
    ConcentrationFlag,
    CorrelationPair,
    FlagKind,
    ReconciliationReport,
)
from portfolio_analytics.models.portfolio import Holding, PortfolioSummary
from portfolio_analytics.models.risk import RiskMetrics

logger = logging.getLogger(__name__)


def concentration_flags(
    holdings: Sequence[Holding],
    thresholds: ConcentrationThresholds,
) -> list[ConcentrationFlag]:
    """Positions, single stocks and regions whose weight exceeds a threshold."""
    flags: list[ConcentrationFlag] = []
    weights = holding_weights(holdings, on_zero=ZeroTotalPolicy.UNDEFINED)

    for h, hw in zip(holdings, weights):
        if hw.weight is None:
            continue
        if hw.weight > thresholds.max_position_weight:
            flags.append(
                ConcentrationFlag(
                    kind=FlagKind.POSITION,
                    label=h.symbol,
                    weight=hw.weight,
                    threshold=thresholds.max_position_weight,
                )
            )
        is_stock = h.asset_type == thresholds.stock_type
        if is_stock and hw.weight > thresholds.max_stock_weight:
            flags.append(
                ConcentrationFlag(
                    kind=FlagKind.STOCK,
                    label=h.symbol,
                    weight=hw.weight,
                    threshold=thresholds.max_stock_weight,
                )
            )

    grand_total = sum(h.current_value for h in holdings)
    for region in compute_weights(rollup_by(holdings, "region"), grand_total):
        if region.weight is not None and region.weight > thresholds.max_region_weight:
            flags.append(
                ConcentrationFlag(
                    kind=FlagKind.REGION,
                    label=region.label,
                    weight=region.weight,
                    threshold=thresholds.max_region_weight,
                )
            )

    for f in flags:
        logger.debug(
            "Concentration flag %s %s at %.1f%%", f.kind, f.label, f.weight * 100
        )
    return flags


def reconcile_summary(
    summary: PortfolioSummary,
    holdings: Sequence[Holding],
    tolerance: float = 0.0,
) -> ReconciliationReport:
    """Compare the reported summary totals against sums over holdings.

    The summary stays an independent input: a gap is reported and logged,
    never raised.
    """
    report = ReconciliationReport(
        reported_profit=summary.total_profit,
        holdings_profit=sum(h.profit_loss for h in holdings),
        reported_investment=summary.total_investment,
        holdings_value=sum(h.current_value for h in holdings),
        tolerance=tolerance,
    )
    if not report.reconciled:
        logger.warning(
            "Summary does not match holdings: profit gap %.2f, investment gap %.2f",
            report.profit_gap,
            report.investment_gap,
        )
    return report


def top_correlations(risk: RiskMetrics, limit: int = 5) -> list[CorrelationPair]:
    ranked = sorted(risk.correlation.items(), key=lambda x: -abs(x[1]))[:limit]
    return [CorrelationPair(pair=k, coefficient=v) for k, v in ranked]


def max_correlation(risk: RiskMetrics) -> float | None:
    if not risk.correlation:
        return None
    return max(abs(v) for v in risk.correlation.values())
