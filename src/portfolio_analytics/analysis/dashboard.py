import logging

from portfolio_analytics.analysis.aggregator import (
    benchmark_deltas,
    compute_weights,
    holding_weights,
    normalize_risk_for_radar,
    rollup_by,
    scale_for_display,
)
from portfolio_analytics.analysis.insights import (
    concentration_flags,
    max_correlation,
    reconcile_summary,
    top_correlations,
)
from portfolio_analytics.config import AnalyticsConfig
from portfolio_analytics.models.derived import ComparisonBar, DashboardView
from portfolio_analytics.models.portfolio import PortfolioFeed

logger = logging.getLogger(__name__)


class DashboardBuilder:
    """Compose every aggregation into the view renderers consume."""

    def __init__(self, config: AnalyticsConfig | None = None) -> None:
        self.config = config or AnalyticsConfig()

    def build(self, feed: PortfolioFeed) -> DashboardView:
        cfg = self.config
        holdings = feed.holdings
        total_value = feed.total_value

        def weights(key: str):
            return compute_weights(
                rollup_by(holdings, key), total_value, on_zero=cfg.zero_weight
            )

        view = DashboardView(
            summary=feed.summary,
            total_value=total_value,
            holdings=holding_weights(holdings, on_zero=cfg.zero_weight),
            sectors=weights("sector"),
            regions=weights("region"),
            asset_types=weights("type"),
            portfolio_bar=self._bar("Portfolio", feed.summary.total_return),
            benchmark_bars=[
                self._bar(name, entry.return_)
                for name, entry in feed.benchmarks.items()
            ],
            benchmark_deltas=benchmark_deltas(
                feed.summary.total_return, feed.benchmarks
            ),
            radar=normalize_risk_for_radar(feed.risk, cfg.radar),
            top_correlations=top_correlations(feed.risk, cfg.correlation_limit),
            max_correlation=max_correlation(feed.risk),
            flags=concentration_flags(holdings, cfg.thresholds),
            reconciliation=reconcile_summary(
                feed.summary, holdings, cfg.reconciliation_tolerance
            ),
        )
        logger.debug(
            "Built dashboard: %d holdings, %d sectors, %d benchmarks",
            len(view.holdings),
            len(view.sectors),
            len(view.benchmark_bars),
        )
        return view

    def _bar(self, label: str, return_rate: float) -> ComparisonBar:
        display = self.config.display
        return ComparisonBar(
            label=label,
            return_rate=return_rate,
            width=scale_for_display(
                return_rate, display.scale_factor, display.scale_cap
            ),
        )


def build_dashboard(
    feed: PortfolioFeed, config: AnalyticsConfig | None = None
) -> DashboardView:
    return DashboardBuilder(config).build(feed)
