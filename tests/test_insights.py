import logging

import pytest

from portfolio_analytics.analysis.insights import (
    concentration_flags,
    max_correlation,
    reconcile_summary,
    top_correlations,
)
from portfolio_analytics.config import ConcentrationThresholds
from portfolio_analytics.data.sample import SAMPLE_HOLDINGS, SAMPLE_RISK, SAMPLE_SUMMARY
from portfolio_analytics.models.derived import FlagKind
from portfolio_analytics.models.portfolio import Holding, PortfolioSummary
from portfolio_analytics.models.risk import RiskMetrics


def _holding(
    symbol: str,
    value: float,
    profit: float = 0.0,
    region: str = "US",
    asset_type: str = "ETF",
) -> Holding:
    return Holding(
        symbol=symbol,
        name=symbol,
        shares=10,
        current_value=value,
        return_rate=1.0,
        profit_loss=profit,
        sector="Any",
        region=region,
        asset_type=asset_type,
    )


class TestConcentrationFlags:
    def test_sample_portfolio(self):
        flags = concentration_flags(SAMPLE_HOLDINGS, ConcentrationThresholds())
        assert [(f.kind, f.label) for f in flags] == [
            (FlagKind.POSITION, "SCHD"),
            (FlagKind.REGION, "US"),
        ]
        assert flags[0].weight == pytest.approx(0.4509, abs=1e-4)
        assert flags[1].weight == pytest.approx(1.0)

    def test_single_stock_limit(self):
        holdings = [
            _holding("ETF1", 40, region="US"),
            _holding("ETF2", 40, region="KR"),
            _holding("STK", 20, region="EU", asset_type="Stock"),
        ]
        flags = concentration_flags(holdings, ConcentrationThresholds())
        assert [(f.kind, f.label) for f in flags] == [(FlagKind.STOCK, "STK")]
        assert flags[0].threshold == 0.10

    def test_custom_thresholds(self):
        holdings = [_holding("A", 55, region="US"), _holding("B", 45, region="KR")]
        strict = ConcentrationThresholds(max_position_weight=0.5, max_region_weight=0.5)
        flags = concentration_flags(holdings, strict)
        assert [(f.kind, f.label) for f in flags] == [
            (FlagKind.POSITION, "A"),
            (FlagKind.REGION, "US"),
        ]

    def test_empty_and_zero_value(self):
        assert concentration_flags([], ConcentrationThresholds()) == []
        assert concentration_flags([_holding("A", 0)], ConcentrationThresholds()) == []


class TestReconcileSummary:
    def test_sample_gaps(self):
        report = reconcile_summary(SAMPLE_SUMMARY, SAMPLE_HOLDINGS)
        assert report.holdings_profit == 3_702_844
        assert report.holdings_value == 41_060_584
        assert report.profit_gap == 2
        assert report.investment_gap == 3
        assert not report.reconciled

    def test_within_tolerance(self):
        report = reconcile_summary(SAMPLE_SUMMARY, SAMPLE_HOLDINGS, tolerance=5)
        assert report.reconciled

    def test_matching_summary(self):
        holdings = [_holding("A", 100, profit=10), _holding("B", 50, profit=-4)]
        summary = PortfolioSummary(total_investment=150, total_profit=6, total_return=4.0)
        assert reconcile_summary(summary, holdings).reconciled

    def test_mismatch_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            reconcile_summary(SAMPLE_SUMMARY, SAMPLE_HOLDINGS)
        assert "does not match holdings" in caplog.text


class TestCorrelations:
    def test_top_correlations_sorted_by_magnitude(self):
        pairs = top_correlations(SAMPLE_RISK, limit=3)
        assert [p.pair for p in pairs] == ["VTI-QQMQ", "VTI-SCHD", "SCHD-QQMQ"]

    def test_negative_coefficients_rank_by_magnitude(self):
        risk = RiskMetrics(
            beta=1,
            sharpe_ratio=1,
            var95=-1,
            max_drawdown=-1,
            volatility=10,
            correlation={"A-B": 0.3, "A-C": -0.9},
        )
        assert [p.pair for p in top_correlations(risk)] == ["A-C", "A-B"]
        assert max_correlation(risk) == 0.9

    def test_no_correlations(self):
        risk = SAMPLE_RISK.model_copy(update={"correlation": {}})
        assert top_correlations(risk) == []
        assert max_correlation(risk) is None
