import json

import pytest
from pydantic import ValidationError

from portfolio_analytics.analysis.aggregator import holding_weights
from portfolio_analytics.data.feed import parse_feed
from portfolio_analytics.data.sample import SAMPLE_RISK, SAMPLE_SUMMARY, sample_feed
from portfolio_analytics.exceptions import (
    AggregationError,
    DivisionByZeroError,
    InvalidInputError,
    UnknownMetricKeyError,
)
from portfolio_analytics.models.derived import Direction, ReconciliationReport
from portfolio_analytics.models.portfolio import Holding, PortfolioFeed
from portfolio_analytics.models.risk import BenchmarkEntry, RiskMetrics


def _holding_kwargs(**overrides) -> dict:
    kwargs = dict(
        symbol="VTI",
        name="Vanguard Total Stock Market ETF",
        shares=21,
        current_value=9_716_627,
        return_rate=18.3,
        profit_loss=1_509_229,
        sector="Total Market ETF",
        region="US",
        asset_type="ETF",
    )
    kwargs.update(overrides)
    return kwargs


class TestHolding:
    def test_accepts_snake_and_camel_case(self):
        snake = Holding(**_holding_kwargs())
        camel = Holding.model_validate(
            {
                "symbol": "VTI",
                "name": "Vanguard Total Stock Market ETF",
                "shares": 21,
                "currentValue": 9_716_627,
                "returnRate": 18.3,
                "profitLoss": 1_509_229,
                "sector": "Total Market ETF",
                "region": "US",
                "type": "ETF",
            }
        )
        assert snake == camel
        assert camel.asset_type == "ETF"

    def test_rejects_non_positive_shares(self):
        with pytest.raises(ValidationError):
            Holding(**_holding_kwargs(shares=0))

    def test_rejects_negative_value(self):
        with pytest.raises(ValidationError):
            Holding(**_holding_kwargs(current_value=-1))

    def test_is_immutable(self):
        h = Holding(**_holding_kwargs())
        with pytest.raises(ValidationError):
            h.shares = 30

    def test_is_gain(self):
        assert Holding(**_holding_kwargs()).is_gain
        assert not Holding(**_holding_kwargs(return_rate=-5.1)).is_gain


class TestRiskMetrics:
    def test_correlation_range(self):
        with pytest.raises(ValidationError):
            RiskMetrics(
                beta=1,
                sharpe_ratio=1,
                var95=-1,
                max_drawdown=-1,
                volatility=10,
                correlation={"A-B": 1.5},
            )

    def test_reversed_pair_rejected(self):
        with pytest.raises(ValidationError, match="duplicates VTI-SCHD"):
            RiskMetrics(
                beta=1,
                sharpe_ratio=1,
                var95=-1,
                max_drawdown=-1,
                volatility=10,
                correlation={"VTI-SCHD": 0.85, "SCHD-VTI": 0.85},
            )

    def test_hyphenated_symbols_in_pairs(self):
        risk = RiskMetrics(
            beta=1,
            sharpe_ratio=1,
            var95=-1,
            max_drawdown=-1,
            volatility=10,
            correlation={"BRK-B-VTI": 0.7, "BRK-B-SCHD": 0.6, "VTI-SCHD": 0.85},
        )
        assert len(risk.correlation) == 3

    def test_reversed_hyphenated_pair_rejected(self):
        with pytest.raises(ValidationError):
            RiskMetrics(
                beta=1,
                sharpe_ratio=1,
                var95=-1,
                max_drawdown=-1,
                volatility=10,
                correlation={"BRK-B-VTI": 0.7, "VTI-BRK-B": 0.7},
            )

    def test_camel_case_keys(self):
        risk = RiskMetrics.model_validate(
            {
                "beta": 1.15,
                "sharpeRatio": 1.23,
                "var95": -2.8,
                "maxDrawdown": -12.5,
                "volatility": 18.2,
            }
        )
        assert risk.sharpe_ratio == 1.23
        assert risk.max_drawdown == -12.5
        assert risk.correlation == {}


class TestBenchmarkEntry:
    def test_return_alias(self):
        entry = BenchmarkEntry.model_validate({"return": 8.2, "volatility": 16.5})
        assert entry.return_ == 8.2
        assert entry.model_dump(by_alias=True) == {"return": 8.2, "volatility": 16.5}


class TestPortfolioFeed:
    def test_sample_feed(self):
        feed = sample_feed()
        assert [h.symbol for h in feed.holdings] == [
            "VTI",
            "SCHD",
            "QQMQ",
            "NEE",
            "TSLA",
            "TLT",
        ]
        assert list(feed.benchmarks) == ["SP500", "KOSPI"]
        assert feed.total_value == 41_060_584

    def test_duplicate_symbols(self):
        h = Holding(**_holding_kwargs())
        with pytest.raises(ValidationError, match="duplicate holding symbol"):
            PortfolioFeed(summary=SAMPLE_SUMMARY, holdings=[h, h], risk=SAMPLE_RISK)

    def test_malformed_correlation_pair(self):
        risk = SAMPLE_RISK.model_copy(update={"correlation": {"VTI": 0.5}})
        with pytest.raises(ValidationError):
            PortfolioFeed(summary=SAMPLE_SUMMARY, risk=risk)


class TestDerived:
    def test_direction_from_return(self):
        assert Direction.from_return(0.0) == Direction.GAIN
        assert Direction.from_return(-0.01) == Direction.LOSS

    def test_reconciliation_gaps(self):
        report = ReconciliationReport(
            reported_profit=110,
            holdings_profit=100,
            reported_investment=1000,
            holdings_value=1000,
            tolerance=5,
        )
        assert report.profit_gap == 10
        assert report.investment_gap == 0
        assert not report.reconciled


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(InvalidInputError, AggregationError)
        assert issubclass(InvalidInputError, ValueError)
        assert issubclass(DivisionByZeroError, ZeroDivisionError)
        assert issubclass(UnknownMetricKeyError, KeyError)

    def test_messages(self):
        assert "grand total is 0" in str(DivisionByZeroError(0))
        assert "'beta'" in str(UnknownMetricKeyError("beta"))


class TestHoldingValidationLayers:
    def test_model_layer_raises_validation_error(self):
        with pytest.raises(ValidationError):
            Holding(**_holding_kwargs(shares=0))

    def test_feed_boundary_raises_aggregation_error(self):
        feed = sample_feed().model_dump(mode="json", by_alias=True)
        feed["holdings"][0]["shares"] = 0
        with pytest.raises(AggregationError):
            parse_feed(json.dumps(feed))

    def test_aggregator_boundary_raises_aggregation_error(self):
        unchecked = Holding.model_construct(**_holding_kwargs(current_value=-1))
        with pytest.raises(InvalidInputError):
            holding_weights([unchecked])
