from datetime import date

from portfolio_analytics.models.portfolio import (
    Holding,
    PortfolioFeed,
    PortfolioSummary,
)
from portfolio_analytics.models.risk import BenchmarkEntry, RiskMetrics

# Snapshot of 2025-10-03, values in KRW at 1404.90 KRW/USD.
SAMPLE_HOLDINGS: list[Holding] = [
    Holding(
        symbol="VTI",
        name="Vanguard Total Stock Market ETF",
        shares=21,
        current_value=9_716_627,
        return_rate=18.3,
        profit_loss=1_509_229,
        sector="Total Market ETF",
        region="US",
        asset_type="ETF",
    ),
    Holding(
        symbol="SCHD",
        name="Schwab US Dividend Equity ETF",
        shares=480,
        current_value=18_516_232,
        return_rate=2.6,
        profit_loss=486_107,
        sector="Dividend ETF",
        region="US",
        asset_type="ETF",
    ),
    Holding(
        symbol="QQMQ",
        name="Invesco NASDAQ 100 ETF",
        shares=20,
        current_value=6_997_947,
        return_rate=16.4,
        profit_loss=989_556,
        sector="Tech ETF",
        region="US",
        asset_type="ETF",
    ),
    Holding(
        symbol="NEE",
        name="NextEra Energy",
        shares=26,
        current_value=2_863_717,
        return_rate=4.4,
        profit_loss=122_992,
        sector="Utilities",
        region="US",
        asset_type="Stock",
    ),
    Holding(
        symbol="TSLA",
        name="Tesla",
        shares=3,
        current_value=1_962_661,
        return_rate=49.3,
        profit_loss=648_922,
        sector="Tech",
        region="US",
        asset_type="Stock",
    ),
    Holding(
        symbol="TLT",
        name="iShares 20+ Year Treasury Bond ETF",
        shares=8,
        current_value=1_003_400,
        return_rate=-5.1,
        profit_loss=-53_962,
        sector="Bonds",
        region="US",
        asset_type="ETF",
    ),
]

SAMPLE_SUMMARY = PortfolioSummary(
    total_investment=41_060_587,
    total_profit=3_702_846,
    total_return=9.9,
    exchange_rate=1404.90,
    last_updated=date(2025, 10, 3),
)

SAMPLE_RISK = RiskMetrics(
    beta=1.15,
    sharpe_ratio=1.23,
    var95=-2.8,
    max_drawdown=-12.5,
    volatility=18.2,
    correlation={
        "VTI-SCHD": 0.85,
        "VTI-QQMQ": 0.92,
        "SCHD-QQMQ": 0.78,
        "TSLA-VTI": 0.65,
    },
)

SAMPLE_BENCHMARKS: dict[str, BenchmarkEntry] = {
    "SP500": BenchmarkEntry(return_=8.2, volatility=16.5),
    "KOSPI": BenchmarkEntry(return_=5.8, volatility=22.1),
}


def sample_feed() -> PortfolioFeed:
    return PortfolioFeed(
        summary=SAMPLE_SUMMARY,
        holdings=SAMPLE_HOLDINGS,
        risk=SAMPLE_RISK,
        benchmarks=SAMPLE_BENCHMARKS,
    )
