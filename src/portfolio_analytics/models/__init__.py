from portfolio_analytics.models.derived import DashboardView
from portfolio_analytics.models.portfolio import (
    Holding,
    PortfolioFeed,
    PortfolioSummary,
)
from portfolio_analytics.models.risk import BenchmarkEntry, RiskMetrics

__all__ = [
    "BenchmarkEntry",
    "DashboardView",
    "Holding",
    "PortfolioFeed",
    "PortfolioSummary",
    "RiskMetrics",
]
