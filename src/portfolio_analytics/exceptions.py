"""Exception hierarchy for portfolio aggregation.

Every error raised by the library is a local computation failure. Nothing
here is transient, so callers either substitute a default or surface it.
"""


class AggregationError(Exception):
    """Base exception for all aggregation errors."""


class InvalidInputError(AggregationError, ValueError):
    """Raised when a holding, feed or parameter is malformed."""


class DivisionByZeroError(AggregationError, ZeroDivisionError):
    """Raised when weights are requested against a zero grand total."""

    def __init__(self, grand_total: float) -> None:
        self.grand_total = grand_total
        super().__init__(f"Cannot compute weights: grand total is {grand_total}")


class UnknownMetricKeyError(AggregationError, KeyError):
    """Raised when radar normalization has no coefficient for a metric."""

    def __init__(self, metric: str) -> None:
        self.metric = metric
        super().__init__(metric)

    def __str__(self) -> str:
        return f"No radar coefficient configured for metric '{self.metric}'"
