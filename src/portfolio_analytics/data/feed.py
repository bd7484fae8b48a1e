import logging
from pathlib import Path

from pydantic import ValidationError

from portfolio_analytics.exceptions import InvalidInputError
from portfolio_analytics.models.portfolio import PortfolioFeed

logger = logging.getLogger(__name__)


def parse_feed(raw: str | bytes) -> PortfolioFeed:
    """Validate a JSON document into a PortfolioFeed.

    Both camelCase (``currentValue``) and snake_case (``current_value``)
    keys are accepted.
    """
    try:
        return PortfolioFeed.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid portfolio feed: {e}") from e


def load_feed(path: str | Path) -> PortfolioFeed:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Feed not found: {p}")
    feed = parse_feed(p.read_bytes())
    logger.debug("Loaded %d holdings from %s", len(feed.holdings), p)
    return feed


def dump_feed(feed: PortfolioFeed) -> str:
    return feed.model_dump_json(by_alias=True, indent=2)
