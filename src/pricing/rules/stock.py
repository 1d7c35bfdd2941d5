"""Stock sufficiency check across every requested item."""

import structlog
from protean.fields import Integer, String

from pricing.domain import pricing
from pricing.errors import InsufficientStockError

logger = structlog.get_logger(__name__)


@pricing.value_object
class StockCheckItem:
    """Requested vs. available quantity for one cart line."""

    title = String(required=True, max_length=255)
    requested = Integer(required=True, min_value=0)
    available = Integer(required=True)

    @property
    def is_short(self) -> bool:
        return self.requested > self.available

    def to_shortage(self) -> dict:
        return {"title": self.title, "requested": self.requested, "available": self.available}


def check_stock(items: list[StockCheckItem]) -> None:
    """Raise `InsufficientStockError` listing every item that cannot be fulfilled."""
    shortages = [item.to_shortage() for item in items if item.is_short]
    if shortages:
        logger.warning("Insufficient stock", items=[s["title"] for s in shortages])
        raise InsufficientStockError(shortages)
