"""Wholesale (B2B) tier pricing.

Approved wholesale customers carry a tier. A product may also carry an
explicit wholesale price, which always wins over the tier discount.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError

from pricing.shared.money import round_minor


class WholesaleTier(Enum):
    STARTER = "starter"
    GROWTH = "growth"
    ENTERPRISE = "enterprise"


TIER_DISCOUNTS = {
    WholesaleTier.STARTER.value: 0.20,
    WholesaleTier.GROWTH.value: 0.30,
    WholesaleTier.ENTERPRISE.value: 0.40,
}


def tier_discount(tier: str | WholesaleTier | None) -> float:
    """Fractional discount for a tier. Unknown or missing tiers get nothing."""
    if tier is None:
        return 0.0
    key = tier.value if isinstance(tier, WholesaleTier) else str(tier).lower()
    return TIER_DISCOUNTS.get(key, 0.0)


@dataclass(frozen=True)
class WholesaleQuote:
    price: int
    is_wholesale_price: bool
    discount_percent: float
    savings: int

    def to_dict(self) -> dict:
        return {
            "price": self.price,
            "is_wholesale_price": self.is_wholesale_price,
            "discount_percent": self.discount_percent,
            "savings": self.savings,
        }


def calculate_wholesale_price(
    retail_price: int,
    wholesale_price: int | None = None,
    tier: str | WholesaleTier | None = None,
) -> WholesaleQuote:
    if retail_price < 0:
        raise ValidationError({"retail_price": ["Retail price cannot be negative"]})

    if wholesale_price is not None and wholesale_price > 0:
        savings = retail_price - wholesale_price
        percent = round((savings / retail_price) * 100, 2) if retail_price > 0 else 0.0
        return WholesaleQuote(
            price=wholesale_price,
            is_wholesale_price=True,
            discount_percent=percent,
            savings=savings,
        )

    discount = tier_discount(tier)
    if discount > 0:
        price = round_minor(retail_price * (1 - discount))
        return WholesaleQuote(
            price=price,
            is_wholesale_price=True,
            discount_percent=round(discount * 100, 2),
            savings=retail_price - price,
        )

    return WholesaleQuote(price=retail_price, is_wholesale_price=False, discount_percent=0.0, savings=0)
