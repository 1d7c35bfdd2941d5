"""Order total assembly: subtotal + shipping + tax - discount, never below zero.

A discount larger than the order is absorbed by clamping the total to zero.
Preventing oversized discounts is the discount issuer's concern, not an
arithmetic error here.
"""

import math

import structlog
from protean.exceptions import ValidationError

from pricing.shared.money import round_minor

logger = structlog.get_logger(__name__)


def _require_non_negative(**amounts: float) -> None:
    errors = {}
    for name, value in amounts.items():
        if not math.isfinite(value):
            errors[name] = [f"{name} must be a finite number"]
        elif value < 0:
            errors[name] = [f"{name} cannot be negative"]
    if errors:
        raise ValidationError(errors)


def fold_order_total(subtotal: int, shipping_total: int, tax_total: int, discount_amount: int) -> int:
    """Combine already-rounded order amounts into the final charge."""
    _require_non_negative(
        subtotal=subtotal,
        shipping_total=shipping_total,
        tax_total=tax_total,
        discount_amount=discount_amount,
    )

    total = subtotal + shipping_total + tax_total - discount_amount
    if total < 0:
        logger.debug("Order total clamped to zero", unclamped_total=total, discount_amount=discount_amount)
        return 0
    return total


def assemble_order_total(
    subtotal: int,
    shipping_total: int,
    tax_rate_percent: float,
    discount_amount: int,
) -> int:
    """Final order total with tax computed on the pre-discount subtotal.

    `tax_rate_percent` is a percentage: 18 means 18%.
    """
    _require_non_negative(tax_rate_percent=tax_rate_percent)
    tax_total = round_minor(subtotal * (tax_rate_percent / 100))
    return fold_order_total(subtotal, shipping_total, tax_total, discount_amount)
