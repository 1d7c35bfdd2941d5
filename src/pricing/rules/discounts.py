"""Discount code rules: usage limits, applicability and the discount amount.

Discount codes are owned by the marketing collaborator. This module only
reads them; incrementing `used_count` happens on confirmed order placement,
elsewhere.
"""

from datetime import UTC, datetime
from enum import Enum

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String

from pricing.domain import pricing
from pricing.errors import DiscountNotApplicableError, DiscountUsageLimitError
from pricing.shared.money import round_minor

logger = structlog.get_logger(__name__)


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    FREE_SHIPPING = "free_shipping"


def _as_utc(moment: datetime) -> datetime:
    # naive timestamps are taken to be UTC
    return moment.replace(tzinfo=UTC) if moment.tzinfo is None else moment


@pricing.value_object
class DiscountCode:
    """Read-only view of a discount code at checkout time.

    `value` is a percentage (0-100) for percentage codes and an amount in
    minor units for fixed-amount codes.
    """

    code = String(required=True, max_length=100)
    discount_type = String(required=True, choices=DiscountType)
    value = Integer(required=True, min_value=0)
    usage_limit = Integer(min_value=0)
    used_count = Integer(default=0, min_value=0)
    min_purchase_amount = Integer(min_value=0)
    is_active = Boolean(default=True)
    starts_at = DateTime()
    ends_at = DateTime()

    @invariant.post
    def percentage_cannot_exceed_100(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and self.value is not None and self.value > 100:
            raise ValidationError({"value": ["Percentage value cannot exceed 100"]})

    @invariant.post
    def window_must_be_ordered(self):
        if self.starts_at and self.ends_at and _as_utc(self.starts_at) > _as_utc(self.ends_at):
            raise ValidationError({"ends_at": ["End date cannot be before start date"]})

    @property
    def usage_exhausted(self) -> bool:
        return self.usage_limit is not None and (self.used_count or 0) >= self.usage_limit


def check_discount_usage(discount_code: DiscountCode) -> None:
    """Raise `DiscountUsageLimitError` when the code has been used up."""
    if discount_code.usage_exhausted:
        logger.warning(
            "Discount usage limit reached",
            code=discount_code.code,
            used_count=discount_code.used_count,
            usage_limit=discount_code.usage_limit,
        )
        raise DiscountUsageLimitError()


def check_discount_applicability(
    discount_code: DiscountCode,
    cart_total: int,
    now: datetime | None = None,
    customer_has_used: bool = False,
) -> None:
    """Raise `DiscountNotApplicableError` when the code's scoping rules are not met."""
    now = _as_utc(now or datetime.now(UTC))

    reason = None
    if not discount_code.is_active:
        reason = "Discount code is inactive"
    elif discount_code.starts_at and _as_utc(discount_code.starts_at) > now:
        reason = "Discount code is not active yet"
    elif discount_code.ends_at and _as_utc(discount_code.ends_at) < now:
        reason = "Discount code has expired"
    elif customer_has_used:
        reason = "You have already used this discount code"
    elif discount_code.min_purchase_amount and cart_total < discount_code.min_purchase_amount:
        reason = f"Minimum purchase of {discount_code.min_purchase_amount / 100:.2f} required"

    if reason is not None:
        logger.warning("Discount not applicable", code=discount_code.code, reason=reason)
        raise DiscountNotApplicableError(reason)


def calculate_discount_amount(cart_total: int, discount_type: str | DiscountType, value: int | float) -> int:
    """Discount in minor units for a cart total, capped at the cart total."""
    kind = DiscountType(discount_type)
    if kind == DiscountType.PERCENTAGE:
        amount = round_minor((cart_total * value) / 100)
    elif kind == DiscountType.FIXED_AMOUNT:
        amount = round_minor(value)
    else:
        amount = 0

    return max(min(amount, cart_total), 0)


def evaluate_discount(
    discount_code: DiscountCode,
    cart_total: int,
    now: datetime | None = None,
    customer_has_used: bool = False,
) -> int:
    """Run every discount rule against a cart and return the discount amount."""
    check_discount_usage(discount_code)
    check_discount_applicability(discount_code, cart_total, now=now, customer_has_used=customer_has_used)
    return calculate_discount_amount(cart_total, discount_code.discount_type, discount_code.value)
