"""Pricing strategy port: the contract every discount algorithm implements.

A strategy exposes two separate steps: `validate` reports whether an input
is acceptable (as a value, never by raising), and `calculate` turns an
input into a fully rounded `PricingOutput`. Callers render field-level
errors from `validate` without ever triggering a computation.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, Integer

from pricing.domain import pricing
from pricing.shared.money import round_minor

logger = structlog.get_logger(__name__)


class StrategyName(Enum):
    STANDARD = "standard"
    PERCENTAGE_DISCOUNT = "percentage_discount"
    FIXED_DISCOUNT = "fixed_discount"
    TIERED_PRICING = "tiered_pricing"


@pricing.value_object
class PricingInput:
    """A single pricing request: unit price, quantity and optional discount inputs.

    `base_price` is in minor units. `discount_percent` is a percentage (0-100),
    `tax_rate` a fraction (0.18 == 18%). Ranges of quantity and discount fields
    are checked by the strategies' `validate`, not here.
    """

    base_price = Float(required=True)
    quantity = Integer(default=1)
    discount_percent = Float()
    discount_amount = Float()
    tax_rate = Float(default=0.0, min_value=0.0)

    @invariant.post
    def amounts_must_be_finite(self):
        errors = {
            field: ["Must be a finite number"]
            for field in ("base_price", "discount_percent", "discount_amount", "tax_rate")
            if getattr(self, field) is not None and not math.isfinite(getattr(self, field))
        }
        if errors:
            raise ValidationError(errors)

    @invariant.post
    def base_price_must_be_positive(self):
        if self.base_price is not None and not self.base_price > 0:
            raise ValidationError({"base_price": ["Base price must be positive"]})


@pricing.value_object
class PricingOutput:
    """Rounded result of a strategy calculation, all amounts in minor units."""

    subtotal = Integer(default=0, min_value=0)
    discount = Integer(default=0, min_value=0)
    taxable_amount = Integer(default=0, min_value=0)
    tax = Integer(default=0, min_value=0)
    total = Integer(default=0, min_value=0)

    @invariant.post
    def discount_cannot_exceed_subtotal(self):
        if self.discount > self.subtotal:
            raise ValidationError({"discount": ["Discount cannot exceed subtotal"]})

    @invariant.post
    def amounts_must_reconcile(self):
        if self.taxable_amount != self.subtotal - self.discount:
            raise ValidationError({"taxable_amount": ["Taxable amount must equal subtotal minus discount"]})
        if self.total != self.taxable_amount + self.tax:
            raise ValidationError({"total": ["Total must equal taxable amount plus tax"]})


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of `PricingStrategy.validate`."""

    valid: bool
    error: str | None = None
    field: str | None = None


VALID = ValidationResult(valid=True)


@dataclass(frozen=True)
class PricingFailure:
    """Structured rejection returned by the dispatcher instead of raising."""

    strategy: str
    error: str
    field: str | None = None
    success: bool = False

    def to_dict(self) -> dict:
        return {"success": self.success, "strategy": self.strategy, "error": self.error, "field": self.field}


class PricingStrategy(ABC):
    """Abstract pricing strategy."""

    name: StrategyName
    description: str

    @abstractmethod
    def raw_discount(self, pricing_input: PricingInput, raw_subtotal: float) -> float:
        """Return the unrounded discount this strategy grants on `raw_subtotal`."""
        ...

    def validate(self, pricing_input: PricingInput) -> ValidationResult:
        """Checks shared by every strategy. Subclasses extend, never replace, this."""
        if pricing_input.quantity is None or pricing_input.quantity < 1:
            return ValidationResult(valid=False, error="Quantity must be at least 1", field="quantity")
        return VALID

    def calculate(self, pricing_input: PricingInput) -> PricingOutput:
        """Price one input. Taxable amount and total derive from the rounded fields."""
        raw_subtotal = pricing_input.base_price * pricing_input.quantity
        subtotal = round_minor(raw_subtotal)

        discount = round_minor(self.raw_discount(pricing_input, raw_subtotal))
        if discount > subtotal or discount < 0:
            logger.debug(
                "Discount clamped",
                strategy=self.name.value,
                discount=discount,
                subtotal=subtotal,
            )
            discount = min(max(discount, 0), subtotal)

        taxable_amount = max(subtotal - discount, 0)
        tax = round_minor(taxable_amount * (pricing_input.tax_rate or 0.0))

        return PricingOutput(
            subtotal=subtotal,
            discount=discount,
            taxable_amount=taxable_amount,
            tax=tax,
            total=taxable_amount + tax,
        )
