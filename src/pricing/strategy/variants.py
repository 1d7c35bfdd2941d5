"""The four pricing strategies: standard, percentage, fixed amount and tiered."""

from pricing.strategy.port import (
    VALID,
    PricingInput,
    PricingStrategy,
    StrategyName,
    ValidationResult,
)

# (minimum quantity, discount percent), highest threshold first
BULK_DISCOUNT_TIERS = (
    (100, 20.0),
    (50, 15.0),
    (25, 10.0),
    (10, 5.0),
)


def bulk_discount_percent(quantity: int) -> float:
    """Discount percent for `quantity`: the highest threshold met wins."""
    for min_quantity, percent in BULK_DISCOUNT_TIERS:
        if quantity >= min_quantity:
            return percent
    return 0.0


class StandardPricing(PricingStrategy):
    name = StrategyName.STANDARD
    description = "No discount, standard pricing"

    def raw_discount(self, pricing_input, raw_subtotal):  # noqa: ARG002
        return 0.0


class PercentageDiscount(PricingStrategy):
    name = StrategyName.PERCENTAGE_DISCOUNT
    description = "Apply percentage-based discount"

    def validate(self, pricing_input: PricingInput) -> ValidationResult:
        result = super().validate(pricing_input)
        if not result.valid:
            return result

        percent = pricing_input.discount_percent
        if percent is not None and not 0 <= percent <= 100:
            return ValidationResult(
                valid=False,
                error="Discount percent must be between 0 and 100",
                field="discount_percent",
            )
        return VALID

    def raw_discount(self, pricing_input, raw_subtotal):
        return raw_subtotal * ((pricing_input.discount_percent or 0.0) / 100)


class FixedDiscount(PricingStrategy):
    name = StrategyName.FIXED_DISCOUNT
    description = "Apply fixed amount discount"

    def validate(self, pricing_input: PricingInput) -> ValidationResult:
        result = super().validate(pricing_input)
        if not result.valid:
            return result

        if pricing_input.discount_amount is not None and pricing_input.discount_amount < 0:
            return ValidationResult(
                valid=False,
                error="Discount amount must be positive",
                field="discount_amount",
            )
        return VALID

    def raw_discount(self, pricing_input, raw_subtotal):
        # Can't discount more than the subtotal
        return min(pricing_input.discount_amount or 0.0, raw_subtotal)


class TieredPricing(PricingStrategy):
    name = StrategyName.TIERED_PRICING
    description = "Apply tiered/bulk discounts based on quantity"

    def raw_discount(self, pricing_input, raw_subtotal):
        return raw_subtotal * (bulk_discount_percent(pricing_input.quantity) / 100)
