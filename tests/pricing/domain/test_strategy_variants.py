"""Tests for the four pricing strategies."""

import math

import pytest
from pricing.strategy.port import PricingInput, PricingOutput, StrategyName
from pricing.strategy.variants import (
    BULK_DISCOUNT_TIERS,
    FixedDiscount,
    PercentageDiscount,
    StandardPricing,
    TieredPricing,
    bulk_discount_percent,
)
from protean.exceptions import ValidationError


def _as_tuple(output: PricingOutput):
    return (output.subtotal, output.discount, output.taxable_amount, output.tax, output.total)


class TestPricingInput:
    def test_defaults(self):
        pricing_input = PricingInput(base_price=100)
        assert pricing_input.quantity == 1
        assert pricing_input.tax_rate == 0.0
        assert pricing_input.discount_percent is None
        assert pricing_input.discount_amount is None

    def test_base_price_must_be_positive(self):
        with pytest.raises(ValidationError) as exc:
            PricingInput(base_price=0)
        assert "base_price" in exc.value.messages

    def test_negative_tax_rate_rejected(self):
        with pytest.raises(ValidationError):
            PricingInput(base_price=100, tax_rate=-0.1)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("base_price", math.inf),
            ("base_price", math.nan),
            ("discount_percent", math.nan),
            ("discount_amount", -math.inf),
            ("tax_rate", math.inf),
        ],
    )
    def test_non_finite_amounts_rejected(self, field, value):
        values = {"base_price": 100, field: value}
        with pytest.raises(ValidationError) as exc:
            PricingInput(**values)
        assert field in exc.value.messages

    def test_out_of_range_discount_is_left_to_strategies(self):
        pricing_input = PricingInput(base_price=100, discount_percent=150)
        assert pricing_input.discount_percent == 150


class TestPricingOutput:
    def test_reconciled_output_accepted(self):
        output = PricingOutput(subtotal=100, discount=10, taxable_amount=90, tax=9, total=99)
        assert output.total == 99

    def test_discount_above_subtotal_rejected(self):
        with pytest.raises(ValidationError):
            PricingOutput(subtotal=100, discount=110, taxable_amount=0, tax=0, total=0)

    def test_unreconciled_taxable_amount_rejected(self):
        with pytest.raises(ValidationError) as exc:
            PricingOutput(subtotal=100, discount=10, taxable_amount=80, tax=0, total=80)
        assert "taxable_amount" in exc.value.messages

    def test_unreconciled_total_rejected(self):
        with pytest.raises(ValidationError) as exc:
            PricingOutput(subtotal=100, discount=0, taxable_amount=100, tax=10, total=100)
        assert "total" in exc.value.messages


class TestStandardPricing:
    def test_no_discount(self):
        output = StandardPricing().calculate(PricingInput(base_price=100, quantity=1, tax_rate=0))
        assert _as_tuple(output) == (100, 0, 100, 0, 100)

    def test_tax_on_subtotal(self):
        output = StandardPricing().calculate(PricingInput(base_price=1250, quantity=3, tax_rate=0.08))
        assert _as_tuple(output) == (3750, 0, 3750, 300, 4050)

    def test_discount_fields_are_ignored(self):
        assert StandardPricing().validate(PricingInput(base_price=100, discount_percent=500)).valid

    def test_name(self):
        assert StandardPricing().name == StrategyName.STANDARD


class TestPercentageDiscount:
    def test_ten_percent(self):
        output = PercentageDiscount().calculate(PricingInput(base_price=100, quantity=1, discount_percent=10))
        assert _as_tuple(output) == (100, 10, 90, 0, 90)

    def test_missing_percent_means_no_discount(self):
        output = PercentageDiscount().calculate(PricingInput(base_price=100, quantity=2))
        assert output.discount == 0
        assert output.total == 200

    def test_discount_rounded_to_minor_unit(self):
        # 333 * 10% = 33.3
        output = PercentageDiscount().calculate(PricingInput(base_price=333, discount_percent=10))
        assert output.discount == 33
        assert output.taxable_amount == 300

    def test_full_discount(self):
        output = PercentageDiscount().calculate(PricingInput(base_price=999, discount_percent=100, tax_rate=0.2))
        assert _as_tuple(output) == (999, 999, 0, 0, 0)

    @pytest.mark.parametrize("percent", [-1, 100.5, 150])
    def test_out_of_range_percent_is_invalid(self, percent):
        result = PercentageDiscount().validate(PricingInput(base_price=100, discount_percent=percent))
        assert not result.valid
        assert result.field == "discount_percent"
        assert result.error == "Discount percent must be between 0 and 100"

    @pytest.mark.parametrize("percent", [None, 0, 50, 100])
    def test_in_range_percent_is_valid(self, percent):
        assert PercentageDiscount().validate(PricingInput(base_price=100, discount_percent=percent)).valid


class TestFixedDiscount:
    def test_discount_applied(self):
        output = FixedDiscount().calculate(
            PricingInput(base_price=1000, quantity=2, discount_amount=250, tax_rate=0.1)
        )
        assert _as_tuple(output) == (2000, 250, 1750, 175, 1925)

    def test_discount_capped_at_subtotal(self):
        output = FixedDiscount().calculate(
            PricingInput(base_price=1000, quantity=1, discount_amount=5000, tax_rate=0.18)
        )
        assert _as_tuple(output) == (1000, 1000, 0, 0, 0)

    def test_negative_amount_is_invalid(self):
        result = FixedDiscount().validate(PricingInput(base_price=100, discount_amount=-5))
        assert not result.valid
        assert result.field == "discount_amount"
        assert result.error == "Discount amount must be positive"

    def test_zero_amount_is_valid(self):
        assert FixedDiscount().validate(PricingInput(base_price=100, discount_amount=0)).valid


class TestTieredPricing:
    @pytest.mark.parametrize(
        "quantity, percent",
        [
            (1, 0.0),
            (9, 0.0),
            (10, 5.0),
            (24, 5.0),
            (25, 10.0),
            (49, 10.0),
            (50, 15.0),
            (99, 15.0),
            (100, 20.0),
            (1000, 20.0),
        ],
    )
    def test_highest_threshold_met_wins(self, quantity, percent):
        assert bulk_discount_percent(quantity) == percent

    def test_tiers_are_ordered_highest_first(self):
        thresholds = [min_quantity for min_quantity, _ in BULK_DISCOUNT_TIERS]
        assert thresholds == sorted(thresholds, reverse=True)

    def test_discount_for_fifty_units(self):
        output = TieredPricing().calculate(PricingInput(base_price=200, quantity=50, tax_rate=0.1))
        assert _as_tuple(output) == (10000, 1500, 8500, 850, 9350)

    def test_no_discount_below_first_tier(self):
        output = TieredPricing().calculate(PricingInput(base_price=200, quantity=9))
        assert output.discount == 0

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_quantity_below_one_is_invalid(self, quantity):
        result = TieredPricing().validate(PricingInput(base_price=100, quantity=quantity))
        assert not result.valid
        assert result.field == "quantity"
        assert result.error == "Quantity must be at least 1"


class TestStrategyProperties:
    @pytest.mark.parametrize("strategy", [StandardPricing(), PercentageDiscount(), FixedDiscount(), TieredPricing()])
    @pytest.mark.parametrize(
        "pricing_input_kwargs",
        [
            {"base_price": 1, "quantity": 1},
            {"base_price": 0.5, "quantity": 3, "discount_percent": 33.3, "tax_rate": 0.175},
            {"base_price": 1999, "quantity": 12, "discount_amount": 99999, "tax_rate": 0.2},
            {"base_price": 4.99, "quantity": 101, "discount_percent": 99.9, "tax_rate": 0.13},
        ],
    )
    def test_outputs_always_reconcile(self, strategy, pricing_input_kwargs):
        output = strategy.calculate(PricingInput(**pricing_input_kwargs))
        assert 0 <= output.discount <= output.subtotal
        assert output.taxable_amount == output.subtotal - output.discount
        assert output.total == output.taxable_amount + output.tax
        assert output.total >= 0
        assert all(isinstance(value, int) for value in _as_tuple(output))

    def test_calculation_is_repeatable(self):
        pricing_input = PricingInput(base_price=1234, quantity=27, tax_rate=0.19)
        strategy = TieredPricing()
        assert _as_tuple(strategy.calculate(pricing_input)) == _as_tuple(strategy.calculate(pricing_input))


class TestSharedQuantityRule:
    @pytest.mark.parametrize("strategy", [StandardPricing(), PercentageDiscount(), FixedDiscount(), TieredPricing()])
    @pytest.mark.parametrize("quantity", [0, -2])
    def test_quantity_below_one_is_invalid_for_every_strategy(self, strategy, quantity):
        result = strategy.validate(PricingInput(base_price=100, quantity=quantity, discount_percent=10))
        assert not result.valid
        assert result.field == "quantity"
        assert result.error == "Quantity must be at least 1"

    def test_quantity_checked_before_discount_fields(self):
        result = PercentageDiscount().validate(PricingInput(base_price=100, quantity=0, discount_percent=150))
        assert result.field == "quantity"
