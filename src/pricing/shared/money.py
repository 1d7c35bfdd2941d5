"""Money value object and the single rounding rule for monetary amounts.

Amounts are integers in minor currency units (cents, paise). Floating point
only ever appears as an intermediate, and every intermediate is brought back
to an integer through `round_minor`.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String

from pricing.domain import pricing

VALID_CURRENCIES = frozenset(
    {
        "USD",
        "EUR",
        "GBP",
        "JPY",
        "CAD",
        "AUD",
        "CHF",
        "CNY",
        "INR",
        "MXN",
        "BRL",
        "KRW",
        "SGD",
        "HKD",
        "NOK",
        "SEK",
        "DKK",
        "NZD",
        "ZAR",
        "TWD",
    }
)

_MINOR_UNIT = Decimal("1")


def round_minor(amount: float | int) -> int:
    """Round an intermediate amount to whole minor units, half away from zero.

    The float is converted to Decimal exactly, so 1800.18 -> 1800 and
    2.5 -> 3 just like `Math.round` does for non-negative values. NaN and
    infinities are not amounts and raise `ValidationError`.
    """
    if not math.isfinite(amount):
        raise ValidationError({"amount": ["Amount must be a finite number"]})
    return int(Decimal(amount).quantize(_MINOR_UNIT, rounding=ROUND_HALF_UP))


@pricing.value_object
class Money:
    """Value object representing a non-negative amount in minor units with currency."""

    amount = Integer(required=True, min_value=0)
    currency = String(max_length=3, default="USD")

    @invariant.post
    def currency_must_be_valid_iso_4217(self):
        if self.currency not in VALID_CURRENCIES:
            raise ValidationError({"currency": [f"Unsupported currency: {self.currency}"]})
