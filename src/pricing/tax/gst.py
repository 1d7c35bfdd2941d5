"""GST breakdown: split a goods-and-services tax into central and state halves."""

import math
from dataclasses import dataclass

from protean.exceptions import ValidationError

from pricing.shared.money import round_minor

DEFAULT_GST_RATE_PERCENT = 18.0


@dataclass(frozen=True)
class TaxBreakdown:
    rate_percent: float
    subtotal: int
    central: int
    state: int
    total: int

    def to_dict(self) -> dict:
        return {
            "rate_percent": self.rate_percent,
            "subtotal": self.subtotal,
            "central": self.central,
            "state": self.state,
            "total": self.total,
        }


def calculate_tax_breakdown(subtotal: int, rate_percent: float = DEFAULT_GST_RATE_PERCENT) -> TaxBreakdown:
    """Compute GST on `subtotal` and split it in two.

    The state half is derived from the total, so `central + state == total`
    even when each half would round differently on its own.
    """
    if subtotal < 0:
        raise ValidationError({"subtotal": ["Subtotal cannot be negative"]})
    if not math.isfinite(rate_percent) or rate_percent < 0 or rate_percent > 100:
        raise ValidationError({"rate_percent": ["Rate must be between 0 and 100"]})

    total = round_minor(subtotal * (rate_percent / 100))
    central = round_minor(subtotal * ((rate_percent / 2) / 100))
    return TaxBreakdown(
        rate_percent=rate_percent,
        subtotal=subtotal,
        central=central,
        state=total - central,
        total=total,
    )
