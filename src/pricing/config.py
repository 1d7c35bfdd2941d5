"""Runtime settings for the pricing engine, read from the environment."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class PricingSettings:
    """Store-level pricing policy.

    `default_tax_rate` is a fraction (0.1 == 10%); `gst_rate_percent` is a
    percentage (18 == 18%).
    """

    default_tax_rate: float = 0.1
    primary_market: str = "US"
    currency_code: str = "USD"
    gst_rate_percent: float = 18.0

    @classmethod
    def from_env(cls) -> "PricingSettings":
        return cls(
            default_tax_rate=float(os.environ.get("DEFAULT_TAX_RATE_PERCENT", "10")) / 100,
            primary_market=os.environ.get("PRIMARY_MARKET", "US").upper(),
            currency_code=os.environ.get("STORE_CURRENCY", "USD").upper(),
            gst_rate_percent=float(os.environ.get("GST_RATE_PERCENT", "18")),
        )
