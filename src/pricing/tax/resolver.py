"""Tax rate resolution by country code.

Resolution never fails: an unknown country falls back to the configured
default rate, named "Sales Tax" in the primary market and "VAT" elsewhere.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError

from pricing.config import PricingSettings
from pricing.shared.money import round_minor
from pricing.tax.rates import TaxRate, default_tax_rates

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TaxResolution:
    tax_amount: int
    tax_rate: float
    tax_name: str
    currency_code: str

    def to_dict(self) -> dict:
        return {
            "tax_amount": self.tax_amount,
            "tax_rate": self.tax_rate,
            "tax_name": self.tax_name,
            "currency_code": self.currency_code,
        }


class TaxResolver:
    """Looks up a country's tax rate and computes the tax on a subtotal."""

    def __init__(self, rates: list[TaxRate] | None = None, settings: PricingSettings | None = None) -> None:
        self._settings = settings or PricingSettings()
        table = default_tax_rates() if rates is None else rates
        self._rates = {rate.country_code.upper(): rate for rate in table}

    @property
    def settings(self) -> PricingSettings:
        return self._settings

    def rate_for(self, country_code: str) -> tuple[float, str]:
        """Return `(rate, name)` for the country, falling back to the default rate."""
        code = (country_code or "").strip().upper()
        entry = self._rates.get(code)
        if entry is not None:
            return entry.rate, entry.name

        name = "Sales Tax" if code == self._settings.primary_market else "VAT"
        logger.debug("No tax rate for country, using default", country_code=code, rate=self._settings.default_tax_rate)
        return self._settings.default_tax_rate, name

    def resolve(self, country_code: str, subtotal: int) -> TaxResolution:
        if subtotal < 0:
            raise ValidationError({"subtotal": ["Subtotal cannot be negative"]})

        rate, name = self.rate_for(country_code)
        return TaxResolution(
            tax_amount=round_minor(subtotal * rate),
            tax_rate=rate,
            tax_name=name,
            currency_code=self._settings.currency_code,
        )


def resolve_tax(country_code: str, subtotal: int, resolver: TaxResolver | None = None) -> TaxResolution:
    return (resolver or TaxResolver()).resolve(country_code, subtotal)
