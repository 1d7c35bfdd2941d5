"""Tax rate table entries and the built-in defaults."""

from protean.fields import Float, String

from pricing.domain import pricing

# country code -> (rate as a fraction, display name)
DEFAULT_TAX_RATES = {
    "US": (0.08, "Sales Tax"),
    "GB": (0.2, "VAT"),
    "CA": (0.13, "HST"),
    "AU": (0.1, "GST"),
    "DE": (0.19, "VAT"),
    "FR": (0.2, "VAT"),
    "IN": (0.18, "GST"),
    "JP": (0.1, "Consumption Tax"),
}


@pricing.value_object
class TaxRate:
    """Tax rate for one country. `rate` is a fraction: 0.2 means 20%."""

    country_code = String(required=True, max_length=2)
    rate = Float(required=True, min_value=0.0, max_value=1.0)
    name = String(required=True, max_length=50)


def default_tax_rates() -> list[TaxRate]:
    return [TaxRate(country_code=code, rate=rate, name=name) for code, (rate, name) in DEFAULT_TAX_RATES.items()]
