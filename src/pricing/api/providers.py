"""Engine factory for the HTTP layer.

Provides get_*/set_* pairs so the API can be pointed at a custom registry,
tax table or settings:
- the default strategy registry and environment settings when nothing is set
- any explicitly constructed calculator in tests or embedding applications
"""

from pricing.checkout.quote import CheckoutCalculator
from pricing.config import PricingSettings
from pricing.strategy.registry import PricingCalculator, build_default_registry
from pricing.tax.resolver import TaxResolver

_current_settings: PricingSettings | None = None
_current_pricing_calculator: PricingCalculator | None = None
_current_checkout_calculator: CheckoutCalculator | None = None


def get_settings() -> PricingSettings:
    """Return the active settings. Defaults to values read from the environment."""
    global _current_settings
    if _current_settings is None:
        _current_settings = PricingSettings.from_env()
    return _current_settings


def get_pricing_calculator() -> PricingCalculator:
    global _current_pricing_calculator
    if _current_pricing_calculator is None:
        _current_pricing_calculator = PricingCalculator(build_default_registry())
    return _current_pricing_calculator


def get_tax_resolver() -> TaxResolver:
    return get_checkout_calculator().tax_resolver


def get_checkout_calculator() -> CheckoutCalculator:
    global _current_checkout_calculator
    if _current_checkout_calculator is None:
        settings = get_settings()
        _current_checkout_calculator = CheckoutCalculator(TaxResolver(settings=settings), settings)
    return _current_checkout_calculator


def set_pricing_calculator(calculator: PricingCalculator) -> None:
    """Override the active pricing calculator (useful for tests)."""
    global _current_pricing_calculator
    _current_pricing_calculator = calculator


def set_checkout_calculator(calculator: CheckoutCalculator) -> None:
    """Override the active checkout calculator and, with it, the tax resolver."""
    global _current_checkout_calculator
    _current_checkout_calculator = calculator


def reset_providers() -> None:
    """Reset to defaults; settings are re-read from the environment on next use."""
    global _current_settings, _current_pricing_calculator, _current_checkout_calculator
    _current_settings = None
    _current_pricing_calculator = None
    _current_checkout_calculator = None
