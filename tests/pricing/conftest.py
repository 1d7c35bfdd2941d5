import os

import pytest


@pytest.fixture(scope="session")
def _pricing_domain(request):
    """Initialize the pricing domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from pricing.domain import pricing

    pricing.init()
    return pricing


@pytest.fixture(autouse=True)
def run_around_tests(_pricing_domain):
    """Push domain context before each test, pop it after."""
    ctx = _pricing_domain.domain_context()
    ctx.push()

    yield

    ctx.pop()


@pytest.fixture()
def settings():
    from pricing.config import PricingSettings

    return PricingSettings()


@pytest.fixture()
def registry():
    from pricing.strategy.registry import build_default_registry

    return build_default_registry()


@pytest.fixture()
def calculator(registry):
    from pricing.strategy.registry import PricingCalculator

    return PricingCalculator(registry)
