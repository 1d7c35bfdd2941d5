"""Strategy registry and dispatcher.

The registry is built explicitly and handed to whoever needs it; there is no
module-level instance. `build_default_registry()` returns the four built-in
strategies.
"""

import structlog

from pricing.errors import UnknownStrategyError
from pricing.strategy.port import (
    PricingFailure,
    PricingInput,
    PricingOutput,
    PricingStrategy,
    StrategyName,
)
from pricing.strategy.variants import (
    FixedDiscount,
    PercentageDiscount,
    StandardPricing,
    TieredPricing,
)

logger = structlog.get_logger(__name__)

DEFAULT_STRATEGY = StrategyName.STANDARD.value


class StrategyRegistry:
    """Maps strategy names to strategy instances."""

    def __init__(self, strategies: list[PricingStrategy] | None = None) -> None:
        self._strategies: dict[str, PricingStrategy] = {}
        for strategy in strategies or []:
            self.register(strategy)

    def register(self, strategy: PricingStrategy) -> None:
        key = strategy.name.value
        if key in self._strategies:
            raise ValueError(f"Pricing strategy already registered: {key}")
        self._strategies[key] = strategy

    def get(self, name: str | StrategyName) -> PricingStrategy | None:
        key = name.value if isinstance(name, StrategyName) else name
        return self._strategies.get(key)

    def resolve(self, name: str | StrategyName) -> PricingStrategy:
        """Return the named strategy or raise `UnknownStrategyError`."""
        strategy = self.get(name)
        if strategy is None:
            key = name.value if isinstance(name, StrategyName) else name
            logger.error("Unknown pricing strategy requested", strategy=key, known=self.names())
            raise UnknownStrategyError(key)
        return strategy

    def names(self) -> list[str]:
        return sorted(self._strategies)

    def __iter__(self):
        return iter(self._strategies.values())

    def __len__(self) -> int:
        return len(self._strategies)


def build_default_registry() -> StrategyRegistry:
    return StrategyRegistry(
        [
            StandardPricing(),
            PercentageDiscount(),
            FixedDiscount(),
            TieredPricing(),
        ]
    )


class PricingCalculator:
    """Routes pricing requests to a strategy: validate first, then calculate."""

    def __init__(self, registry: StrategyRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> StrategyRegistry:
        return self._registry

    def calculate_price(
        self,
        pricing_input: PricingInput,
        strategy_name: str | StrategyName = DEFAULT_STRATEGY,
    ) -> PricingOutput | PricingFailure:
        strategy = self._registry.resolve(strategy_name)

        result = strategy.validate(pricing_input)
        if not result.valid:
            logger.info(
                "Pricing input rejected",
                strategy=strategy.name.value,
                field=result.field,
                error=result.error,
            )
            return PricingFailure(strategy=strategy.name.value, error=result.error, field=result.field)

        return strategy.calculate(pricing_input)


def calculate_price(
    pricing_input: PricingInput,
    strategy_name: str | StrategyName = DEFAULT_STRATEGY,
    registry: StrategyRegistry | None = None,
) -> PricingOutput | PricingFailure:
    """Price `pricing_input` with the named strategy (default: standard)."""
    calculator = PricingCalculator(registry or build_default_registry())
    return calculator.calculate_price(pricing_input, strategy_name)
