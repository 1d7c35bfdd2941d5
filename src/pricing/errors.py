"""Error taxonomy for the pricing engine.

Business rule rejections are user-presentable and always propagate to the
caller. Configuration errors are integration mistakes: the HTTP layer logs
them and answers with a generic internal error.

Malformed values are not modelled here. Value objects raise Protean's
`ValidationError`, and strategy validation failures are returned as values.
"""

from typing import Any


class PricingError(Exception):
    """Base class for errors raised by the pricing engine."""

    status_code = 500
    default_code = "PRICING_ERROR"

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code, "details": self.details}


class BusinessLogicError(PricingError):
    """A legitimate business-rule rejection."""

    status_code = 400
    default_code = "BUSINESS_ERROR"


class InsufficientStockError(BusinessLogicError):
    """One or more requested quantities exceed available stock."""

    default_code = "INSUFFICIENT_STOCK"

    def __init__(self, items: list[dict[str, Any]]) -> None:
        if items:
            message = f"Insufficient stock for: {', '.join(item['title'] for item in items)}"
        else:
            message = "Insufficient stock"
        super().__init__(message, details={"items": items})
        self.items = items


class DiscountUsageLimitError(BusinessLogicError):
    default_code = "DISCOUNT_LIMIT_REACHED"

    def __init__(self, message: str = "Discount code usage limit reached", code: str | None = None) -> None:
        super().__init__(message, code)


class DiscountNotApplicableError(BusinessLogicError):
    default_code = "DISCOUNT_NOT_APPLICABLE"


class ConfigurationError(PricingError):
    """A developer or integration mistake, never shown verbatim to customers."""

    status_code = 500
    default_code = "CONFIGURATION_ERROR"


class UnknownStrategyError(ConfigurationError):
    default_code = "UNKNOWN_STRATEGY"

    def __init__(self, strategy_name: str) -> None:
        super().__init__(f"Unknown pricing strategy: {strategy_name}", details={"strategy": strategy_name})
        self.strategy_name = strategy_name
