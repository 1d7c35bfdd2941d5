"""Checkout quote: stock, discount, tax and order total for a whole cart."""

from dataclasses import dataclass
from datetime import datetime

import structlog
from protean.exceptions import ValidationError
from protean.fields import Integer, String

from pricing.config import PricingSettings
from pricing.domain import pricing
from pricing.order.totals import fold_order_total
from pricing.rules.discounts import DiscountCode, evaluate_discount
from pricing.rules.stock import StockCheckItem, check_stock
from pricing.shared.money import Money
from pricing.tax.resolver import TaxResolver

logger = structlog.get_logger(__name__)


@pricing.value_object
class CheckoutLine:
    """One cart line as the checkout collaborator sees it."""

    title = String(required=True, max_length=255)
    unit_price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    available = Integer(required=True)

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity

    def to_stock_item(self) -> StockCheckItem:
        return StockCheckItem(title=self.title, requested=self.quantity, available=self.available)


@dataclass(frozen=True)
class CheckoutQuote:
    subtotal: int
    shipping_total: int
    tax: int
    tax_rate: float
    tax_name: str
    discount_total: int
    total: Money
    discount_code: str | None = None

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "shipping_total": self.shipping_total,
            "tax": self.tax,
            "tax_rate": self.tax_rate,
            "tax_name": self.tax_name,
            "discount_total": self.discount_total,
            "total": self.total.amount,
            "currency": self.total.currency,
            "discount_code": self.discount_code,
        }


class CheckoutCalculator:
    """Prices a cart end to end.

    Business rule violations (stock, discount usage, discount scope) raise
    and stop the quote. Tax resolution never fails.
    """

    def __init__(self, tax_resolver: TaxResolver | None = None, settings: PricingSettings | None = None) -> None:
        self.settings = settings or PricingSettings()
        self.tax_resolver = tax_resolver or TaxResolver(settings=self.settings)

    def quote(
        self,
        lines: list[CheckoutLine],
        country_code: str,
        shipping_total: int = 0,
        discount_code: DiscountCode | None = None,
        customer_has_used_discount: bool = False,
        now: datetime | None = None,
    ) -> CheckoutQuote:
        if not lines:
            raise ValidationError({"lines": ["Cart is empty"]})

        check_stock([line.to_stock_item() for line in lines])

        subtotal = sum(line.line_total for line in lines)

        discount_total = 0
        if discount_code is not None:
            discount_total = evaluate_discount(
                discount_code,
                subtotal,
                now=now,
                customer_has_used=customer_has_used_discount,
            )

        tax = self.tax_resolver.resolve(country_code, subtotal)
        total = fold_order_total(subtotal, shipping_total, tax.tax_amount, discount_total)

        logger.info(
            "Checkout quoted",
            country_code=country_code,
            line_count=len(lines),
            subtotal=subtotal,
            discount_total=discount_total,
            tax=tax.tax_amount,
            total=total,
        )

        return CheckoutQuote(
            subtotal=subtotal,
            shipping_total=shipping_total,
            tax=tax.tax_amount,
            tax_rate=tax.tax_rate,
            tax_name=tax.tax_name,
            discount_total=discount_total,
            total=Money(amount=total, currency=tax.currency_code),
            discount_code=discount_code.code if discount_code is not None else None,
        )
