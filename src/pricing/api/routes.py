"""FastAPI endpoints for the pricing engine: strategies, tax, totals and checkout."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from pricing.api.providers import (
    get_checkout_calculator,
    get_pricing_calculator,
    get_settings,
    get_tax_resolver,
)
from pricing.api.schemas import (
    CalculatePriceRequest,
    CheckoutQuoteRequest,
    CheckoutQuoteResponse,
    DiscountCodeSchema,
    OrderTotalRequest,
    OrderTotalResponse,
    PricingResultResponse,
    StrategyListResponse,
    StrategyResponse,
    TaxBreakdownRequest,
    TaxBreakdownResponse,
    TaxRequest,
    TaxResponse,
    ValidateCouponRequest,
    ValidateCouponResponse,
    WholesalePriceRequest,
    WholesalePriceResponse,
)
from pricing.checkout.quote import CheckoutLine
from pricing.errors import BusinessLogicError, ConfigurationError
from pricing.order.totals import assemble_order_total
from pricing.rules.discounts import DiscountCode, evaluate_discount
from pricing.strategy.port import PricingFailure, PricingInput
from pricing.tax.gst import calculate_tax_breakdown
from pricing.wholesale.tiers import calculate_wholesale_price

pricing_router = APIRouter(prefix="/pricing", tags=["pricing"])
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


# ---------------------------------------------------------------------------
# Error responses
# ---------------------------------------------------------------------------
def _business_error(exc: BusinessLogicError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _configuration_error() -> JSONResponse:
    # Logged where raised
    return JSONResponse(status_code=500, content={"error": "Internal pricing error"})


def _validation_error(exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"errors": exc.messages})


def _discount_code(body: DiscountCodeSchema) -> DiscountCode:
    return DiscountCode(**body.model_dump(exclude_none=True))


# ---------------------------------------------------------------------------
# Pricing endpoints
# ---------------------------------------------------------------------------
@pricing_router.post("/calculate", response_model=PricingResultResponse)
async def calculate(body: CalculatePriceRequest):
    """Price one line with the named strategy."""
    try:
        pricing_input = PricingInput(
            base_price=body.base_price,
            quantity=body.quantity,
            discount_percent=body.discount_percent,
            discount_amount=body.discount_amount,
            tax_rate=body.tax_rate,
        )
        result = get_pricing_calculator().calculate_price(pricing_input, body.strategy)
    except ValidationError as exc:
        return _validation_error(exc)
    except ConfigurationError:
        return _configuration_error()

    if isinstance(result, PricingFailure):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": result.error, "field": result.field},
        )

    return PricingResultResponse(
        strategy=body.strategy,
        subtotal=result.subtotal,
        discount=result.discount,
        taxable_amount=result.taxable_amount,
        tax=result.tax,
        total=result.total,
    )


@pricing_router.get("/strategies", response_model=StrategyListResponse)
async def list_strategies() -> StrategyListResponse:
    registry = get_pricing_calculator().registry
    return StrategyListResponse(
        strategies=[
            StrategyResponse(name=strategy.name.value, description=strategy.description)
            for strategy in sorted(registry, key=lambda s: s.name.value)
        ]
    )


@pricing_router.post("/tax", response_model=TaxResponse)
async def resolve_tax(body: TaxRequest):
    try:
        resolution = get_tax_resolver().resolve(body.country_code, body.subtotal)
    except ValidationError as exc:
        return _validation_error(exc)
    return TaxResponse(**resolution.to_dict())


@pricing_router.post("/tax/breakdown", response_model=TaxBreakdownResponse)
async def tax_breakdown(body: TaxBreakdownRequest):
    """GST split into central and state portions."""
    rate_percent = body.rate_percent if body.rate_percent is not None else get_settings().gst_rate_percent
    try:
        breakdown = calculate_tax_breakdown(body.subtotal, rate_percent)
    except ValidationError as exc:
        return _validation_error(exc)
    return TaxBreakdownResponse(**breakdown.to_dict())


@pricing_router.post("/order-total", response_model=OrderTotalResponse)
async def order_total(body: OrderTotalRequest):
    try:
        total = assemble_order_total(
            subtotal=body.subtotal,
            shipping_total=body.shipping_total,
            tax_rate_percent=body.tax_rate_percent,
            discount_amount=body.discount_amount,
        )
    except ValidationError as exc:
        return _validation_error(exc)
    return OrderTotalResponse(total=total)


@pricing_router.post("/wholesale", response_model=WholesalePriceResponse)
async def wholesale_price(body: WholesalePriceRequest):
    try:
        quote = calculate_wholesale_price(body.retail_price, body.wholesale_price, body.tier)
    except ValidationError as exc:
        return _validation_error(exc)
    return WholesalePriceResponse(**quote.to_dict())


# ---------------------------------------------------------------------------
# Checkout endpoints
# ---------------------------------------------------------------------------
@checkout_router.post("/validate-coupon", response_model=ValidateCouponResponse)
async def validate_coupon(body: ValidateCouponRequest):
    """Check a discount code against a cart total and return the discount it grants."""
    try:
        discount_code = _discount_code(body.discount_code)
        amount = evaluate_discount(discount_code, body.cart_total, customer_has_used=body.customer_has_used)
    except ValidationError as exc:
        return _validation_error(exc)
    except BusinessLogicError as exc:
        return _business_error(exc)

    return ValidateCouponResponse(
        code=discount_code.code,
        discount_type=discount_code.discount_type,
        discount_amount=amount,
    )


@checkout_router.post("/quote", response_model=CheckoutQuoteResponse)
async def checkout_quote(body: CheckoutQuoteRequest):
    try:
        lines = [CheckoutLine(**line.model_dump()) for line in body.lines]
        discount_code = _discount_code(body.discount_code) if body.discount_code is not None else None
        quote = get_checkout_calculator().quote(
            lines,
            body.country_code,
            shipping_total=body.shipping_total,
            discount_code=discount_code,
            customer_has_used_discount=body.customer_has_used_discount,
        )
    except ValidationError as exc:
        return _validation_error(exc)
    except BusinessLogicError as exc:
        return _business_error(exc)

    return CheckoutQuoteResponse(**quote.to_dict())
