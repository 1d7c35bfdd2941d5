"""Pydantic request/response schemas for the Pricing API.

Request schemas check shapes and reject NaN and infinities. Range rules live
in the domain so that the API reports them the same way the engine does.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Strategy Schemas ---


class CalculatePriceRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "strategy": "percentage_discount",
                    "base_price": 2500,
                    "quantity": 4,
                    "discount_percent": 10,
                    "tax_rate": 0.08,
                }
            ]
        }
    }

    strategy: str = "standard"
    base_price: float = Field(..., allow_inf_nan=False)
    quantity: int = 1
    discount_percent: float | None = Field(None, allow_inf_nan=False)
    discount_amount: float | None = Field(None, allow_inf_nan=False)
    tax_rate: float = Field(0.0, allow_inf_nan=False)


class PricingResultResponse(BaseModel):
    success: bool = True
    strategy: str
    subtotal: int
    discount: int
    taxable_amount: int
    tax: int
    total: int


class StrategyResponse(BaseModel):
    name: str
    description: str


class StrategyListResponse(BaseModel):
    strategies: list[StrategyResponse]


# --- Tax Schemas ---


class TaxRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"country_code": "GB", "subtotal": 10000}]}}

    country_code: str = Field(..., max_length=10)
    subtotal: int


class TaxResponse(BaseModel):
    tax_amount: int
    tax_rate: float
    tax_name: str
    currency_code: str


class TaxBreakdownRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"subtotal": 10000, "rate_percent": 18}]}}

    subtotal: int
    rate_percent: float | None = Field(None, allow_inf_nan=False)


class TaxBreakdownResponse(BaseModel):
    rate_percent: float
    subtotal: int
    central: int
    state: int
    total: int


# --- Order Total Schemas ---


class OrderTotalRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "subtotal": 10000,
                    "shipping_total": 500,
                    "tax_rate_percent": 18,
                    "discount_amount": 1000,
                }
            ]
        }
    }

    subtotal: int
    shipping_total: int = 0
    tax_rate_percent: float = Field(0.0, allow_inf_nan=False)
    discount_amount: int = 0


class OrderTotalResponse(BaseModel):
    total: int


# --- Wholesale Schemas ---


class WholesalePriceRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"retail_price": 10000, "wholesale_price": None, "tier": "growth"}]}
    }

    retail_price: int
    wholesale_price: int | None = None
    tier: str | None = Field(None, max_length=20)


class WholesalePriceResponse(BaseModel):
    price: int
    is_wholesale_price: bool
    discount_percent: float
    savings: int


# --- Checkout Schemas ---


class DiscountCodeSchema(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "SUMMER10",
                    "discount_type": "percentage",
                    "value": 10,
                    "usage_limit": 500,
                    "used_count": 42,
                    "min_purchase_amount": 5000,
                    "is_active": True,
                    "starts_at": "2026-06-01T00:00:00Z",
                    "ends_at": "2026-08-31T23:59:59Z",
                }
            ]
        }
    }

    code: str = Field(..., max_length=100)
    discount_type: str
    value: int
    usage_limit: int | None = None
    used_count: int = 0
    min_purchase_amount: int | None = None
    is_active: bool = True
    starts_at: datetime | None = None
    ends_at: datetime | None = None


class ValidateCouponRequest(BaseModel):
    discount_code: DiscountCodeSchema
    cart_total: int
    customer_has_used: bool = False


class ValidateCouponResponse(BaseModel):
    valid: bool = True
    code: str
    discount_type: str
    discount_amount: int


class CheckoutLineSchema(BaseModel):
    title: str = Field(..., max_length=255)
    unit_price: int
    quantity: int
    available: int


class CheckoutQuoteRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "country_code": "US",
                    "shipping_total": 599,
                    "lines": [
                        {"title": "Classic Black T-Shirt", "unit_price": 2500, "quantity": 2, "available": 40},
                        {"title": "Canvas Tote", "unit_price": 1800, "quantity": 1, "available": 3},
                    ],
                }
            ]
        }
    }

    lines: list[CheckoutLineSchema]
    country_code: str = Field(..., max_length=10)
    shipping_total: int = 0
    discount_code: DiscountCodeSchema | None = None
    customer_has_used_discount: bool = False


class CheckoutQuoteResponse(BaseModel):
    subtotal: int
    shipping_total: int
    tax: int
    tax_rate: float
    tax_name: str
    discount_total: int
    total: int
    currency: str
    discount_code: str | None = None
