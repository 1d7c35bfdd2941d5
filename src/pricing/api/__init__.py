"""Pricing engine API package."""

from pricing.api.routes import checkout_router, pricing_router

__all__ = ["pricing_router", "checkout_router"]
