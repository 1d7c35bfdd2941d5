"""Pricing bounded context: order pricing and checkout computation.

Turns a cart (line items, region, discount code) into a final charge amount.
All computation is pure: value objects in, value objects out, no persistence.
"""

from protean.domain import Domain

from pricing.utils.logging import configure_logging

# Configure logging for the application
configure_logging()

# Domain Composition Root
pricing = Domain(name="pricing")
