"""Pricing bounded context: checkout pricing, tax, discounts and order totals."""
