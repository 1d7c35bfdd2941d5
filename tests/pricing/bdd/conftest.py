"""Shared BDD fixtures for the pricing engine."""

import pytest


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def request_data():
    """Keyword arguments accumulated by Given steps."""
    return {}


@pytest.fixture()
def stock_items():
    """Cart lines collected by repeated Given steps."""
    return []
