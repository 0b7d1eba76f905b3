"""
Unit test fixtures - factory-built models.
"""

import pytest

from core.models import Customer, Product
from tests.factories.model_factories import make_customer, make_product


@pytest.fixture
def customer_data():
    """Return randomized customer data dict."""
    return make_customer()


@pytest.fixture
def product_data():
    """Return randomized product data dict."""
    return make_product()


@pytest.fixture
def customer(customer_data):
    return Customer(**customer_data)


@pytest.fixture
def product(product_data):
    return Product(**product_data)
