"""
Randomized model factories.

Every factory call generates randomized non-identity fields (names, prices,
quantities, descriptions) so tests cannot rely on specific default values.
Factories return dicts; wrap with the model class (Customer(**data)).
"""

import random
import string
from decimal import Decimal


def _random_suffix(length: int = 6) -> str:
    """Generate random alphanumeric suffix."""
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


def random_price() -> str:
    """Two-decimal price string between 0.50 and 999.99."""
    cents = random.randint(50, 99999)
    return str(Decimal(cents) / Decimal(100))


def make_customer(**overrides):
    """
    Build Customer field values.

    Returns:
        dict suitable for Customer(**result)
    """
    suffix = _random_suffix()
    base = {
        "first_name": f"First{suffix}",
        "last_name": f"Last{suffix}",
        "email": f"{suffix}@example.com",
        "phone": f"555-{random.randint(1000, 9999)}",
        "address": f"{random.randint(1, 999)} Main Street",
        "city": random.choice(["Cape Town", "Durban", "Pretoria"]),
        "state": random.choice(["WC", "KZN", "GP"]),
        "zip_code": f"{random.randint(1000, 9999)}",
    }
    base.update(overrides)
    return base


def make_product(**overrides):
    """
    Build Product field values.

    Returns:
        dict suitable for Product(**result)
    """
    suffix = _random_suffix()
    base = {
        "name": f"Product {suffix}",
        "description": f"Description {suffix}",
        "price": random_price(),
        "stock_quantity": random.randint(0, 500),
        "category": random.choice(["Electronics", "Clothing", "Books", "Garden"]),
    }
    base.update(overrides)
    return base


def make_order_request(customer_id: str, product_id: str, **overrides):
    """
    Build OrderRequest field values.

    Returns:
        dict suitable for OrderRequest(**result)
    """
    suffix = _random_suffix()
    base = {
        "customer_id": customer_id,
        "product_id": product_id,
        "quantity": random.randint(1, 9),
        "shipping_address": f"{random.randint(1, 999)} Dock Road {suffix}",
        "payment_method": random.choice(["Credit Card", "EFT", "Cash"]),
        "notes": f"note {suffix}",
    }
    base.update(overrides)
    return base


def make_file_bytes(size: int = None) -> bytes:
    """Random payload of the given (or random) size."""
    size = size if size is not None else random.randint(1, 4096)
    return bytes(random.getrandbits(8) for _ in range(size))
