"""
Config test fixtures - clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "AZURE_STORAGE_CONNECTION_STRING", "AzureStorage__ConnectionString",
        "ConnectionStrings__AzureStorage", "STORAGE_ACCOUNT_NAME",
        "CUSTOMERS_TABLE", "PRODUCTS_TABLE", "PRODUCT_IMAGES_CONTAINER",
        "BLOB_CONTAINERS", "LOG_SHARE_NAME",
        "ORDERS_QUEUE", "INVENTORY_QUEUE", "QUEUE_VISIBILITY_TIMEOUT", "QUEUE_MESSAGE_BASE64",
        "ENVIRONMENT", "DEBUG_MODE", "DEBUG_LOGGING", "LOG_LEVEL",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
