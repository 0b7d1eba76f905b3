"""
AppConfig / StorageConfig / QueueConfig environment loading tests.
"""

import pytest
from pydantic import ValidationError

from config import AppConfig, QueueConfig, StorageConfig, debug_config, get_config, reset_config
from config.defaults import QueueDefaults, StorageDefaults


class TestStorageConfig:

    def test_defaults(self, clean_env):
        storage = StorageConfig.from_environment()
        assert storage.customers_table == StorageDefaults.CUSTOMERS_TABLE
        assert storage.products_table == StorageDefaults.PRODUCTS_TABLE
        assert storage.log_share == "logs"
        assert storage.browsable_containers == ["product-images", "documents", "uploads"]
        assert storage.is_configured is False

    def test_account_name_only(self, clean_env):
        clean_env.setenv("STORAGE_ACCOUNT_NAME", "retailacct")
        storage = StorageConfig.from_environment()
        assert storage.is_configured
        assert storage.uses_connection_string is False
        assert storage.account_url("queue") == "https://retailacct.queue.core.windows.net"

    def test_connection_string_priority(self, clean_env):
        clean_env.setenv("ConnectionStrings__AzureStorage", "third")
        clean_env.setenv("AzureStorage__ConnectionString", "second")
        assert StorageConfig.from_environment().connection_string == "second"

        clean_env.setenv("AZURE_STORAGE_CONNECTION_STRING", "first")
        assert StorageConfig.from_environment().connection_string == "first"

    def test_container_list_trimmed(self, clean_env):
        clean_env.setenv("BLOB_CONTAINERS", " product-images , invoices,, ")
        assert StorageConfig.from_environment().browsable_containers == ["product-images", "invoices"]

    def test_connection_string_masked(self, clean_env):
        clean_env.setenv("AZURE_STORAGE_CONNECTION_STRING", "AccountKey=secret")
        info = StorageConfig.from_environment().debug_dict()
        assert info["connection_string"] == "***MASKED***"
        assert info["auth_mode"] == "connection_string"
        assert "secret" not in repr(StorageConfig.from_environment())


class TestQueueConfig:

    def test_defaults(self, clean_env):
        queues = QueueConfig.from_environment()
        assert queues.orders_queue == QueueDefaults.ORDERS_QUEUE
        assert queues.inventory_queue == QueueDefaults.INVENTORY_QUEUE
        assert queues.visibility_timeout == 30
        assert queues.message_base64 is False

    def test_overrides(self, clean_env):
        clean_env.setenv("ORDERS_QUEUE", "orders-qa")
        clean_env.setenv("QUEUE_VISIBILITY_TIMEOUT", "120")
        clean_env.setenv("QUEUE_MESSAGE_BASE64", "TRUE")
        queues = QueueConfig.from_environment()
        assert queues.orders_queue == "orders-qa"
        assert queues.visibility_timeout == 120
        assert queues.message_base64 is True

    def test_visibility_timeout_must_be_positive(self, clean_env):
        clean_env.setenv("QUEUE_VISIBILITY_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            QueueConfig.from_environment()


class TestAppConfig:

    def test_from_environment(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "qa")
        clean_env.setenv("DEBUG_MODE", "true")
        clean_env.setenv("STORAGE_ACCOUNT_NAME", "retailacct")
        config = AppConfig.from_environment()
        assert config.environment == "qa"
        assert config.debug_mode is True
        assert config.storage_account_name == "retailacct"

    def test_singleton_and_reset(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "qa")
        first = get_config()
        assert get_config() is first

        clean_env.setenv("ENVIRONMENT", "prod")
        assert get_config().environment == "qa"
        reset_config()
        assert get_config().environment == "prod"

    def test_debug_config(self, clean_env):
        clean_env.setenv("AZURE_STORAGE_CONNECTION_STRING", "AccountKey=secret")
        info = debug_config()
        assert info["storage"]["connection_string"] == "***MASKED***"
        assert info["queues"]["orders_queue"] == "orders"
