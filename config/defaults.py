"""
Configuration Defaults - Single source of truth for all default values.

Every name the back office uses for a table, queue, container or share lives
here so the pydantic config models, the repositories and the tests agree on
the same values.

Organization:
    - StorageDefaults: table, container and share names
    - QueueDefaults: Storage Queue names and receive settings
    - CatalogDefaults: seed products for the in-memory fallback catalog
    - AppDefaults: application-level settings (environment, logging)

Required Environment Variables (one of):
    AZURE_STORAGE_CONNECTION_STRING - storage account connection string
    STORAGE_ACCOUNT_NAME - account name for DefaultAzureCredential auth

Usage:
    from config.defaults import StorageDefaults, QueueDefaults

    # In Pydantic Field definitions:
    customers_table: str = Field(default=StorageDefaults.CUSTOMERS_TABLE, ...)
"""


# =============================================================================
# STORAGE DEFAULTS
# =============================================================================

class StorageDefaults:
    """
    Azure Storage resource names.

    Table names and partition keys match the tables already provisioned for
    the retail back office. Partition keys are constants per entity type.
    """

    # Table Storage
    CUSTOMERS_TABLE = "Customers"
    PRODUCTS_TABLE = "Products"
    CUSTOMER_PARTITION_KEY = "Customers"
    PRODUCT_PARTITION_KEY = "Products"

    # Blob Storage
    PRODUCT_IMAGES_CONTAINER = "product-images"
    DOCUMENTS_CONTAINER = "documents"
    UPLOADS_CONTAINER = "uploads"
    BROWSABLE_CONTAINERS = "product-images,documents,uploads"

    # Containers are created with anonymous read access to blobs only
    CONTAINER_PUBLIC_ACCESS = "blob"

    # Azure Files
    LOG_SHARE = "logs"

    # Environment variable names accepted for the connection string, in
    # priority order. The last two follow the .NET configuration key style.
    CONNECTION_STRING_VARS = (
        "AZURE_STORAGE_CONNECTION_STRING",
        "AzureStorage__ConnectionString",
        "ConnectionStrings__AzureStorage",
    )


# =============================================================================
# QUEUE DEFAULTS
# =============================================================================

class QueueDefaults:
    """Azure Storage Queue defaults."""

    ORDERS_QUEUE = "orders"
    INVENTORY_QUEUE = "inventory"

    # Seconds a received message stays invisible before redelivery
    VISIBILITY_TIMEOUT = 30

    # Plain JSON text by default; Functions queue triggers expect base64
    MESSAGE_BASE64 = False

    PEEK_MAX_MESSAGES = 32


# =============================================================================
# CATALOG DEFAULTS
# =============================================================================

class CatalogDefaults:
    """Seed data for the in-memory fallback product catalog."""

    ID_PREFIX = "prod-"

    SEED_PRODUCTS = (
        {
            "product_id": "sample-1",
            "name": "Sample Product 1",
            "description": "This is a sample product",
            "price": "100.00",
            "stock_quantity": 10,
            "category": "Electronics",
        },
        {
            "product_id": "sample-2",
            "name": "Sample Product 2",
            "description": "Another sample product",
            "price": "50.00",
            "stock_quantity": 20,
            "category": "Clothing",
        },
        {
            "product_id": "sample-3",
            "name": "Sample Product 3",
            "description": "Third sample product",
            "price": "25.00",
            "stock_quantity": 15,
            "category": "Books",
        },
    )


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Application-level defaults."""

    ENVIRONMENT = "dev"
    DEBUG_MODE = False
    DEBUG_LOGGING = False
    LOG_LEVEL = "INFO"
