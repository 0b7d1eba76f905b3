# ============================================================================
# MODULE CONTEXT - STORAGE CONFIGURATION
# ============================================================================
# STATUS: Active
# PURPOSE: Azure Storage configuration - credentials, tables, containers, share
# EXPORTS: StorageConfig, resolve_connection_string
# INTERFACES: Pydantic BaseModel
# PYDANTIC_MODELS: StorageConfig
# DEPENDENCIES: pydantic, os, typing
# SOURCE: Environment variables (AZURE_STORAGE_CONNECTION_STRING, STORAGE_ACCOUNT_NAME)
# SCOPE: Storage-specific configuration shared by all four storage repositories
# VALIDATION: Pydantic v2 validation
# PATTERNS: Value objects, composition
# ENTRY_POINTS: from config import StorageConfig
# ============================================================================

"""
Azure Storage Configuration

One storage account backs tables, blobs, queues and file shares. It is
addressed either by a connection string or, when only the account name is
set, through DefaultAzureCredential against the standard endpoints.
"""

import os
from typing import Optional, List
from pydantic import BaseModel, Field

from .defaults import StorageDefaults


def resolve_connection_string() -> Optional[str]:
    """
    Return the first storage connection string found in the environment.

    Checks AZURE_STORAGE_CONNECTION_STRING first, then the two .NET style
    keys still set on older deployments.
    """
    for var_name in StorageDefaults.CONNECTION_STRING_VARS:
        value = os.environ.get(var_name)
        if value:
            return value
    return None


class StorageConfig(BaseModel):
    """
    Azure Storage account and resource names.

    Exactly one of connection_string / account_name is needed. The
    connection string wins when both are set.
    """

    connection_string: Optional[str] = Field(
        default=None,
        repr=False,
        description="Storage account connection string (AZURE_STORAGE_CONNECTION_STRING)"
    )
    account_name: Optional[str] = Field(
        default=None,
        description="Storage account name for DefaultAzureCredential authentication",
        examples=["abcretailstorage"]
    )

    # Tables
    customers_table: str = Field(
        default=StorageDefaults.CUSTOMERS_TABLE,
        description="Table holding customer entities"
    )
    products_table: str = Field(
        default=StorageDefaults.PRODUCTS_TABLE,
        description="Table holding product entities"
    )

    # Blobs
    product_images_container: str = Field(
        default=StorageDefaults.PRODUCT_IMAGES_CONTAINER,
        description="Container for product images uploaded with a new product"
    )
    browsable_containers: List[str] = Field(
        default_factory=lambda: StorageDefaults.BROWSABLE_CONTAINERS.split(","),
        description="Containers offered by the file browser"
    )

    # Files
    log_share: str = Field(
        default=StorageDefaults.LOG_SHARE,
        description="Azure Files share that receives audit log files"
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.connection_string or self.account_name)

    @property
    def uses_connection_string(self) -> bool:
        return bool(self.connection_string)

    def account_url(self, service: str) -> str:
        """
        Build the public endpoint for one storage service.

        Args:
            service: 'blob', 'queue', 'table' or 'file'
        """
        return f"https://{self.account_name}.{service}.core.windows.net"

    @classmethod
    def from_environment(cls):
        """Load storage configuration from environment variables."""
        containers = os.environ.get("BLOB_CONTAINERS", StorageDefaults.BROWSABLE_CONTAINERS)
        return cls(
            connection_string=resolve_connection_string(),
            account_name=os.environ.get("STORAGE_ACCOUNT_NAME"),
            customers_table=os.environ.get("CUSTOMERS_TABLE", StorageDefaults.CUSTOMERS_TABLE),
            products_table=os.environ.get("PRODUCTS_TABLE", StorageDefaults.PRODUCTS_TABLE),
            product_images_container=os.environ.get(
                "PRODUCT_IMAGES_CONTAINER",
                StorageDefaults.PRODUCT_IMAGES_CONTAINER
            ),
            browsable_containers=[c.strip() for c in containers.split(",") if c.strip()],
            log_share=os.environ.get("LOG_SHARE_NAME", StorageDefaults.LOG_SHARE),
        )

    def debug_dict(self) -> dict:
        """Return debug-friendly configuration with the connection string masked."""
        return {
            "connection_string": "***MASKED***" if self.connection_string else None,
            "account_name": self.account_name,
            "auth_mode": "connection_string" if self.uses_connection_string else "managed_identity",
            "customers_table": self.customers_table,
            "products_table": self.products_table,
            "product_images_container": self.product_images_container,
            "browsable_containers": self.browsable_containers,
            "log_share": self.log_share,
        }
