# ============================================================================
# MODULE CONTEXT - REPOSITORY FACTORY
# ============================================================================
# STATUS: Infrastructure - Central factory for all repository instances
# PURPOSE: Build Azure SDK service clients from config and hand out initialized repositories
# EXPORTS: RepositoryFactory
# INTERFACES: Creates ITableRepository, IBlobRepository, IQueueRepository, IFileShareRepository
# DEPENDENCIES: azure-data-tables, azure-storage-blob/-queue/-file-share (aio), azure-identity (aio), config
# SOURCE: AppConfig.storage / AppConfig.queues
# SCOPE: Global repository creation for entire application
# PATTERNS: Factory pattern, Dependency Injection, per-process Singleton
# ENTRY_POINTS: await RepositoryFactory.create_table_repository(), close_all()
# ============================================================================

"""
Repository Factory - Central Creation Point

This is THE centralized authentication point for all storage operations.
Every repository shares one storage account:

    connection string set  -> <Service>Client.from_connection_string(...)
    only account name set  -> DefaultAzureCredential against
                              https://<account>.<service>.core.windows.net
    neither                -> ConfigurationError

Repositories are created once per process, initialized (tables/queues
created if missing) and cached. close_all() releases the SDK transports.

Usage:
    tables = await RepositoryFactory.create_table_repository()
    queues = await RepositoryFactory.create_queue_repository()
"""

import asyncio
from typing import Any, Dict, List, Optional

from azure.data.tables.aio import TableServiceClient
from azure.identity.aio import DefaultAzureCredential
from azure.storage.blob.aio import BlobServiceClient
from azure.storage.fileshare.aio import ShareServiceClient
from azure.storage.queue.aio import QueueServiceClient

from config import AppConfig, StorageConfig, get_config
from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType

from .blob import BlobRepository
from .file_share import FileShareRepository
from .product_cache import InMemoryProductCatalog
from .queue import QueueRepository
from .table import TableRepository

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "RepositoryFactory")


def _from_connection_string(client_cls, storage: StorageConfig):
    try:
        return client_cls.from_connection_string(storage.connection_string)
    except ValueError as e:
        raise ConfigurationError(f"Invalid storage connection string: {e}") from e


# ============================================================================
# REPOSITORY FACTORY - Central creation point
# ============================================================================

class RepositoryFactory:
    """
    Factory for creating repository instances.

    Holds the per-process cache of repositories and the SDK clients behind
    them so they can be closed together.
    """

    _repositories: Dict[str, Any] = {}
    _clients: List[Any] = []
    _credential: Optional[DefaultAzureCredential] = None
    _lock: Optional[asyncio.Lock] = None

    # ========================================================================
    # SDK CLIENTS
    # ========================================================================

    @staticmethod
    def _require_storage(storage: StorageConfig) -> None:
        if not storage.is_configured:
            raise ConfigurationError(
                "Azure Storage is not configured: set AZURE_STORAGE_CONNECTION_STRING "
                "or STORAGE_ACCOUNT_NAME"
            )

    @classmethod
    def _get_credential(cls) -> DefaultAzureCredential:
        if cls._credential is None:
            logger.info("🔐 Creating DefaultAzureCredential for storage access")
            cls._credential = DefaultAzureCredential()
        return cls._credential

    @classmethod
    def create_table_service_client(cls, storage: StorageConfig) -> TableServiceClient:
        cls._require_storage(storage)
        if storage.uses_connection_string:
            return _from_connection_string(TableServiceClient, storage)
        return TableServiceClient(endpoint=storage.account_url("table"), credential=cls._get_credential())

    @classmethod
    def create_blob_service_client(cls, storage: StorageConfig) -> BlobServiceClient:
        cls._require_storage(storage)
        if storage.uses_connection_string:
            return _from_connection_string(BlobServiceClient, storage)
        return BlobServiceClient(account_url=storage.account_url("blob"), credential=cls._get_credential())

    @classmethod
    def create_queue_service_client(cls, storage: StorageConfig) -> QueueServiceClient:
        cls._require_storage(storage)
        if storage.uses_connection_string:
            return _from_connection_string(QueueServiceClient, storage)
        return QueueServiceClient(account_url=storage.account_url("queue"), credential=cls._get_credential())

    @classmethod
    def create_share_service_client(cls, storage: StorageConfig) -> ShareServiceClient:
        cls._require_storage(storage)
        if storage.uses_connection_string:
            return _from_connection_string(ShareServiceClient, storage)
        # Token auth against Azure Files needs an explicit intent
        return ShareServiceClient(
            account_url=storage.account_url("file"),
            credential=cls._get_credential(),
            token_intent="backup"
        )

    # ========================================================================
    # REPOSITORIES
    # ========================================================================

    @classmethod
    def _get_lock(cls) -> asyncio.Lock:
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    async def create_table_repository(cls, config: Optional[AppConfig] = None) -> TableRepository:
        """
        Create (once) the Customers/Products table repository.

        Example:
            tables = await RepositoryFactory.create_table_repository()
            customers = (await tables.list_customers()).value_or([])
        """
        async with cls._get_lock():
            if "table" not in cls._repositories:
                config = config or get_config()
                logger.info("🏭 Creating Table repository")
                client = cls.create_table_service_client(config.storage)
                repo = TableRepository(
                    client,
                    customers_table=config.storage.customers_table,
                    products_table=config.storage.products_table
                )
                await repo.initialize()
                cls._clients.append(client)
                cls._repositories["table"] = repo
                logger.info("✅ Table repository created successfully")
            return cls._repositories["table"]

    @classmethod
    async def create_blob_repository(cls, config: Optional[AppConfig] = None) -> BlobRepository:
        async with cls._get_lock():
            if "blob" not in cls._repositories:
                config = config or get_config()
                logger.info("🏭 Creating Blob Storage repository")
                client = cls.create_blob_service_client(config.storage)
                cls._clients.append(client)
                cls._repositories["blob"] = BlobRepository(client)
                logger.info("✅ Blob repository created successfully")
            return cls._repositories["blob"]

    @classmethod
    async def create_queue_repository(cls, config: Optional[AppConfig] = None) -> QueueRepository:
        async with cls._get_lock():
            if "queue" not in cls._repositories:
                config = config or get_config()
                logger.info("🏭 Creating Queue repository")
                client = cls.create_queue_service_client(config.storage)
                repo = QueueRepository(
                    client,
                    orders_queue=config.queues.orders_queue,
                    inventory_queue=config.queues.inventory_queue,
                    visibility_timeout=config.queues.visibility_timeout,
                    message_base64=config.queues.message_base64
                )
                await repo.initialize()
                cls._clients.append(client)
                cls._repositories["queue"] = repo
                logger.info("✅ Queue repository created successfully")
            return cls._repositories["queue"]

    @classmethod
    async def create_file_share_repository(cls, config: Optional[AppConfig] = None) -> FileShareRepository:
        async with cls._get_lock():
            if "file_share" not in cls._repositories:
                config = config or get_config()
                logger.info("🏭 Creating File Share repository")
                client = cls.create_share_service_client(config.storage)
                cls._clients.append(client)
                cls._repositories["file_share"] = FileShareRepository(
                    client,
                    default_share=config.storage.log_share
                )
                logger.info("✅ File Share repository created successfully")
            return cls._repositories["file_share"]

    @classmethod
    def create_product_catalog(cls) -> InMemoryProductCatalog:
        """The process-wide fallback catalog. No storage account needed."""
        if "catalog" not in cls._repositories:
            cls._repositories["catalog"] = InMemoryProductCatalog()
        return cls._repositories["catalog"]

    @classmethod
    async def close_all(cls) -> None:
        """Close every SDK client and forget all cached repositories."""
        for client in cls._clients:
            try:
                await client.close()
            except Exception as e:
                logger.warning(f"⚠️ Error closing {type(client).__name__}: {e}")
        if cls._credential is not None:
            await cls._credential.close()
        cls._clients = []
        cls._repositories = {}
        cls._credential = None
        cls._lock = None
        logger.info("🔌 Storage clients closed")


__all__ = ['RepositoryFactory']
