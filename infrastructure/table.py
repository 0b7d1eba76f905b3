# ============================================================================
# MODULE CONTEXT - TABLE REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Table Storage repository
# PURPOSE: Customers and Products tables behind one async repository
# EXPORTS: TableRepository
# INTERFACES: ITableRepository
# PYDANTIC_MODELS: Customer, Product
# DEPENDENCIES: azure-data-tables (aio), azure-core, core.models, util_logger
# SOURCE: Azure Table Storage - Customers / Products tables
# SCOPE: ALL table reads and writes
# PATTERNS: Repository, StorageResult error boundary, optimistic concurrency
# ENTRY_POINTS: RepositoryFactory.create_table_repository()
# ============================================================================

"""
Table Storage Repository

One async TableServiceClient, two table clients. Entities keep a constant
partition key per type ("Customers" / "Products") and use the entity id as
row key, so a point read is always (partition, id).

Updates are full replaces. When the model still carries the ETag it was read
with, the write is conditional and a concurrent change comes back as a FATAL
result with error code CONCURRENCY_CONFLICT. Models without an ETag, or
updates with force=True, overwrite unconditionally.

Usage:
    repo = await RepositoryFactory.create_table_repository()
    result = await repo.add_customer(Customer(first_name="Ada"))
    customer = result.unwrap()
"""

import uuid
from typing import Dict, List

from azure.core import MatchConditions
from azure.data.tables import UpdateMode
from azure.data.tables.aio import TableClient, TableServiceClient

from config.defaults import StorageDefaults
from core.models import Customer, Product, StorageResult, utc_now
from exceptions import ContractViolationError
from infrastructure.decorators import storage_operation
from infrastructure.interface_repository import ITableRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "TableRepository")

_PARTITION_FILTER = "PartitionKey eq @pk"
_CATEGORY_FILTER = "PartitionKey eq @pk and Category eq @category"


class TableRepository(ITableRepository):
    """
    Azure Table Storage repository for customers and products.

    The service client is injected so the factory decides on authentication
    (connection string or DefaultAzureCredential) and tests can pass fakes.
    """

    def __init__(
        self,
        service_client: TableServiceClient,
        customers_table: str = StorageDefaults.CUSTOMERS_TABLE,
        products_table: str = StorageDefaults.PRODUCTS_TABLE
    ):
        self.logger = logger
        self._service = service_client
        self.customers_table = customers_table
        self.products_table = products_table
        self._customers: TableClient = service_client.get_table_client(customers_table)
        self._products: TableClient = service_client.get_table_client(products_table)

    async def initialize(self) -> Dict[str, bool]:
        """
        Create both tables if they do not exist.

        A failure is logged and reported in the returned map but never raised;
        the repository stays usable and later calls surface their own errors.
        """
        status = {}
        for table_name in (self.customers_table, self.products_table):
            try:
                await self._service.create_table_if_not_exists(table_name=table_name)
                logger.debug(f"✅ Table ready: {table_name}")
                status[table_name] = True
            except Exception as e:
                logger.error(f"❌ Could not create table {table_name}: {e}")
                status[table_name] = False
        return status

    # ========================================================================
    # CUSTOMERS
    # ========================================================================

    @storage_operation("add_customer")
    async def add_customer(self, customer: Customer) -> StorageResult[Customer]:
        if not isinstance(customer, Customer):
            raise ContractViolationError(
                f"add_customer expects Customer, got {type(customer).__name__}"
            )
        new_customer = customer.model_copy(update={
            "customer_id": str(uuid.uuid4()),
            "created_date": utc_now(),
            "etag": None,
        })
        metadata = await self._customers.create_entity(entity=new_customer.to_entity())
        logger.info(f"✅ Customer added: {new_customer.customer_id}")
        return StorageResult.ok(new_customer.model_copy(update={"etag": metadata.get("etag")}))

    @storage_operation("get_customer")
    async def get_customer(self, customer_id: str) -> StorageResult[Customer]:
        if not customer_id:
            return StorageResult.not_found("customer_id is empty")
        entity = await self._customers.get_entity(
            partition_key=StorageDefaults.CUSTOMER_PARTITION_KEY,
            row_key=customer_id
        )
        return StorageResult.ok(Customer.from_entity(entity))

    @storage_operation("list_customers")
    async def list_customers(self) -> StorageResult[List[Customer]]:
        entities = self._customers.query_entities(
            query_filter=_PARTITION_FILTER,
            parameters={"pk": StorageDefaults.CUSTOMER_PARTITION_KEY}
        )
        customers = [Customer.from_entity(entity) async for entity in entities]
        logger.debug(f"📋 Listed {len(customers)} customers")
        return StorageResult.ok(customers)

    @storage_operation("update_customer")
    async def update_customer(self, customer: Customer, force: bool = False) -> StorageResult[Customer]:
        if not isinstance(customer, Customer):
            raise ContractViolationError(
                f"update_customer expects Customer, got {type(customer).__name__}"
            )
        metadata = await self._replace(self._customers, customer.to_entity(), customer.etag, force)
        logger.info(f"✅ Customer updated: {customer.customer_id}")
        return StorageResult.ok(customer.model_copy(update={"etag": metadata.get("etag")}))

    @storage_operation("delete_customer")
    async def delete_customer(self, customer_id: str) -> StorageResult[bool]:
        # Deleting a missing entity is not an error for the tables SDK
        await self._customers.delete_entity(
            partition_key=StorageDefaults.CUSTOMER_PARTITION_KEY,
            row_key=customer_id
        )
        logger.info(f"🗑️ Customer deleted: {customer_id}")
        return StorageResult.ok(True)

    # ========================================================================
    # PRODUCTS
    # ========================================================================

    @storage_operation("add_product")
    async def add_product(self, product: Product) -> StorageResult[Product]:
        if not isinstance(product, Product):
            raise ContractViolationError(
                f"add_product expects Product, got {type(product).__name__}"
            )
        new_product = product.model_copy(update={
            "product_id": str(uuid.uuid4()),
            "created_date": utc_now(),
            "etag": None,
        })
        metadata = await self._products.create_entity(entity=new_product.to_entity())
        logger.info(f"✅ Product added: {new_product.product_id} ({new_product.name})")
        return StorageResult.ok(new_product.model_copy(update={"etag": metadata.get("etag")}))

    @storage_operation("get_product")
    async def get_product(self, product_id: str) -> StorageResult[Product]:
        if not product_id:
            return StorageResult.not_found("product_id is empty")
        entity = await self._products.get_entity(
            partition_key=StorageDefaults.PRODUCT_PARTITION_KEY,
            row_key=product_id
        )
        return StorageResult.ok(Product.from_entity(entity))

    @storage_operation("list_products")
    async def list_products(self) -> StorageResult[List[Product]]:
        entities = self._products.query_entities(
            query_filter=_PARTITION_FILTER,
            parameters={"pk": StorageDefaults.PRODUCT_PARTITION_KEY}
        )
        products = [Product.from_entity(entity) async for entity in entities]
        logger.debug(f"📋 Listed {len(products)} products")
        return StorageResult.ok(products)

    @storage_operation("list_products_by_category")
    async def list_products_by_category(self, category: str) -> StorageResult[List[Product]]:
        entities = self._products.query_entities(
            query_filter=_CATEGORY_FILTER,
            parameters={"pk": StorageDefaults.PRODUCT_PARTITION_KEY, "category": category}
        )
        products = [Product.from_entity(entity) async for entity in entities]
        logger.debug(f"📋 Listed {len(products)} products in category '{category}'")
        return StorageResult.ok(products)

    @storage_operation("update_product")
    async def update_product(self, product: Product, force: bool = False) -> StorageResult[Product]:
        if not isinstance(product, Product):
            raise ContractViolationError(
                f"update_product expects Product, got {type(product).__name__}"
            )
        metadata = await self._replace(self._products, product.to_entity(), product.etag, force)
        logger.info(f"✅ Product updated: {product.product_id}")
        return StorageResult.ok(product.model_copy(update={"etag": metadata.get("etag")}))

    @storage_operation("delete_product")
    async def delete_product(self, product_id: str) -> StorageResult[bool]:
        await self._products.delete_entity(
            partition_key=StorageDefaults.PRODUCT_PARTITION_KEY,
            row_key=product_id
        )
        logger.info(f"🗑️ Product deleted: {product_id}")
        return StorageResult.ok(True)

    # ========================================================================
    # HELPERS
    # ========================================================================

    async def _replace(self, table: TableClient, entity: dict, etag, force: bool) -> dict:
        """
        Replace-mode update of an existing entity.

        Conditional on etag unless force is set or there is no etag. Raises
        ResourceModifiedError on a lost race and ResourceNotFoundError when the
        entity is gone; the decorator classifies both.
        """
        if etag and not force:
            return await table.update_entity(
                entity=entity,
                mode=UpdateMode.REPLACE,
                etag=etag,
                match_condition=MatchConditions.IfNotModified
            )
        return await table.update_entity(entity=entity, mode=UpdateMode.REPLACE)
