"""
Service Layer - Explicit Wiring (No Magic!)

Every service is constructed here from the repositories RepositoryFactory
hands out. Triggers ask for the container once per request and never build
repositories themselves.

Usage:
    services = await get_retail_services()
    listing = await services.catalog.browse(category="Books")

Tests construct RetailServices directly with fake repositories.
"""

from dataclasses import dataclass
from typing import Optional

from config import get_config
from infrastructure.factory import RepositoryFactory

from .catalog_service import CatalogService, CatalogListing
from .customer_service import CustomerService
from .file_service import FileService
from .order_service import OrderService, QUEUE_LENGTH_UNAVAILABLE


@dataclass
class RetailServices:
    customers: CustomerService
    catalog: CatalogService
    orders: OrderService
    files: FileService


_services: Optional[RetailServices] = None


async def get_retail_services() -> RetailServices:
    """Build (once per process) the services over the shared repositories."""
    global _services
    if _services is None:
        config = get_config()
        tables = await RepositoryFactory.create_table_repository(config)
        blobs = await RepositoryFactory.create_blob_repository(config)
        queues = await RepositoryFactory.create_queue_repository(config)
        file_share = await RepositoryFactory.create_file_share_repository(config)
        catalog = RepositoryFactory.create_product_catalog()

        _services = RetailServices(
            customers=CustomerService(tables),
            catalog=CatalogService(
                tables, blobs, catalog,
                images_container=config.storage.product_images_container
            ),
            orders=OrderService(tables, queues),
            files=FileService(
                blobs, file_share,
                browsable_containers=config.storage.browsable_containers
            ),
        )
    return _services


def set_retail_services(services: Optional[RetailServices]) -> None:
    """Replace the process-wide services (tests), or clear them with None."""
    global _services
    _services = services


__all__ = [
    'RetailServices',
    'get_retail_services',
    'set_retail_services',
    'CustomerService',
    'CatalogService',
    'CatalogListing',
    'OrderService',
    'QUEUE_LENGTH_UNAVAILABLE',
    'FileService',
]
