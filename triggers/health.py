"""
Health Check HTTP Trigger.

GET /api/health reports each storage primitive separately so a single
failing service does not hide the others.

Components Monitored:
    - Configuration (storage account resolved)
    - Table Storage (Customers table readable)
    - Blob Storage (product image container reachable)
    - Queue Storage (orders queue length)
    - Azure Files (log share reachable)
    - In-memory product catalog

Exports:
    HealthCheckTrigger: Health check trigger class
    health_check_trigger: Singleton trigger instance
"""

from typing import Dict, Any, List
import sys

import azure.functions as func

from config import get_config
from infrastructure.factory import RepositoryFactory
from .http_base import SystemMonitoringTrigger


class HealthCheckTrigger(SystemMonitoringTrigger):
    """Health check HTTP trigger implementation."""

    def __init__(self):
        super().__init__("health_check")

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        config = get_config()
        components = {
            "configuration": await self.check_component_health(
                "configuration", self._check_configuration, "Storage account settings"
            ),
            "tables": await self.check_component_health(
                "tables", self._check_tables, "Customers and Products tables"
            ),
            "blobs": await self.check_component_health(
                "blobs", self._check_blobs, "Product image and document containers"
            ),
            "queues": await self.check_component_health(
                "queues", self._check_queues, "Orders and inventory queues"
            ),
            "file_share": await self.check_component_health(
                "file_share", self._check_file_share, "Audit log share"
            ),
            "product_catalog": await self.check_component_health(
                "product_catalog", self._check_catalog, "In-memory fallback catalog"
            ),
        }

        unhealthy = [name for name, result in components.items() if result["status"] == "unhealthy"]
        if unhealthy:
            self.logger.warning(f"⚠️ Unhealthy components: {', '.join(unhealthy)}")

        return {
            "status": "unhealthy" if unhealthy else "healthy",
            "components": components,
            "environment": {
                "environment": config.environment,
                "storage_account": config.storage_account_name,
                "python_version": sys.version.split()[0],
                "function_runtime": "python",
            },
        }

    async def _check_configuration(self) -> Dict[str, Any]:
        storage = get_config().storage
        return {
            "configured": storage.is_configured,
            "auth": "connection_string" if storage.uses_connection_string else "default_azure_credential",
            "error": None if storage.is_configured else "No storage connection string or account name",
        }

    async def _check_tables(self) -> Dict[str, Any]:
        tables = await RepositoryFactory.create_table_repository()
        result = await tables.list_customers()
        return {
            "outcome": result.outcome.value,
            "customers": len(result.value) if result.is_ok else None,
            "error": None if result.is_ok else result.message,
        }

    async def _check_blobs(self) -> Dict[str, Any]:
        blobs = await RepositoryFactory.create_blob_repository()
        container = get_config().storage.product_images_container
        result = await blobs.container_exists(container)
        if not result.is_ok:
            return {"container": container, "error": result.message}
        # A missing container is created on first upload
        return {"container": container, "exists": result.value, "_status": "healthy" if result.value else "degraded"}

    async def _check_queues(self) -> Dict[str, Any]:
        queues = await RepositoryFactory.create_queue_repository()
        result = await queues.get_order_queue_length()
        return {
            "orders_queue_length": result.value if result.is_ok else None,
            "error": None if result.is_ok else result.message,
        }

    async def _check_file_share(self) -> Dict[str, Any]:
        file_share = await RepositoryFactory.create_file_share_repository()
        result = await file_share.share_exists()
        if not result.is_ok:
            return {"share": get_config().storage.log_share, "error": result.message}
        return {
            "share": get_config().storage.log_share,
            "exists": result.value,
            "_status": "healthy" if result.value else "degraded",
        }

    async def _check_catalog(self) -> Dict[str, Any]:
        catalog = RepositoryFactory.create_product_catalog()
        return {"products": len(catalog), "categories": catalog.list_categories()}


health_check_trigger = HealthCheckTrigger()
