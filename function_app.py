"""
Azure Functions entry point for the ABC Retail back office.

This module binds the HTTP trigger singletons to routes. Every handler is a
thin async call into a trigger; triggers call services, services call the
storage repositories.

Architecture:
    HTTP -> Trigger -> Service -> Repository -> Azure Storage
                                    |
                     Table / Blob / Queue / Files (+ in-memory catalog)

Exports:
    app: Azure Function App instance

Endpoints:
    Customers:
        GET    /api/customers
        POST   /api/customers
        GET    /api/customers/{customer_id}
        PUT    /api/customers/{customer_id}
        DELETE /api/customers/{customer_id}

    Products:
        GET    /api/products?category=
        POST   /api/products
        GET    /api/products/categories
        GET    /api/products/{product_id}
        PUT    /api/products/{product_id}
        DELETE /api/products/{product_id}

    Orders:
        GET    /api/orders/queue
        POST   /api/orders
        POST   /api/orders/process
        POST   /api/orders/complete

    Files:
        GET    /api/files/blobs?container=
        POST   /api/files/blobs
        GET    /api/files/blobs/{container}/{file_name}
        DELETE /api/files/blobs/{container}/{file_name}
        GET    /api/files/logs
        GET    /api/files/logs/{file_name}
        GET    /api/files/logs/{file_name}/download
        DELETE /api/files/logs/{file_name}

    System:
        GET    /api/health

Environment Variables:
    AZURE_STORAGE_CONNECTION_STRING: Storage connection string (or STORAGE_ACCOUNT_NAME)
    STORAGE_ACCOUNT_NAME: Account for DefaultAzureCredential when no connection string
    DEBUG_LOGGING: Drop default log level to DEBUG
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.storage").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("msal").setLevel(logging.WARNING)  # Microsoft Authentication Library

# Application modules
from util_logger import LoggerFactory, ComponentType
from triggers.health import health_check_trigger
from triggers.customers import customers_trigger, customer_item_trigger
from triggers.products import products_trigger, product_categories_trigger, product_item_trigger
from triggers.orders import (
    order_queue_trigger,
    create_order_trigger,
    process_order_trigger,
    complete_order_trigger,
)
from triggers.files import (
    blob_files_trigger,
    blob_item_trigger,
    log_files_trigger,
    log_item_trigger,
    log_download_trigger,
)

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")

# Function keys on every route except health
app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


# ============================================================================
# SYSTEM
# ============================================================================

@app.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def health(req: func.HttpRequest) -> func.HttpResponse:
    """Per-service storage health."""
    return await health_check_trigger.handle_request(req)


# ============================================================================
# CUSTOMERS
# ============================================================================

@app.route(route="customers", methods=["GET", "POST"])
async def customers(req: func.HttpRequest) -> func.HttpResponse:
    return await customers_trigger.handle_request(req)


@app.route(route="customers/{customer_id}", methods=["GET", "PUT", "DELETE"])
async def customer_by_id(req: func.HttpRequest) -> func.HttpResponse:
    return await customer_item_trigger.handle_request(req)


# ============================================================================
# PRODUCTS
# ============================================================================

@app.route(route="products", methods=["GET", "POST"])
async def products(req: func.HttpRequest) -> func.HttpResponse:
    """Browse (table with in-memory fallback) and create."""
    return await products_trigger.handle_request(req)


@app.route(route="products/categories", methods=["GET"])
async def product_categories(req: func.HttpRequest) -> func.HttpResponse:
    return await product_categories_trigger.handle_request(req)


@app.route(route="products/{product_id}", methods=["GET", "PUT", "DELETE"])
async def product_by_id(req: func.HttpRequest) -> func.HttpResponse:
    return await product_item_trigger.handle_request(req)


# ============================================================================
# ORDERS
# ============================================================================

@app.route(route="orders/queue", methods=["GET"])
async def order_queue(req: func.HttpRequest) -> func.HttpResponse:
    return await order_queue_trigger.handle_request(req)


@app.route(route="orders", methods=["POST"])
async def create_order(req: func.HttpRequest) -> func.HttpResponse:
    """Validate, price and enqueue an order."""
    return await create_order_trigger.handle_request(req)


@app.route(route="orders/process", methods=["POST"])
async def process_order(req: func.HttpRequest) -> func.HttpResponse:
    """Receive the next order. The response carries the ack token."""
    return await process_order_trigger.handle_request(req)


@app.route(route="orders/complete", methods=["POST"])
async def complete_order(req: func.HttpRequest) -> func.HttpResponse:
    return await complete_order_trigger.handle_request(req)


# ============================================================================
# FILES
# ============================================================================

@app.route(route="files/blobs", methods=["GET", "POST"])
async def blob_files(req: func.HttpRequest) -> func.HttpResponse:
    return await blob_files_trigger.handle_request(req)


@app.route(route="files/blobs/{container}/{file_name}", methods=["GET", "DELETE"])
async def blob_file(req: func.HttpRequest) -> func.HttpResponse:
    return await blob_item_trigger.handle_request(req)


@app.route(route="files/logs", methods=["GET"])
async def log_files(req: func.HttpRequest) -> func.HttpResponse:
    return await log_files_trigger.handle_request(req)


@app.route(route="files/logs/{file_name}", methods=["GET", "DELETE"])
async def log_file(req: func.HttpRequest) -> func.HttpResponse:
    return await log_item_trigger.handle_request(req)


@app.route(route="files/logs/{file_name}/download", methods=["GET"])
async def log_file_download(req: func.HttpRequest) -> func.HttpResponse:
    return await log_download_trigger.handle_request(req)


logger.info("✅ ABC Retail function app routes registered")
