"""
Product HTTP Triggers.

Endpoints:
    GET    /api/products?category=       browse (table, in-memory fallback)
    POST   /api/products                 create (JSON, or multipart with an "image" file)
    GET    /api/products/categories      category filter values
    GET    /api/products/{product_id}    read product
    PUT    /api/products/{product_id}    replace product (JSON or multipart, ?force=true)
    DELETE /api/products/{product_id}    delete product

Multipart forms carry the product fields as text parts (name, description,
price, stockQuantity, category, isActive, etag) plus an optional "image"
file part.

Exports:
    products_trigger, product_categories_trigger, product_item_trigger
"""

from typing import Any, Dict, List, Optional, Tuple

import azure.functions as func

from core.models import IncomingFile, Product
from services import get_retail_services
from .http_base import BaseHttpTrigger, camel_keys, query_flag, to_json
from .multipart import is_multipart, parse_multipart

REQUIRED_PRODUCT_FIELDS = ["name"]


class ProductTriggerMixin:
    """Shared body parsing for create and replace."""

    def read_product(self, req: func.HttpRequest) -> Tuple[Product, Optional[IncomingFile]]:
        if is_multipart(req):
            image, fields = parse_multipart(req)
            data = {k: v for k, v in fields.items() if v != ""}
        else:
            image = None
            data = self.extract_json_body(req)
        self.validate_required_fields(camel_keys(data), REQUIRED_PRODUCT_FIELDS)
        return Product.model_validate(data), image


class ProductsTrigger(ProductTriggerMixin, BaseHttpTrigger):
    """Collection endpoint: browse and create."""

    def __init__(self):
        super().__init__("products")

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "POST"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        services = await get_retail_services()

        if req.method == "GET":
            category = self.extract_query_params(req, optional_params=["category"]).get("category")
            listing = await services.catalog.browse(category=category)
            return {
                "products": [to_json(p) for p in listing.products],
                "count": len(listing.products),
                "source": listing.source,
                "category": listing.category,
            }

        product, image = self.read_product(req)
        created = await services.catalog.create_product(product, image=image)
        return {"product": to_json(created), "created": True}


class ProductCategoriesTrigger(BaseHttpTrigger):
    def __init__(self):
        super().__init__("product_categories")

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        services = await get_retail_services()
        categories = await services.catalog.list_categories()
        return {"categories": categories, "count": len(categories)}


class ProductItemTrigger(ProductTriggerMixin, BaseHttpTrigger):
    """Single product: read, replace and delete."""

    def __init__(self):
        super().__init__("product_item")

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "PUT", "DELETE"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        product_id = self.extract_path_params(req, ["product_id"])["product_id"]
        services = await get_retail_services()

        if req.method == "GET":
            product = await services.catalog.get_product(product_id)
            return {"product": to_json(product)}

        if req.method == "PUT":
            product, image = self.read_product(req)
            updated = await services.catalog.update_product(
                product_id, product, image=image, force=query_flag(req.params.get("force"))
            )
            return {"product": to_json(updated), "updated": True}

        await services.catalog.delete_product(product_id)
        return {"product_id": product_id, "deleted": True}


products_trigger = ProductsTrigger()
product_categories_trigger = ProductCategoriesTrigger()
product_item_trigger = ProductItemTrigger()
