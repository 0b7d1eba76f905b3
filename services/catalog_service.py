# ============================================================================
# MODULE CONTEXT - CATALOG SERVICE
# ============================================================================
# STATUS: Service layer - product catalog
# PURPOSE: Product browsing with in-memory fallback, product CRUD with image upload
# EXPORTS: CatalogService, CatalogListing
# DEPENDENCIES: infrastructure repositories, core.models
# PATTERNS: Service layer over injected repositories
# ============================================================================

"""
Catalog Service

Browsing reads the Products table first. When the table answers with no
products, or the call fails, the in-memory catalog answers instead so the
shop front never renders empty. CatalogListing.source says which one was
used.

Product writes go to the table. A product image, when supplied, is uploaded
to the product-images container first and its blob URL stored on the
product; an image upload failure aborts the write.
"""

from dataclasses import dataclass
from typing import List, Optional

from config.defaults import StorageDefaults
from core.models import IncomingFile, Product
from exceptions import ResourceNotFoundError, ValidationError
from infrastructure.interface_repository import IBlobRepository, ITableRepository
from infrastructure.product_cache import InMemoryProductCatalog
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "CatalogService")

SOURCE_TABLE = "table"
SOURCE_MEMORY = "memory"


@dataclass
class CatalogListing:
    products: List[Product]
    source: str
    category: Optional[str] = None


class CatalogService:
    """
    Product catalog operations.

    Usage:
        service = CatalogService(tables, blobs, catalog)
        listing = await service.browse(category="Books")
    """

    def __init__(
        self,
        tables: ITableRepository,
        blobs: IBlobRepository,
        catalog: InMemoryProductCatalog,
        images_container: str = StorageDefaults.PRODUCT_IMAGES_CONTAINER
    ):
        self.tables = tables
        self.blobs = blobs
        self.catalog = catalog
        self.images_container = images_container

    # ========================================================================
    # BROWSING
    # ========================================================================

    async def browse(self, category: Optional[str] = None) -> CatalogListing:
        """
        List products, all or one category.

        Table category matching is exact; the in-memory fallback ignores case.
        """
        if category:
            result = await self.tables.list_products_by_category(category)
        else:
            result = await self.tables.list_products()

        if result.is_ok and result.value:
            return CatalogListing(result.value, SOURCE_TABLE, category)

        if not result.is_ok:
            logger.warning(
                f"⚠️ Products table unavailable ({result.outcome.value}: {result.message}), "
                f"using in-memory catalog"
            )
        else:
            logger.info("📭 Products table returned nothing, using in-memory catalog")

        if category:
            products = self.catalog.list_products_by_category(category)
        else:
            products = self.catalog.list_products()
        return CatalogListing(products, SOURCE_MEMORY, category)

    async def list_categories(self) -> List[str]:
        """Distinct non-empty categories from the table and the in-memory catalog."""
        categories = set(self.catalog.list_categories())
        table_products = (await self.tables.list_products()).value_or([])
        categories.update(p.category for p in table_products if p.category)
        return sorted(categories)

    async def get_product(self, product_id: str) -> Product:
        """Table first, then the in-memory catalog."""
        product = (await self.tables.get_product(product_id)).value_or(None)
        if product is None:
            product = self.catalog.get_product(product_id)
        if product is None:
            raise ResourceNotFoundError(f"Product '{product_id}' not found", "RESOURCE_NOT_FOUND")
        return product

    # ========================================================================
    # WRITES
    # ========================================================================

    async def _attach_image(self, product: Product, image: Optional[IncomingFile]) -> Product:
        if image is None or image.size == 0:
            return product
        uploaded = (await self.blobs.upload_file(
            image,
            self.images_container,
            description=product.description,
            category=product.category
        )).unwrap()
        logger.info(f"🖼️ Product image stored at {uploaded.blob_url}")
        return product.model_copy(update={"image_url": uploaded.blob_url})

    async def create_product(self, product: Product, image: Optional[IncomingFile] = None) -> Product:
        product = await self._attach_image(product, image)
        created = (await self.tables.add_product(product)).unwrap()
        logger.info(
            f"✅ Created product {created.product_id}: {created.name}, "
            f"Price: {created.price}, Stock: {created.stock_quantity}"
        )
        return created

    async def update_product(
        self,
        product_id: str,
        product: Product,
        image: Optional[IncomingFile] = None,
        force: bool = False
    ) -> Product:
        """
        Replace a product in the table, or in the in-memory catalog when the
        id only lives there. created_date keeps the stored value.
        """
        if product.product_id and product.product_id != product_id:
            raise ValidationError(
                f"Product id in body ('{product.product_id}') does not match '{product_id}'",
                "VALIDATION_ERROR"
            )

        stored = await self.tables.get_product(product_id)
        cached = self.catalog.get_product(product_id)
        if not stored.is_ok and cached is None:
            stored.raise_for_outcome()

        original = stored.value if stored.is_ok else cached
        replacement = product.model_copy(update={
            "product_id": product_id,
            "created_date": original.created_date,
        })
        replacement = await self._attach_image(replacement, image)

        if stored.is_ok:
            replacement = (await self.tables.update_product(replacement, force=force)).unwrap()
        if cached is not None:
            self.catalog.update_product(replacement)
        return replacement

    async def delete_product(self, product_id: str) -> bool:
        stored = await self.tables.get_product(product_id)
        in_catalog = self.catalog.get_product(product_id) is not None
        if not stored.is_ok and not in_catalog:
            stored.raise_for_outcome()

        if stored.is_ok:
            (await self.tables.delete_product(product_id)).raise_for_outcome()
        if in_catalog:
            self.catalog.delete_product(product_id)
        logger.info(f"🗑️ Deleted product {product_id}")
        return True
