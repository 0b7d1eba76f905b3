# ============================================================================
# MODULE CONTEXT - IN-MEMORY PRODUCT CATALOG
# ============================================================================
# STATUS: Infrastructure - process-local fallback catalog
# PURPOSE: Keep the product pages usable when the Products table is empty or failing
# EXPORTS: InMemoryProductCatalog
# PYDANTIC_MODELS: Product
# DEPENDENCIES: threading, config.defaults, core.models
# SCOPE: Catalog browsing fallback only; never a source of truth
# PATTERNS: Lock-guarded dictionary
# ENTRY_POINTS: RepositoryFactory.create_product_catalog()
# ============================================================================

"""
In-Memory Product Catalog

A small product dictionary seeded with three sample products. It is the
fallback source for browsing when table storage returns nothing or fails,
and the source of the category filter list.

Contents are ephemeral: a process restart resets the catalog to the seed
products and the id counter to 1. Ids have the form ``prod-{n}``.

Every mutation holds one lock, so concurrent adds never share an id and
never lose an entry. Products go in and come out as copies; callers cannot
change stored state except through the methods below.
"""

import threading
from typing import Dict, List, Optional

from config.defaults import CatalogDefaults
from core.models import Product, utc_now
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.CACHE, "InMemoryProductCatalog")


class InMemoryProductCatalog:
    """Thread-safe, process-local product store."""

    def __init__(self, seed: bool = True):
        self._products: Dict[str, Product] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        if seed:
            for values in CatalogDefaults.SEED_PRODUCTS:
                product = Product(**values)
                self._products[product.product_id] = product
            logger.debug(f"🌱 Seeded catalog with {len(self._products)} sample products")

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def add_product(self, product: Product) -> Product:
        """Store a copy under a fresh prod-{n} id and return it."""
        with self._lock:
            product_id = f"{CatalogDefaults.ID_PREFIX}{self._next_id}"
            self._next_id += 1
            stored = product.model_copy(update={
                "product_id": product_id,
                "created_date": utc_now(),
                "etag": None,
            })
            self._products[product_id] = stored
        logger.info(f"✅ Catalog product added: {product_id}")
        return stored.model_copy()

    def get_product(self, product_id: str) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
        return product.model_copy() if product else None

    def list_products(self) -> List[Product]:
        """All products ordered by name."""
        with self._lock:
            products = list(self._products.values())
        return [p.model_copy() for p in sorted(products, key=lambda p: p.name)]

    def list_products_by_category(self, category: str) -> List[Product]:
        """Products whose category matches ignoring case, ordered by name."""
        wanted = (category or "").casefold()
        with self._lock:
            products = [p for p in self._products.values() if p.category.casefold() == wanted]
        return [p.model_copy() for p in sorted(products, key=lambda p: p.name)]

    def update_product(self, product: Product) -> bool:
        """Replace an existing product. Returns False when the id is unknown."""
        with self._lock:
            if product.product_id not in self._products:
                return False
            self._products[product.product_id] = product.model_copy(update={"etag": None})
        logger.info(f"✅ Catalog product updated: {product.product_id}")
        return True

    def delete_product(self, product_id: str) -> bool:
        with self._lock:
            removed = self._products.pop(product_id, None)
        if removed:
            logger.info(f"🗑️ Catalog product deleted: {product_id}")
        return removed is not None

    def list_categories(self) -> List[str]:
        """Distinct non-empty categories, sorted."""
        with self._lock:
            categories = {p.category for p in self._products.values() if p.category}
        return sorted(categories)
