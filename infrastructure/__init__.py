"""
Infrastructure Package - Lazy Loading Implementation.

Provides all repository implementations with lazy loading so that importing
function_app.py does not read configuration or build Azure SDK clients.

The Azure Functions host imports function_app.py before app settings and
managed identity are guaranteed to be ready; the first access to a name
below happens inside a request, by which time they are.

Exports:
    RepositoryFactory: Creates and caches storage repositories
    TableRepository, BlobRepository, QueueRepository, FileShareRepository
    InMemoryProductCatalog: Fallback product catalog
"""

from typing import TYPE_CHECKING

# For type checking only - doesn't actually import at runtime
if TYPE_CHECKING:
    from .factory import RepositoryFactory as _RepositoryFactory
    from .table import TableRepository as _TableRepository
    from .blob import BlobRepository as _BlobRepository
    from .queue import QueueRepository as _QueueRepository
    from .file_share import FileShareRepository as _FileShareRepository
    from .product_cache import InMemoryProductCatalog as _InMemoryProductCatalog


_LAZY_IMPORTS = {
    "RepositoryFactory": ".factory",
    "TableRepository": ".table",
    "BlobRepository": ".blob",
    "QueueRepository": ".queue",
    "FileShareRepository": ".file_share",
    "InMemoryProductCatalog": ".product_cache",
}


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    """
    if name in _LAZY_IMPORTS:
        from importlib import import_module
        module = import_module(_LAZY_IMPORTS[name], package=__name__)
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = list(_LAZY_IMPORTS)
