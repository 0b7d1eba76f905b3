# ============================================================================
# MODULE CONTEXT - STORAGE OPERATION DECORATOR
# ============================================================================
# STATUS: Infrastructure - Error boundary for storage repositories
# PURPOSE: Turn Azure SDK exceptions into StorageResult values at the repository edge
# EXPORTS: storage_operation
# INTERFACES: None - Pure decorator functions
# DEPENDENCIES: functools, core.models.results, exceptions, util_logger
# SCOPE: ALL async storage repository methods
# PATTERNS: Decorator pattern, DRY principle
# ENTRY_POINTS: @storage_operation("get_customer")
# ============================================================================

"""
Storage Operation Decorator - Repository Error Boundary

Every public repository coroutine is wrapped so it returns a StorageResult
instead of raising. The decorated method only has to describe the happy path
and return StorageResult.ok(...) (or not_found for an empty queue and the
like); anything the SDK raises is classified here.

ContractViolationError is the one exception that passes through: it marks a
programming bug, not a storage failure.

Usage:
    from infrastructure.decorators import storage_operation

    class TableRepository:
        @storage_operation("get_customer")
        async def get_customer(self, customer_id: str) -> StorageResult[Customer]:
            entity = await self._customers.get_entity(...)
            return StorageResult.ok(Customer.from_entity(entity))
"""

from functools import wraps
from typing import Callable

from core.models.results import StorageResult
from exceptions import ContractViolationError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, __name__)


def storage_operation(operation: str) -> Callable:
    """
    Decorator converting exceptions from an async repository method into a
    StorageResult.

    Logs through the repository's own ``logger`` attribute when it has one:
    not-found at DEBUG, transient at WARNING, fatal at ERROR with traceback.

    Args:
        operation: Operation name used in log lines
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(self, *args, **kwargs) -> StorageResult:
            log = getattr(self, "logger", logger)
            try:
                return await func(self, *args, **kwargs)
            except ContractViolationError:
                raise
            except Exception as e:
                result = StorageResult.from_exception(e)
                label = f"{type(self).__name__}.{operation}"
                if result.is_not_found:
                    log.debug(f"🔍 {label}: not found ({e})")
                elif result.is_transient:
                    log.warning(f"⚠️ {label}: transient failure [{result.error_code.value}] {e}")
                else:
                    log.error(f"❌ {label}: failed [{result.error_code.value}] {e}", exc_info=True)
                return result
        return wrapper
    return decorator
