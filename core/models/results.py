# ============================================================================
# MODULE CONTEXT - CORE MODELS - STORAGE RESULTS
# ============================================================================
# STATUS: Core data models - uniform return type of every storage repository call
# PURPOSE: Tagged result separating not-found, transient and fatal failures
# EXPORTS: StorageOutcome, StorageResult
# DEPENDENCIES: dataclasses, core.errors, exceptions
# PATTERNS: Result object, no business logic
# ENTRY_POINTS: from core.models import StorageResult
# ============================================================================

"""
Storage Results

Repositories never raise for storage failures. Each call returns a
StorageResult tagged with one of four outcomes:

    OK               value holds the result
    NOT_FOUND        the entity/blob/message/file does not exist
    TRANSIENT_ERROR  retryable failure (timeouts, 5xx, throttling)
    FATAL            everything else (auth, conflicts, bad payloads)

Callers choose the policy per call site:

    customer = (await tables.get_customer(cid)).value_or(None)   # degrade
    stream = (await blobs.download_file(name, c)).unwrap()       # raise
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from core.errors import ErrorCode, classify_exception, is_retryable
from exceptions import (
    ConcurrencyConflictError,
    QueueError,
    ResourceNotFoundError,
    StorageError,
)

T = TypeVar("T")
U = TypeVar("U")


class StorageOutcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    TRANSIENT_ERROR = "transient_error"
    FATAL = "fatal"


@dataclass(frozen=True)
class StorageResult(Generic[T]):
    """Outcome of a single storage call."""

    outcome: StorageOutcome
    value: Optional[T] = None
    error_code: Optional[ErrorCode] = None
    message: str = ""

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def ok(cls, value: T = None) -> "StorageResult[T]":
        return cls(StorageOutcome.OK, value=value)

    @classmethod
    def not_found(cls, message: str = "") -> "StorageResult[T]":
        return cls(StorageOutcome.NOT_FOUND, error_code=ErrorCode.RESOURCE_NOT_FOUND, message=message)

    @classmethod
    def transient(cls, error_code: ErrorCode, message: str = "") -> "StorageResult[T]":
        return cls(StorageOutcome.TRANSIENT_ERROR, error_code=error_code, message=message)

    @classmethod
    def fatal(cls, error_code: ErrorCode, message: str = "") -> "StorageResult[T]":
        return cls(StorageOutcome.FATAL, error_code=error_code, message=message)

    @classmethod
    def from_exception(cls, exc: BaseException, message: str = "") -> "StorageResult[T]":
        """Classify an SDK exception into NOT_FOUND / TRANSIENT_ERROR / FATAL."""
        error_code = classify_exception(exc)
        text = message or f"{type(exc).__name__}: {exc}"
        if error_code == ErrorCode.RESOURCE_NOT_FOUND:
            return cls.not_found(text)
        if is_retryable(error_code):
            return cls.transient(error_code, text)
        return cls.fatal(error_code, text)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def is_ok(self) -> bool:
        return self.outcome == StorageOutcome.OK

    @property
    def is_not_found(self) -> bool:
        return self.outcome == StorageOutcome.NOT_FOUND

    @property
    def is_transient(self) -> bool:
        return self.outcome == StorageOutcome.TRANSIENT_ERROR

    @property
    def is_conflict(self) -> bool:
        return self.error_code == ErrorCode.CONCURRENCY_CONFLICT

    def __bool__(self) -> bool:
        return self.is_ok

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def raise_for_outcome(self) -> None:
        """
        Raise the matching business exception unless the outcome is OK.

        Raises:
            ResourceNotFoundError: outcome NOT_FOUND
            ConcurrencyConflictError: conditional update lost
            QueueError: undecodable queue message
            StorageError: any other failure (retryable flag set for transient)
        """
        if self.is_ok:
            return
        code = self.error_code.value if self.error_code else None
        if self.is_not_found:
            raise ResourceNotFoundError(self.message or "Resource not found", code)
        if self.is_conflict:
            raise ConcurrencyConflictError(self.message or "Entity was modified", code)
        if self.error_code == ErrorCode.MESSAGE_ERROR:
            raise QueueError(self.message or "Queue message could not be decoded", code)
        raise StorageError(self.message or "Storage operation failed", code, retryable=self.is_transient)

    def unwrap(self) -> T:
        """Return the value, raising as raise_for_outcome() does on failure."""
        self.raise_for_outcome()
        return self.value

    def value_or(self, default: Any) -> Any:
        return self.value if self.is_ok else default

    def map(self, func: Callable[[T], U]) -> "StorageResult[U]":
        """Apply func to an OK value; failures pass through unchanged."""
        if not self.is_ok:
            return StorageResult(self.outcome, None, self.error_code, self.message)
        return StorageResult.ok(func(self.value))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "error_code": self.error_code.value if self.error_code else None,
            "message": self.message,
        }
