# ============================================================================
# MODULE CONTEXT - EXCEPTIONS
# ============================================================================
# STATUS: Active
# PURPOSE: Custom exception hierarchy for distinguishing contract violations from business failures
# EXPORTS: ContractViolationError, BusinessLogicError, StorageError, QueueError,
#          ResourceNotFoundError, ValidationError, ConcurrencyConflictError, ConfigurationError
# INTERFACES: Standard Python exception hierarchy
# PYDANTIC_MODELS: None
# DEPENDENCIES: None (standard library only)
# SCOPE: Application-wide exception handling
# PATTERNS: Exception hierarchy for error categorization
# ENTRY_POINTS: Raised by StorageResult.unwrap() and the service layer
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues)

Storage repositories never raise these for storage failures. They return a
StorageResult and the service layer decides whether a failure is fatal by
calling unwrap(), which raises one of the BusinessLogicError subclasses below.
"""


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Repository receives a dict instead of a Customer model
        - unwrap() called on a result built without a value
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime business logic failures.

    Carries the ErrorCode value (a plain string) chosen when the failure was
    classified, so HTTP handlers can map it without re-inspecting the cause.
    """

    def __init__(self, message: str = "", error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class StorageError(BusinessLogicError):
    """
    Azure Storage operation failed.

    Examples:
        - Table service unavailable
        - Blob upload rejected
        - Authentication failure
        - Network timeout
    """

    def __init__(self, message: str = "", error_code: str = None, retryable: bool = False):
        super().__init__(message, error_code)
        self.retryable = retryable


class QueueError(StorageError):
    """
    Storage queue communication failures.

    Examples:
        - Queue does not exist
        - Message body could not be decoded
        - Pop receipt expired before delete
    """
    pass


class ResourceNotFoundError(BusinessLogicError):
    """
    Requested resource does not exist.

    Examples:
        - Customer ID not in table
        - Blob not found in container
        - Log file not in share
    """
    pass


class ValidationError(BusinessLogicError):
    """
    Business validation failed.

    Note: This is different from ContractViolationError.
    This is for business rule validation, not type contracts.

    Examples:
        - Order references an unknown customer or product
        - Route ID does not match the body ID on edit
        - Required form field missing
    """
    pass


class ConcurrencyConflictError(BusinessLogicError):
    """
    Conditional write rejected because the entity changed since it was read.

    Raised when an update carrying an ETag loses the race against another
    writer. Reload the entity and retry, or update with force=True.
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    These are typically fatal and indicate misconfiguration
    that prevents the system from operating.

    Examples:
        - Neither a connection string nor an account name is set
        - Invalid connection string
    """
    pass
