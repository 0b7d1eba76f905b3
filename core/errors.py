"""
Error Code Definitions and Classification.

Centralized error code management with retry logic and consistent
HTTP status mapping across all endpoints.

Key Features:
    - Explicit error codes for all failure modes
    - Retry classification (PERMANENT, TRANSIENT, THROTTLING)
    - Mapping from azure-core exceptions to error codes
    - HTTP status code per error code

Exports:
    ErrorCode: Standardized error codes enum
    ErrorClassification: Error category enum
    classify_exception: Map an exception raised by an Azure SDK call to an ErrorCode
    is_retryable: Helper to check if error should be retried
    get_http_status_code: HTTP status for an ErrorCode
"""

from enum import Enum
from typing import Dict

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceExistsError,
    ResourceModifiedError,
    ResourceNotFoundError as AzureResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)


class ErrorCode(str, Enum):
    """
    Standardized error codes for all application errors.

    These codes are carried by StorageResult and returned in API responses to
    provide explicit error classification for logging and retry logic.
    """

    # ========================================================================
    # CLIENT ERRORS (HTTP 400/404/409)
    # ========================================================================

    # Resource not found errors (HTTP 404, NOT RETRYABLE)
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"  # Entity, blob, message or log file missing

    # Parameter validation errors (HTTP 400, NOT RETRYABLE)
    VALIDATION_ERROR = "VALIDATION_ERROR"  # Generic validation failed
    INVALID_PARAMETER = "INVALID_PARAMETER"  # Specific parameter invalid
    MISSING_PARAMETER = "MISSING_PARAMETER"  # Required parameter missing

    # Write conflicts (HTTP 409, NOT RETRYABLE)
    ALREADY_EXISTS = "ALREADY_EXISTS"  # Create of an existing resource
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"  # ETag no longer matches

    # ========================================================================
    # SERVICE ERRORS (HTTP 500)
    # ========================================================================

    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"  # Credential rejected by storage
    MESSAGE_ERROR = "MESSAGE_ERROR"  # Queue message body could not be decoded

    # ========================================================================
    # INFRASTRUCTURE ERRORS (HTTP 503, RETRYABLE)
    # ========================================================================

    STORAGE_ERROR = "STORAGE_ERROR"  # Azure storage 5xx
    STORAGE_TIMEOUT = "STORAGE_TIMEOUT"  # Connection or read timeout
    THROTTLED = "THROTTLED"  # Storage account throttling (429)

    # ========================================================================
    # GENERIC ERRORS
    # ========================================================================

    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"  # Unexpected exception


class ErrorClassification(str, Enum):
    """
    Error classification for retry logic.

    Determines whether an error should trigger a retry or fail immediately.
    """

    PERMANENT = "PERMANENT"  # Never retry (client error, won't fix itself)
    TRANSIENT = "TRANSIENT"  # Retry with exponential backoff (temporary issue)
    THROTTLING = "THROTTLING"  # Retry with longer delay (rate limiting)


# Error code to classification mapping
_ERROR_CLASSIFICATION: Dict[ErrorCode, ErrorClassification] = {
    # PERMANENT - Never retry
    ErrorCode.RESOURCE_NOT_FOUND: ErrorClassification.PERMANENT,
    ErrorCode.VALIDATION_ERROR: ErrorClassification.PERMANENT,
    ErrorCode.INVALID_PARAMETER: ErrorClassification.PERMANENT,
    ErrorCode.MISSING_PARAMETER: ErrorClassification.PERMANENT,
    ErrorCode.ALREADY_EXISTS: ErrorClassification.PERMANENT,
    ErrorCode.CONCURRENCY_CONFLICT: ErrorClassification.PERMANENT,
    ErrorCode.AUTHENTICATION_FAILED: ErrorClassification.PERMANENT,
    ErrorCode.MESSAGE_ERROR: ErrorClassification.PERMANENT,
    ErrorCode.UNEXPECTED_ERROR: ErrorClassification.PERMANENT,

    # TRANSIENT - Retry with exponential backoff
    ErrorCode.STORAGE_ERROR: ErrorClassification.TRANSIENT,
    ErrorCode.STORAGE_TIMEOUT: ErrorClassification.TRANSIENT,

    # THROTTLING - Retry with longer delay
    ErrorCode.THROTTLED: ErrorClassification.THROTTLING,
}

# HTTP status codes that Azure Storage documents as safe to retry
_TRANSIENT_STATUS_CODES = {408, 500, 502, 503, 504}


def classify_exception(exc: BaseException) -> ErrorCode:
    """
    Map an exception raised by an Azure SDK call to an ErrorCode.

    Specific azure-core subclasses are checked before the generic
    HttpResponseError because they all inherit from it.

    Example:
        >>> classify_exception(ResourceNotFoundError("gone"))
        ErrorCode.RESOURCE_NOT_FOUND
    """
    if isinstance(exc, AzureResourceNotFoundError):
        return ErrorCode.RESOURCE_NOT_FOUND
    if isinstance(exc, ResourceModifiedError):
        return ErrorCode.CONCURRENCY_CONFLICT
    if isinstance(exc, ResourceExistsError):
        return ErrorCode.ALREADY_EXISTS
    if isinstance(exc, ClientAuthenticationError):
        return ErrorCode.AUTHENTICATION_FAILED
    if isinstance(exc, (ServiceRequestError, ServiceResponseError)):
        return ErrorCode.STORAGE_TIMEOUT
    if isinstance(exc, HttpResponseError):
        status = exc.status_code
        if status == 404:
            return ErrorCode.RESOURCE_NOT_FOUND
        if status == 412:
            return ErrorCode.CONCURRENCY_CONFLICT
        if status == 409:
            return ErrorCode.ALREADY_EXISTS
        if status == 429:
            return ErrorCode.THROTTLED
        if status in _TRANSIENT_STATUS_CODES:
            return ErrorCode.STORAGE_ERROR
        if status in (401, 403):
            return ErrorCode.AUTHENTICATION_FAILED
        if status is not None and 400 <= status < 500:
            return ErrorCode.INVALID_PARAMETER
        return ErrorCode.STORAGE_ERROR
    if isinstance(exc, (TimeoutError, ConnectionError)):
        return ErrorCode.STORAGE_TIMEOUT
    if isinstance(exc, ValueError):
        return ErrorCode.INVALID_PARAMETER
    return ErrorCode.UNEXPECTED_ERROR


def is_retryable(error_code: ErrorCode) -> bool:
    """
    Determine if an error code should trigger a retry.

    Example:
        >>> is_retryable(ErrorCode.RESOURCE_NOT_FOUND)
        False
        >>> is_retryable(ErrorCode.STORAGE_TIMEOUT)
        True
    """
    classification = _ERROR_CLASSIFICATION.get(error_code, ErrorClassification.PERMANENT)
    return classification != ErrorClassification.PERMANENT


def get_http_status_code(error_code: ErrorCode) -> int:
    """
    Get the appropriate HTTP status code for an error code.

    Returns:
        HTTP status code (400, 404, 409, 500, 503)
    """
    if error_code == ErrorCode.RESOURCE_NOT_FOUND:
        return 404

    if error_code in {
        ErrorCode.VALIDATION_ERROR,
        ErrorCode.INVALID_PARAMETER,
        ErrorCode.MISSING_PARAMETER,
    }:
        return 400

    if error_code in {ErrorCode.ALREADY_EXISTS, ErrorCode.CONCURRENCY_CONFLICT}:
        return 409

    if is_retryable(error_code):
        return 503

    return 500
