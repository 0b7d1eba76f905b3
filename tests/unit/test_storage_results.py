"""
StorageResult and error classification tests.
"""

import pytest
from azure.core.exceptions import (
    ClientAuthenticationError,
    ResourceExistsError,
    ResourceModifiedError,
    ResourceNotFoundError as AzureResourceNotFoundError,
    ServiceRequestError,
)

from core.errors import ErrorCode, classify_exception, get_http_status_code, is_retryable
from core.models import StorageOutcome, StorageResult
from exceptions import (
    ConcurrencyConflictError, QueueError, ResourceNotFoundError, StorageError
)
from tests.fakes.azure_fakes import http_error


class TestClassifyException:

    @pytest.mark.parametrize("exc, expected", [
        (AzureResourceNotFoundError(message="gone"), ErrorCode.RESOURCE_NOT_FOUND),
        (ResourceModifiedError(message="changed"), ErrorCode.CONCURRENCY_CONFLICT),
        (ResourceExistsError(message="exists"), ErrorCode.ALREADY_EXISTS),
        (ClientAuthenticationError(message="denied"), ErrorCode.AUTHENTICATION_FAILED),
        (ServiceRequestError(message="dns"), ErrorCode.STORAGE_TIMEOUT),
        (TimeoutError(), ErrorCode.STORAGE_TIMEOUT),
        (RuntimeError("boom"), ErrorCode.UNEXPECTED_ERROR),
    ])
    def test_sdk_exceptions(self, exc, expected):
        assert classify_exception(exc) == expected

    @pytest.mark.parametrize("status, expected", [
        (404, ErrorCode.RESOURCE_NOT_FOUND),
        (409, ErrorCode.ALREADY_EXISTS),
        (412, ErrorCode.CONCURRENCY_CONFLICT),
        (429, ErrorCode.THROTTLED),
        (503, ErrorCode.STORAGE_ERROR),
        (403, ErrorCode.AUTHENTICATION_FAILED),
        (400, ErrorCode.INVALID_PARAMETER),
    ])
    def test_http_status_codes(self, status, expected):
        assert classify_exception(http_error(status)) == expected

    def test_retryable_codes(self):
        assert is_retryable(ErrorCode.STORAGE_TIMEOUT)
        assert is_retryable(ErrorCode.THROTTLED)
        assert not is_retryable(ErrorCode.CONCURRENCY_CONFLICT)

    @pytest.mark.parametrize("code, status", [
        (ErrorCode.RESOURCE_NOT_FOUND, 404),
        (ErrorCode.VALIDATION_ERROR, 400),
        (ErrorCode.CONCURRENCY_CONFLICT, 409),
        (ErrorCode.STORAGE_ERROR, 503),
        (ErrorCode.AUTHENTICATION_FAILED, 500),
    ])
    def test_http_status_mapping(self, code, status):
        assert get_http_status_code(code) == status


class TestStorageResult:

    def test_from_exception_not_found(self):
        result = StorageResult.from_exception(AzureResourceNotFoundError(message="gone"))
        assert result.outcome == StorageOutcome.NOT_FOUND
        assert not result

    def test_from_exception_transient(self):
        result = StorageResult.from_exception(http_error(503))
        assert result.is_transient
        assert result.error_code == ErrorCode.STORAGE_ERROR

    def test_from_exception_fatal(self):
        result = StorageResult.from_exception(ResourceModifiedError(message="changed"))
        assert result.outcome == StorageOutcome.FATAL
        assert result.is_conflict

    def test_value_or(self):
        assert StorageResult.ok(5).value_or(0) == 5
        assert StorageResult.not_found().value_or(0) == 0

    def test_unwrap_ok(self):
        assert StorageResult.ok("v").unwrap() == "v"

    def test_unwrap_not_found(self):
        with pytest.raises(ResourceNotFoundError):
            StorageResult.not_found("missing").unwrap()

    def test_unwrap_conflict(self):
        with pytest.raises(ConcurrencyConflictError):
            StorageResult.fatal(ErrorCode.CONCURRENCY_CONFLICT, "changed").unwrap()

    def test_unwrap_transient_is_retryable_storage_error(self):
        with pytest.raises(StorageError) as exc_info:
            StorageResult.transient(ErrorCode.STORAGE_TIMEOUT, "slow").unwrap()
        assert exc_info.value.retryable is True
        assert exc_info.value.error_code == "STORAGE_TIMEOUT"

    def test_unwrap_message_error_is_queue_error(self):
        with pytest.raises(QueueError):
            StorageResult.fatal(ErrorCode.MESSAGE_ERROR, "bad body").unwrap()

    def test_map(self):
        assert StorageResult.ok(2).map(lambda v: v * 3).value == 6
        failed = StorageResult.not_found("x").map(lambda v: v * 3)
        assert failed.is_not_found

    def test_to_dict(self):
        data = StorageResult.transient(ErrorCode.THROTTLED, "slow down").to_dict()
        assert data == {"outcome": "transient_error", "error_code": "THROTTLED", "message": "slow down"}
