"""
HTTP Trigger Base Class.

Abstract base class for all Azure Functions HTTP triggers providing consistent
infrastructure patterns for request/response handling.

Handlers are async: process_request() awaits the service layer and returns
either a dict (serialized as JSON) or a ready func.HttpResponse for binary
downloads. Exceptions are mapped to status codes in one place:

    ValidationError, ValueError (incl. pydantic)  -> 400
    ResourceNotFoundError                         -> 404
    ConcurrencyConflictError                      -> 409
    StorageError                                  -> 503 retryable, else 500
    ConfigurationError, anything else             -> 500

Exports:
    BaseHttpTrigger: Base class for HTTP triggers
    SystemMonitoringTrigger: Base class for monitoring
    to_json: Pydantic model -> camelCase JSON-safe dict
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Union, List
import uuid
import json
from datetime import datetime, timezone

import azure.functions as func
from pydantic import BaseModel

from core.errors import ErrorCode, get_http_status_code
from exceptions import (
    BusinessLogicError, ConcurrencyConflictError, ConfigurationError,
    ResourceNotFoundError, StorageError, ValidationError
)
from util_logger import LoggerFactory, LogContext
from util_logger import ComponentType


def to_json(model: BaseModel) -> Dict[str, Any]:
    """Serialize a model the way clients see it (camelCase, JSON types)."""
    return model.model_dump(mode="json", by_alias=True)


def query_flag(value: Optional[str]) -> bool:
    """Truthy query string flag: 1/true/yes."""
    return str(value or "").strip().lower() in ("1", "true", "yes")


def camel_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of data with snake_case keys also present in camelCase."""
    normalized = dict(data)
    for key, value in data.items():
        if "_" in key:
            head, *rest = key.split("_")
            normalized.setdefault(head + "".join(part.title() for part in rest), value)
    return normalized


def _status_for(error: BusinessLogicError, default: int) -> int:
    try:
        return get_http_status_code(ErrorCode(error.error_code))
    except ValueError:
        return default


class BaseHttpTrigger(ABC):
    """
    Abstract base class for Azure Functions HTTP triggers.

    Provides consistent infrastructure for HTTP request/response handling,
    parameter extraction, error handling, and logging patterns.
    """

    def __init__(self, trigger_name: str):
        """
        Initialize HTTP trigger with name for logging context.

        Args:
            trigger_name: Name of the trigger for logging (e.g., "customers", "health_check")
        """
        self.trigger_name = trigger_name
        self.logger = LoggerFactory.create_logger(ComponentType.TRIGGER, f"HttpTrigger.{trigger_name}")

    # ========================================================================
    # ABSTRACT METHODS - Must be implemented by concrete triggers
    # ========================================================================

    @abstractmethod
    async def process_request(self, req: func.HttpRequest) -> Union[Dict[str, Any], func.HttpResponse]:
        """
        Process the HTTP request and return response data.

        This is where business logic goes. Should raise appropriate exceptions
        for error conditions that will be handled by the base class.

        Returns:
            Dictionary to be serialized as JSON response, or a complete
            HttpResponse (file downloads) returned as is
        """
        pass

    @abstractmethod
    def get_allowed_methods(self) -> List[str]:
        """
        Return list of allowed HTTP methods for this trigger.

        Returns:
            List of HTTP methods (e.g., ["GET"], ["POST"], ["GET", "POST"])
        """
        pass

    # ========================================================================
    # CONCRETE INFRASTRUCTURE METHODS
    # ========================================================================

    async def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Main entry point for HTTP request handling.

        Provides consistent error handling, logging, and response formatting.
        """
        request_id = self._generate_request_id()
        context = self.build_log_context(req, request_id)

        self.logger.info(
            f"🌐 [{self.trigger_name}] Request {request_id} started: "
            f"{req.method} {req.url}",
            extra=context.as_extra()
        )

        try:
            if req.method not in self.get_allowed_methods():
                return self._create_error_response(
                    error="Method not allowed",
                    message=f"Method {req.method} not allowed. Allowed: {', '.join(self.get_allowed_methods())}",
                    status_code=405,
                    request_id=request_id
                )

            response_data = await self.process_request(req)

            if isinstance(response_data, func.HttpResponse):
                response_data.headers["X-Request-ID"] = request_id
                response = response_data
            else:
                response = self._create_success_response(response_data, request_id)

            self.logger.info(
                f"✅ [{self.trigger_name}] Request {request_id} completed successfully",
                extra=context.as_extra()
            )
            return response

        except ResourceNotFoundError as e:
            self.logger.info(f"🔍 [{self.trigger_name}] Not found: {e}", extra=context.as_extra())
            return self._create_error_response(
                error="Not found",
                message=str(e),
                status_code=404,
                request_id=request_id
            )

        except ValidationError as e:
            self.logger.warning(f"❌ [{self.trigger_name}] Validation failed: {e}", extra=context.as_extra())
            return self._create_error_response(
                error="Bad request",
                message=str(e),
                status_code=_status_for(e, 400),
                request_id=request_id
            )

        except ConcurrencyConflictError as e:
            self.logger.warning(f"⚔️ [{self.trigger_name}] Concurrent modification: {e}", extra=context.as_extra())
            return self._create_error_response(
                error="Conflict",
                message=str(e),
                status_code=409,
                request_id=request_id
            )

        except StorageError as e:
            status_code = 503 if e.retryable else _status_for(e, 500)
            self.logger.error(
                f"💥 [{self.trigger_name}] Storage failure ({e.error_code}, status {status_code}): {e}",
                extra=context.as_extra()
            )
            return self._create_error_response(
                error="Service unavailable" if status_code == 503 else "Storage error",
                message=str(e),
                status_code=status_code,
                request_id=request_id
            )

        except ConfigurationError as e:
            self.logger.error(f"⚙️ [{self.trigger_name}] Configuration error: {e}", extra=context.as_extra())
            return self._create_error_response(
                error="Configuration error",
                message=str(e),
                status_code=500,
                request_id=request_id,
                include_debug_info=True
            )

        except ValueError as e:
            # Client errors (400), pydantic ValidationError included
            self.logger.warning(f"❌ [{self.trigger_name}] Client error: {e}", extra=context.as_extra())
            return self._create_error_response(
                error="Bad request",
                message=str(e),
                status_code=400,
                request_id=request_id
            )

        except Exception as e:
            self.logger.error(f"💥 [{self.trigger_name}] Internal error: {e}", exc_info=True, extra=context.as_extra())
            return self._create_error_response(
                error="Internal server error",
                message=str(e),
                status_code=500,
                request_id=request_id,
                include_debug_info=True
            )

    # ========================================================================
    # UTILITY METHODS FOR SUBCLASSES
    # ========================================================================

    def extract_path_params(self, req: func.HttpRequest, required_params: List[str]) -> Dict[str, str]:
        """
        Extract and validate path parameters.

        Raises:
            ValueError: If required parameters are missing
        """
        params = {}
        missing_params = []

        for param_name in required_params:
            value = req.route_params.get(param_name)
            if not value:
                missing_params.append(param_name)
            else:
                params[param_name] = value

        if missing_params:
            raise ValueError(f"Missing required path parameters: {', '.join(missing_params)}")

        return params

    def extract_query_params(self, req: func.HttpRequest,
                           required_params: Optional[List[str]] = None,
                           optional_params: Optional[List[str]] = None) -> Dict[str, str]:
        """
        Extract and validate query parameters.

        Raises:
            ValueError: If required parameters are missing
        """
        params = {}
        required_params = required_params or []
        optional_params = optional_params or []
        missing_params = []

        for param_name in required_params:
            value = req.params.get(param_name)
            if not value:
                missing_params.append(param_name)
            else:
                params[param_name] = value

        for param_name in optional_params:
            value = req.params.get(param_name)
            if value:
                params[param_name] = value

        if missing_params:
            raise ValueError(f"Missing required query parameters: {', '.join(missing_params)}")

        return params

    def extract_json_body(self, req: func.HttpRequest, required: bool = True) -> Optional[Dict[str, Any]]:
        """
        Extract and parse JSON request body.

        Raises:
            ValueError: If body is required but missing, invalid JSON, or not an object
        """
        if not req.get_body():
            if required:
                raise ValueError("Request body is required")
            return None

        try:
            body = req.get_json()
        except ValueError as e:
            raise ValueError(f"Invalid JSON in request body: {e}")

        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        return body

    def validate_required_fields(self, data: Dict[str, Any], required_fields: List[str]) -> None:
        """
        Validate that required fields are present in data.

        Raises:
            ValidationError: If required fields are missing or blank
        """
        missing_fields = [
            field for field in required_fields
            if data.get(field) is None or (isinstance(data[field], str) and not data[field].strip())
        ]

        if missing_fields:
            raise ValidationError(f"Missing required fields: {', '.join(missing_fields)}", "MISSING_PARAMETER")

    # ========================================================================
    # PRIVATE INFRASTRUCTURE METHODS
    # ========================================================================

    def build_log_context(self, req: func.HttpRequest, request_id: str) -> LogContext:
        """Request-scoped customDimensions: request id, caller correlation id, route ids."""
        route = req.route_params or {}
        return LogContext(
            request_id=request_id,
            correlation_id=req.headers.get("X-Correlation-ID"),
            customer_id=route.get("customer_id"),
            product_id=route.get("product_id"),
            container=route.get("container"),
            file_name=route.get("file_name"),
        )

    def _generate_request_id(self) -> str:
        """Generate unique request ID for tracing."""
        return str(uuid.uuid4())[:8]

    def _create_success_response(self, data: Dict[str, Any], request_id: str) -> func.HttpResponse:
        """Create standardized success response."""
        response_data = {
            **data,
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        return func.HttpResponse(
            json.dumps(response_data, default=str),
            status_code=200,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )

    def _create_error_response(self, error: str, message: str, status_code: int,
                             request_id: str, include_debug_info: bool = False) -> func.HttpResponse:
        """Create standardized error response."""
        response_data = {
            "error": error,
            "message": message,
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        if include_debug_info:
            response_data["debug"] = {
                "trigger_name": self.trigger_name,
                "python_version": __import__("sys").version.split()[0]
            }

        return func.HttpResponse(
            json.dumps(response_data),
            status_code=status_code,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )


class SystemMonitoringTrigger(BaseHttpTrigger):
    """Base class for system monitoring triggers (health)."""

    def get_system_timestamp(self) -> str:
        """Get standardized system timestamp."""
        return datetime.now(timezone.utc).isoformat()

    async def check_component_health(
        self,
        component_name: str,
        check_function,
        description: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Standard pattern for checking component health.

        Status determination (in priority order):
        1. If check_function raises exception -> "unhealthy"
        2. If result contains "_status" key -> use that value (explicit override)
        3. If result contains "error" key with truthy value -> "unhealthy"
        4. If result contains "exists": False -> "unhealthy"
        5. Otherwise -> "healthy"

        check_function is an async callable returning a dict.
        """
        try:
            result = await check_function()

            if isinstance(result, dict):
                if "_status" in result:
                    status = result.pop("_status")
                elif result.get("error"):
                    status = "unhealthy"
                elif result.get("exists") is False:
                    status = "unhealthy"
                else:
                    status = "healthy"
            else:
                status = "healthy"

            return {
                "component": component_name,
                "description": description or f"{component_name} health check",
                "status": status,
                "details": result,
                "checked_at": self.get_system_timestamp()
            }
        except Exception as e:
            return {
                "component": component_name,
                "description": description or f"{component_name} health check",
                "status": "unhealthy",
                "error": str(e),
                "checked_at": self.get_system_timestamp()
            }
