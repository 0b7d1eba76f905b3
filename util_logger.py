"""
Unified Logger System.

JSON-only structured logging for Azure Functions with Application Insights.

Design Principles:
    - Strong typing with dataclasses (stdlib only)
    - Enum safety for categories
    - Component-specific loggers
    - Clean factory pattern

Exports:
    ComponentType: Enum for component types
    LogLevel: Enum for log levels
    LogContext: Logging context dataclass
    ComponentConfig: Per-component logger settings
    JSONFormatter: One JSON object per log line
    LoggerFactory: Factory for creating loggers
    log_exceptions: Exception logging decorator (sync and async)

Dependencies:
    Standard library only (logging, enum, dataclasses, json)
"""

from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from dataclasses import dataclass
import asyncio
import logging
import sys
import os
import json
import traceback
from functools import wraps


# ============================================================================
# COMPONENT TYPES - Aligned with application layers
# ============================================================================

class ComponentType(Enum):
    """
    Component types aligned with application layers.

    Each layer has specific logging needs and levels.
    """
    TRIGGER = "trigger"        # HTTP entry point layer
    SERVICE = "service"        # Business logic layer
    REPOSITORY = "repository"  # Azure Storage access layer
    FACTORY = "factory"        # Client and repository creation
    CACHE = "cache"            # In-memory fallback catalog


# ============================================================================
# LOG LEVELS - Standard Python levels with enum safety
# ============================================================================

class LogLevel(Enum):
    """
    Standard Python log levels as enum for type safety.
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        """Convert to Python logging level constant."""
        return getattr(logging, self.value)


# ============================================================================
# LOG CONTEXT - Correlation and tracking
# ============================================================================

@dataclass
class LogContext:
    """
    Context for log correlation across one HTTP request.

    Built by BaseHttpTrigger.handle_request from the request id, the
    X-Correlation-ID header and the route parameters. Only the fields that
    are set end up in customDimensions.
    """
    # Request correlation
    request_id: Optional[str] = None  # HTTP request ID (8 chars)
    correlation_id: Optional[str] = None  # Caller supplied correlation ID

    # Route parameters
    customer_id: Optional[str] = None
    product_id: Optional[str] = None
    container: Optional[str] = None  # Blob container
    file_name: Optional[str] = None  # Blob or log file

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            k: v for k, v in {
                'request_id': self.request_id,
                'correlation_id': self.correlation_id,
                'customer_id': self.customer_id,
                'product_id': self.product_id,
                'container': self.container,
                'file_name': self.file_name,
            }.items() if v is not None
        }

    def as_extra(self) -> Dict[str, Any]:
        """The `extra` argument that puts this context into customDimensions."""
        return {'custom_dimensions': self.to_dict()}


# ============================================================================
# COMPONENT CONFIGURATION - Per-component settings
# ============================================================================

@dataclass
class ComponentConfig:
    """
    Configuration for component-specific logging.

    Each component type can have different settings.
    """
    component_type: ComponentType
    log_level: LogLevel = LogLevel.INFO


# ============================================================================
# JSON FORMATTER - Structured logging for Azure Functions
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging in Azure Functions.
    Outputs logs in a format that Application Insights can automatically parse.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Add custom dimensions if present (for Application Insights)
        if hasattr(record, 'custom_dimensions'):
            log_obj['customDimensions'] = record.custom_dimensions

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        return json.dumps(log_obj, default=str)


# ============================================================================
# LOGGER FACTORY - Creates component-specific loggers
# ============================================================================

class LoggerFactory:
    """
    Factory for creating component-specific loggers.

    Example:
        logger = LoggerFactory.create_logger(
            ComponentType.REPOSITORY,
            "QueueRepository"
        )
        logger.info("📤 Order sent")
    """

    # DEBUG_LOGGING=true lowers every non-repository component to DEBUG
    _default_level = LogLevel.DEBUG if os.getenv('DEBUG_LOGGING', '').lower() == 'true' else LogLevel.INFO

    DEFAULT_CONFIGS = {
        ComponentType.TRIGGER: ComponentConfig(
            component_type=ComponentType.TRIGGER,
            log_level=_default_level
        ),
        ComponentType.SERVICE: ComponentConfig(
            component_type=ComponentType.SERVICE,
            log_level=_default_level
        ),
        ComponentType.REPOSITORY: ComponentConfig(
            component_type=ComponentType.REPOSITORY,
            log_level=LogLevel.DEBUG  # Always debug for repositories to track storage calls
        ),
        ComponentType.FACTORY: ComponentConfig(
            component_type=ComponentType.FACTORY,
            log_level=_default_level
        ),
        ComponentType.CACHE: ComponentConfig(
            component_type=ComponentType.CACHE,
            log_level=_default_level
        ),
    }

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        config: Optional[ComponentConfig] = None
    ) -> logging.Logger:
        """
        Create a logger for a specific component.

        Args:
            component_type: Type of component
            name: Component name (e.g., "TableRepository")
            config: Optional custom configuration

        Returns:
            Configured Python logger
        """
        if config is None:
            config = cls.DEFAULT_CONFIGS.get(
                component_type,
                ComponentConfig(component_type=component_type)
            )

        # Create hierarchical logger name
        logger_name = f"{component_type.value}.{name}"
        logger = logging.getLogger(logger_name)

        log_level = config.log_level.to_python_level()
        logger.setLevel(log_level)

        # Only add our JSON handler once per logger
        has_json_handler = any(
            isinstance(h.formatter, JSONFormatter) for h in logger.handlers
        )
        if not has_json_handler:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(log_level)
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)

        # Allow propagation to Azure's root logger for Application Insights
        logger.propagate = True

        if not hasattr(logger, '_context_wrapped'):
            original_log = logger._log

            def log_with_context(level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=1):
                """Wrapper to inject component identity and any per-call custom dimensions."""
                if extra is None:
                    extra = {}

                custom_dims = {
                    'component_type': component_type.value,
                    'component_name': name,
                }

                if 'custom_dimensions' in extra:
                    custom_dims.update(extra['custom_dimensions'])

                extra['custom_dimensions'] = custom_dims

                # +1 to account for this wrapper function
                original_log(level, msg, args, exc_info=exc_info, extra=extra,
                             stack_info=stack_info, stacklevel=stacklevel + 1)

            logger._log = log_with_context
            logger._context_wrapped = True

        return logger


# ============================================================================
# EXCEPTION DECORATOR - Automatic exception logging with context
# ============================================================================

def log_exceptions(component_type: Optional[ComponentType] = None,
                   component_name: Optional[str] = None,
                   logger: Optional[logging.Logger] = None):
    """
    Decorator to automatically log exceptions with full context.

    Works on plain functions and coroutine functions. The exception is always
    re-raised.

    Can be used in three ways:
    1. With existing logger: @log_exceptions(logger=my_logger)
    2. With component info: @log_exceptions(ComponentType.SERVICE, "OrderService")
    3. Simple: @log_exceptions() - uses function module and name

    Example:
        @log_exceptions(ComponentType.SERVICE, "OrderService")
        async def create_order(self, request):
            ...
    """
    def _resolve_logger(func) -> logging.Logger:
        if logger:
            return logger
        if component_type and component_name:
            return LoggerFactory.create_logger(component_type, component_name)
        return LoggerFactory.create_logger(
            ComponentType.SERVICE,
            func.__module__ or "unknown"
        )

    def _log_failure(func, e: Exception, args, kwargs) -> None:
        _resolve_logger(func).error(
            f"Exception in {func.__name__}",
            exc_info=True,
            extra={
                'custom_dimensions': {
                    'function_name': func.__name__,
                    'function_module': func.__module__,
                    'exception_type': type(e).__name__,
                    'exception_message': str(e),
                    'function_args': str(args)[:500],
                    'function_kwargs': str(kwargs)[:500],
                    'traceback': traceback.format_exc()
                }
            }
        )

    def decorator(func):
        if asyncio.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _log_failure(func, e, args, kwargs)
                    raise
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_failure(func, e, args, kwargs)
                raise
        return wrapper
    return decorator
