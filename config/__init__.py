# ============================================================================
# MODULE CONTEXT - CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Active
# PURPOSE: Configuration package exports
# EXPORTS: All config classes, get_config singleton, reset_config, debug_config helper
# INTERFACES: Pydantic BaseModel
# PYDANTIC_MODELS: AppConfig, StorageConfig, QueueConfig
# DEPENDENCIES: domain config modules
# PATTERNS: Singleton, composition, facade
# ENTRY_POINTS: from config import get_config, QueueNames
# ============================================================================

"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── storage_config.py        # Storage account, tables, containers, share
    ├── queue_config.py          # Storage queues
    └── defaults.py              # Default values

Usage:
    from config import get_config
    config = get_config()
    table = config.storage.customers_table

    from config import debug_config
    info = debug_config()  # Connection string masked
"""

from typing import Optional

from .storage_config import StorageConfig, resolve_connection_string
from .queue_config import QueueConfig, QueueNames
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, secrets masked
    """
    try:
        config = get_config()
        return {
            'storage': config.storage.debug_dict(),
            'queues': {
                'orders_queue': config.queues.orders_queue,
                'inventory_queue': config.queues.inventory_queue,
                'visibility_timeout': config.queues.visibility_timeout,
                'message_base64': config.queues.message_base64,
            },
            'debug_mode': config.debug_mode,
            'environment': config.environment,
            'log_level': config.log_level,
        }
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'AppConfig',
    'get_config',
    'reset_config',
    'debug_config',
    'StorageConfig',
    'resolve_connection_string',
    'QueueConfig',
    'QueueNames',
]
