"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - StorageConfig (account credentials, tables, containers, log share)
    - QueueConfig (order and inventory queues)

Exports:
    AppConfig: Main configuration class

Dependencies:
    pydantic: BaseModel for configuration validation
    config.storage_config: StorageConfig
    config.queue_config: QueueConfig
    config.defaults: Default value constants

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os

from pydantic import BaseModel, Field

from .storage_config import StorageConfig
from .queue_config import QueueConfig
from .defaults import AppDefaults


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    # ========================================================================
    # Core Application Settings
    # ========================================================================

    debug_mode: bool = Field(
        default=AppDefaults.DEBUG_MODE,
        description="Enable debug mode for verbose diagnostics. "
                    "Adds configuration details to the health endpoint.",
        examples=[True, False]
    )

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)",
        examples=["dev", "qa", "prod"]
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================

    log_level: str = Field(
        default=AppDefaults.LOG_LEVEL,
        description="Logging level for application diagnostics",
        examples=["DEBUG", "INFO", "WARNING", "ERROR"]
    )

    debug_logging: bool = Field(
        default=AppDefaults.DEBUG_LOGGING,
        description="Force DEBUG level for every component logger (DEBUG_LOGGING=true)"
    )

    # ========================================================================
    # Domain Configurations (Composition Pattern)
    # ========================================================================

    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Storage account used by the table, blob, queue and file repositories"
    )

    queues: QueueConfig = Field(
        default_factory=QueueConfig,
        description="Azure Storage Queue configuration"
    )

    @property
    def storage_account_name(self):
        """Shortcut for storage.account_name."""
        return self.storage.account_name

    @classmethod
    def from_environment(cls):
        """Load all configs from environment."""
        return cls(
            debug_mode=os.environ.get("DEBUG_MODE", str(AppDefaults.DEBUG_MODE).lower()).lower() == "true",
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),
            debug_logging=os.environ.get(
                "DEBUG_LOGGING",
                str(AppDefaults.DEBUG_LOGGING).lower()
            ).lower() == "true",
            storage=StorageConfig.from_environment(),
            queues=QueueConfig.from_environment(),
        )
