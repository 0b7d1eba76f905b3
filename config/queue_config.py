"""
Azure Storage Queue Configuration.

Provides configuration for:
    - Queue names (orders, inventory)
    - Visibility timeout applied when a message is received
    - Message body encoding

Queue Architecture:
    - orders: one JSON message per placed order, drained manually by staff
    - inventory: free-text inventory notifications

Exports:
    QueueConfig: Pydantic queue configuration model
    QueueNames: Queue name constants
"""

import os

from pydantic import BaseModel, Field

from .defaults import QueueDefaults


# ============================================================================
# QUEUE NAMES
# ============================================================================

class QueueNames:
    """Queue name constants for easy access."""
    ORDERS = QueueDefaults.ORDERS_QUEUE
    INVENTORY = QueueDefaults.INVENTORY_QUEUE


# ============================================================================
# QUEUE CONFIGURATION
# ============================================================================

class QueueConfig(BaseModel):
    """
    Azure Storage Queue configuration.

    Queues share the storage account configured in StorageConfig, so there is
    no separate connection setting here.
    """

    orders_queue: str = Field(
        default=QueueDefaults.ORDERS_QUEUE,
        description="Storage queue receiving placed orders"
    )
    inventory_queue: str = Field(
        default=QueueDefaults.INVENTORY_QUEUE,
        description="Storage queue receiving inventory notifications"
    )
    visibility_timeout: int = Field(
        default=QueueDefaults.VISIBILITY_TIMEOUT,
        ge=1,
        le=7 * 24 * 3600,
        description="Seconds a received message stays hidden before it is redelivered"
    )
    message_base64: bool = Field(
        default=QueueDefaults.MESSAGE_BASE64,
        description="Base64-encode message bodies (required by Functions queue triggers)"
    )

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            orders_queue=os.environ.get("ORDERS_QUEUE", QueueDefaults.ORDERS_QUEUE),
            inventory_queue=os.environ.get("INVENTORY_QUEUE", QueueDefaults.INVENTORY_QUEUE),
            visibility_timeout=int(os.environ.get(
                "QUEUE_VISIBILITY_TIMEOUT",
                str(QueueDefaults.VISIBILITY_TIMEOUT)
            )),
            message_base64=os.environ.get(
                "QUEUE_MESSAGE_BASE64",
                str(QueueDefaults.MESSAGE_BASE64).lower()
            ).lower() == "true",
        )
