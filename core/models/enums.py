"""
Pure Enumeration Types for the Retail Domain.

No business logic - pure type definitions only.

Exports:
    OrderStatus: Order lifecycle states
"""

from enum import Enum


class OrderStatus(str, Enum):
    """
    Valid status values for orders.

    State transitions:
    - PENDING -> PROCESSING -> COMPLETED (normal flow)
    - PENDING -> CANCELLED
    - PROCESSING -> CANCELLED

    Values are title case because they travel verbatim in queue messages
    read by other consumers.
    """

    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
