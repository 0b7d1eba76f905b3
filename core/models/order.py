# ============================================================================
# MODULE CONTEXT - CORE MODELS - ORDER
# ============================================================================
# STATUS: Core data models - Order queue message
# PURPOSE: Pydantic models for orders placed on the orders storage queue
# EXPORTS: Order, OrderRequest
# PYDANTIC_MODELS: Order, OrderRequest
# DEPENDENCIES: pydantic, decimal, uuid
# SCOPE: QUEUE message boundary and HTTP request boundary
# VALIDATION: Field validation via Pydantic
# ============================================================================

"""
Order Models - Queue Boundary

Orders are never stored in a table; they live only as JSON messages on the
orders queue. The wire format uses camelCase keys:

    {"orderId": "...", "customerId": "...", "customerName": "...",
     "productId": "...", "productName": "...", "quantity": 2,
     "totalAmount": 39.98, "orderDate": "2025-01-01T10:00:00Z",
     "status": "Pending", "shippingAddress": "...",
     "paymentMethod": "...", "notes": "..."}

totalAmount is written as a JSON number. Notes is free text for the
customer; delivery bookkeeping (message id, pop receipt) travels separately
in QueueEnvelope.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from .customer import utc_now
from .enums import OrderStatus


class OrderRequest(BaseModel):
    """
    What a client may submit when placing an order.

    There is deliberately no total here: the total is always computed from
    the current product price when the order is created.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_id: str = Field(min_length=1)
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    shipping_address: str = Field(default="")
    payment_method: str = Field(default="")
    notes: str = Field(default="")


class Order(BaseModel):
    """Order as it travels on the orders queue."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    customer_id: str = Field(default="")
    customer_name: str = Field(default="")
    product_id: str = Field(default="")
    product_name: str = Field(default="")
    quantity: int = Field(default=0, ge=0)
    total_amount: Decimal = Field(default=Decimal("0"))
    order_date: datetime = Field(default_factory=utc_now)
    status: OrderStatus = Field(default=OrderStatus.PENDING)
    shipping_address: str = Field(default="")
    payment_method: str = Field(default="")
    notes: str = Field(default="")

    @field_serializer("total_amount", when_used="json")
    def _total_as_number(self, value: Decimal) -> float:
        return float(value)

    def to_message(self) -> str:
        """Serialize to the camelCase JSON body placed on the queue."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_message(cls, body: str) -> "Order":
        """Parse a queue message body. Raises pydantic.ValidationError on bad input."""
        return cls.model_validate_json(body)
