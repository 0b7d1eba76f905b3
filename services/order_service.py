"""
Order Service - order placement and manual queue processing.

Orders are validated against the Customers and Products tables, priced from
the current product price and placed on the orders queue. Staff drain the
queue one message at a time: process_next_order() hides the next order for
the visibility timeout, complete_order() deletes it with the AckToken from
the envelope. An order that is received but never completed reappears on
the queue.

Exports:
    OrderService
    QUEUE_LENGTH_UNAVAILABLE: Sentinel returned when the queue length is unknown
"""

from typing import List, Optional

from core.models import (
    Order, OrderRequest, OrderStatus, QueueEnvelope
)
from exceptions import ValidationError
from infrastructure.interface_repository import IQueueRepository, ITableRepository
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "OrderService")

QUEUE_LENGTH_UNAVAILABLE = -1


class OrderService:
    """Create, receive and complete orders."""

    def __init__(self, tables: ITableRepository, queues: IQueueRepository):
        self.tables = tables
        self.queues = queues

    @log_exceptions(logger=logger)
    async def create_order(self, request: OrderRequest) -> Order:
        """
        Build and enqueue an order.

        The total is unit price times quantity from the product as stored
        now; nothing the client sends can change it.

        Raises:
            ValidationError: unknown customer or product
            StorageError: the order could not be queued
        """
        customer = (await self.tables.get_customer(request.customer_id)).value_or(None)
        if customer is None:
            raise ValidationError(f"Invalid customer: '{request.customer_id}'", "VALIDATION_ERROR")

        product = (await self.tables.get_product(request.product_id)).value_or(None)
        if product is None:
            raise ValidationError(f"Invalid product: '{request.product_id}'", "VALIDATION_ERROR")

        order = Order(
            customer_id=customer.customer_id,
            customer_name=customer.full_name,
            product_id=product.product_id,
            product_name=product.name,
            quantity=request.quantity,
            total_amount=product.unit_price * request.quantity,
            status=OrderStatus.PENDING,
            shipping_address=request.shipping_address,
            payment_method=request.payment_method,
            notes=request.notes,
        )

        message_id = (await self.queues.send_order(order)).unwrap()
        logger.info(
            f"📤 Order {order.order_id} queued as message {message_id}: "
            f"{order.quantity} x {order.product_name} = {order.total_amount}"
        )
        return order

    async def process_next_order(self, visibility_timeout: Optional[int] = None) -> Optional[QueueEnvelope[Order]]:
        """
        Receive the next order, or None when the queue is empty.

        Raises:
            QueueError: the next message could not be decoded
            StorageError: the queue could not be read
        """
        result = await self.queues.receive_order(visibility_timeout=visibility_timeout)
        if result.is_not_found:
            return None
        envelope = result.unwrap()
        if envelope.dequeue_count > 1:
            logger.warning(
                f"⚠️ Order {envelope.payload.order_id} delivered {envelope.dequeue_count} times"
            )
        return envelope

    async def complete_order(
        self,
        order_id: str,
        status: OrderStatus,
        message_id: str,
        pop_receipt: str
    ) -> bool:
        """
        Remove a processed order from the queue.

        Returns False when the delivery could not be deleted (already
        deleted, or the pop receipt expired and the message was handed out
        again).
        """
        result = await self.queues.delete_order_message(message_id, pop_receipt)
        if not result.is_ok:
            logger.warning(
                f"⚠️ Could not complete order {order_id} (message {message_id}): "
                f"{result.outcome.value} {result.message}"
            )
            return False
        logger.info(f"✅ Order {order_id} marked {OrderStatus(status).value}, message {message_id} deleted")
        return True

    async def queue_status(self) -> int:
        """Approximate number of waiting orders, or QUEUE_LENGTH_UNAVAILABLE."""
        result = await self.queues.get_order_queue_length()
        if not result.is_ok:
            logger.warning(f"⚠️ Order queue length unavailable: {result.message}")
        return result.value_or(QUEUE_LENGTH_UNAVAILABLE)

    async def pending_orders(self, max_messages: int = 32) -> List[Order]:
        """Waiting orders without claiming them."""
        return (await self.queues.peek_orders(max_messages=max_messages)).value_or([])
