# ============================================================================
# MODULE CONTEXT - QUEUE REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Storage Queue repository
# PURPOSE: Orders and inventory queues with explicit receive/delete acknowledgement
# EXPORTS: QueueRepository
# INTERFACES: IQueueRepository
# PYDANTIC_MODELS: Order
# DEPENDENCIES: azure-storage-queue (aio), azure-core, base64, core.models
# SOURCE: Storage queues "orders" and "inventory"
# SCOPE: ALL queue operations
# PATTERNS: Repository, StorageResult error boundary, at-least-once delivery
# ENTRY_POINTS: RepositoryFactory.create_queue_repository()
# ============================================================================

"""
Queue Storage Repository

Order messages are camelCase JSON (see core.models.order); inventory
messages are opaque text. Bodies are sent as plain text unless
QUEUE_MESSAGE_BASE64=true, which matches what Functions queue triggers
expect.

Receive never removes a message. It hides it for the visibility timeout and
returns a QueueEnvelope whose AckToken deletes exactly that delivery. If the
token is not used before the timeout runs out the message becomes visible
again, with a higher dequeue count and a new pop receipt.

A body that cannot be decoded comes back as a FATAL result with error code
MESSAGE_ERROR; the message itself is left for redelivery so it is not lost.
"""

import base64
from typing import Callable, Dict, List, Optional, TypeVar

from azure.core.exceptions import ResourceExistsError
from azure.storage.queue.aio import QueueClient, QueueServiceClient

from config.defaults import QueueDefaults
from core.errors import ErrorCode
from core.models import AckToken, Order, QueueEnvelope, StorageResult
from exceptions import ContractViolationError
from infrastructure.decorators import storage_operation
from infrastructure.interface_repository import IQueueRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "QueueRepository")

T = TypeVar("T")


class QueueRepository(IQueueRepository):
    """
    Azure Storage Queue repository for the orders and inventory queues.
    """

    def __init__(
        self,
        service_client: QueueServiceClient,
        orders_queue: str = QueueDefaults.ORDERS_QUEUE,
        inventory_queue: str = QueueDefaults.INVENTORY_QUEUE,
        visibility_timeout: int = QueueDefaults.VISIBILITY_TIMEOUT,
        message_base64: bool = QueueDefaults.MESSAGE_BASE64
    ):
        self.logger = logger
        self._service = service_client
        self.orders_queue = orders_queue
        self.inventory_queue = inventory_queue
        self.visibility_timeout = visibility_timeout
        self.message_base64 = message_base64
        self._orders: QueueClient = service_client.get_queue_client(orders_queue)
        self._inventory: QueueClient = service_client.get_queue_client(inventory_queue)

    async def initialize(self) -> Dict[str, bool]:
        """
        Create both queues if they do not exist.

        Failures are logged and reported, never raised.
        """
        status = {}
        for queue_name, client in ((self.orders_queue, self._orders), (self.inventory_queue, self._inventory)):
            try:
                await client.create_queue()
                logger.info(f"✅ Created queue: {queue_name}")
                status[queue_name] = True
            except ResourceExistsError:
                logger.debug(f"Queue already exists: {queue_name}")
                status[queue_name] = True
            except Exception as e:
                logger.error(f"❌ Could not create queue {queue_name}: {e}")
                status[queue_name] = False
        return status

    # ========================================================================
    # ENCODING
    # ========================================================================

    def _encode(self, text: str) -> str:
        if self.message_base64:
            return base64.b64encode(text.encode("utf-8")).decode("ascii")
        return text

    def _decode(self, content) -> str:
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        if self.message_base64:
            return base64.b64decode(content, validate=True).decode("utf-8")
        return content

    # ========================================================================
    # GENERIC QUEUE OPERATIONS
    # ========================================================================

    async def _send(self, client: QueueClient, text: str) -> StorageResult[str]:
        message = await client.send_message(self._encode(text))
        logger.info(f"📤 Message sent to {client.queue_name}. ID: {message.id}")
        return StorageResult.ok(message.id)

    async def _receive(
        self,
        client: QueueClient,
        parse: Callable[[str], T],
        visibility_timeout: Optional[int]
    ) -> StorageResult[QueueEnvelope[T]]:
        message = await client.receive_message(
            visibility_timeout=visibility_timeout or self.visibility_timeout
        )
        if message is None:
            logger.debug(f"📭 Queue {client.queue_name} is empty")
            return StorageResult.not_found(f"Queue {client.queue_name} is empty")

        try:
            payload = parse(self._decode(message.content))
        except ValueError as e:
            logger.error(
                f"❌ Undecodable message {message.id} on {client.queue_name} "
                f"(dequeue_count={message.dequeue_count}): {e}"
            )
            return StorageResult.fatal(
                ErrorCode.MESSAGE_ERROR,
                f"Message {message.id} on {client.queue_name} could not be decoded: {e}"
            )

        logger.info(f"📥 Received message {message.id} from {client.queue_name}")
        return StorageResult.ok(QueueEnvelope(
            payload=payload,
            ack_token=AckToken(message_id=message.id, pop_receipt=message.pop_receipt),
            dequeue_count=message.dequeue_count or 1,
            inserted_on=message.inserted_on,
        ))

    async def _delete(self, client: QueueClient, message_id: str, pop_receipt: str) -> StorageResult[bool]:
        if not message_id or not pop_receipt:
            return StorageResult.fatal(
                ErrorCode.MISSING_PARAMETER,
                "message_id and pop_receipt are both required to delete a message"
            )
        await client.delete_message(message_id, pop_receipt)
        logger.debug(f"🗑️ Deleted message {message_id} from {client.queue_name}")
        return StorageResult.ok(True)

    async def _length(self, client: QueueClient) -> StorageResult[int]:
        properties = await client.get_queue_properties()
        return StorageResult.ok(properties.approximate_message_count or 0)

    # ========================================================================
    # ORDERS QUEUE
    # ========================================================================

    @storage_operation("send_order")
    async def send_order(self, order: Order) -> StorageResult[str]:
        if not isinstance(order, Order):
            raise ContractViolationError(
                f"send_order expects Order, got {type(order).__name__}"
            )
        return await self._send(self._orders, order.to_message())

    @storage_operation("receive_order")
    async def receive_order(
        self,
        visibility_timeout: Optional[int] = None
    ) -> StorageResult[QueueEnvelope[Order]]:
        return await self._receive(self._orders, Order.from_message, visibility_timeout)

    @storage_operation("delete_order_message")
    async def delete_order_message(self, message_id: str, pop_receipt: str) -> StorageResult[bool]:
        return await self._delete(self._orders, message_id, pop_receipt)

    @storage_operation("get_order_queue_length")
    async def get_order_queue_length(self) -> StorageResult[int]:
        return await self._length(self._orders)

    @storage_operation("peek_orders")
    async def peek_orders(self, max_messages: int = QueueDefaults.PEEK_MAX_MESSAGES) -> StorageResult[List[Order]]:
        """Look at waiting orders without changing their visibility."""
        messages = await self._orders.peek_messages(max_messages=max_messages)
        orders = []
        for message in messages:
            try:
                orders.append(Order.from_message(self._decode(message.content)))
            except ValueError as e:
                logger.warning(f"⚠️ Skipping undecodable message {message.id} in peek: {e}")
        return StorageResult.ok(orders)

    # ========================================================================
    # INVENTORY QUEUE
    # ========================================================================

    @storage_operation("send_inventory_message")
    async def send_inventory_message(self, message: str) -> StorageResult[str]:
        return await self._send(self._inventory, message)

    @storage_operation("receive_inventory_message")
    async def receive_inventory_message(
        self,
        visibility_timeout: Optional[int] = None
    ) -> StorageResult[QueueEnvelope[str]]:
        return await self._receive(self._inventory, str, visibility_timeout)

    @storage_operation("delete_inventory_message")
    async def delete_inventory_message(self, message_id: str, pop_receipt: str) -> StorageResult[bool]:
        return await self._delete(self._inventory, message_id, pop_receipt)

    @storage_operation("get_inventory_queue_length")
    async def get_inventory_queue_length(self) -> StorageResult[int]:
        return await self._length(self._inventory)
