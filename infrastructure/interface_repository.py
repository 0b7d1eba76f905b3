"""
Repository Abstract Base Classes - Single Point of Truth.

Enforces exact method signatures across all storage repository
implementations. All parameter names, return types, and method signatures
are defined here and nowhere else.

Every storage coroutine returns a StorageResult; none raise for storage
failures.

Exports:
    ITableRepository: Customers/Products table interface
    IBlobRepository: Blob container interface
    IQueueRepository: Orders/inventory queue interface
    IFileShareRepository: Log share interface
"""

from abc import ABC, abstractmethod
from io import BytesIO
from typing import Dict, List, Optional

from core.models import (
    Customer, Product, Order, IncomingFile, UploadedFile, LogFile,
    QueueEnvelope, StorageResult
)


class ITableRepository(ABC):
    """
    Table repository interface for the Customers and Products tables.

    add_* assigns a fresh identity; update_* is a replace-mode write that is
    conditional on the carried ETag unless force=True.
    """

    @abstractmethod
    async def initialize(self) -> Dict[str, bool]:
        """Create both tables if missing. Never raises; returns per-table success."""
        pass

    @abstractmethod
    async def add_customer(self, customer: Customer) -> StorageResult[Customer]:
        pass

    @abstractmethod
    async def get_customer(self, customer_id: str) -> StorageResult[Customer]:
        pass

    @abstractmethod
    async def list_customers(self) -> StorageResult[List[Customer]]:
        pass

    @abstractmethod
    async def update_customer(self, customer: Customer, force: bool = False) -> StorageResult[Customer]:
        pass

    @abstractmethod
    async def delete_customer(self, customer_id: str) -> StorageResult[bool]:
        pass

    @abstractmethod
    async def add_product(self, product: Product) -> StorageResult[Product]:
        pass

    @abstractmethod
    async def get_product(self, product_id: str) -> StorageResult[Product]:
        pass

    @abstractmethod
    async def list_products(self) -> StorageResult[List[Product]]:
        pass

    @abstractmethod
    async def list_products_by_category(self, category: str) -> StorageResult[List[Product]]:
        """Exact, case-sensitive match on the Category property."""
        pass

    @abstractmethod
    async def update_product(self, product: Product, force: bool = False) -> StorageResult[Product]:
        pass

    @abstractmethod
    async def delete_product(self, product_id: str) -> StorageResult[bool]:
        pass


class IBlobRepository(ABC):
    """
    Blob repository interface.

    Containers are created lazily on first upload with blob-level public
    read access.
    """

    @abstractmethod
    async def upload_file(
        self,
        file: IncomingFile,
        container_name: str,
        description: str = "",
        category: str = ""
    ) -> StorageResult[UploadedFile]:
        pass

    @abstractmethod
    async def download_file(self, file_name: str, container_name: str) -> StorageResult[BytesIO]:
        pass

    @abstractmethod
    async def list_files(self, container_name: str) -> StorageResult[List[UploadedFile]]:
        """Missing container yields an empty list, not a failure."""
        pass

    @abstractmethod
    async def delete_file(self, file_name: str, container_name: str) -> StorageResult[bool]:
        """True when a blob was deleted, False when it did not exist."""
        pass

    @abstractmethod
    def get_file_url(self, file_name: str, container_name: str) -> str:
        pass

    @abstractmethod
    async def container_exists(self, container_name: str) -> StorageResult[bool]:
        pass

    @abstractmethod
    async def create_container(self, container_name: str) -> StorageResult[bool]:
        pass


class IQueueRepository(ABC):
    """
    Queue repository interface with EXACT method signatures.

    Delivery is at-least-once: a received message stays on the queue,
    invisible for the visibility timeout, until it is deleted with the
    AckToken from its envelope.
    """

    @abstractmethod
    async def initialize(self) -> Dict[str, bool]:
        pass

    @abstractmethod
    async def send_order(self, order: Order) -> StorageResult[str]:
        """Returns the message id."""
        pass

    @abstractmethod
    async def receive_order(
        self,
        visibility_timeout: Optional[int] = None
    ) -> StorageResult[QueueEnvelope[Order]]:
        """NOT_FOUND when the queue is empty."""
        pass

    @abstractmethod
    async def delete_order_message(self, message_id: str, pop_receipt: str) -> StorageResult[bool]:
        pass

    @abstractmethod
    async def get_order_queue_length(self) -> StorageResult[int]:
        pass

    @abstractmethod
    async def peek_orders(self, max_messages: int = 32) -> StorageResult[List[Order]]:
        pass

    @abstractmethod
    async def send_inventory_message(self, message: str) -> StorageResult[str]:
        pass

    @abstractmethod
    async def receive_inventory_message(
        self,
        visibility_timeout: Optional[int] = None
    ) -> StorageResult[QueueEnvelope[str]]:
        pass

    @abstractmethod
    async def delete_inventory_message(self, message_id: str, pop_receipt: str) -> StorageResult[bool]:
        pass

    @abstractmethod
    async def get_inventory_queue_length(self) -> StorageResult[int]:
        pass


class IFileShareRepository(ABC):
    """Log share interface. Files live in the share root."""

    @abstractmethod
    async def upload_log(self, file_name: str, content: str, share_name: Optional[str] = None) -> StorageResult[bool]:
        pass

    @abstractmethod
    async def download_log(self, file_name: str, share_name: Optional[str] = None) -> StorageResult[str]:
        pass

    @abstractmethod
    async def list_logs(self, share_name: Optional[str] = None) -> StorageResult[List[LogFile]]:
        """Missing share yields an empty list, not a failure."""
        pass

    @abstractmethod
    async def delete_log(self, file_name: str, share_name: Optional[str] = None) -> StorageResult[bool]:
        pass

    @abstractmethod
    async def share_exists(self, share_name: Optional[str] = None) -> StorageResult[bool]:
        pass

    @abstractmethod
    async def create_share(self, share_name: Optional[str] = None) -> StorageResult[bool]:
        pass
