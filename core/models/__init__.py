"""
Core Data Models Package.

Contains pure data structures without business logic.

Exports:
    Customer, Product: Table entities
    Order, OrderRequest, OrderStatus: Queue message models
    IncomingFile, UploadedFile, LogFile: File models
    AckToken, QueueEnvelope: Queue delivery bookkeeping
    StorageOutcome, StorageResult: Repository return type
"""

from .enums import OrderStatus
from .customer import Customer, utc_now
from .product import Product
from .order import Order, OrderRequest
from .files import IncomingFile, UploadedFile, LogFile
from .envelope import AckToken, QueueEnvelope
from .results import StorageOutcome, StorageResult

__all__ = [
    'OrderStatus',
    'Customer',
    'Product',
    'Order',
    'OrderRequest',
    'IncomingFile',
    'UploadedFile',
    'LogFile',
    'AckToken',
    'QueueEnvelope',
    'StorageOutcome',
    'StorageResult',
    'utc_now',
]
