"""
Product Model - Table Storage Boundary.

Price is kept as decimal text ("19.99") exactly as the Products table stores
it; unit_price exposes it as a Decimal for arithmetic.

Exports:
    Product: Product entity model
"""

from decimal import Decimal, InvalidOperation
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from config.defaults import StorageDefaults
from .customer import utc_now, entity_etag


class Product(BaseModel):
    """Product entity stored in the Products table and the fallback catalog."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str = Field(default="", description="Identity, also the table row key")
    name: str = Field(default="")
    description: str = Field(default="")
    price: str = Field(default="0.00", description="Non-negative decimal encoded as text")
    stock_quantity: int = Field(default=0, ge=0)
    category: str = Field(default="")
    image_url: str = Field(default="")
    is_active: bool = Field(default=True)
    created_date: datetime = Field(default_factory=utc_now)
    etag: Optional[str] = Field(default=None)

    @field_validator("price", mode="before")
    @classmethod
    def _validate_price(cls, value: Any) -> str:
        text = str(value).strip() if value is not None else ""
        if not text:
            return "0.00"
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"price must be a decimal number, got {value!r}")
        if not amount.is_finite() or amount < 0:
            raise ValueError(f"price must be a non-negative decimal, got {value!r}")
        return text

    @property
    def partition_key(self) -> str:
        return StorageDefaults.PRODUCT_PARTITION_KEY

    @property
    def row_key(self) -> str:
        return self.product_id

    @property
    def unit_price(self) -> Decimal:
        return Decimal(self.price)

    def to_entity(self) -> Dict[str, Any]:
        return {
            "PartitionKey": self.partition_key,
            "RowKey": self.row_key,
            "ProductId": self.product_id,
            "Name": self.name,
            "Description": self.description,
            "Price": self.price,
            "StockQuantity": self.stock_quantity,
            "Category": self.category,
            "ImageUrl": self.image_url,
            "IsActive": self.is_active,
            "CreatedDate": self.created_date,
        }

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "Product":
        values = {
            "product_id": entity.get("RowKey") or entity.get("ProductId", ""),
            "name": entity.get("Name", ""),
            "description": entity.get("Description", ""),
            "price": entity.get("Price", "0.00"),
            "stock_quantity": entity.get("StockQuantity", 0) or 0,
            "category": entity.get("Category", ""),
            "image_url": entity.get("ImageUrl", ""),
            "is_active": entity.get("IsActive", True),
            "etag": entity_etag(entity),
        }
        if entity.get("CreatedDate") is not None:
            values["created_date"] = entity["CreatedDate"]
        return cls(**values)
