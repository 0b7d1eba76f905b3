# ============================================================================
# MODULE CONTEXT - CORE MODELS - CUSTOMER
# ============================================================================
# STATUS: Core data models - Customer table representation
# PURPOSE: Pydantic model for customer entities in Azure Table Storage
# EXPORTS: Customer, utc_now
# PYDANTIC_MODELS: Customer
# DEPENDENCIES: pydantic, datetime, config.defaults
# SCOPE: Customer data model for TABLE STORAGE and HTTP boundaries
# VALIDATION: Field validation via Pydantic
# PATTERNS: Data model pattern, no business logic
# ENTRY_POINTS: from core.models import Customer
# ============================================================================

"""
Customer Model - Table Storage Boundary

The customer row key is always the customer id and the partition key is the
constant "Customers". Table properties use PascalCase names (FirstName,
ZipCode, ...) so existing rows stay readable; the HTTP boundary uses
camelCase through the alias generator.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config.defaults import StorageDefaults


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def entity_etag(entity: Mapping[str, Any]) -> Optional[str]:
    """Read the ETag that azure-data-tables attaches to returned entities."""
    metadata = getattr(entity, "metadata", None) or {}
    return metadata.get("etag")


class Customer(BaseModel):
    """
    Customer entity stored in the Customers table.

    customer_id is assigned by TableRepository.add_customer; any value a
    caller sets before the add is overwritten.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_id: str = Field(default="", description="Identity, also the table row key")
    first_name: str = Field(default="")
    last_name: str = Field(default="")
    email: str = Field(default="")
    phone: str = Field(default="")
    address: str = Field(default="")
    city: str = Field(default="")
    state: str = Field(default="")
    zip_code: str = Field(default="")
    created_date: datetime = Field(default_factory=utc_now)

    # Concurrency token returned by the table service on read
    etag: Optional[str] = Field(default=None)

    @property
    def partition_key(self) -> str:
        return StorageDefaults.CUSTOMER_PARTITION_KEY

    @property
    def row_key(self) -> str:
        return self.customer_id

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_entity(self) -> Dict[str, Any]:
        """Table entity with PartitionKey/RowKey and PascalCase properties."""
        return {
            "PartitionKey": self.partition_key,
            "RowKey": self.row_key,
            "CustomerId": self.customer_id,
            "FirstName": self.first_name,
            "LastName": self.last_name,
            "Email": self.email,
            "Phone": self.phone,
            "Address": self.address,
            "City": self.city,
            "State": self.state,
            "ZipCode": self.zip_code,
            "CreatedDate": self.created_date,
        }

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "Customer":
        """Build a Customer from a table entity; the row key wins over CustomerId."""
        values = {
            "customer_id": entity.get("RowKey") or entity.get("CustomerId", ""),
            "first_name": entity.get("FirstName", ""),
            "last_name": entity.get("LastName", ""),
            "email": entity.get("Email", ""),
            "phone": entity.get("Phone", ""),
            "address": entity.get("Address", ""),
            "city": entity.get("City", ""),
            "state": entity.get("State", ""),
            "zip_code": entity.get("ZipCode", ""),
            "etag": entity_etag(entity),
        }
        if entity.get("CreatedDate") is not None:
            values["created_date"] = entity["CreatedDate"]
        return cls(**values)
