"""
Customer Service - customer CRUD over the Customers table.

Exports:
    CustomerService
"""

from typing import List

from core.models import Customer
from exceptions import ResourceNotFoundError, ValidationError
from infrastructure.interface_repository import ITableRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "CustomerService")


class CustomerService:
    """Customer operations. Reads degrade to empty results; writes raise."""

    def __init__(self, tables: ITableRepository):
        self.tables = tables

    async def list_customers(self) -> List[Customer]:
        result = await self.tables.list_customers()
        if not result.is_ok:
            logger.warning(f"⚠️ Listing customers failed, returning empty list: {result.message}")
        return result.value_or([])

    async def get_customer(self, customer_id: str) -> Customer:
        """Raises ResourceNotFoundError for unknown ids and for failed reads."""
        customer = (await self.tables.get_customer(customer_id)).value_or(None)
        if customer is None:
            raise ResourceNotFoundError(f"Customer '{customer_id}' not found", "RESOURCE_NOT_FOUND")
        return customer

    async def create_customer(self, customer: Customer) -> Customer:
        created = (await self.tables.add_customer(customer)).unwrap()
        logger.info(f"✅ Created customer {created.customer_id} ({created.full_name})")
        return created

    async def update_customer(self, customer_id: str, customer: Customer, force: bool = False) -> Customer:
        """
        Replace a customer.

        The body id must match the route id when given. created_date always
        keeps the stored value.
        """
        if customer.customer_id and customer.customer_id != customer_id:
            raise ValidationError(
                f"Customer id in body ('{customer.customer_id}') does not match '{customer_id}'",
                "VALIDATION_ERROR"
            )
        existing = await self.get_customer(customer_id)
        replacement = customer.model_copy(update={
            "customer_id": customer_id,
            "created_date": existing.created_date,
        })
        return (await self.tables.update_customer(replacement, force=force)).unwrap()

    async def delete_customer(self, customer_id: str) -> bool:
        await self.get_customer(customer_id)
        return (await self.tables.delete_customer(customer_id)).unwrap()
