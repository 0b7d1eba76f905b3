"""
Customer HTTP Triggers.

Endpoints:
    GET    /api/customers                 list customers
    POST   /api/customers                 create customer
    GET    /api/customers/{customer_id}   read customer
    PUT    /api/customers/{customer_id}   replace customer (?force=true skips the ETag check)
    DELETE /api/customers/{customer_id}   delete customer

Exports:
    customers_trigger, customer_item_trigger
"""

from typing import Any, Dict, List

import azure.functions as func

from core.models import Customer
from services import get_retail_services
from .http_base import BaseHttpTrigger, camel_keys, query_flag, to_json

REQUIRED_CUSTOMER_FIELDS = ["firstName", "lastName", "email"]


class CustomersTrigger(BaseHttpTrigger):
    """Collection endpoint: list and create."""

    def __init__(self):
        super().__init__("customers")

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "POST"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        services = await get_retail_services()

        if req.method == "GET":
            customers = await services.customers.list_customers()
            return {
                "customers": [to_json(c) for c in customers],
                "count": len(customers)
            }

        body = self.extract_json_body(req)
        self.validate_required_fields(camel_keys(body), REQUIRED_CUSTOMER_FIELDS)
        created = await services.customers.create_customer(Customer.model_validate(body))
        return {"customer": to_json(created), "created": True}


class CustomerItemTrigger(BaseHttpTrigger):
    """Single customer: read, replace and delete."""

    def __init__(self):
        super().__init__("customer_item")

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "PUT", "DELETE"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        customer_id = self.extract_path_params(req, ["customer_id"])["customer_id"]
        services = await get_retail_services()

        if req.method == "GET":
            customer = await services.customers.get_customer(customer_id)
            return {"customer": to_json(customer)}

        if req.method == "PUT":
            body = self.extract_json_body(req)
            self.validate_required_fields(camel_keys(body), REQUIRED_CUSTOMER_FIELDS)
            force = query_flag(req.params.get("force"))
            updated = await services.customers.update_customer(
                customer_id, Customer.model_validate(body), force=force
            )
            return {"customer": to_json(updated), "updated": True}

        await services.customers.delete_customer(customer_id)
        return {"customer_id": customer_id, "deleted": True}


customers_trigger = CustomersTrigger()
customer_item_trigger = CustomerItemTrigger()
