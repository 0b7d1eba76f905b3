"""
Order HTTP Triggers.

Endpoints:
    GET  /api/orders/queue      approximate queue length (?peek=true adds waiting orders)
    POST /api/orders            place an order from an OrderRequest body
    POST /api/orders/process    receive the next order (hidden for the visibility timeout)
    POST /api/orders/complete   delete a received order with its ack token

The process response carries the ack token (messageId, popReceipt) that
/orders/complete needs. Orders that are never completed reappear on the
queue once the visibility timeout passes.

Exports:
    order_queue_trigger, create_order_trigger, process_order_trigger, complete_order_trigger
"""

from typing import Any, Dict, List

import azure.functions as func

from core.models import OrderRequest, OrderStatus
from services import get_retail_services
from .http_base import BaseHttpTrigger, camel_keys, query_flag, to_json


class OrderQueueTrigger(BaseHttpTrigger):
    def __init__(self):
        super().__init__("order_queue")

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        services = await get_retail_services()
        response = {"queue_length": await services.orders.queue_status()}
        if query_flag(req.params.get("peek")):
            pending = await services.orders.pending_orders()
            response["pending_orders"] = [to_json(o) for o in pending]
        return response


class CreateOrderTrigger(BaseHttpTrigger):
    def __init__(self):
        super().__init__("create_order")

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = self.extract_json_body(req)
        self.validate_required_fields(camel_keys(body), ["customerId", "productId", "quantity"])
        services = await get_retail_services()
        order = await services.orders.create_order(OrderRequest.model_validate(body))
        return {"order": to_json(order), "queued": True}


class ProcessOrderTrigger(BaseHttpTrigger):
    def __init__(self):
        super().__init__("process_order")

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = camel_keys(self.extract_json_body(req, required=False) or {})
        visibility_timeout = body.get("visibilityTimeout")
        if visibility_timeout is not None:
            visibility_timeout = int(visibility_timeout)
            if visibility_timeout < 1:
                raise ValueError("visibilityTimeout must be at least 1 second")

        services = await get_retail_services()
        envelope = await services.orders.process_next_order(visibility_timeout=visibility_timeout)
        if envelope is None:
            return {"order": None, "message": "No orders in the queue."}
        return {"order": envelope.to_dict()}


class CompleteOrderTrigger(BaseHttpTrigger):
    def __init__(self):
        super().__init__("complete_order")

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = camel_keys(self.extract_json_body(req))
        self.validate_required_fields(body, ["orderId", "messageId", "popReceipt"])
        status = OrderStatus(body.get("status") or OrderStatus.COMPLETED.value)

        services = await get_retail_services()
        completed = await services.orders.complete_order(
            body["orderId"], status, body["messageId"], body["popReceipt"]
        )
        return {"order_id": body["orderId"], "status": status.value, "completed": completed}


order_queue_trigger = OrderQueueTrigger()
create_order_trigger = CreateOrderTrigger()
process_order_trigger = ProcessOrderTrigger()
complete_order_trigger = CompleteOrderTrigger()
