"""
OrderService tests: order totals from stored prices, queue hand-off and
manual processing with ack tokens.
"""

from decimal import Decimal

import pytest

from core.models import Customer, OrderRequest, OrderStatus, Product
from exceptions import QueueError, StorageError, ValidationError
from services.order_service import OrderService, QUEUE_LENGTH_UNAVAILABLE
from tests.factories.model_factories import make_customer, make_order_request, make_product
from tests.fakes.azure_fakes import http_error


@pytest.fixture
def service(table_repo, queue_repo):
    return OrderService(table_repo, queue_repo)


@pytest.fixture
async def stored(table_repo):
    customer = (await table_repo.add_customer(Customer(**make_customer(first_name="Ada", last_name="Lovelace")))).unwrap()
    product = (await table_repo.add_product(Product(**make_product(name="Widget", price="19.99")))).unwrap()
    return customer, product


class TestCreateOrder:

    async def test_total_recomputed_from_product_price(self, service, stored, queue_repo):
        customer, product = stored
        request = OrderRequest(**make_order_request(customer.customer_id, product.product_id, quantity=2))

        order = await service.create_order(request)

        assert order.total_amount == Decimal("39.98")
        assert order.customer_name == "Ada Lovelace"
        assert order.product_name == "Widget"
        assert order.status == OrderStatus.PENDING
        assert (await queue_repo.get_order_queue_length()).unwrap() == 1

    async def test_client_total_cannot_override(self, service, stored):
        customer, product = stored
        request = OrderRequest.model_validate({
            "customerId": customer.customer_id,
            "productId": product.product_id,
            "quantity": 3,
            "totalAmount": 1,
        })
        order = await service.create_order(request)
        assert order.total_amount == Decimal("59.97")

    async def test_unknown_customer(self, service, stored, queue_repo):
        _, product = stored
        with pytest.raises(ValidationError):
            await service.create_order(OrderRequest(**make_order_request("ghost", product.product_id)))
        assert (await queue_repo.get_order_queue_length()).unwrap() == 0

    async def test_unknown_product(self, service, stored):
        customer, _ = stored
        with pytest.raises(ValidationError):
            await service.create_order(OrderRequest(**make_order_request(customer.customer_id, "ghost")))

    async def test_send_failure_is_fatal(self, service, stored, queue_service):
        customer, product = stored
        queue_service.fail_with(http_error(503))
        with pytest.raises(StorageError) as exc_info:
            await service.create_order(OrderRequest(**make_order_request(customer.customer_id, product.product_id)))
        assert exc_info.value.retryable is True


class TestProcessing:

    async def test_process_and_complete(self, service, stored):
        customer, product = stored
        placed = await service.create_order(
            OrderRequest(**make_order_request(customer.customer_id, product.product_id, notes="fragile"))
        )

        envelope = await service.process_next_order()
        assert envelope.payload.order_id == placed.order_id
        assert envelope.payload.notes == "fragile"

        token = envelope.ack_token
        completed = await service.complete_order(
            placed.order_id, OrderStatus.COMPLETED, token.message_id, token.pop_receipt
        )
        assert completed is True
        assert await service.queue_status() == 0

    async def test_empty_queue(self, service):
        assert await service.process_next_order() is None

    async def test_uncompleted_order_reappears(self, service, stored, clock):
        customer, product = stored
        await service.create_order(OrderRequest(**make_order_request(customer.customer_id, product.product_id)))

        first = await service.process_next_order(visibility_timeout=10)
        assert await service.process_next_order() is None

        clock.advance(11)
        again = await service.process_next_order()
        assert again.payload.order_id == first.payload.order_id
        assert again.dequeue_count == 2

    async def test_complete_with_bad_receipt(self, service, stored):
        customer, product = stored
        await service.create_order(OrderRequest(**make_order_request(customer.customer_id, product.product_id)))
        envelope = await service.process_next_order()
        completed = await service.complete_order(
            envelope.payload.order_id, OrderStatus.CANCELLED, envelope.ack_token.message_id, "wrong"
        )
        assert completed is False
        assert await service.queue_status() == 1

    async def test_undecodable_message_raises(self, service, queue_service):
        queue_service.get_queue_client("orders").put_raw("<xml/>")
        with pytest.raises(QueueError):
            await service.process_next_order()

    async def test_queue_status_unavailable(self, service, queue_service):
        queue_service.fail_with(http_error(500))
        assert await service.queue_status() == QUEUE_LENGTH_UNAVAILABLE

    async def test_pending_orders(self, service, stored):
        customer, product = stored
        for _ in range(2):
            await service.create_order(OrderRequest(**make_order_request(customer.customer_id, product.product_id)))
        assert len(await service.pending_orders()) == 2
        assert await service.queue_status() == 2
