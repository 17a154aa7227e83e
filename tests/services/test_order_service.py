from datetime import datetime, timezone

import pytest

from factories import seed_customer
from shopledger.core.errors import EntityNotFound, InvalidAmount
from shopledger.models.enums import PaymentStatus
from shopledger.models.order import OrderItem


@pytest.mark.asyncio
async def test_create_order_updates_pending(storage, order_service):
    customer = await seed_customer(storage, orders=[(100, 40)])

    order = await order_service.create_order(customer.id, [
        OrderItem(type="chicken", quantity=2.5, rate=180),
        OrderItem(type="leg-piece", quantity=1, rate=220.5),
    ])

    assert order.total_amount == 670.5
    assert order.paid_amount == 0
    assert order.payment_status == PaymentStatus.PENDING
    assert (await storage.get_customer(customer.id)).pending_amount == 730.5


@pytest.mark.asyncio
async def test_backdated_order_keeps_its_place(storage, order_service):
    customer = await seed_customer(storage, orders=[(100, 0)])
    backdated = datetime(2023, 6, 1, tzinfo=timezone.utc)

    order = await order_service.create_order(
        customer.id, [OrderItem(type="goat", quantity=1, rate=500)], created_at=backdated
    )

    orders = await order_service.list_customer_orders(customer.id)
    assert orders[0].id == order.id


@pytest.mark.asyncio
async def test_create_order_rejects_empty_or_zero(storage, order_service):
    customer = await seed_customer(storage)

    with pytest.raises(InvalidAmount):
        await order_service.create_order(customer.id, [])
    with pytest.raises(InvalidAmount):
        await order_service.create_order(customer.id, [OrderItem(type="chicken", quantity=1, rate=0)])
    with pytest.raises(EntityNotFound):
        await order_service.create_order("missing", [OrderItem(type="chicken", quantity=1, rate=10)])


@pytest.mark.asyncio
async def test_get_order(storage, order_service):
    customer = await seed_customer(storage, orders=[(100, 0)])
    orders = await order_service.list_customer_orders(customer.id)

    assert (await order_service.get_order(orders[0].id)).total_amount == 100
    with pytest.raises(EntityNotFound):
        await order_service.get_order("missing")
    with pytest.raises(EntityNotFound):
        await order_service.list_customer_orders("missing")
