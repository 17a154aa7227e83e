"""Builders for stored test data."""
from datetime import datetime, timedelta, timezone

from shopledger.models.customer import Customer
from shopledger.models.order import Order, OrderItem
from shopledger.models.supplier import Supplier
from shopledger.repositories.storage import WriteBatch

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def make_order(customer_id: str, total: float, paid: float = 0.0, minutes: int = 0, **kwargs) -> Order:
    """Order created `minutes` after BASE_TIME, so tests control FIFO order."""
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return Order(
        customer_id=customer_id,
        items=[OrderItem(type="chicken", quantity=1, rate=total)],
        total_amount=total,
        paid_amount=paid,
        created_at=created_at,
        updated_at=created_at,
        **kwargs,
    )


async def seed_customer(storage, orders=(), pending=None, **kwargs) -> Customer:
    """Store a customer with the given (total, paid) orders, oldest first."""
    customer = Customer(name=kwargs.pop("name", "Ravi"), **kwargs)
    stored_orders = [
        make_order(customer.id, total, paid, minutes=index)
        for index, (total, paid) in enumerate(orders)
    ]
    if pending is None:
        pending = sum(total - paid for total, paid in orders)
    customer.pending_amount = round(pending, 2)
    await storage.commit(WriteBatch(customers=[customer], orders=stored_orders))
    return customer


async def seed_supplier(storage, debt: float = 0.0, **kwargs) -> Supplier:
    supplier = Supplier(name=kwargs.pop("name", "Farm Fresh"), debt=debt, **kwargs)
    await storage.commit(WriteBatch(suppliers=[supplier]))
    return supplier
