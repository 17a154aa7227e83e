import logging
from datetime import datetime
from typing import List, Optional

from shopledger.core.errors import EntityNotFound, InvalidAmount
from shopledger.models.enums import OrderStatus
from shopledger.models.order import Order, OrderItem
from shopledger.repositories.storage import Storage, WriteBatch
from shopledger.services.allocation import recompute_pending
from shopledger.services.locks import EntityLocks
from shopledger.utils.currency import calculate_order_total

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, storage: Storage, locks: EntityLocks):
        self.storage = storage
        self.locks = locks

    async def create_order(
        self,
        customer_id: str,
        items: List[OrderItem],
        order_status: OrderStatus = OrderStatus.CONFIRMED,
        created_at: Optional[datetime] = None,
    ) -> Order:
        """
        Create an unpaid order and re-sync the customer's pending amount.

        The total is always computed from the items; callers cannot set it.
        """
        if not items:
            raise InvalidAmount("Order must contain at least one item")

        total = calculate_order_total(items)
        if total <= 0:
            raise InvalidAmount("Order total must be greater than 0")

        async with self.locks.customer(customer_id):
            customer = await self.storage.get_customer(customer_id)
            if customer is None:
                raise EntityNotFound("customer", customer_id)

            order = Order(
                customer_id=customer_id,
                items=items,
                total_amount=total,
                paid_amount=0.0,
                order_status=order_status,
            )
            if created_at is not None:
                order = order.model_copy(update={"created_at": created_at, "updated_at": created_at})

            orders = await self.storage.get_orders_by_customer(customer_id)
            pending = recompute_pending([*orders, order])
            await self.storage.commit(WriteBatch(
                customers=[customer.touched(pending_amount=pending)],
                orders=[order],
            ))

        logger.info("Order %s created for customer %s: total=%.2f", order.id, customer_id, total)
        return order

    async def get_order(self, order_id: str) -> Order:
        order = await self.storage.get_order(order_id)
        if order is None:
            raise EntityNotFound("order", order_id)
        return order

    async def list_customer_orders(self, customer_id: str) -> List[Order]:
        if await self.storage.get_customer(customer_id) is None:
            raise EntityNotFound("customer", customer_id)
        return await self.storage.get_orders_by_customer(customer_id)
