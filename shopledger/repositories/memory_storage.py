"""In-process storage for development and tests."""

from typing import Dict, List, Optional

from shopledger.models.customer import Customer
from shopledger.models.ledger import DebtAdjustment
from shopledger.models.order import Order
from shopledger.models.supplier import Supplier
from shopledger.models.transaction import Transaction
from shopledger.repositories.storage import Storage, WriteBatch


def _oldest_first(models):
    return sorted(models, key=lambda m: (m.created_at, m.id))


class MemoryStorage(Storage):
    """
    Dictionary-backed store.

    Models are copied on the way in and out so callers can never mutate
    stored state without a commit.
    """

    def __init__(self):
        self.customers: Dict[str, Customer] = {}
        self.suppliers: Dict[str, Supplier] = {}
        self.orders: Dict[str, Order] = {}
        self.transactions: Dict[str, Transaction] = {}
        self.adjustments: Dict[str, DebtAdjustment] = {}
        self.commits = 0

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        customer = self.customers.get(customer_id)
        return customer.model_copy(deep=True) if customer else None

    async def list_customers(self) -> List[Customer]:
        return [c.model_copy(deep=True) for c in _oldest_first(self.customers.values())]

    async def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        supplier = self.suppliers.get(supplier_id)
        return supplier.model_copy(deep=True) if supplier else None

    async def list_suppliers(self) -> List[Supplier]:
        return [s.model_copy(deep=True) for s in _oldest_first(self.suppliers.values())]

    async def get_order(self, order_id: str) -> Optional[Order]:
        order = self.orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    async def get_orders_by_customer(self, customer_id: str) -> List[Order]:
        orders = [o for o in self.orders.values() if o.customer_id == customer_id]
        return [o.model_copy(deep=True) for o in _oldest_first(orders)]

    async def get_transactions_by_entity(self, entity_id: str) -> List[Transaction]:
        return _oldest_first(t for t in self.transactions.values() if t.entity_id == entity_id)

    async def list_transactions(self, limit: int = 100) -> List[Transaction]:
        newest = sorted(self.transactions.values(), key=lambda t: (t.created_at, t.id), reverse=True)
        return newest[:limit]

    async def get_adjustments_by_customer(self, customer_id: str) -> List[DebtAdjustment]:
        return _oldest_first(a for a in self.adjustments.values() if a.customer_id == customer_id)

    async def commit(self, batch: WriteBatch) -> None:
        for transaction in batch.transactions:
            if transaction.id in self.transactions:
                raise ValueError(f"Transaction {transaction.id} already recorded")
        for adjustment in batch.adjustments:
            if adjustment.id in self.adjustments:
                raise ValueError(f"Adjustment {adjustment.id} already recorded")

        # Validation is done, nothing below can fail half way
        for customer in batch.customers:
            self.customers[customer.id] = customer.model_copy(deep=True)
        for supplier in batch.suppliers:
            self.suppliers[supplier.id] = supplier.model_copy(deep=True)
        for order in batch.orders:
            self.orders[order.id] = order.model_copy(deep=True)
        for transaction in batch.transactions:
            self.transactions[transaction.id] = transaction
        for adjustment in batch.adjustments:
            self.adjustments[adjustment.id] = adjustment
        self.commits += 1
