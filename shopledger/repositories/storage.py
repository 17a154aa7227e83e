"""
Storage interface consumed by the services.

Reads return pydantic models. All writes go through commit(), which applies a
WriteBatch atomically: a payment's mutated orders, the updated aggregate and
its transaction record are persisted together or not at all.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from shopledger.models.customer import Customer
from shopledger.models.ledger import DebtAdjustment
from shopledger.models.order import Order
from shopledger.models.supplier import Supplier
from shopledger.models.transaction import Transaction


@dataclass
class WriteBatch:
    """Documents to persist in one atomic step.

    customers, suppliers and orders are upserted whole; transactions and
    adjustments are insert-only.
    """
    customers: List[Customer] = field(default_factory=list)
    suppliers: List[Supplier] = field(default_factory=list)
    orders: List[Order] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)
    adjustments: List[DebtAdjustment] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.customers or self.suppliers or self.orders
            or self.transactions or self.adjustments
        )


class Storage(ABC):
    # Customers
    @abstractmethod
    async def get_customer(self, customer_id: str) -> Optional[Customer]: ...

    @abstractmethod
    async def list_customers(self) -> List[Customer]: ...

    # Suppliers
    @abstractmethod
    async def get_supplier(self, supplier_id: str) -> Optional[Supplier]: ...

    @abstractmethod
    async def list_suppliers(self) -> List[Supplier]: ...

    # Orders
    @abstractmethod
    async def get_order(self, order_id: str) -> Optional[Order]: ...

    @abstractmethod
    async def get_orders_by_customer(self, customer_id: str) -> List[Order]:
        """Orders oldest first."""

    # Transactions
    @abstractmethod
    async def get_transactions_by_entity(self, entity_id: str) -> List[Transaction]:
        """Transactions oldest first."""

    @abstractmethod
    async def list_transactions(self, limit: int = 100) -> List[Transaction]:
        """Most recent transactions first."""

    # Debt adjustments
    @abstractmethod
    async def get_adjustments_by_customer(self, customer_id: str) -> List[DebtAdjustment]: ...

    # Writes
    @abstractmethod
    async def commit(self, batch: WriteBatch) -> None: ...

    async def close(self) -> None:
        return None
