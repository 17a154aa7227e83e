import logging
from typing import List, Optional

from shopledger.core.errors import EntityNotFound
from shopledger.models.customer import Customer
from shopledger.models.enums import CustomerType, DEBT_INCREASING_TYPES, EntityType, TransactionType
from shopledger.models.order import OPENING_BALANCE_ITEM, Order, OrderItem
from shopledger.models.supplier import Supplier
from shopledger.models.transaction import Transaction
from shopledger.repositories.storage import Storage, WriteBatch
from shopledger.services.locks import EntityLocks
from shopledger.utils.currency import add_currency
from shopledger.utils.payment_validation import validate_payment_amount

logger = logging.getLogger(__name__)

MAX_BALANCE = 10_000_000


class AccountService:
    """Customers and suppliers, including the records behind their balances."""

    def __init__(self, storage: Storage, locks: EntityLocks):
        self.storage = storage
        self.locks = locks

    # ===== CUSTOMERS =====

    async def create_customer(
        self,
        name: str,
        contact: str = "",
        type: CustomerType = CustomerType.RANDOM,
        opening_balance: float = 0,
    ) -> Customer:
        """
        Create a customer.

        An opening balance becomes an order of its own so that pending_amount
        stays equal to the sum of order balances.
        """
        customer = Customer(name=name, contact=contact, type=type)
        batch = WriteBatch(customers=[customer])

        if opening_balance:
            amount = validate_payment_amount(opening_balance, MAX_BALANCE)
            batch.orders.append(Order(
                customer_id=customer.id,
                items=[OrderItem(type=OPENING_BALANCE_ITEM, quantity=1, rate=amount, details="Opening balance")],
                total_amount=amount,
            ))
            customer.pending_amount = amount

        await self.storage.commit(batch)
        logger.info("Customer %s created (%s), pending=%.2f", customer.id, customer.type, customer.pending_amount)
        return customer

    async def get_customer(self, customer_id: str) -> Customer:
        customer = await self.storage.get_customer(customer_id)
        if customer is None:
            raise EntityNotFound("customer", customer_id)
        return customer

    async def list_customers(self) -> List[Customer]:
        return await self.storage.list_customers()

    # ===== SUPPLIERS =====

    async def create_supplier(self, name: str, contact: str = "", opening_debt: float = 0) -> Supplier:
        """Create a supplier; opening debt is logged as an initial_debt transaction."""
        supplier = Supplier(name=name, contact=contact)
        batch = WriteBatch(suppliers=[supplier])

        if opening_debt:
            amount = validate_payment_amount(opening_debt, MAX_BALANCE)
            supplier.debt = amount
            batch.transactions.append(Transaction(
                entity_id=supplier.id,
                entity_type=EntityType.SUPPLIER,
                type=TransactionType.INITIAL_DEBT,
                amount=amount,
                description=f"Initial debt for supplier: {name}",
            ))

        await self.storage.commit(batch)
        logger.info("Supplier %s created, debt=%.2f", supplier.id, supplier.debt)
        return supplier

    async def get_supplier(self, supplier_id: str) -> Supplier:
        supplier = await self.storage.get_supplier(supplier_id)
        if supplier is None:
            raise EntityNotFound("supplier", supplier_id)
        return supplier

    async def list_suppliers(self) -> List[Supplier]:
        return await self.storage.list_suppliers()

    async def record_supplier_debt(
        self,
        supplier_id: str,
        amount,
        type: TransactionType = TransactionType.PURCHASE,
        description: Optional[str] = None,
    ) -> tuple[Supplier, Transaction]:
        """Add a purchase, expense or initial debt to a supplier's balance."""
        if type not in DEBT_INCREASING_TYPES:
            raise ValueError(f"{type} does not increase supplier debt")
        value = validate_payment_amount(amount, MAX_BALANCE)

        async with self.locks.supplier(supplier_id):
            supplier = await self.get_supplier(supplier_id)
            transaction = Transaction(
                entity_id=supplier_id,
                entity_type=EntityType.SUPPLIER,
                type=type,
                amount=value,
                description=description or f"{TransactionType(type).value.replace('_', ' ').capitalize()} from supplier: {supplier.name}",
            )
            updated = supplier.touched(debt=add_currency(supplier.debt, value))
            await self.storage.commit(WriteBatch(suppliers=[updated], transactions=[transaction]))

        logger.info("Supplier %s %s recorded: %.2f, debt=%.2f", supplier_id, transaction.type, value, updated.debt)
        return updated, transaction

    # ===== TRANSACTIONS =====

    async def list_transactions(self, entity_id: Optional[str] = None, limit: int = 100) -> List[Transaction]:
        if entity_id:
            transactions = await self.storage.get_transactions_by_entity(entity_id)
            return list(reversed(transactions))[:limit]
        return await self.storage.list_transactions(limit)
