import logging
from dataclasses import dataclass, field
from typing import List, Optional

from shopledger.core.errors import EntityNotFound
from shopledger.models.customer import Customer
from shopledger.models.order import Order
from shopledger.models.supplier import Supplier
from shopledger.models.transaction import Transaction
from shopledger.repositories.storage import Storage, WriteBatch
from shopledger.services.allocation import allocate_customer_payment, allocate_supplier_payment
from shopledger.services.locks import EntityLocks
from shopledger.utils.currency import add_currency
from shopledger.utils.payment_validation import DEFAULT_MAX_PAYMENT, validate_payment_amount

logger = logging.getLogger(__name__)


@dataclass
class CustomerPaymentResult:
    customer: Customer
    transaction: Transaction
    applied_amount: float
    remaining_credit: float
    updated_orders: List[Order] = field(default_factory=list)


@dataclass
class SupplierPaymentResult:
    supplier: Supplier
    transaction: Transaction
    applied_amount: float
    remaining_credit: float


class PaymentService:
    """
    Applies customer and supplier payments.

    Each payment is one locked read-modify-write against a single entity:
    load, allocate, commit orders + aggregate + transaction in one batch.
    """

    def __init__(
        self,
        storage: Storage,
        locks: EntityLocks,
        max_payment_amount: float = DEFAULT_MAX_PAYMENT,
        allow_credit: bool = False,
        currency_symbol: str = "₹",
    ):
        self.storage = storage
        self.locks = locks
        self.max_payment_amount = max_payment_amount
        self.allow_credit = allow_credit
        self.currency_symbol = currency_symbol

    async def pay_customer(
        self,
        customer_id: str,
        amount,
        description: Optional[str] = None,
        target_order_id: Optional[str] = None,
    ) -> CustomerPaymentResult:
        # Fail fast before taking the lock
        value = validate_payment_amount(amount, self.max_payment_amount, self.currency_symbol)

        async with self.locks.customer(customer_id):
            customer = await self.storage.get_customer(customer_id)
            if customer is None:
                raise EntityNotFound("customer", customer_id)

            orders = await self.storage.get_orders_by_customer(customer_id)
            allocation = allocate_customer_payment(
                customer_id,
                value,
                orders,
                allow_credit=self.allow_credit,
                target_order_id=target_order_id,
                description=description or f"Payment from customer: {customer.name}",
                max_amount=self.max_payment_amount,
            )

            updated_customer = customer.touched(
                pending_amount=allocation.pending_amount,
                credit_balance=add_currency(customer.credit_balance, allocation.remaining_credit),
            )
            await self.storage.commit(WriteBatch(
                customers=[updated_customer],
                orders=allocation.updated_orders,
                transactions=[allocation.transaction],
            ))

        logger.info(
            "Customer payment processed: %s applied=%.2f credit=%.2f orders=%d pending=%.2f",
            customer_id,
            allocation.applied_amount,
            allocation.remaining_credit,
            len(allocation.updated_orders),
            allocation.pending_amount,
        )
        return CustomerPaymentResult(
            customer=updated_customer,
            transaction=allocation.transaction,
            applied_amount=allocation.applied_amount,
            remaining_credit=allocation.remaining_credit,
            updated_orders=allocation.updated_orders,
        )

    async def pay_supplier(
        self,
        supplier_id: str,
        amount,
        description: Optional[str] = None,
    ) -> SupplierPaymentResult:
        value = validate_payment_amount(amount, self.max_payment_amount, self.currency_symbol)

        async with self.locks.supplier(supplier_id):
            supplier = await self.storage.get_supplier(supplier_id)
            if supplier is None:
                raise EntityNotFound("supplier", supplier_id)

            allocation = allocate_supplier_payment(
                supplier_id,
                value,
                supplier.debt,
                allow_credit=self.allow_credit,
                description=description or f"Payment to supplier: {supplier.name}",
                max_amount=self.max_payment_amount,
            )

            updated_supplier = supplier.touched(
                debt=allocation.debt,
                credit_balance=add_currency(supplier.credit_balance, allocation.remaining_credit),
            )
            await self.storage.commit(WriteBatch(
                suppliers=[updated_supplier],
                transactions=[allocation.transaction],
            ))

        logger.info(
            "Supplier payment processed: %s applied=%.2f credit=%.2f debt=%.2f",
            supplier_id,
            allocation.applied_amount,
            allocation.remaining_credit,
            allocation.debt,
        )
        return SupplierPaymentResult(
            supplier=updated_supplier,
            transaction=allocation.transaction,
            applied_amount=allocation.applied_amount,
            remaining_credit=allocation.remaining_credit,
        )
