"""
Running-account ledger for hotel customers.

Hotels are billed continuously, so besides orders and payments their balance
can be corrected by hand with debt adjustments. A debit adjustment is stored
together with an adjustment order (the charge); a credit adjustment is spread
over open orders oldest first, like a payment. Either way the customer's
pending amount stays equal to the sum of order balances, and replaying the
ledger from the first entry reproduces it.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from shopledger.core.errors import EntityNotFound, NotRunningAccount, OverpaymentRejected
from shopledger.models.customer import Customer
from shopledger.models.enums import AdjustmentType, LedgerEntryType, TransactionType
from shopledger.models.ledger import DebtAdjustment, HotelLedgerEntry
from shopledger.models.order import ADJUSTMENT_ITEM, Order, OrderItem
from shopledger.repositories.storage import Storage, WriteBatch
from shopledger.services.allocation import apply_fifo, merge_orders, recompute_pending, total_outstanding
from shopledger.services.locks import EntityLocks
from shopledger.utils.currency import add_currency, round_currency, subtract_currency
from shopledger.utils.payment_validation import DEFAULT_MAX_PAYMENT, validate_payment_amount

logger = logging.getLogger(__name__)

# Debits sort before credits recorded at the same instant
_ENTRY_RANK = {
    LedgerEntryType.ORDER: 0,
    LedgerEntryType.DEBIT_ADJUSTMENT: 0,
    LedgerEntryType.PAYMENT: 1,
    LedgerEntryType.CREDIT_ADJUSTMENT: 1,
}


@dataclass
class AdjustmentResult:
    adjustment: DebtAdjustment
    customer: Customer
    updated_orders: List[Order] = field(default_factory=list)


@dataclass
class HotelLedger:
    customer: Customer
    entries: List[HotelLedgerEntry] = field(default_factory=list)
    closing_balance: float = 0.0

    @property
    def is_balanced(self) -> bool:
        return self.closing_balance == round_currency(self.customer.pending_amount)


def _describe_order(order: Order) -> str:
    parts = [f"{item.quantity:g}kg {item.type}" for item in order.items]
    return "Order: " + (", ".join(parts) if parts else "no items")


class LedgerService:
    def __init__(
        self,
        storage: Storage,
        locks: EntityLocks,
        max_amount: float = DEFAULT_MAX_PAYMENT,
        currency_symbol: str = "₹",
    ):
        self.storage = storage
        self.locks = locks
        self.max_amount = max_amount
        self.currency_symbol = currency_symbol

    async def _get_hotel(self, customer_id: str) -> Customer:
        customer = await self.storage.get_customer(customer_id)
        if customer is None:
            raise EntityNotFound("customer", customer_id)
        if not customer.is_hotel:
            raise NotRunningAccount(f"Customer {customer_id} is not a hotel account")
        return customer

    async def add_adjustment(
        self,
        customer_id: str,
        type: AdjustmentType,
        amount,
        reason: str,
        adjusted_by: str = "System",
    ) -> AdjustmentResult:
        value = validate_payment_amount(amount, self.max_amount, self.currency_symbol)
        reason = (reason or "").strip()
        if not reason:
            raise ValueError("A reason is required for a debt adjustment")

        async with self.locks.customer(customer_id):
            customer = await self._get_hotel(customer_id)
            orders = await self.storage.get_orders_by_customer(customer_id)

            if type == AdjustmentType.DEBIT:
                adjustment = DebtAdjustment(
                    customer_id=customer_id,
                    type=AdjustmentType.DEBIT,
                    amount=value,
                    reason=reason,
                    adjusted_by=adjusted_by or "System",
                )
                charge = Order(
                    customer_id=customer_id,
                    items=[OrderItem(type=ADJUSTMENT_ITEM, quantity=1, rate=value, details=reason)],
                    total_amount=value,
                    adjustment_id=adjustment.id,
                    created_at=adjustment.created_at,
                    updated_at=adjustment.created_at,
                )
                adjustment = adjustment.model_copy(update={"order_id": charge.id})
                updated = [charge]
                live = [*orders, charge]
            else:
                outstanding = total_outstanding(orders)
                if value > outstanding:
                    raise OverpaymentRejected(value, outstanding)
                updated, allocations, _ = apply_fifo(value, orders)
                adjustment = DebtAdjustment(
                    customer_id=customer_id,
                    type=AdjustmentType.CREDIT,
                    amount=value,
                    reason=reason,
                    adjusted_by=adjusted_by or "System",
                    allocations=allocations,
                )
                live = merge_orders(orders, updated)

            updated_customer = customer.touched(pending_amount=recompute_pending(live))
            await self.storage.commit(WriteBatch(
                customers=[updated_customer],
                orders=updated,
                adjustments=[adjustment],
            ))

        logger.info(
            "Debt adjustment %s for hotel %s: %s %.2f by %s (%s)",
            adjustment.id, customer_id, adjustment.type, value, adjustment.adjusted_by, reason,
        )
        return AdjustmentResult(adjustment=adjustment, customer=updated_customer, updated_orders=updated)

    async def hotel_ledger(self, customer_id: str) -> HotelLedger:
        """Rebuild the hotel's ledger with running balances, oldest entry first."""
        customer = await self._get_hotel(customer_id)
        orders = await self.storage.get_orders_by_customer(customer_id)
        transactions = await self.storage.get_transactions_by_entity(customer_id)
        adjustments = await self.storage.get_adjustments_by_customer(customer_id)

        rows: List[tuple[datetime, LedgerEntryType, str, str, float, float]] = []
        for order in orders:
            # Charges from debit adjustments are listed as the adjustment itself
            if order.adjustment_id:
                continue
            rows.append((order.created_at, LedgerEntryType.ORDER, order.id,
                         _describe_order(order), order.total_amount, 0.0))
        for transaction in transactions:
            if transaction.type != TransactionType.CUSTOMER_PAYMENT:
                continue
            rows.append((transaction.created_at, LedgerEntryType.PAYMENT, transaction.id,
                         transaction.description, 0.0, transaction.amount))
        for adjustment in adjustments:
            if adjustment.type == AdjustmentType.DEBIT:
                rows.append((adjustment.created_at, LedgerEntryType.DEBIT_ADJUSTMENT, adjustment.id,
                             f"Charge: {adjustment.reason}", adjustment.amount, 0.0))
            else:
                rows.append((adjustment.created_at, LedgerEntryType.CREDIT_ADJUSTMENT, adjustment.id,
                             f"Credit: {adjustment.reason}", 0.0, adjustment.amount))

        rows.sort(key=lambda row: (row[0], _ENTRY_RANK[row[1]], row[2]))

        balance = 0.0
        entries: List[HotelLedgerEntry] = []
        for created_at, entry_type, reference_id, description, debit, credit in rows:
            balance = subtract_currency(add_currency(balance, debit), credit)
            entries.append(HotelLedgerEntry(
                entry_type=entry_type,
                reference_id=reference_id,
                description=description,
                debit=round_currency(debit),
                credit=round_currency(credit),
                running_balance=balance,
                created_at=created_at,
            ))

        ledger = HotelLedger(customer=customer, entries=entries, closing_balance=balance)
        if not ledger.is_balanced:
            logger.warning(
                "Hotel %s ledger closes at %.2f but pending amount is %.2f",
                customer_id, balance, customer.pending_amount,
            )
        return ledger
