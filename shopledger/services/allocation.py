"""
Payment allocation rules.

Pure functions: they take entity state loaded by the caller and return the
mutated orders, new aggregates and the transaction record to persist. Nothing
here touches storage.

Customer algorithm:
1. Re-validate the amount
2. Pick orders with an unpaid balance, oldest first (an optional target
   order jumps the queue)
3. Pay min(remaining, balance) into each order until the payment runs out
4. Recompute pending_amount from every order of the customer, never by
   decrementing the cached value
5. Emit one customer_payment transaction for the applied amount
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from shopledger.core.errors import EntityNotFound, NoOutstandingBalance, OverpaymentRejected
from shopledger.models.enums import DEBT_INCREASING_TYPES, EntityType, TransactionType
from shopledger.models.ledger import Allocation
from shopledger.models.order import Order
from shopledger.models.transaction import Transaction
from shopledger.utils.currency import add_currency, round_currency, subtract_currency
from shopledger.utils.payment_validation import DEFAULT_MAX_PAYMENT, validate_payment_amount


@dataclass
class CustomerAllocation:
    applied_amount: float
    remaining_credit: float
    pending_amount: float
    transaction: Transaction
    updated_orders: List[Order] = field(default_factory=list)
    allocations: List[Allocation] = field(default_factory=list)


@dataclass
class SupplierAllocation:
    applied_amount: float
    remaining_credit: float
    debt: float
    transaction: Transaction


def recompute_pending(orders: Iterable[Order]) -> float:
    """sum(total_amount - paid_amount) over the given orders."""
    pending = 0.0
    for order in orders:
        pending = add_currency(pending, order.balance())
    return pending


def total_outstanding(orders: Iterable[Order]) -> float:
    """Sum of the positive order balances, i.e. what a payment can cover."""
    outstanding = 0.0
    for order in orders:
        if order.is_outstanding():
            outstanding = add_currency(outstanding, order.balance())
    return outstanding


def merge_orders(orders: Iterable[Order], updated: Iterable[Order]) -> List[Order]:
    """Replace orders by their updated copies, keeping their position."""
    replacements = {order.id: order for order in updated}
    return [replacements.get(order.id, order) for order in orders]


def apply_fifo(
    amount: float,
    orders: Iterable[Order],
    target_order_id: Optional[str] = None,
) -> Tuple[List[Order], List[Allocation], float]:
    """
    Spread amount over outstanding orders, oldest first.

    Returns (updated orders, allocations, unallocated remainder).
    """
    queue = sorted(
        (order for order in orders if order.is_outstanding()),
        key=lambda order: (order.created_at, order.id),
    )
    if target_order_id:
        # stable sort: the target moves to the front, the rest stay FIFO
        queue.sort(key=lambda order: order.id != target_order_id)

    remaining = round_currency(amount)
    updated: List[Order] = []
    allocations: List[Allocation] = []

    for order in queue:
        if remaining <= 0:
            break

        applied = min(remaining, order.balance())
        updated.append(order.touched(paid_amount=add_currency(order.paid_amount, applied)))
        allocations.append(Allocation(order_id=order.id, amount=applied))
        remaining = subtract_currency(remaining, applied)

    return updated, allocations, remaining


def allocate_customer_payment(
    customer_id: str,
    amount,
    orders: List[Order],
    *,
    allow_credit: bool = False,
    target_order_id: Optional[str] = None,
    description: Optional[str] = None,
    max_amount: float = DEFAULT_MAX_PAYMENT,
) -> CustomerAllocation:
    """
    Apply a payment to a customer's orders.

    Raises:
        InvalidAmount: amount fails validation
        EntityNotFound: target_order_id is not one of the customer's orders
        NoOutstandingBalance: nothing is owed and credit is not allowed
        OverpaymentRejected: amount exceeds what is owed and credit is not allowed
    """
    value = validate_payment_amount(amount, max_amount)

    if target_order_id and target_order_id not in {order.id for order in orders}:
        raise EntityNotFound("order", target_order_id)

    outstanding = total_outstanding(orders)
    if not allow_credit:
        if outstanding <= 0:
            raise NoOutstandingBalance(EntityType.CUSTOMER.value, customer_id)
        if value > outstanding:
            raise OverpaymentRejected(value, outstanding)

    updated, allocations, remaining = apply_fifo(value, orders, target_order_id)
    applied = subtract_currency(value, remaining)
    pending = recompute_pending(merge_orders(orders, updated))

    transaction = Transaction(
        entity_id=customer_id,
        entity_type=EntityType.CUSTOMER,
        type=TransactionType.CUSTOMER_PAYMENT,
        amount=applied,
        credit_amount=remaining,
        description=description or "Payment from customer",
        order_ids=[allocation.order_id for allocation in allocations],
    )

    return CustomerAllocation(
        applied_amount=applied,
        remaining_credit=remaining,
        pending_amount=pending,
        transaction=transaction,
        updated_orders=updated,
        allocations=allocations,
    )


def allocate_supplier_payment(
    supplier_id: str,
    amount,
    debt,
    *,
    allow_credit: bool = False,
    description: Optional[str] = None,
    max_amount: float = DEFAULT_MAX_PAYMENT,
) -> SupplierAllocation:
    """Reduce a supplier's debt by min(amount, debt)."""
    value = validate_payment_amount(amount, max_amount)
    current = round_currency(debt)

    if not allow_credit:
        if current <= 0:
            raise NoOutstandingBalance(EntityType.SUPPLIER.value, supplier_id)
        if value > current:
            raise OverpaymentRejected(value, current)

    applied = min(value, max(current, 0.0))
    remaining = subtract_currency(value, applied)

    transaction = Transaction(
        entity_id=supplier_id,
        entity_type=EntityType.SUPPLIER,
        type=TransactionType.SUPPLIER_PAYMENT,
        amount=applied,
        credit_amount=remaining,
        description=description or "Payment to supplier",
    )

    return SupplierAllocation(
        applied_amount=applied,
        remaining_credit=remaining,
        debt=subtract_currency(current, applied),
        transaction=transaction,
    )


def replay_supplier_debt(transactions: Iterable[Transaction]) -> float:
    """Debt implied by the transaction log: increases minus payments."""
    debt = 0.0
    for transaction in transactions:
        if transaction.type in DEBT_INCREASING_TYPES:
            debt = add_currency(debt, transaction.amount)
        elif transaction.type == TransactionType.SUPPLIER_PAYMENT:
            debt = subtract_currency(debt, transaction.amount)
    return debt
