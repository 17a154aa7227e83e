"""
Integrity checks for the cached balances.

customer.pending_amount and supplier.debt are caches. The source of truth is
the set of orders (customers) and the transaction log (suppliers). A partial
failure outside a transaction, or a manual edit, can make them drift; the
checks here recompute them, report the difference and optionally write the
recomputed value back. Running a repair on consistent data writes nothing.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from shopledger.core.errors import EntityNotFound, IntegrityMismatch
from shopledger.models.enums import EntityType, TransactionType
from shopledger.models.order import Order
from shopledger.repositories.storage import Storage, WriteBatch
from shopledger.services.allocation import merge_orders, recompute_pending, replay_supplier_debt
from shopledger.services.locks import EntityLocks
from shopledger.utils.currency import (
    calculate_order_total,
    determine_payment_status,
    round_currency,
    subtract_currency,
)

logger = logging.getLogger(__name__)


@dataclass
class IntegrityReport:
    entity_id: str
    entity_type: str
    stored_amount: float
    calculated_amount: float
    issues: List[str] = field(default_factory=list)
    repairs: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues


@dataclass
class OrderRepair:
    order: Order
    repairs: List[str] = field(default_factory=list)

    @property
    def was_corrupted(self) -> bool:
        return bool(self.repairs)


def inspect_order(order: Order) -> OrderRepair:
    """
    Check one order's amounts and return a repaired copy.

    Rules:
    - total <= 0 with items: recompute the total from the items
    - total and paid rounded to the cent
    - negative paid becomes 0
    - paid above total is capped at total
    """
    repairs: List[str] = []
    total = order.total_amount
    paid = order.paid_amount

    if total <= 0 and order.items:
        calculated = calculate_order_total(order.items)
        if calculated > 0:
            repairs.append(f"Fixed totalAmount: {total} -> {calculated}")
            total = calculated

    rounded_total = round_currency(total)
    if rounded_total != total:
        repairs.append(f"Fixed totalAmount precision: {total} -> {rounded_total}")
        total = rounded_total

    if paid < 0:
        repairs.append(f"Fixed negative paidAmount: {paid} -> 0")
        paid = 0.0

    rounded_paid = round_currency(paid)
    if rounded_paid != paid:
        repairs.append(f"Fixed paidAmount precision: {paid} -> {rounded_paid}")
        paid = rounded_paid

    cap = max(total, 0.0)
    if paid > cap:
        repairs.append(f"Capped paidAmount at totalAmount: {paid} -> {cap}")
        paid = cap

    if not repairs:
        return OrderRepair(order=order)

    status = determine_payment_status(total, paid)
    if status != order.payment_status:
        repairs.append(f"paymentStatus: {order.payment_status.value} -> {status.value}")

    return OrderRepair(order=order.touched(total_amount=total, paid_amount=paid), repairs=repairs)


class IntegrityService:
    def __init__(self, storage: Storage, locks: EntityLocks, repair_limit: float = 1000):
        self.storage = storage
        self.locks = locks
        # Larger differences are reported but only repaired when forced
        self.repair_limit = repair_limit

    async def check_customer(self, customer_id: str, repair: bool = True, force: bool = False) -> IntegrityReport:
        """Recompute pending_amount from the customer's orders and compare."""
        async with self.locks.customer(customer_id):
            customer = await self.storage.get_customer(customer_id)
            if customer is None:
                raise EntityNotFound("customer", customer_id)

            orders = await self.storage.get_orders_by_customer(customer_id)
            issues: List[str] = []
            repairs: List[str] = []
            batch = WriteBatch()

            for order in orders:
                result = inspect_order(order)
                if not result.was_corrupted:
                    continue
                issues.append(f"Order {order.id}: " + "; ".join(result.repairs))
                if repair:
                    batch.orders.append(result.order)
                    repairs.extend(f"Order {order.id}: {note}" for note in result.repairs)

            calculated = recompute_pending(merge_orders(orders, batch.orders))
            stored = round_currency(customer.pending_amount)

            if stored != calculated:
                issues.append(f"Pending amount mismatch: stored={stored:.2f}, calculated={calculated:.2f}")
                difference = abs(subtract_currency(calculated, stored))
                if repair and (force or difference <= self.repair_limit):
                    batch.customers.append(customer.touched(pending_amount=calculated))
                    repairs.append(f"Fixed pending amount: {stored:.2f} -> {calculated:.2f}")
                elif repair:
                    logger.warning(
                        "Customer %s pending difference %.2f exceeds auto-repair limit %.2f",
                        customer_id, difference, self.repair_limit,
                    )

            if not batch.is_empty():
                await self.storage.commit(batch)

        report = IntegrityReport(
            entity_id=customer_id,
            entity_type=EntityType.CUSTOMER.value,
            stored_amount=stored,
            calculated_amount=calculated,
            issues=issues,
            repairs=repairs,
        )
        if issues:
            logger.warning("Integrity issues for customer %s: %s", customer_id, issues)
        if repairs:
            logger.info("Repaired customer %s: %s", customer_id, repairs)
        return report

    async def assert_customer_consistent(self, customer_id: str) -> IntegrityReport:
        report = await self.check_customer(customer_id, repair=False)
        if not report.is_valid:
            raise IntegrityMismatch(report)
        return report

    async def repair_order(self, order_id: str) -> OrderRepair:
        """Repair a single order and re-sync its customer's pending amount."""
        order = await self.storage.get_order(order_id)
        if order is None:
            raise EntityNotFound("order", order_id)

        async with self.locks.customer(order.customer_id):
            # Re-read under the lock
            order = await self.storage.get_order(order_id)
            result = inspect_order(order)
            if not result.was_corrupted:
                return result

            batch = WriteBatch(orders=[result.order])
            customer = await self.storage.get_customer(order.customer_id)
            if customer is not None:
                orders = await self.storage.get_orders_by_customer(order.customer_id)
                pending = recompute_pending(merge_orders(orders, [result.order]))
                batch.customers.append(customer.touched(pending_amount=pending))
            await self.storage.commit(batch)

        logger.info("Repaired order %s: %s", order_id, result.repairs)
        return result

    async def check_supplier(self, supplier_id: str, repair: bool = True, force: bool = False) -> IntegrityReport:
        """
        Replay the supplier's transaction log and compare with the stored debt.

        A log without an initial_debt record may start after the supplier already
        owed money. Any stored debt above the replayed amount is then taken as that
        opening debt; stored debt below it is reported and only repaired when forced.
        """
        async with self.locks.supplier(supplier_id):
            supplier = await self.storage.get_supplier(supplier_id)
            if supplier is None:
                raise EntityNotFound("supplier", supplier_id)

            transactions = await self.storage.get_transactions_by_entity(supplier_id)
            stored = round_currency(supplier.debt)
            report = IntegrityReport(
                entity_id=supplier_id,
                entity_type=EntityType.SUPPLIER.value,
                stored_amount=stored,
                calculated_amount=stored,
            )

            # Suppliers imported without history have nothing to replay
            if not transactions:
                return report

            calculated = replay_supplier_debt(transactions)
            has_opening_debt = any(t.type == TransactionType.INITIAL_DEBT for t in transactions)

            if not has_opening_debt:
                # Debt carried over from before the log started
                carried = subtract_currency(stored, calculated)
                if carried >= 0:
                    if carried > 0:
                        logger.info(
                            "Supplier %s has %.2f opening debt not covered by transactions",
                            supplier_id, carried,
                        )
                    return report

            report.calculated_amount = calculated
            if stored == calculated:
                return report

            report.issues.append(f"Debt mismatch: stored={stored:.2f}, calculated={calculated:.2f}")
            difference = abs(subtract_currency(calculated, stored))
            # Without an initial_debt record the log is incomplete, so only a forced repair writes
            within_limit = has_opening_debt and difference <= self.repair_limit
            if repair and (force or within_limit):
                await self.storage.commit(WriteBatch(suppliers=[supplier.touched(debt=calculated)]))
                report.repairs.append(f"Fixed debt: {stored:.2f} -> {calculated:.2f}")

        logger.warning("Integrity issues for supplier %s: %s", supplier_id, report.issues)
        return report
