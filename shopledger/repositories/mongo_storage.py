"""
MongoStorage - motor implementation of Storage.

Collections: customers, suppliers, orders, transactions, debt_adjustments.
Documents use string ids in _id. commit() runs every write of a batch inside
one client session transaction, so a payment never lands without its
transaction record and updated aggregate.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from shopledger.core.errors import StoreUnavailable
from shopledger.models.customer import Customer
from shopledger.models.ledger import DebtAdjustment
from shopledger.models.order import Order
from shopledger.models.supplier import Supplier
from shopledger.models.transaction import Transaction
from shopledger.repositories.storage import Storage, WriteBatch

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str):
    """Surface driver failures as StoreUnavailable."""
    try:
        yield
    except PyMongoError as exc:
        logger.error("MongoDB %s failed: %s", operation, exc)
        raise StoreUnavailable(f"Store unavailable during {operation}") from exc


class MongoStorage(Storage):
    """Storage backed by a motor database."""

    def __init__(self, db: AsyncIOMotorDatabase, use_transactions: bool = True):
        self.db = db
        self.use_transactions = use_transactions
        self.customers = db["customers"]
        self.suppliers = db["suppliers"]
        self.orders = db["orders"]
        self.transactions = db["transactions"]
        self.adjustments = db["debt_adjustments"]

    # ===== READS =====

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        with _store_errors("get_customer"):
            doc = await self.customers.find_one({"_id": customer_id})
        return Customer(**doc) if doc else None

    async def list_customers(self) -> List[Customer]:
        with _store_errors("list_customers"):
            docs = await self.customers.find({}).sort("created_at", ASCENDING).to_list(None)
        return [Customer(**doc) for doc in docs]

    async def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        with _store_errors("get_supplier"):
            doc = await self.suppliers.find_one({"_id": supplier_id})
        return Supplier(**doc) if doc else None

    async def list_suppliers(self) -> List[Supplier]:
        with _store_errors("list_suppliers"):
            docs = await self.suppliers.find({}).sort("created_at", ASCENDING).to_list(None)
        return [Supplier(**doc) for doc in docs]

    async def get_order(self, order_id: str) -> Optional[Order]:
        with _store_errors("get_order"):
            doc = await self.orders.find_one({"_id": order_id})
        return Order(**doc) if doc else None

    async def get_orders_by_customer(self, customer_id: str) -> List[Order]:
        with _store_errors("get_orders_by_customer"):
            docs = await self.orders.find({"customer_id": customer_id}).sort(
                [("created_at", ASCENDING), ("_id", ASCENDING)]
            ).to_list(None)
        return [Order(**doc) for doc in docs]

    async def get_transactions_by_entity(self, entity_id: str) -> List[Transaction]:
        with _store_errors("get_transactions_by_entity"):
            docs = await self.transactions.find({"entity_id": entity_id}).sort(
                [("created_at", ASCENDING), ("_id", ASCENDING)]
            ).to_list(None)
        return [Transaction(**doc) for doc in docs]

    async def list_transactions(self, limit: int = 100) -> List[Transaction]:
        with _store_errors("list_transactions"):
            docs = await self.transactions.find({}).sort(
                "created_at", DESCENDING
            ).limit(limit).to_list(None)
        return [Transaction(**doc) for doc in docs]

    async def get_adjustments_by_customer(self, customer_id: str) -> List[DebtAdjustment]:
        with _store_errors("get_adjustments_by_customer"):
            docs = await self.adjustments.find({"customer_id": customer_id}).sort(
                [("created_at", ASCENDING), ("_id", ASCENDING)]
            ).to_list(None)
        return [DebtAdjustment(**doc) for doc in docs]

    # ===== WRITES =====

    async def commit(self, batch: WriteBatch) -> None:
        if batch.is_empty():
            return

        with _store_errors("commit"):
            if not self.use_transactions:
                await self._apply(batch, session=None)
                return

            async with await self.db.client.start_session() as session:
                async with session.start_transaction():
                    await self._apply(batch, session=session)

    async def _apply(self, batch: WriteBatch, session) -> None:
        for customer in batch.customers:
            await self.customers.replace_one(
                {"_id": customer.id}, customer.to_document(), upsert=True, session=session
            )
        for supplier in batch.suppliers:
            await self.suppliers.replace_one(
                {"_id": supplier.id}, supplier.to_document(), upsert=True, session=session
            )
        for order in batch.orders:
            await self.orders.replace_one(
                {"_id": order.id}, order.to_document(), upsert=True, session=session
            )
        if batch.transactions:
            await self.transactions.insert_many(
                [t.to_document() for t in batch.transactions], session=session
            )
        if batch.adjustments:
            await self.adjustments.insert_many(
                [a.to_document() for a in batch.adjustments], session=session
            )
