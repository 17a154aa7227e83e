from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from shopledger.core import config
from shopledger.main import app
from shopledger.repositories.memory_storage import MemoryStorage
from shopledger.services.account_service import AccountService
from shopledger.services.integrity_service import IntegrityService
from shopledger.services.ledger_service import LedgerService
from shopledger.services.locks import EntityLocks
from shopledger.services.order_service import OrderService
from shopledger.services.payment_service import PaymentService


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def locks():
    return EntityLocks()


@pytest.fixture
def payment_service(storage, locks):
    return PaymentService(storage, locks)


@pytest.fixture
def credit_payment_service(storage, locks):
    return PaymentService(storage, locks, allow_credit=True)


@pytest.fixture
def account_service(storage, locks):
    return AccountService(storage, locks)


@pytest.fixture
def order_service(storage, locks):
    return OrderService(storage, locks)


@pytest.fixture
def integrity_service(storage, locks):
    return IntegrityService(storage, locks)


@pytest.fixture
def ledger_service(storage, locks):
    return LedgerService(storage, locks)


@pytest.fixture
def mock_db():
    """Motor database double with async collection methods."""
    db = MagicMock()
    for name in ("customers", "suppliers", "orders", "transactions", "debt_adjustments"):
        collection = MagicMock()
        collection.find_one = AsyncMock()
        collection.replace_one = AsyncMock()
        collection.insert_many = AsyncMock()
        setattr(db, name, collection)

    collections = {
        "customers": db.customers,
        "suppliers": db.suppliers,
        "orders": db.orders,
        "transactions": db.transactions,
        "debt_adjustments": db.debt_adjustments,
    }
    db.__getitem__.side_effect = collections.__getitem__
    return db


@pytest.fixture
def test_client(monkeypatch):
    """FastAPI test client running against a fresh in-memory store."""
    monkeypatch.setattr(config.settings, "STORAGE_BACKEND", "memory")
    monkeypatch.setattr(config.settings, "OVERPAYMENT_POLICY", "reject")

    # Context manager runs the lifespan startup and shutdown
    with TestClient(app) as client:
        yield client
