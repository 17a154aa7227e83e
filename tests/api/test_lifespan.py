"""
Tests for opening and closing the store with the application lifespan.
"""
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from shopledger import main
from shopledger.core import config
from shopledger.repositories.memory_storage import MemoryStorage


def test_memory_store_opened_and_closed(monkeypatch):
    monkeypatch.setattr(config.settings, "STORAGE_BACKEND", "memory")
    close = AsyncMock()
    monkeypatch.setattr(MemoryStorage, "close", close)

    with TestClient(main.app) as client:
        assert isinstance(client.app.state.storage, MemoryStorage)
        assert client.app.state.mongodb is None
        assert client.get("/health").json()["storage"] == "memory"
        close.assert_not_awaited()

    close.assert_awaited_once()


def test_mongo_connection_closed_on_shutdown(monkeypatch):
    monkeypatch.setattr(config.settings, "STORAGE_BACKEND", "mongo")
    mongodb = MagicMock()
    mongodb.connect = AsyncMock(return_value=MagicMock())
    mongodb.close = AsyncMock()
    monkeypatch.setattr(main, "MongoDatabase", MagicMock(return_value=mongodb))

    with TestClient(main.app) as client:
        assert client.app.state.mongodb is mongodb
        mongodb.connect.assert_awaited_once()

    mongodb.close.assert_awaited_once()
