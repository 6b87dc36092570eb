"""
Tests for the MongoDB adapter and the application lifespan that drives it.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from pymongo import ASCENDING
from pymongo.errors import ServerSelectionTimeoutError

from adapters import mongo_adapter
from app.config import settings
from main import app


@pytest.fixture(autouse=True)
def reset_adapter():
    yield
    mongo_adapter._client = None
    mongo_adapter._db = None


def test_get_db_before_connect_raises():
    with pytest.raises(RuntimeError):
        mongo_adapter.get_db()


def test_connect_pings_and_selects_default_database():
    with patch("adapters.mongo_adapter.MongoClient") as client_cls:
        client = client_cls.return_value
        db = mongo_adapter.connect("mongodb://h:27017/meals", "fallback", timeout_ms=100)

    client_cls.assert_called_once_with("mongodb://h:27017/meals", serverSelectionTimeoutMS=100)
    client.admin.command.assert_called_once_with("ping")
    client.get_default_database.assert_called_once_with(default="fallback")
    assert db is client.get_default_database.return_value
    assert mongo_adapter.get_db() is db


def test_connect_failure_closes_client_and_raises():
    with patch("adapters.mongo_adapter.MongoClient") as client_cls:
        client = client_cls.return_value
        client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        with pytest.raises(ServerSelectionTimeoutError):
            mongo_adapter.connect("mongodb://h:27017")

    client.close.assert_called_once()
    with pytest.raises(RuntimeError):
        mongo_adapter.get_db()


def test_close_resets_state():
    client = MagicMock()
    mongo_adapter._client = client
    mongo_adapter._db = MagicMock()

    mongo_adapter.close()

    client.close.assert_called_once()
    with pytest.raises(RuntimeError):
        mongo_adapter.get_db()


def test_ensure_indexes_creates_restaurant_name_index():
    db = MagicMock()
    mongo_adapter.ensure_indexes(db)
    db.__getitem__.assert_called_with("restaurants")
    db.__getitem__.return_value.create_index.assert_called_once_with([("name", ASCENDING)])


# =============================================================================
# LIFESPAN
# =============================================================================


def test_lifespan_connects_and_closes():
    with patch("main.mongo_adapter") as adapter:
        with TestClient(app) as c:
            assert c.get("/").status_code == 200
            adapter.connect.assert_called_once_with(
                settings.mongo_uri,
                settings.mongo_db_name,
                timeout_ms=settings.mongo_server_selection_timeout_ms,
            )
            adapter.ensure_indexes.assert_called_once_with(adapter.connect.return_value)
        adapter.close.assert_called_once()


def test_lifespan_startup_fails_when_mongo_is_unreachable():
    with patch("main.mongo_adapter") as adapter:
        adapter.connect.side_effect = ServerSelectionTimeoutError("no servers")
        with pytest.raises(ServerSelectionTimeoutError):
            with TestClient(app):
                pass
