"""Tests for opening, closing and querying MongoDB handles."""

from unittest.mock import MagicMock

import pytest
from pymongo import ReadPreference
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from docmapper.resources.mongo import client as mongo_client
from docmapper.resources.mongo.session import parse_version, ping_database, server_version
from tests.doubles import make_db


@pytest.fixture
def fake_client_cls(monkeypatch):
    cls = MagicMock(name="MongoClient")
    monkeypatch.setattr(mongo_client, "MongoClient", cls)
    yield cls
    mongo_client._clients.clear()


def test_open_master(fake_client_cls):
    db = mongo_client.open_database("test", "db1", 27018)
    fake_client_cls.assert_called_once_with("db1", 27018, connectTimeoutMS=5000, serverSelectionTimeoutMS=5000)
    fake_client_cls.return_value.__getitem__.assert_called_once_with("test")
    assert db is fake_client_cls.return_value.__getitem__.return_value


def test_open_read_only(fake_client_cls):
    mongo_client.open_database("test", "r1", 27019, read_only=True)
    _, kwargs = fake_client_cls.call_args
    assert kwargs["read_preference"] == ReadPreference.SECONDARY_PREFERRED


def test_timeouts_from_environment(fake_client_cls, monkeypatch):
    monkeypatch.setenv("DOCMAPPER_MONGO_CONNECT_TIMEOUT_MS", "250")
    monkeypatch.setenv("DOCMAPPER_MONGO_SERVER_SELECTION_TIMEOUT_MS", "750")
    mongo_client.open_database("test")
    fake_client_cls.assert_called_once_with(
        "localhost", 27017, connectTimeoutMS=250, serverSelectionTimeoutMS=750
    )


def test_close_clients(fake_client_cls):
    first, second = MagicMock(), MagicMock()
    fake_client_cls.side_effect = [first, second]
    mongo_client.open_database("test")
    mongo_client.open_database("test", read_only=True)
    mongo_client.close_clients()
    first.close.assert_called_once()
    second.close.assert_called_once()
    assert mongo_client._clients == []


def test_close_clients_continues_after_failure(fake_client_cls):
    first, second = MagicMock(), MagicMock()
    first.close.side_effect = RuntimeError("boom")
    fake_client_cls.side_effect = [first, second]
    mongo_client.open_database("test")
    mongo_client.open_database("test")
    mongo_client.close_clients()
    second.close.assert_called_once()
    assert mongo_client._clients == []


def test_ping_ok():
    assert ping_database(make_db()) == {"ok": True}


def test_ping_timeout():
    db = make_db()
    db.client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
    assert ping_database(db) == {"ok": False, "error": "connection_timeout"}


def test_ping_failure():
    db = make_db()
    db.client.admin.command.side_effect = OperationFailure("unauthorized")
    assert ping_database(db) == {"ok": False, "error": "connection_failed"}


def test_server_version():
    assert server_version(make_db(version="6.0.14")) == (6, 0, 14)


@pytest.mark.parametrize(
    "raw, expected",
    [("4.4.1", (4, 4, 1)), ("7.0.0-rc1", (7, 0, 0)), ("1.6", (1, 6)), ("", ())],
)
def test_parse_version(raw, expected):
    assert parse_version(raw) == expected
