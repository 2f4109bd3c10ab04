import logging

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

import app.database.mongo as mongo
import app.main as main
from app.database.store import MongoProductStore


class FakeDatabase:
    def __init__(self, name, ping_error=None):
        self.name = name
        self.ping_error = ping_error
        self.commands = []

    async def command(self, cmd):
        self.commands.append(cmd)
        if self.ping_error is not None:
            raise self.ping_error
        return {"ok": 1}

    def __getitem__(self, collection):
        return collection


class FakeClient:
    def __init__(self, ping_error=None):
        self.ping_error = ping_error
        self.closed = False
        self.databases = {}

    def __getitem__(self, name):
        return self.databases.setdefault(name, FakeDatabase(name, self.ping_error))

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client(monkeypatch):
    def install(ping_error=None):
        client = FakeClient(ping_error)
        monkeypatch.setattr(main, "create_client", lambda: client)
        return client
    return install


def test_lifespan_connects_and_closes(fake_client):
    client = fake_client()
    application = main.create_app()

    with TestClient(application):
        assert isinstance(application.state.product_store, MongoProductStore)
        assert application.state.product_store.collection == "products"
        assert client.databases[main.settings.MONGO_DB].commands == ["ping"]

    assert client.closed


def test_lifespan_logs_connection_failure_and_keeps_serving(fake_client, caplog):
    client = fake_client(ServerSelectionTimeoutError("no server"))
    application = main.create_app()

    with caplog.at_level(logging.ERROR, logger="app.main"):
        with TestClient(application) as c:
            assert c.get("/health").json() == {"status": "healthy"}

    assert "MongoDB connection failed" in caplog.text
    assert client.closed


def test_client_uses_short_server_selection_timeout(monkeypatch):
    calls = []
    monkeypatch.setattr(mongo, "AsyncIOMotorClient", lambda *args, **kwargs: calls.append((args, kwargs)))

    mongo.create_client("mongodb://db.example:27017")

    assert calls == [(
        ("mongodb://db.example:27017",),
        {"serverSelectionTimeoutMS": main.settings.MONGO_TIMEOUT_MS},
    )]
