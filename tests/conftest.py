import pytest
from fastapi.testclient import TestClient

from crudstore.app import create_app
from crudstore.config import ServerConfig, reset_config
from crudstore.models import Item
from crudstore.store import Store


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for key in ("HOST", "PORT", "PATH", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(f"CRUD_{key}", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def store():
    return Store[Item]()


@pytest.fixture
def app(store):
    return create_app(store=store, config=ServerConfig())


@pytest.fixture
def client(app):
    return TestClient(app)
