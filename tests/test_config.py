import pytest

from crudstore.config import ServerConfig, get_config, load_config, reset_config
from crudstore.exceptions import ConfigurationError


def test_defaults():
    config = load_config()
    assert config == ServerConfig()
    assert config.port == 8080
    assert config.path == "/item"
    assert config.json_logs is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CRUD_PORT", "9090")
    monkeypatch.setenv("CRUD_PATH", "/todo")
    monkeypatch.setenv("CRUD_LOG_LEVEL", "debug")
    monkeypatch.setenv("CRUD_LOG_FORMAT", "json")

    config = load_config()
    assert config.port == 9090
    assert config.path == "/todo"
    assert config.log_level == "DEBUG"
    assert config.json_logs is True


@pytest.mark.parametrize(
    "key,value",
    [("CRUD_PORT", "eighty"), ("CRUD_PORT", "0"), ("CRUD_PORT", "70000"), ("CRUD_PATH", "item")],
)
def test_invalid_values_raise(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigurationError):
        load_config()


def test_get_config_is_cached_until_reset(monkeypatch):
    first = get_config()
    monkeypatch.setenv("CRUD_PORT", "9999")
    assert get_config() is first

    reset_config()
    assert get_config().port == 9999


def test_create_app_uses_configured_path(monkeypatch):
    from fastapi.testclient import TestClient
    from crudstore.app import create_app

    monkeypatch.setenv("CRUD_PATH", "/todo")
    client = TestClient(create_app())
    assert client.post("/todo", json={"title": "x"}).status_code == 201
    assert client.get("/item").status_code == 404
