"""
crudstore configuration
=======================
Server settings with environment variable overrides.

Priority: ENV (CRUD_<KEY>) > defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional

from crudstore.exceptions import ConfigurationError


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    path: str = "/item"
    log_level: str = "INFO"
    log_format: str = "text"

    @property
    def json_logs(self) -> bool:
        return self.log_format.lower() == "json"


def _env_override(key: str, default):
    """Check for CRUD_<KEY> environment variable override."""
    env_key = f"CRUD_{key.upper()}"
    val = os.environ.get(env_key)
    if val is None:
        return default
    # Type coercion based on the default's type
    if isinstance(default, bool):
        return val.lower() in ("true", "1", "yes")
    if isinstance(default, int):
        try:
            return int(val)
        except ValueError as exc:
            raise ConfigurationError(f"{env_key} must be an integer, got {val!r}") from exc
    return val


def load_config() -> ServerConfig:
    """
    Build the server configuration from defaults and the environment.

    Raises:
        ConfigurationError: If the port is out of range or the resource
            path does not start with "/".
    """
    defaults = ServerConfig()
    config = ServerConfig(
        host=_env_override("host", defaults.host),
        port=_env_override("port", defaults.port),
        path=_env_override("path", defaults.path),
        log_level=_env_override("log_level", defaults.log_level).upper(),
        log_format=_env_override("log_format", defaults.log_format),
    )

    if not 1 <= config.port <= 65535:
        raise ConfigurationError(f"port must be between 1 and 65535, got {config.port}")
    if not config.path.startswith("/"):
        raise ConfigurationError(f"path must start with '/', got {config.path!r}")
    return config


# Module-level singleton (lazy-loaded)
_CONFIG: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get or initialize the global config singleton."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def reset_config():
    """Reset the global config singleton (useful for testing)."""
    global _CONFIG
    _CONFIG = None
