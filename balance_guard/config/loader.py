"""
Configuration management and loading.

Handles balance settings from YAML and cache connection settings
from environment variables.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml


DEFAULT_KEY = "account1/balance"
DEFAULT_BALANCE = 100
MAX_EXPIRATION = 60 * 60 * 24 * 30
DEFAULT_CHARGE_DIVISOR = 20


class CacheBackend(Enum):
    """Supported cache servers."""
    REDIS = "redis"
    MEMCACHED = "memcached"


DEFAULT_PORTS: Dict[CacheBackend, int] = {
    CacheBackend.REDIS: 6379,
    CacheBackend.MEMCACHED: 11211,
}


@dataclass(frozen=True)
class BalanceConfig:
    """Parameters of the balance record and its fixed charge."""
    key: str = DEFAULT_KEY
    default_balance: int = DEFAULT_BALANCE
    max_expiration: int = MAX_EXPIRATION
    charge_divisor: int = DEFAULT_CHARGE_DIVISOR

    def __post_init__(self):
        """Validate balance values."""
        if not self.key or not self.key.strip():
            raise ValueError("key is required and cannot be empty")
        if self.default_balance <= 0:
            raise ValueError("default_balance must be > 0")
        if self.max_expiration <= 0:
            raise ValueError("max_expiration must be > 0")
        # Memcached reads larger values as absolute unix timestamps
        if self.max_expiration > MAX_EXPIRATION:
            raise ValueError(f"max_expiration must be <= {MAX_EXPIRATION} seconds")
        if self.charge_divisor <= 0:
            raise ValueError("charge_divisor must be > 0")
        if self.default_balance // self.charge_divisor <= 0:
            raise ValueError("charge_divisor must not exceed default_balance")

    @property
    def charges(self) -> int:
        """Fixed amount deducted per authorized request."""
        return self.default_balance // self.charge_divisor


@dataclass(frozen=True)
class CacheConfig:
    """Connection settings for the cache server."""
    backend: CacheBackend
    host: str
    port: int

    def __post_init__(self):
        if not self.host or not self.host.strip():
            raise ValueError("host is required and cannot be empty")
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")


def parse_backend(value: str) -> CacheBackend:
    """Parse a backend name, case-insensitively.

    Raises:
        ValueError: If the backend is not supported
    """
    try:
        return CacheBackend(value.strip().lower())
    except ValueError:
        valid_backends = [backend.value for backend in CacheBackend]
        raise ValueError(f"backend must be one of: {valid_backends}")


def load_cache_config(
    backend: CacheBackend,
    environ: Optional[Mapping[str, str]] = None
) -> CacheConfig:
    """Build cache connection settings from the environment.

    Reads ``ENDPOINT`` for the host and ``PORT`` for the port. The port
    falls back to the backend's standard port when unset.

    Args:
        backend: Cache server type
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated CacheConfig

    Raises:
        ValueError: If PORT is not an integer or is out of range
    """
    env = os.environ if environ is None else environ

    host = env.get("ENDPOINT") or "localhost"
    raw_port = env.get("PORT")
    if raw_port:
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}")
    else:
        port = DEFAULT_PORTS[backend]

    return CacheConfig(backend=backend, host=host, port=port)


def load_balance_config(path: Optional[str] = None) -> BalanceConfig:
    """Load and validate balance configuration.

    Without a path the built-in defaults are returned. With a path the
    YAML file is validated strictly; unknown keys are rejected so that a
    typo never silently falls back to a default.

    Args:
        path: Optional path to YAML configuration file

    Returns:
        Validated BalanceConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    if path is None:
        return BalanceConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Balance config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")

    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'balance'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    balance_data = raw_config['balance']
    if not isinstance(balance_data, dict):
        raise ValueError("'balance' must be a dictionary")

    return _parse_balance_config(balance_data)


def _parse_balance_config(data: Dict) -> BalanceConfig:
    """Parse the ``balance`` section, applying defaults for absent keys."""
    allowed_keys = {'key', 'default_balance', 'max_expiration', 'charge_divisor'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in balance: {unknown_keys}")

    key = data.get('key', DEFAULT_KEY)
    if not isinstance(key, str):
        raise ValueError("'key' in balance must be a string")

    values = {}
    for name, default in (
        ('default_balance', DEFAULT_BALANCE),
        ('max_expiration', MAX_EXPIRATION),
        ('charge_divisor', DEFAULT_CHARGE_DIVISOR),
    ):
        value = data.get(name, default)
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"'{name}' in balance must be an integer")
        values[name] = value

    return BalanceConfig(key=key, **values)
