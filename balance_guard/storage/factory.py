"""
Store construction from connection settings.
"""

import logging
from typing import Dict, Optional, Tuple

from balance_guard.config.loader import (
    BalanceConfig,
    CacheBackend,
    CacheConfig,
    MAX_EXPIRATION,
    load_cache_config,
)
from .base import BalanceStore
from .memcached_store import MemcachedBalanceStore
from .redis_store import RedisBalanceStore

logger = logging.getLogger(__name__)


def create_store(
    cache_config: CacheConfig,
    balance_config: Optional[BalanceConfig] = None
) -> BalanceStore:
    """Create a balance store for the configured backend.

    Args:
        cache_config: Cache server connection settings
        balance_config: Balance settings; supplies the Memcached expiration

    Returns:
        A store connected lazily to the cache server
    """
    logger.debug(
        "Creating %s store for %s:%s",
        cache_config.backend.value, cache_config.host, cache_config.port
    )
    if cache_config.backend == CacheBackend.REDIS:
        return RedisBalanceStore(host=cache_config.host, port=cache_config.port)

    expire = balance_config.max_expiration if balance_config else MAX_EXPIRATION
    return MemcachedBalanceStore(
        host=cache_config.host,
        port=cache_config.port,
        expire=expire
    )


# Stores shared across calls, one per backend and balance config
_default_stores: Dict[Tuple[CacheBackend, BalanceConfig], BalanceStore] = {}


def get_store(
    backend: CacheBackend,
    balance_config: Optional[BalanceConfig] = None
) -> BalanceStore:
    """Get the shared store for a backend, built from the environment.

    The first call per backend and balance config reads ``ENDPOINT``/``PORT``;
    later calls reuse the same client so connections survive between
    invocations.
    """
    balance_config = balance_config or BalanceConfig()
    cache_key = (backend, balance_config)
    if cache_key not in _default_stores:
        _default_stores[cache_key] = create_store(
            load_cache_config(backend), balance_config
        )
    return _default_stores[cache_key]
