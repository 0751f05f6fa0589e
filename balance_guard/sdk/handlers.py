"""
Function-style entry points.

Each handler accepts an invocation ``event`` and ``context`` (both
ignored) and returns plain JSON-serializable values. Connection settings
come from ``ENDPOINT`` and ``PORT``.
"""

from typing import Any, Dict, Optional

from ..config.loader import CacheBackend
from .client import BalanceClient


def charge_request_redis(event: Optional[Any] = None, context: Optional[Any] = None) -> Dict[str, Any]:
    """Charge one request against the Redis balance."""
    return BalanceClient(CacheBackend.REDIS).charge().to_dict()


def reset_redis(event: Optional[Any] = None, context: Optional[Any] = None) -> int:
    """Reset the Redis balance; returns the default balance."""
    return BalanceClient(CacheBackend.REDIS).reset()


def charge_request_memcached(event: Optional[Any] = None, context: Optional[Any] = None) -> Dict[str, Any]:
    """Charge one request against the Memcached balance."""
    return BalanceClient(CacheBackend.MEMCACHED).charge().to_dict()


def reset_memcached(event: Optional[Any] = None, context: Optional[Any] = None) -> int:
    """Reset the Memcached balance; returns the default balance."""
    return BalanceClient(CacheBackend.MEMCACHED).reset()
