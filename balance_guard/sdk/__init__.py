"""
SDK for Balance Guard.

Provides programmatic access to charging and reset.
"""

from .client import BalanceClient
from .handlers import (
    charge_request_memcached,
    charge_request_redis,
    reset_memcached,
    reset_redis,
)

__all__ = [
    "BalanceClient",
    "charge_request_memcached",
    "charge_request_redis",
    "reset_memcached",
    "reset_redis",
]
