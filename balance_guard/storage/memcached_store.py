"""
Memcached-backed balance store.

Memcached stores values as strings and clamps ``decr`` at zero, so a
balance held here can never go negative.
"""

from typing import Optional

from pymemcache.client.base import Client

from balance_guard.config.loader import MAX_EXPIRATION
from .base import BalanceNotFoundError, BalanceStore


class MemcachedBalanceStore(BalanceStore):
    """Balance store using get, set and decr.

    Writes carry an expiration; values above 30 days would be read by the
    server as an absolute unix timestamp.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 11211,
        expire: int = MAX_EXPIRATION,
        client: Optional[Client] = None
    ):
        if expire > MAX_EXPIRATION:
            raise ValueError(f"expire must be <= {MAX_EXPIRATION} seconds")
        self.host = host
        self.port = port
        self.expire = expire
        self.client = client or Client((host, port))

    def get_balance(self, key: str) -> int:
        value = self.client.get(key)
        if value is None:
            return 0
        return int(value)

    def set_balance(self, key: str, balance: int) -> None:
        self.client.set(key, str(balance), expire=self.expire, noreply=False)

    def decrement(self, key: str, amount: int) -> int:
        result = self.client.decr(key, amount, noreply=False)
        if result is None:
            raise BalanceNotFoundError(key)
        return int(result)
