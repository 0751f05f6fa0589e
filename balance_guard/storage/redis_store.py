"""
Redis-backed balance store.
"""

from typing import Optional

import redis

from .base import BalanceStore


class RedisBalanceStore(BalanceStore):
    """Balance store using GET, SET and DECRBY.

    Redis client errors (``redis.exceptions.ConnectionError`` and friends)
    propagate to the caller unchanged.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        client: Optional[redis.StrictRedis] = None
    ):
        self.host = host
        self.port = port
        self.client = client or redis.StrictRedis(
            host=host,
            port=port,
            db=0,
            decode_responses=True
        )

    def get_balance(self, key: str) -> int:
        value = self.client.get(key)
        return int(value or "0")

    def set_balance(self, key: str, balance: int) -> None:
        self.client.set(key, str(balance))

    def decrement(self, key: str, amount: int) -> int:
        # DECRBY on a missing key starts from 0
        return int(self.client.decrby(key, amount))
