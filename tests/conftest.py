"""
Shared fixtures.
"""

from typing import Dict

import pytest

from balance_guard.storage import factory
from balance_guard.storage.base import BalanceStore


class InMemoryBalanceStore(BalanceStore):
    """Dict-backed store with Redis semantics for missing keys."""

    def __init__(self, balances: Dict[str, int] = None):
        self.balances = dict(balances or {})
        self.calls = []

    def get_balance(self, key: str) -> int:
        self.calls.append(("get", key))
        return self.balances.get(key, 0)

    def set_balance(self, key: str, balance: int) -> None:
        self.calls.append(("set", key, balance))
        self.balances[key] = balance

    def decrement(self, key: str, amount: int) -> int:
        self.calls.append(("decr", key, amount))
        self.balances[key] = self.balances.get(key, 0) - amount
        return self.balances[key]


@pytest.fixture
def memory_store():
    """Empty in-memory balance store."""
    return InMemoryBalanceStore()


@pytest.fixture(autouse=True)
def clear_shared_stores():
    """Drop stores cached by get_store between tests."""
    factory._default_stores.clear()
    yield
    factory._default_stores.clear()
