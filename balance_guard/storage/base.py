"""
Abstract balance store.

Defines the three cache commands the charging logic relies on.
"""

from abc import ABC, abstractmethod


class BalanceNotFoundError(KeyError):
    """Raised when a decrement targets a key the cache does not hold."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Balance not found for key: {self.key}"


class BalanceStore(ABC):
    """Key-value store holding integer balances."""

    @abstractmethod
    def get_balance(self, key: str) -> int:
        """Return the stored balance, or 0 when the key is absent."""

    @abstractmethod
    def set_balance(self, key: str, balance: int) -> None:
        """Store ``balance`` under ``key``, replacing any previous value."""

    @abstractmethod
    def decrement(self, key: str, amount: int) -> int:
        """Decrement the balance by ``amount`` and return the new value."""
