"""
Balance client.

Binds a cache backend and balance settings so callers can charge and
reset without passing them on every call.
"""

from typing import Optional

from ..config.loader import BalanceConfig, CacheBackend
from ..core.charging import ChargeResult, charge_request, read_balance, reset_balance
from ..storage.base import BalanceStore
from ..storage.factory import get_store


class BalanceClient:
    """Charges requests against a balance held in Redis or Memcached.

    Cache errors are not caught here; they surface to the caller after
    being logged by the core operations.
    """

    def __init__(
        self,
        backend: CacheBackend,
        config: Optional[BalanceConfig] = None,
        store: Optional[BalanceStore] = None
    ):
        """Initialize the client.

        Args:
            backend: Cache server type
            config: Balance settings (defaults to built-in values)
            store: Store to use instead of the shared one for ``backend``
        """
        self.backend = backend
        self.config = config or BalanceConfig()
        self.store = store or get_store(backend, self.config)

    def charge(self) -> ChargeResult:
        """Charge one request."""
        return charge_request(self.store, self.config)

    def reset(self) -> int:
        """Reset the balance and return the default balance."""
        return reset_balance(self.store, self.config)

    def balance(self) -> int:
        """Current balance; 0 when the key is not set."""
        return read_balance(self.store, self.config)
