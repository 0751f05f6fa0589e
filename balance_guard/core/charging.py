"""
Request charging and balance reset.

A charge reads the current balance, authorizes the request when the
balance covers the fixed charge, and only then decrements the balance.

The read and the decrement are separate cache commands. Concurrent
callers may both pass authorization against the same balance; the cache
serializes each decrement but not the pair.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from balance_guard.config.loader import BalanceConfig
from balance_guard.storage.base import BalanceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChargeResult:
    """Outcome of a single charge request."""
    remaining_balance: int
    charges: int
    is_authorized: bool

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for function-style callers."""
        return {
            "remainingBalance": self.remaining_balance,
            "charges": self.charges,
            "isAuthorized": self.is_authorized,
        }


def get_charges(config: BalanceConfig) -> int:
    """Fixed charge: a fraction of the default balance."""
    return config.charges


def authorize_request(remaining_balance: int, charges: int) -> bool:
    """A request is authorized when the balance covers the charge."""
    return remaining_balance >= charges


def charge_request(store: BalanceStore, config: BalanceConfig) -> ChargeResult:
    """Charge one request against the stored balance.

    Args:
        store: Cache holding the balance
        config: Balance key and charge settings

    Returns:
        ChargeResult. When unauthorized the balance is left untouched and
        the reported charge is 0.

    Raises:
        Any error from the cache client, unchanged
    """
    try:
        remaining_balance = store.get_balance(config.key)
        charges = get_charges(config)
        is_authorized = authorize_request(remaining_balance, charges)

        if not is_authorized:
            logger.info(
                "Charge of %d declined for %s: balance %d",
                charges, config.key, remaining_balance
            )
            return ChargeResult(
                remaining_balance=remaining_balance,
                charges=0,
                is_authorized=False
            )

        updated_balance = store.decrement(config.key, charges)
        logger.debug(
            "Charged %d to %s: %d -> %d",
            charges, config.key, remaining_balance, updated_balance
        )
        return ChargeResult(
            remaining_balance=updated_balance,
            charges=charges,
            is_authorized=True
        )
    except Exception:
        logger.exception("Error charging request for %s", config.key)
        raise


def reset_balance(store: BalanceStore, config: BalanceConfig) -> int:
    """Set the balance back to its default.

    Returns:
        The default balance

    Raises:
        Any error from the cache client, unchanged
    """
    try:
        store.set_balance(config.key, config.default_balance)
    except Exception:
        logger.exception("Error resetting balance for %s", config.key)
        raise
    logger.info("Reset %s to %d", config.key, config.default_balance)
    return config.default_balance


def read_balance(store: BalanceStore, config: BalanceConfig) -> int:
    """Return the current balance without modifying it."""
    try:
        return store.get_balance(config.key)
    except Exception:
        logger.exception("Error reading balance for %s", config.key)
        raise
