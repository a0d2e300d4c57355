"""
Account ledger: one participant's E and T balances.

An Account never prices anything. It forwards the quantity to the pool engine
and applies the signed deltas it gets back.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.pool import LiquidityPool


# Type aliases
Amount = int  # Signed integer quantity (arbitrary precision)
Address = str  # 40 lowercase hex characters

ADDRESS_BYTES = 20

logger = logging.getLogger(__name__)


def new_address(rng: Optional[random.Random] = None) -> Address:
    """
    Generate a fresh identifier: 20 random bytes, hex-encoded.

    The identifier only has to be unique with high probability; it carries no
    cryptographic meaning.
    """
    if rng is None:
        rng = random.SystemRandom()
    return rng.getrandbits(ADDRESS_BYTES * 8).to_bytes(ADDRESS_BYTES, "big").hex()


class Account:
    """
    Holds a caller's two asset balances and an opaque identifier.

    Note: balances are allowed to go negative. There is no collateral check.
    """

    def __init__(self, balance_e: Amount, balance_t: Amount, *, rng: Optional[random.Random] = None):
        self.identifier: Address = new_address(rng)
        self.balance_e = balance_e
        self.balance_t = balance_t

    def update_e_balance(self, delta: Amount) -> None:
        """Add a signed delta to the E balance."""
        self.balance_e += delta
        if self.balance_e < 0:
            logger.debug("account %s: e balance is negative (%d)", self.identifier, self.balance_e)

    def update_t_balance(self, delta: Amount) -> None:
        """Add a signed delta to the T balance."""
        self.balance_t += delta
        if self.balance_t < 0:
            logger.debug("account %s: t balance is negative (%d)", self.identifier, self.balance_t)

    def swap_from_eth(self, pool: LiquidityPool, delta_e: Amount) -> Amount:
        """Sell exactly `delta_e` of E. Returns the T received."""
        delta_t = pool.eth_to_token(delta_e)
        self.update_e_balance(-delta_e)
        self.update_t_balance(delta_t)
        return delta_t

    def swap_exact(self, pool: LiquidityPool, delta_t: Amount) -> Amount:
        """Buy exactly `delta_t` of T. Returns the E paid."""
        delta_e = pool.eth_to_token_exact(delta_t)
        self.update_e_balance(-delta_e)
        self.update_t_balance(delta_t)
        return delta_e

    def swap_from_token(self, pool: LiquidityPool, delta_t: Amount) -> Amount:
        """Sell exactly `delta_t` of T. Returns the E received."""
        delta_e = pool.token_to_eth(delta_t)
        self.update_e_balance(delta_e)
        self.update_t_balance(-delta_t)
        return delta_e

    def swap_exact_for_eth(self, pool: LiquidityPool, delta_e: Amount) -> Amount:
        """Buy exactly `delta_e` of E. Returns the T paid."""
        delta_t = pool.token_to_eth_exact(delta_e)
        self.update_e_balance(delta_e)
        self.update_t_balance(-delta_t)
        return delta_t

    def __repr__(self) -> str:
        return f"Account({self.identifier}, e={self.balance_e}, t={self.balance_t})"
