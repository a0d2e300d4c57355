"""
Pool engine: a two-asset constant-product pool mutated in place.

Every operation first computes the complete post-state with the pure functions
in `cpmm.py` / `liquidity.py` and only then assigns it, so a failing call
leaves the pool untouched.
"""

from __future__ import annotations

import logging

from ..state.balances import Amount
from ..state.pools import PoolState
from . import cpmm
from .liquidity import deposit_liquidity, withdraw_liquidity

logger = logging.getLogger(__name__)


class LiquidityPool:
    """
    Reserves of assets E and T, the outstanding share supply and the fee rate.

    The constructor stores what it is given. Validity of the initial reserves
    and of the fee rate is the caller's responsibility; the fee is checked when
    it is used to price a swap.
    """

    price_for_exact_input = staticmethod(cpmm.price_for_exact_input)
    price_for_exact_output = staticmethod(cpmm.price_for_exact_output)

    def __init__(self, reserve_e: Amount, reserve_t: Amount, liquidity_supply: Amount, fee_rate: float):
        self.reserve_e = reserve_e
        self.reserve_t = reserve_t
        self.liquidity_supply = liquidity_supply
        self.fee_rate = fee_rate
        self.invariant_k = cpmm.invariant_k(reserve_e, reserve_t)

    def _commit(self, reserve_e: Amount, reserve_t: Amount, liquidity_supply: Amount) -> None:
        self.reserve_e = reserve_e
        self.reserve_t = reserve_t
        self.liquidity_supply = liquidity_supply
        self.invariant_k = cpmm.invariant_k(reserve_e, reserve_t)

    def add_liquidity(self, delta_e: Amount) -> None:
        """Contribute `delta_e` of E; T reserve and share supply scale with it."""
        new_e, new_t, new_l = deposit_liquidity(self.reserve_e, self.reserve_t, self.liquidity_supply, delta_e)
        logger.debug(
            "add_liquidity(%d): e %d->%d t %d->%d l %d->%d",
            delta_e, self.reserve_e, new_e, self.reserve_t, new_t, self.liquidity_supply, new_l,
        )
        self._commit(new_e, new_t, new_l)

    def remove_liquidity(self, delta_l: Amount) -> None:
        """Burn `delta_l` shares; both reserves shrink proportionally."""
        new_e, new_t, new_l = withdraw_liquidity(self.reserve_e, self.reserve_t, self.liquidity_supply, delta_l)
        logger.debug(
            "remove_liquidity(%d): e %d->%d t %d->%d l %d->%d",
            delta_l, self.reserve_e, new_e, self.reserve_t, new_t, self.liquidity_supply, new_l,
        )
        self._commit(new_e, new_t, new_l)

    # Swaps. E is the "x" side for the eth_* operations, T for the token_* ones.

    def eth_to_token(self, delta_x: Amount) -> Amount:
        """Sell exactly `delta_x` of E. Returns the T paid out."""
        delta_y, (new_e, new_t) = cpmm.swap_exact_in(self.reserve_e, self.reserve_t, delta_x, self.fee_rate)
        logger.debug("eth_to_token(%d) -> %d", delta_x, delta_y)
        self._commit(new_e, new_t, self.liquidity_supply)
        return delta_y

    def eth_to_token_exact(self, delta_y: Amount) -> Amount:
        """Buy exactly `delta_y` of T. Returns the E required."""
        delta_x, (new_e, new_t) = cpmm.swap_exact_out(self.reserve_e, self.reserve_t, delta_y, self.fee_rate)
        logger.debug("eth_to_token_exact(%d) -> %d", delta_y, delta_x)
        self._commit(new_e, new_t, self.liquidity_supply)
        return delta_x

    def token_to_eth(self, delta_y: Amount) -> Amount:
        """Sell exactly `delta_y` of T. Returns the E paid out."""
        delta_x, (new_t, new_e) = cpmm.swap_exact_in(self.reserve_t, self.reserve_e, delta_y, self.fee_rate)
        logger.debug("token_to_eth(%d) -> %d", delta_y, delta_x)
        self._commit(new_e, new_t, self.liquidity_supply)
        return delta_x

    def token_to_eth_exact(self, delta_x: Amount) -> Amount:
        """Buy exactly `delta_x` of E. Returns the T required."""
        delta_y, (new_t, new_e) = cpmm.swap_exact_out(self.reserve_t, self.reserve_e, delta_x, self.fee_rate)
        logger.debug("token_to_eth_exact(%d) -> %d", delta_x, delta_y)
        self._commit(new_e, new_t, self.liquidity_supply)
        return delta_y

    def snapshot(self) -> PoolState:
        return PoolState(
            reserve_e=self.reserve_e,
            reserve_t=self.reserve_t,
            liquidity_supply=self.liquidity_supply,
            invariant_k=self.invariant_k,
            fee_rate=self.fee_rate,
        )

    def __repr__(self) -> str:
        return (
            f"LiquidityPool(e={self.reserve_e}, t={self.reserve_t}, "
            f"l={self.liquidity_supply}, k={self.invariant_k}, fee={self.fee_rate})"
        )
