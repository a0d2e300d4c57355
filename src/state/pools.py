"""
Pool state snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

from .balances import Amount


@dataclass(frozen=True)
class PoolState:
    """
    Immutable view of a pool at one point in time.

    `invariant_k` is the cached reserve product recomputed by every mutating
    operation. It is for inspection only.
    """

    reserve_e: Amount
    reserve_t: Amount
    liquidity_supply: Amount
    invariant_k: int
    fee_rate: float

    @property
    def spot_price(self) -> float:
        """T per E at the current reserves (NaN for an empty E reserve)."""
        if self.reserve_e == 0:
            return float("nan")
        return self.reserve_t / self.reserve_e

    def to_dict(self) -> dict:
        return {
            "reserve_e": self.reserve_e,
            "reserve_t": self.reserve_t,
            "liquidity_supply": self.liquidity_supply,
            "invariant_k": self.invariant_k,
            "fee_rate": self.fee_rate,
        }
