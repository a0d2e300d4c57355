"""
Liquidity management operations: deposit and withdraw against a pool.

Both operations scale the reserves and the share supply by the same binary32
ratio, with deliberately asymmetric rounding:

    deposit:     a = delta_e / reserve_e
                 reserve_e' = reserve_e + delta_e
                 reserve_t' = trunc((1 + a) * reserve_t) + 1
                 supply'    = trunc((1 + a) * supply)

    withdrawal:  a = delta_l / supply
                 supply'    = supply - delta_l
                 reserve_t' = trunc((1 - a) * reserve_t)
                 reserve_e' = trunc((1 - a) * reserve_e)

The "+1" on deposit keeps asset T from being under-collateralised after
truncation; withdrawal has no bias so the pool retains the fractional surplus.

A deposit followed by burning the shares it minted does not always return the
pool to exactly its prior reserves: each leg truncates independently, so the
result drifts by at most a few units per share of reserve.
"""

from typing import Tuple

from ..state.balances import Amount
from ..kernels.python.cpmm_float_v1 import grow_by_ratio, ratio, shrink_by_ratio
from .errors import InsufficientLiquidityError, InvalidAmountError


def deposit_liquidity(
    reserve_e: Amount,
    reserve_t: Amount,
    liquidity_supply: Amount,
    delta_e: Amount,
) -> Tuple[Amount, Amount, Amount]:
    """
    Contribute `delta_e` of asset E and scale the rest of the pool to match.

    Returns:
        Tuple of (new_reserve_e, new_reserve_t, new_liquidity_supply)

    Raises:
        InvalidAmountError: If delta_e <= 0, too large to price, or mints no shares
        InsufficientLiquidityError: If reserve_e <= 0 (ratio undefined)
    """
    if delta_e <= 0:
        raise InvalidAmountError(f"delta_e must be greater than 0: {delta_e}")
    if reserve_e <= 0:
        raise InsufficientLiquidityError(f"Cannot add liquidity to empty pool: reserve_e={reserve_e}")

    try:
        a = ratio(delta_e, reserve_e)
        new_reserve_t = grow_by_ratio(reserve_t, a) + 1
        new_supply = grow_by_ratio(liquidity_supply, a)
    except OverflowError as exc:
        raise InvalidAmountError(f"delta_e too large to price: {delta_e}") from exc
    if new_supply <= liquidity_supply:
        raise InvalidAmountError(
            f"Deposit too small to mint shares: delta_e={delta_e}, supply={liquidity_supply}"
        )
    return reserve_e + delta_e, new_reserve_t, new_supply


def withdraw_liquidity(
    reserve_e: Amount,
    reserve_t: Amount,
    liquidity_supply: Amount,
    delta_l: Amount,
) -> Tuple[Amount, Amount, Amount]:
    """
    Burn `delta_l` shares and shrink the reserves proportionally.

    Returns:
        Tuple of (new_reserve_e, new_reserve_t, new_liquidity_supply)

    Raises:
        InvalidAmountError: If delta_l <= 0
        InsufficientLiquidityError: If delta_l exceeds the outstanding supply
    """
    if delta_l <= 0:
        raise InvalidAmountError(f"delta_l must be greater than 0: {delta_l}")
    if liquidity_supply <= 0 or delta_l > liquidity_supply:
        raise InsufficientLiquidityError(
            f"Cannot burn more shares than supply: {delta_l} > {liquidity_supply}"
        )

    a = ratio(delta_l, liquidity_supply)
    new_supply = liquidity_supply - delta_l
    new_reserve_t = shrink_by_ratio(reserve_t, a)
    new_reserve_e = shrink_by_ratio(reserve_e, a)
    return new_reserve_e, new_reserve_t, new_supply
