"""
Constant Product Market Maker (CPMM) swap operations.

This module validates swap requests and applies the binary32/truncation pricing
kernel (`src/kernels/python/cpmm_float_v1.py`) to a reserve pair.

Algorithm Design:
- Type: Binary32 ratios / truncating integer conversion
- Time Complexity: O(1) per swap operation
- Space Complexity: O(1) auxiliary
- Invariant: for exact-in swaps x' * y' >= x * y and y' > 0. A kernel quote that
  reaches the whole output reserve is rejected; a quote above the fee-free
  integer bound floor(y * dx / (x + dx)) (binary32 rounding) is capped to it.
  The truncating exact-out formula can leave the product marginally below its
  pre-trade value; that is logged, not rejected.
"""

import logging
from typing import Tuple

from ..state.balances import Amount
from ..kernels.python.cpmm_float_v1 import price_for_exact_input as _kernel_price_for_exact_input
from ..kernels.python.cpmm_float_v1 import price_for_exact_output as _kernel_price_for_exact_output
from .errors import InsufficientLiquidityError, InvalidAmountError, InvalidFeeError

logger = logging.getLogger(__name__)


def invariant_k(reserve_in: Amount, reserve_out: Amount) -> int:
    """Constant product of a reserve pair."""
    return reserve_in * reserve_out


def max_output_for_input(reserve_in: Amount, reserve_out: Amount, amount_in: Amount) -> Amount:
    """Largest integer output that keeps (x + dx) * (y - dy) >= x * y with no fee."""
    return (reserve_out * amount_in) // (reserve_in + amount_in)


def _validate(reserve_in: Amount, reserve_out: Amount, amount: Amount, fee_rate: float, label: str) -> None:
    if amount <= 0:
        raise InvalidAmountError(f"{label} must be positive: {amount}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidityError(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    if not (0.0 <= fee_rate < 1.0):
        raise InvalidFeeError(f"fee_rate must be in [0, 1): {fee_rate}")


def _check_invariant(k_before: int, k_after: int, kind: str) -> None:
    if k_after < k_before:
        logger.warning("%s swap decreased k: %d -> %d", kind, k_before, k_after)


def price_for_exact_input(delta_x: Amount, x: Amount, y: Amount, fee_rate: float) -> Amount:
    """
    Output of Y for exactly `delta_x` of X (see kernel for the formula).

    Raises InsufficientLiquidityError when the quote would pay out all of `y`,
    and InvalidAmountError when `delta_x` is too large for binary32.
    """
    _validate(x, y, delta_x, fee_rate, "delta_x")
    try:
        quoted = _kernel_price_for_exact_input(delta_x, x, y, fee_rate)
    except OverflowError as exc:
        raise InvalidAmountError(f"delta_x too large to price: {delta_x}") from exc
    if quoted >= y:
        raise InsufficientLiquidityError(
            f"Swap would drain output reserve: amount_out ({quoted}) >= reserve_out ({y})"
        )
    bound = max_output_for_input(x, y, delta_x)
    if quoted > bound:
        logger.debug("exact-in quote %d capped to %d", quoted, bound)
        return bound
    return quoted


def price_for_exact_output(delta_y: Amount, x: Amount, y: Amount, fee_rate: float) -> Amount:
    """
    Input of X required for exactly `delta_y` of Y.

    Requests for the whole output reserve or more are rejected with
    InsufficientLiquidityError rather than priced.
    """
    _validate(x, y, delta_y, fee_rate, "delta_y")
    if delta_y >= y:
        raise InsufficientLiquidityError(
            f"Cannot drain full reserve: amount_out ({delta_y}) >= reserve_out ({y})"
        )
    try:
        return _kernel_price_for_exact_output(delta_y, x, y, fee_rate)
    except OverflowError as exc:
        raise InsufficientLiquidityError(
            f"Cannot price amount_out ({delta_y}) against reserve_out ({y})"
        ) from exc


def swap_exact_in(
    reserve_in: Amount,
    reserve_out: Amount,
    amount_in: Amount,
    fee_rate: float,
) -> Tuple[Amount, Tuple[Amount, Amount]]:
    """
    Compute output amount for an exact-in swap.

    Post-swap reserves:
        new_reserve_in = reserve_in + amount_in  (fee stays in pool)
        new_reserve_out = reserve_out - amount_out  (always >= 1)

    Args:
        reserve_in: Current reserve of input asset
        reserve_out: Current reserve of output asset
        amount_in: Exact input amount
        fee_rate: Fraction of the input withheld, in [0, 1)

    Returns:
        Tuple of (amount_out, (new_reserve_in, new_reserve_out))

    Raises:
        InvalidAmountError: If amount_in is not positive or too large to price
        InsufficientLiquidityError: If a reserve is not positive or the quote would drain reserve_out
        InvalidFeeError: If fee_rate is outside [0, 1)
    """
    amount_out = price_for_exact_input(amount_in, reserve_in, reserve_out, fee_rate)
    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out

    _check_invariant(
        invariant_k(reserve_in, reserve_out),
        invariant_k(new_reserve_in, new_reserve_out),
        "exact-in",
    )
    return amount_out, (new_reserve_in, new_reserve_out)


def swap_exact_out(
    reserve_in: Amount,
    reserve_out: Amount,
    amount_out: Amount,
    fee_rate: float,
) -> Tuple[Amount, Tuple[Amount, Amount]]:
    """
    Compute required input amount for an exact-out swap.

    Post-swap reserves:
        new_reserve_in = reserve_in + amount_in
        new_reserve_out = reserve_out - amount_out

    Returns:
        Tuple of (amount_in, (new_reserve_in, new_reserve_out))

    Raises:
        InvalidAmountError: If amount_out is not positive
        InsufficientLiquidityError: If amount_out >= reserve_out or a reserve is not positive
        InvalidFeeError: If fee_rate is outside [0, 1)
    """
    amount_in = price_for_exact_output(amount_out, reserve_in, reserve_out, fee_rate)
    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out

    _check_invariant(
        invariant_k(reserve_in, reserve_out),
        invariant_k(new_reserve_in, new_reserve_out),
        "exact-out",
    )
    return amount_in, (new_reserve_in, new_reserve_out)
