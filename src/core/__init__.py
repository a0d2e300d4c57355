"""
Core pool engine
"""

from .cpmm import (
    invariant_k,
    price_for_exact_input,
    price_for_exact_output,
    swap_exact_in,
    swap_exact_out,
)
from .errors import InsufficientLiquidityError, InvalidAmountError, InvalidFeeError, PoolError
from .liquidity import deposit_liquidity, withdraw_liquidity
from .pool import LiquidityPool

__all__ = [
    "invariant_k",
    "price_for_exact_input",
    "price_for_exact_output",
    "swap_exact_in",
    "swap_exact_out",
    "InsufficientLiquidityError",
    "InvalidAmountError",
    "InvalidFeeError",
    "PoolError",
    "deposit_liquidity",
    "withdraw_liquidity",
    "LiquidityPool",
]
