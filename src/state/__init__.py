"""
State for the pool simulator: account ledgers and pool snapshots
"""

from .balances import Account, Address, Amount, new_address
from .pools import PoolState

__all__ = [
    "Account",
    "Address",
    "Amount",
    "new_address",
    "PoolState",
]
