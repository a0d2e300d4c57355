"""Exception types for the pool engine.

All engine errors derive from ``ValueError`` so callers that already guard
against bad arguments with ``except ValueError`` keep working.
"""

from __future__ import annotations


class PoolError(ValueError):
    """Base class for pool engine failures. Raised before any state changes."""


class InvalidAmountError(PoolError):
    """Raised when an amount that must be strictly positive is not."""


class InsufficientLiquidityError(PoolError):
    """Raised when the pool cannot satisfy a request from its reserves or share supply."""


class InvalidFeeError(PoolError):
    """Raised when pricing with a fee rate outside [0, 1)."""
