"""
CPMM pricing kernel (v1 float semantics).

Reserves are integers, ratios are IEEE-754 binary32 floats, and every result is
converted back to an integer by truncation (toward zero):

- exact input:  dy = trunc((a*r / (1 + a*r)) * y)    with a = dx/x, r = 1 - fee
- exact output: dx = trunc((b / (1 - b)) / r * x)    with b = dy/y, r = 1 - fee
- deposit:      v' = trunc((1 + a) * v)
- withdrawal:   v' = trunc((1 - a) * v)

Every operand, including the fee and the constant 1, is a `numpy.float32` and
every intermediate is rounded to binary32, so results match a single-precision
engine bit for bit. Truncation (not rounding) is the approximation scheme. It is
part of the semantics and must not be replaced by exact rational arithmetic.
"""

from __future__ import annotations

import numpy as np

ONE = np.float32(1.0)


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_fee(fee_rate: float) -> None:
    if not (0.0 <= fee_rate < 1.0):
        raise ValueError(f"fee_rate must be in [0, 1): {fee_rate}")


def _f32(value) -> np.float32:
    return np.float32(float(value))


def _truncate(value: np.float32) -> int:
    """int() toward zero; a non-finite intermediate raises OverflowError."""
    if not np.isfinite(value):
        raise OverflowError(f"non-finite binary32 intermediate: {value}")
    return int(value)


def ratio(numerator: int, denominator: int) -> np.float32:
    """numerator / denominator in binary32."""
    _require_int("numerator", numerator)
    _require_int("denominator", denominator)
    if denominator == 0:
        raise ValueError("denominator must be non-zero")
    with np.errstate(over="ignore"):
        return _f32(numerator) / _f32(denominator)


def price_for_exact_input(delta_x: int, x: int, y: int, fee_rate: float) -> int:
    """
    Output amount of Y paid for exactly `delta_x` of X.

    The fee is withheld on the input leg before solving (x + dx)(y - dy) >= xy.
    """
    for name, v in (("delta_x", delta_x), ("x", x), ("y", y)):
        _require_int(name, v)
    if x <= 0 or y <= 0:
        raise ValueError(f"reserves must be positive: ({x}, {y})")
    _require_fee(fee_rate)

    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        r = ONE - _f32(fee_rate)
        a = _f32(delta_x) / _f32(x)
        return _truncate((a * r / (ONE + a * r)) * _f32(y))


def price_for_exact_output(delta_y: int, x: int, y: int, fee_rate: float) -> int:
    """
    Input amount of X required to receive exactly `delta_y` of Y.

    Raises ValueError when `delta_y >= y`: the denominator (1 - b) would be zero
    or negative and the result meaningless. For very large `y` the binary32
    ratio can still round to 1, which surfaces as OverflowError.
    """
    for name, v in (("delta_y", delta_y), ("x", x), ("y", y)):
        _require_int(name, v)
    if x <= 0 or y <= 0:
        raise ValueError(f"reserves must be positive: ({x}, {y})")
    if delta_y >= y:
        raise ValueError(f"cannot drain full reserve: delta_y ({delta_y}) >= y ({y})")
    _require_fee(fee_rate)

    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        r = ONE - _f32(fee_rate)
        b = _f32(delta_y) / _f32(y)
        return _truncate((b / (ONE - b)) / r * _f32(x))


def grow_by_ratio(value: int, ratio: float) -> int:
    """trunc((1 + ratio) * value)"""
    _require_int("value", value)
    with np.errstate(over="ignore", invalid="ignore"):
        return _truncate((ONE + np.float32(ratio)) * _f32(value))


def shrink_by_ratio(value: int, ratio: float) -> int:
    """trunc((1 - ratio) * value)"""
    _require_int("value", value)
    with np.errstate(over="ignore", invalid="ignore"):
        return _truncate((ONE - np.float32(ratio)) * _f32(value))
