# [TESTER] v1

from __future__ import annotations

import logging

import pytest

from src.core.cpmm import invariant_k, max_output_for_input, swap_exact_in, swap_exact_out
from src.core.errors import InsufficientLiquidityError, InvalidAmountError, InvalidFeeError, PoolError


def test_swap_exact_in_updates_reserves() -> None:
    amount_out, (new_in, new_out) = swap_exact_in(1000, 1000, 100, 0.003)
    assert amount_out == 90
    assert (new_in, new_out) == (1100, 910)


def test_round_trip_loses_value_to_the_fee() -> None:
    amount_out, (x1, y1) = swap_exact_in(1000, 1000, 100, 0.003)
    back, _ = swap_exact_in(y1, x1, amount_out, 0.003)
    assert back == 98
    assert back < 100


def test_swap_exact_in_rejects_quote_that_drains_output() -> None:
    # a*r/(1+a*r) rounds to exactly 1.0 in binary32 for such a lopsided trade.
    with pytest.raises(InsufficientLiquidityError, match="drain output reserve"):
        swap_exact_in(1, 100, 10**17, 0.003)


def test_swap_exact_in_keeps_output_reserve_positive_above_float_precision() -> None:
    # 2**54 + 3 is not representable in binary32; the quote rounds to 2**54.
    amount_out, (new_in, new_out) = swap_exact_in(1, 2**54 + 3, 10**20, 0.0)
    assert amount_out == 2**54
    assert (new_in, new_out) == (10**20 + 1, 3)
    assert invariant_k(new_in, new_out) >= invariant_k(1, 2**54 + 3)


def test_swap_exact_in_caps_rounded_up_quote() -> None:
    # binary32 rounds 2**25 + 3 up to 2**25 + 4, so the raw quote is 2**24 + 2.
    assert max_output_for_input(1, 2**25 + 3, 1) == 2**24 + 1
    amount_out, (new_in, new_out) = swap_exact_in(1, 2**25 + 3, 1, 0.0)
    assert amount_out == 2**24 + 1
    assert (new_in, new_out) == (2, 2**24 + 2)
    assert invariant_k(new_in, new_out) >= invariant_k(1, 2**25 + 3)


def test_swap_exact_in_rejects_amount_beyond_float_range() -> None:
    with pytest.raises(InvalidAmountError, match="too large to price"):
        swap_exact_in(1, 10, 10**40, 0.0)


def test_swap_exact_out_pays_truncated_input(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="src.core.cpmm"):
        amount_in, (new_in, new_out) = swap_exact_out(1000, 1000, 100, 0.003)

    assert amount_in == 111
    assert (new_in, new_out) == (1111, 900)
    # Truncating the required input leaves k slightly lower; reported, not rejected.
    assert invariant_k(new_in, new_out) == 999_900
    assert "decreased k" in caplog.text


@pytest.mark.parametrize("amount_out", [1000, 1200])
def test_swap_exact_out_rejects_draining_the_reserve(amount_out: int) -> None:
    with pytest.raises(InsufficientLiquidityError, match="Cannot drain full reserve"):
        swap_exact_out(1000, 1000, amount_out, 0.003)


def test_swap_exact_out_rejects_ratio_that_rounds_to_one() -> None:
    # 2**30 - 1 rounds to 2**30 in binary32, so 1 - b is zero.
    with pytest.raises(InsufficientLiquidityError, match="Cannot price"):
        swap_exact_out(1, 2**30, 2**30 - 1, 0.003)


def test_swap_validation_errors() -> None:
    with pytest.raises(InvalidAmountError):
        swap_exact_in(1000, 1000, 0, 0.003)
    with pytest.raises(InvalidAmountError):
        swap_exact_out(1000, 1000, -1, 0.003)
    with pytest.raises(InsufficientLiquidityError):
        swap_exact_in(0, 1000, 10, 0.003)
    with pytest.raises(InvalidFeeError):
        swap_exact_in(1000, 1000, 10, 1.0)
    with pytest.raises(InvalidFeeError):
        swap_exact_out(1000, 1000, 10, -0.1)


def test_pool_errors_are_value_errors() -> None:
    assert issubclass(PoolError, ValueError)
    with pytest.raises(ValueError):
        swap_exact_in(1000, 1000, 0, 0.003)
