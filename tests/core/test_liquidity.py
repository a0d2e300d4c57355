# [TESTER] v1

from __future__ import annotations

import pytest

from src.core.errors import InsufficientLiquidityError, InvalidAmountError
from src.core.liquidity import deposit_liquidity, withdraw_liquidity


def test_deposit_biases_t_reserve_upward() -> None:
    assert deposit_liquidity(100, 100, 100, 100) == (200, 201, 200)
    assert deposit_liquidity(200, 201, 200, 200) == (400, 403, 400)
    assert deposit_liquidity(1000, 500, 1000, 250) == (1250, 626, 1250)


def test_withdraw_truncates_without_bias() -> None:
    assert withdraw_liquidity(200, 201, 200, 100) == (100, 100, 100)
    assert withdraw_liquidity(1250, 626, 1250, 250) == (1000, 500, 1000)


def test_withdraw_entire_supply_empties_pool() -> None:
    assert withdraw_liquidity(200, 201, 200, 200) == (0, 0, 0)


@pytest.mark.parametrize("delta_e", [0, -5])
def test_deposit_rejects_non_positive_amounts(delta_e: int) -> None:
    with pytest.raises(InvalidAmountError, match="delta_e must be greater than 0"):
        deposit_liquidity(100, 100, 100, delta_e)


def test_deposit_rejects_empty_pool() -> None:
    with pytest.raises(InsufficientLiquidityError, match="empty pool"):
        deposit_liquidity(0, 100, 100, 10)


@pytest.mark.parametrize("delta_l", [0, -1])
def test_withdraw_rejects_non_positive_amounts(delta_l: int) -> None:
    with pytest.raises(InvalidAmountError, match="delta_l must be greater than 0"):
        withdraw_liquidity(100, 100, 100, delta_l)


def test_withdraw_rejects_more_than_supply() -> None:
    with pytest.raises(InsufficientLiquidityError, match="more shares than supply"):
        withdraw_liquidity(200, 201, 200, 201)


def test_deposit_scales_with_binary32_ratio() -> None:
    # 623/400 rounds below 1.5575 in binary32, so (1 + a) * 400 truncates to 1022.
    assert deposit_liquidity(400, 444, 400, 623) == (1023, 1136, 1022)


def test_deposit_rejects_amount_that_mints_no_shares() -> None:
    with pytest.raises(InvalidAmountError, match="too small to mint shares"):
        deposit_liquidity(1000, 1000, 10, 1)


def test_deposit_rejects_amount_beyond_float_range() -> None:
    with pytest.raises(InvalidAmountError, match="too large to price"):
        deposit_liquidity(1, 100, 100, 10**40)
