from __future__ import annotations

import random
import string

import pytest

from src.core import LiquidityPool
from src.core.errors import InsufficientLiquidityError
from src.state import Account, new_address


def test_identifier_is_40_lowercase_hex_chars() -> None:
    account = Account(100, 100)
    assert len(account.identifier) == 40
    assert set(account.identifier) <= set(string.hexdigits.lower())


def test_identifiers_are_unique_and_seedable() -> None:
    assert Account(1, 1).identifier != Account(1, 1).identifier
    assert new_address(random.Random(42)) == new_address(random.Random(42))
    assert Account(1, 1, rng=random.Random(7)).identifier == Account(1, 1, rng=random.Random(7)).identifier


def test_balances_may_go_negative() -> None:
    account = Account(10, 10)
    account.update_e_balance(-25)
    account.update_t_balance(5)
    assert (account.balance_e, account.balance_t) == (-15, 15)


def test_swap_from_eth_then_from_token() -> None:
    pool = LiquidityPool(400, 403, 400, 0.003)
    account = Account(100, 100)
    account_sub = Account(100, 100)

    assert account.swap_from_eth(pool, 100) == 80
    assert (account.balance_e, account.balance_t) == (0, 180)

    assert account_sub.swap_from_token(pool, 100) == 117
    assert (account_sub.balance_e, account_sub.balance_t) == (217, 0)


def test_swap_exact_pays_computed_e_for_exact_t() -> None:
    pool = LiquidityPool(1000, 1000, 1000, 0.003)
    account = Account(100, 100)
    assert account.swap_exact(pool, 100) == 111
    assert (account.balance_e, account.balance_t) == (-11, 200)


def test_swap_exact_for_eth_pays_computed_t_for_exact_e() -> None:
    pool = LiquidityPool(1000, 1000, 1000, 0.003)
    account = Account(100, 100)
    assert account.swap_exact_for_eth(pool, 100) == 111
    assert (account.balance_e, account.balance_t) == (200, -11)


def test_failed_swap_leaves_account_untouched() -> None:
    pool = LiquidityPool(1000, 1000, 1000, 0.003)
    account = Account(100, 100)
    with pytest.raises(InsufficientLiquidityError):
        account.swap_exact(pool, 1000)
    assert (account.balance_e, account.balance_t) == (100, 100)
