#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.config import LOG_LEVELS, ConfigError, DemoConfig, load_config
from src.core.errors import PoolError
from src.core.pool import LiquidityPool
from src.state.balances import Account
from src.state.pools import PoolState

logger = logging.getLogger("pool_demo")


def _pool_line(state: PoolState, *, with_price: bool = False) -> str:
    line = f"e: {state.reserve_e}, t: {state.reserve_t}, l: {state.liquidity_supply}, k: {state.invariant_k}"
    if with_price:
        line += f", price: {state.spot_price:.4f}"
    return line


def _account_line(account: Account) -> str:
    return f"address: {account.identifier}, e_balance: {account.balance_e}, t_balance: {account.balance_t}"


def run_demo(config: DemoConfig, rng: Optional[random.Random] = None) -> List[str]:
    """Run the reference scenario and return the report lines."""
    params = config.pool
    pool = LiquidityPool(params.reserve_e, params.reserve_t, params.liquidity_supply, params.fee_rate)
    account, account_sub = (Account(e, t, rng=rng) for e, t in config.account_balances)

    lines = [_pool_line(pool.snapshot(), with_price=True)]

    for amount in config.liquidity_additions:
        pool.add_liquidity(amount)
        lines.append(_pool_line(pool.snapshot()))

    received_t = account.swap_from_eth(pool, config.swap_from_eth)
    logger.info("account %s sold %d E for %d T", account.identifier, config.swap_from_eth, received_t)
    lines.append(_account_line(account))
    lines.append(_pool_line(pool.snapshot(), with_price=True))

    received_e = account_sub.swap_from_token(pool, config.swap_from_token)
    logger.info("account %s sold %d T for %d E", account_sub.identifier, config.swap_from_token, received_e)
    lines.append(_account_line(account_sub))
    lines.append(_pool_line(pool.snapshot(), with_price=True))
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Run the constant-product pool demonstration scenario.")
    ap.add_argument("--config", type=Path, default=None, help="YAML config file (default: built-in scenario)")
    ap.add_argument("--log-level", choices=LOG_LEVELS, default=None, help="override the configured log level")
    ap.add_argument("--seed", type=int, default=None, help="seed account identifiers for reproducible output")
    args = ap.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"[pool-demo] FAIL (config): {exc}")
        return 1

    logging.basicConfig(
        level=args.log_level or config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        lines = run_demo(config, rng=rng)
    except PoolError as exc:
        print(f"[pool-demo] FAIL: {exc}")
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
