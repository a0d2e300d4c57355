"""
Configuration for pool simulations.

Defaults reproduce the reference scenario (pool 100/100, 100 shares, 0.3% fee,
two accounts funded with 100/100). A YAML file can override any field:

    pool:
      reserve_e: 100
      reserve_t: 100
      liquidity_supply: 100
      fee_rate: 0.003
    demo:
      account_balances: [[100, 100], [100, 100]]
      liquidity_additions: [100, 200]
      swap_from_eth: 100
      swap_from_token: 100
      log_level: WARNING

Environment overrides (applied last):
- CPMM_CONFIG: path to the YAML file when none is passed explicitly
- CPMM_FEE_RATE: pool fee rate
- CPMM_LOG_LEVEL: logging level name
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import yaml


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised for malformed or out-of-range configuration."""


def _require_int(name: str, value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"{name} must be an int, got {value!r}")
    return value


def _require_fee(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"fee_rate must be a number, got {value!r}")
    fee = float(value)
    if not (0.0 <= fee < 1.0):
        raise ConfigError(f"fee_rate must be in [0, 1): {fee}")
    return fee


@dataclass(frozen=True)
class PoolParams:
    reserve_e: int = 100
    reserve_t: int = 100
    liquidity_supply: int = 100
    fee_rate: float = 0.003

    def __post_init__(self) -> None:
        for name in ("reserve_e", "reserve_t", "liquidity_supply"):
            if _require_int(name, getattr(self, name)) <= 0:
                raise ConfigError(f"{name} must be positive: {getattr(self, name)}")
        object.__setattr__(self, "fee_rate", _require_fee(self.fee_rate))


@dataclass(frozen=True)
class DemoConfig:
    pool: PoolParams = field(default_factory=PoolParams)
    account_balances: Tuple[Tuple[int, int], ...] = ((100, 100), (100, 100))
    liquidity_additions: Tuple[int, ...] = (100, 200)
    swap_from_eth: int = 100
    swap_from_token: int = 100
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if len(self.account_balances) != 2:
            raise ConfigError("account_balances must list exactly two accounts")
        for pair in self.account_balances:
            if len(pair) != 2:
                raise ConfigError(f"account balance must be an [e, t] pair, got {pair!r}")
            _require_int("account balance", pair[0])
            _require_int("account balance", pair[1])
        for amount in self.liquidity_additions:
            if _require_int("liquidity addition", amount) <= 0:
                raise ConfigError(f"liquidity addition must be positive: {amount}")
        for name in ("swap_from_eth", "swap_from_token"):
            if _require_int(name, getattr(self, name)) <= 0:
                raise ConfigError(f"{name} must be positive: {getattr(self, name)}")
        level = str(self.log_level).strip().upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"unknown log_level: {self.log_level!r}")
        object.__setattr__(self, "log_level", level)


def _env_str(environ: Mapping[str, str], name: str) -> Optional[str]:
    raw = environ.get(name)
    if raw is None:
        return None
    v = raw.strip()
    return v if v else None


def _env_float(environ: Mapping[str, str], name: str) -> Optional[float]:
    raw = _env_str(environ, name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def _read_yaml(path: Path) -> Mapping[str, Any]:
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if obj is None:
        return {}
    if not isinstance(obj, Mapping):
        raise ConfigError("config YAML must be a mapping")
    return obj


def _section(obj: Mapping[str, Any], name: str, allowed: Tuple[str, ...]) -> dict:
    raw = obj.get(name) or {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"'{name}' section must be a mapping")
    unknown = sorted(set(raw) - set(allowed), key=str)
    if unknown:
        raise ConfigError(f"unknown keys in '{name}': {', '.join(str(k) for k in unknown)}")
    return dict(raw)


def load_config(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> DemoConfig:
    """Build a DemoConfig from defaults, an optional YAML file and the environment."""
    if environ is None:
        environ = os.environ

    if path is None:
        env_path = _env_str(environ, "CPMM_CONFIG")
        if env_path is not None:
            path = Path(env_path)

    pool_kwargs: dict = {}
    demo_kwargs: dict = {}
    if path is not None:
        obj = _read_yaml(Path(path))
        pool_kwargs = _section(obj, "pool", ("reserve_e", "reserve_t", "liquidity_supply", "fee_rate"))
        demo_kwargs = _section(
            obj,
            "demo",
            ("account_balances", "liquidity_additions", "swap_from_eth", "swap_from_token", "log_level"),
        )

    fee_override = _env_float(environ, "CPMM_FEE_RATE")
    if fee_override is not None:
        pool_kwargs["fee_rate"] = fee_override

    level_override = _env_str(environ, "CPMM_LOG_LEVEL")
    if level_override is not None:
        demo_kwargs["log_level"] = level_override

    if "account_balances" in demo_kwargs:
        balances = demo_kwargs["account_balances"]
        if not isinstance(balances, (list, tuple)) or not all(isinstance(p, (list, tuple)) for p in balances):
            raise ConfigError("account_balances must be a list of [e, t] pairs")
        demo_kwargs["account_balances"] = tuple(tuple(pair) for pair in balances)
    if "liquidity_additions" in demo_kwargs:
        additions = demo_kwargs["liquidity_additions"]
        if not isinstance(additions, (list, tuple)):
            raise ConfigError("liquidity_additions must be a list")
        demo_kwargs["liquidity_additions"] = tuple(additions)

    config = DemoConfig(**demo_kwargs)
    if pool_kwargs:
        config = replace(config, pool=PoolParams(**pool_kwargs))
    return config
