"""Configuration loader: reads config.yaml, interpolates env vars and validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .codec import parse_amount, to_account_address
from .constants import ZERO_ADDRESS
from .errors import ConfigError
from .models import EModeConfig, ReserveConfig
from .profiles import PROFILES, get_profile

logger = logging.getLogger(__name__)

# Environment variables holding the signing keys of each role
POOL_KEY_ENV = "AAVE_POOL_PRIVATE_KEY"
ORACLE_KEY_ENV = "AAVE_ORACLE_PRIVATE_KEY"
RATE_KEY_ENV = "AAVE_RATE_PRIVATE_KEY"
UNDERLYING_TOKENS_KEY_ENV = "UNDERLYING_TOKENS_PRIVATE_KEY"
USER_KEY_ENV = "USER_PRIVATE_KEY"
MNEMONIC_ENV = "MNEMONIC"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NetworkConfig:
    name: str = "testnet"
    node_url: str = ""
    faucet_url: str = ""
    timeout: int = 30
    addresses: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SignersConfig:
    pool_private_key: str = ""
    oracle_private_key: str = ""
    rate_private_key: str = ""
    underlying_tokens_private_key: str = ""
    user_private_key: str = ""
    mnemonic: str = ""


@dataclass(frozen=True)
class AppConfig:
    network: NetworkConfig = field(default_factory=NetworkConfig)
    signers: SignersConfig = field(default_factory=SignersConfig)
    reserves: tuple[ReserveConfig, ...] = ()
    emodes: tuple[EModeConfig, ...] = ()


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _amount(raw: dict[str, Any], key: str, where: str) -> int:
    try:
        return parse_amount(raw.get(key, 0))
    except ValueError as e:
        raise ConfigError(f"{where}: invalid {key}: {e}") from None


def _flag(raw: dict[str, Any], key: str, default: bool, where: str) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{where}: {key} must be true or false, got {value!r}")
    return value


def _build_network(raw: dict[str, Any], override: str | None = None) -> NetworkConfig:
    name = str(override or raw.get("name", "testnet")).lower()
    if name not in PROFILES:
        raise ConfigError(
            f"Unknown network '{name}' (expected one of {', '.join(PROFILES)})"
        )
    profile = get_profile(name)
    addresses = dict(profile.addresses)
    addresses.update({k: str(v) for k, v in raw.get("addresses", {}).items()})
    return NetworkConfig(
        name=name,
        node_url=raw.get("node_url") or profile.node_url,
        faucet_url=raw.get("faucet_url") or profile.faucet_url,
        timeout=int(raw.get("timeout", 30)),
        addresses=addresses,
    )


def _build_signers(raw: dict[str, Any]) -> SignersConfig:
    return SignersConfig(
        pool_private_key=raw.get("pool_private_key", ""),
        oracle_private_key=raw.get("oracle_private_key", ""),
        rate_private_key=raw.get("rate_private_key", ""),
        underlying_tokens_private_key=raw.get("underlying_tokens_private_key", ""),
        user_private_key=raw.get("user_private_key", ""),
        mnemonic=raw.get("mnemonic", ""),
    )


def _build_reserves(raw: list[dict[str, Any]]) -> tuple[ReserveConfig, ...]:
    reserves: list[ReserveConfig] = []
    for r in raw:
        symbol = str(r.get("symbol", ""))
        where = f"Reserve '{symbol}'"
        reserves.append(
            ReserveConfig(
                symbol=symbol,
                name=str(r.get("name", symbol)),
                decimals=int(r.get("decimals", 8)),
                max_supply=_amount(r, "max_supply", where),
                icon_uri=r.get("icon_uri", ""),
                project_uri=r.get("project_uri", ""),
                treasury=to_account_address(str(r.get("treasury") or ZERO_ADDRESS)),
                a_token_name=r.get("a_token_name", f"AAVE_A_{symbol}"),
                a_token_symbol=r.get("a_token_symbol", f"A_{symbol}"),
                variable_debt_token_name=r.get(
                    "variable_debt_token_name", f"AAVE_VAR_DEBT_{symbol}"
                ),
                variable_debt_token_symbol=r.get(
                    "variable_debt_token_symbol", f"V_D_{symbol}"
                ),
                price_in_market_reference_currency=_amount(
                    r, "price_in_market_reference_currency", where
                ),
                optimal_usage_ratio=_amount(r, "optimal_usage_ratio", where),
                base_variable_borrow_rate=_amount(r, "base_variable_borrow_rate", where),
                variable_rate_slope1=_amount(r, "variable_rate_slope1", where),
                variable_rate_slope2=_amount(r, "variable_rate_slope2", where),
                ltv=_amount(r, "ltv", where),
                liquidation_threshold=_amount(r, "liquidation_threshold", where),
                liquidation_bonus=_amount(r, "liquidation_bonus", where),
                reserve_factor=_amount(r, "reserve_factor", where),
                borrow_cap=_amount(r, "borrow_cap", where),
                supply_cap=_amount(r, "supply_cap", where),
                borrowing_enabled=_flag(r, "borrowing_enabled", False, where),
                flashloan_enabled=_flag(r, "flashloan_enabled", False, where),
                emode_category_id=int(r.get("emode_category_id", 0)),
                borrowable_in_isolation=_flag(r, "borrowable_in_isolation", False, where),
                active=_flag(r, "active", True, where),
                paused=_flag(r, "paused", False, where),
                freezed=_flag(r, "freezed", False, where),
                debt_ceiling=_amount(r, "debt_ceiling", where),
            )
        )
    return tuple(reserves)


def _build_emodes(raw: list[dict[str, Any]]) -> tuple[EModeConfig, ...]:
    emodes: list[EModeConfig] = []
    for e in raw:
        emodes.append(
            EModeConfig(
                category_id=int(e.get("category_id", 0)),
                ltv=int(e.get("ltv", 0)),
                liquidation_threshold=int(e.get("liquidation_threshold", 0)),
                liquidation_bonus=int(e.get("liquidation_bonus", 0)),
                oracle=to_account_address(str(e.get("oracle") or ZERO_ADDRESS)),
                label=str(e.get("label", "")),
            )
        )
    return tuple(emodes)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    config_path: str | Path | None = None, network: str | None = None
) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
        network: Profile name overriding ``network.name`` from the file.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        network=_build_network(raw.get("network", {}), network),
        signers=_build_signers(raw.get("signers", {})),
        reserves=_build_reserves(raw.get("reserves", [])),
        emodes=_build_emodes(raw.get("emodes", [])),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s (network %s)", config_path, cfg.network.name)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.network.node_url:
        raise ConfigError(f"Network '{cfg.network.name}' has no node_url")

    seen: set[str] = set()
    emode_ids = {e.category_id for e in cfg.emodes}
    for reserve in cfg.reserves:
        if not reserve.symbol:
            raise ConfigError("Every reserve needs a symbol")
        if reserve.symbol in seen:
            raise ConfigError(f"Reserve '{reserve.symbol}' is declared twice")
        seen.add(reserve.symbol)
        if reserve.emode_category_id and reserve.emode_category_id not in emode_ids:
            raise ConfigError(
                f"Reserve '{reserve.symbol}' references unknown eMode "
                f"category {reserve.emode_category_id}"
            )


def resolve_private_key(explicit: str | None, env_var: str) -> str:
    """Return ``explicit`` or the key stored in ``env_var``; raise if neither is set."""
    load_dotenv()
    key = explicit or os.environ.get(env_var, "")
    if not key:
        raise ConfigError(
            f"Signing key missing: pass it explicitly or set the {env_var} "
            "environment variable"
        )
    return key
