"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest
from aptos_sdk.account_address import AccountAddress

from aave_aptos.config import (
    USER_KEY_ENV,
    AppConfig,
    _interpolate_env,
    load_config,
    resolve_private_key,
)
from aave_aptos.constants import U128_MAX
from aave_aptos.errors import ConfigError
from aave_aptos.profiles import AAVE_ORACLE, get_profile


def _write(tmp_path: Path, content: str) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(content)
    return cfg_file


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOK", "secret")
        assert _interpolate_env({"k": ["${TOK}", 1]}) == {"k": ["secret", 1]}


class TestLoadConfig:
    def test_loads_valid_yaml(
        self, sample_yaml_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEST_POOL_KEY", "0xkey")
        cfg = load_config(sample_yaml_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.network.name == "testnet"
        assert cfg.network.timeout == 10
        assert cfg.network.node_url == get_profile("testnet").node_url
        assert cfg.signers.pool_private_key == "0xkey"
        assert [r.symbol for r in cfg.reserves] == ["DAI"]
        assert cfg.emodes[0].label == "Stablecoins"

    def test_amounts_keep_precision(self, sample_yaml_path: Path) -> None:
        reserve = load_config(sample_yaml_path).reserves[0]
        assert reserve.max_supply == U128_MAX
        assert reserve.optimal_usage_ratio == 9 * 10**26

    def test_reserve_defaults(self, sample_yaml_path: Path) -> None:
        reserve = load_config(sample_yaml_path).reserves[0]
        assert reserve.a_token_name == "AAVE_A_DAI"
        assert reserve.variable_debt_token_symbol == "V_D_DAI"
        assert reserve.treasury == AccountAddress.from_str_relaxed("0x0")
        assert reserve.active is True
        assert reserve.address is None

    def test_address_overrides_merge_over_profile(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert cfg.network.addresses["AAVE_POOL"] == "0xabc"
        assert cfg.network.addresses[AAVE_ORACLE] == get_profile("testnet").addresses[AAVE_ORACLE]

    def test_network_override(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path, network="local")
        assert cfg.network.name == "local"
        assert cfg.network.node_url == "http://127.0.0.1:8080/v1"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_frozen(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.network = None  # type: ignore[misc]


class TestValidation:
    def test_unknown_network(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Unknown network 'devnet'"):
            load_config(_write(tmp_path, "network: {name: devnet}\n"))

    def test_duplicate_symbol(self, tmp_path: Path) -> None:
        content = "reserves:\n  - {symbol: DAI}\n  - {symbol: DAI}\n"
        with pytest.raises(ConfigError, match="declared twice"):
            load_config(_write(tmp_path, content))

    def test_missing_symbol(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="needs a symbol"):
            load_config(_write(tmp_path, "reserves:\n  - {name: x}\n"))

    def test_unknown_emode(self, tmp_path: Path) -> None:
        content = "reserves:\n  - {symbol: DAI, emode_category_id: 3}\n"
        with pytest.raises(ConfigError, match="unknown eMode category 3"):
            load_config(_write(tmp_path, content))

    def test_negative_amount(self, tmp_path: Path) -> None:
        content = "reserves:\n  - {symbol: DAI, supply_cap: -5}\n"
        with pytest.raises(ConfigError, match="invalid supply_cap"):
            load_config(_write(tmp_path, content))

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)


class TestResolvePrivateKey:
    def test_explicit_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(USER_KEY_ENV, "from-env")
        assert resolve_private_key("explicit", USER_KEY_ENV) == "explicit"

    def test_env_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(USER_KEY_ENV, "from-env")
        assert resolve_private_key(None, USER_KEY_ENV) == "from-env"

    def test_missing_names_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(USER_KEY_ENV, raising=False)
        monkeypatch.setattr("aave_aptos.config.load_dotenv", lambda: None)
        with pytest.raises(ConfigError, match=USER_KEY_ENV):
            resolve_private_key("", USER_KEY_ENV)


class TestReserveFlags:
    def test_quoted_false_rejected(self, tmp_path: Path) -> None:
        content = 'reserves:\n  - {symbol: DAI, paused: "false"}\n'
        with pytest.raises(ConfigError, match="paused must be true or false"):
            load_config(_write(tmp_path, content))

    def test_yaml_booleans_accepted(self, tmp_path: Path) -> None:
        content = "reserves:\n  - {symbol: DAI, paused: true, borrowing_enabled: false}\n"
        reserve = load_config(_write(tmp_path, content)).reserves[0]
        assert reserve.paused is True
        assert reserve.borrowing_enabled is False
        assert reserve.freezed is False


class TestNetworkConfig:
    def test_has_no_asset_table(self, sample_yaml_path: Path) -> None:
        network = load_config(sample_yaml_path).network
        assert "assets" not in {f.name for f in dataclasses.fields(network)}
