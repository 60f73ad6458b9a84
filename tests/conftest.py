"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from aptos_sdk.account import Account

from aave_aptos.config import NetworkConfig
from aave_aptos.models import EModeConfig, ReserveConfig, TransactionReceipt
from aave_aptos.profiles import get_profile
from tests.helpers import POOL_KEY, USER_KEY, ViewRouter, addr


# ---------------------------------------------------------------------------
# Account fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def user_account() -> Account:
    return Account.load_key(USER_KEY)


@pytest.fixture()
def pool_account() -> Account:
    return Account.load_key(POOL_KEY)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def testnet_config() -> NetworkConfig:
    profile = get_profile("testnet")
    return NetworkConfig(
        name="testnet",
        node_url="https://node.example.com/v1",
        faucet_url="https://faucet.example.com",
        timeout=5,
        addresses=dict(profile.addresses),
    )


@pytest.fixture()
def sample_reserve() -> ReserveConfig:
    return ReserveConfig(
        symbol="DAI",
        name="Dai Stablecoin",
        decimals=8,
        max_supply=10**20,
        treasury=addr("0x0"),
        a_token_name="Aave DAI",
        a_token_symbol="aDAI",
        variable_debt_token_name="Aave Variable Debt DAI",
        variable_debt_token_symbol="vDAI",
        optimal_usage_ratio=9 * 10**26,
        base_variable_borrow_rate=0,
        variable_rate_slope1=4 * 10**25,
        variable_rate_slope2=6 * 10**26,
        ltv=7500,
        liquidation_threshold=8000,
        liquidation_bonus=10500,
        reserve_factor=1000,
        borrow_cap=1_000_000,
        supply_cap=2_000_000,
        borrowing_enabled=True,
        flashloan_enabled=True,
        emode_category_id=1,
        debt_ceiling=0,
    )


@pytest.fixture()
def sample_emode() -> EModeConfig:
    return EModeConfig(
        category_id=1,
        ltv=9000,
        liquidation_threshold=9300,
        liquidation_bonus=10200,
        oracle=addr("0x0"),
        label="Stablecoins",
    )


# ---------------------------------------------------------------------------
# Mocked gateway
# ---------------------------------------------------------------------------


@pytest.fixture()
def router() -> ViewRouter:
    return ViewRouter()


@pytest.fixture()
def gateway(router: ViewRouter) -> MagicMock:
    gw = MagicMock()
    gw.function_id = MagicMock(side_effect=lambda profile, function: f"{profile}::{function}")
    gw.view = AsyncMock(side_effect=router.__call__)
    counter = iter(range(1, 10_000))
    gw.submit_transaction = AsyncMock(
        side_effect=lambda *a, **kw: TransactionReceipt(
            hash=f"0x{next(counter):064x}", success=True, vm_status="Executed successfully"
        )
    )
    gw.fund_account = AsyncMock(return_value=None)
    return gw


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    network:
      name: testnet
      timeout: 10
      addresses:
        AAVE_POOL: "0xabc"
    signers:
      pool_private_key: "${TEST_POOL_KEY}"
    emodes:
      - category_id: 1
        ltv: 9000
        liquidation_threshold: 9300
        liquidation_bonus: 10200
        oracle: "0x0"
        label: Stablecoins
    reserves:
      - symbol: DAI
        name: Dai Stablecoin
        decimals: 8
        max_supply: "340282366920938463463374607431768211455"
        optimal_usage_ratio: "900000000000000000000000000"
        ltv: 7500
        liquidation_threshold: 8000
        liquidation_bonus: 10500
        borrowing_enabled: true
        emode_category_id: 1
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
