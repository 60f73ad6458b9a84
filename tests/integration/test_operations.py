"""Integration tests for the operator actions behind the CLI."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from aptos_sdk.account import Account

from aave_aptos.errors import ConfigError, NotFoundError
from aave_aptos.keys import account_from_mnemonic
from aave_aptos.models import UserAccountData
from aave_aptos.services import operations
from tests.helpers import TEST_MNEMONIC, ViewRouter, addr, submitted, wire

DAI = addr("0xda1")
USDC = addr("0xc0")

RESERVES = [[
    {"symbol": "DAI", "token_address": wire(DAI)},
    {"symbol": "USDC", "token_address": wire(USDC)},
]]


@pytest.fixture()
def listed(router: ViewRouter) -> ViewRouter:
    router.responses["pool_data_provider::get_all_reserves_tokens"] = RESERVES
    return router


class TestUserActions:
    @pytest.mark.asyncio
    async def test_supply_on_behalf(
        self, gateway: MagicMock, listed: ViewRouter, user_account: Account
    ) -> None:
        await operations.supply(gateway, user_account, "DAI", "100", on_behalf_of="0xabc")

        assert submitted(gateway) == [
            ("supply_logic::supply", [wire(DAI), "100", wire("0xabc"), 0])
        ]

    @pytest.mark.asyncio
    async def test_supply_defaults_to_signer(
        self, gateway: MagicMock, listed: ViewRouter, user_account: Account
    ) -> None:
        await operations.supply(gateway, user_account, "USDC", 5)

        _, args = submitted(gateway)[0]
        assert args == [wire(USDC), "5", wire(user_account.address()), 0]

    @pytest.mark.asyncio
    async def test_unknown_symbol(
        self, gateway: MagicMock, listed: ViewRouter, user_account: Account
    ) -> None:
        with pytest.raises(NotFoundError, match="XYZ"):
            await operations.supply(gateway, user_account, "XYZ", "1")
        gateway.submit_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_amount_rejected_before_any_call(
        self, gateway: MagicMock, listed: ViewRouter, user_account: Account
    ) -> None:
        with pytest.raises(ValueError):
            await operations.borrow(gateway, user_account, "DAI", "1.5")
        assert listed.calls == []

    @pytest.mark.asyncio
    async def test_borrow_uses_variable_mode(
        self, gateway: MagicMock, listed: ViewRouter, user_account: Account
    ) -> None:
        await operations.borrow(gateway, user_account, "DAI", "7")

        me = wire(user_account.address())
        assert submitted(gateway) == [("borrow_logic::borrow", [wire(DAI), "7", 2, 0, me])]

    @pytest.mark.asyncio
    async def test_repay_uses_variable_mode(
        self, gateway: MagicMock, listed: ViewRouter, user_account: Account
    ) -> None:
        await operations.repay(gateway, user_account, "DAI", "7")

        me = wire(user_account.address())
        assert submitted(gateway) == [("borrow_logic::repay", [wire(DAI), "7", 2, me])]

    @pytest.mark.asyncio
    async def test_withdraw_to(
        self, gateway: MagicMock, listed: ViewRouter, user_account: Account
    ) -> None:
        await operations.withdraw(gateway, user_account, "USDC", "3", to="0xbeef")

        assert submitted(gateway) == [
            ("supply_logic::withdraw", [wire(USDC), "3", wire("0xbeef")])
        ]


class TestAdminActions:
    @pytest.mark.asyncio
    async def test_mint_every_symbol_to_every_recipient(
        self, gateway: MagicMock, router: ViewRouter, user_account: Account
    ) -> None:
        metadata = {"DAI": wire(DAI), "USDC": wire(USDC)}
        router.responses["mock_underlying_token_factory::get_metadata_by_symbol"] = (
            lambda args: [{"inner": metadata[args[0]]}]
        )

        receipts = await operations.mint_underlyings(
            gateway, user_account, ["0x1", "0x2"], "10", ["DAI", "USDC"]
        )

        assert len(receipts) == 4
        assert [args for _, args in submitted(gateway)] == [
            [wire("0x1"), "10", wire(DAI)],
            [wire("0x2"), "10", wire(DAI)],
            [wire("0x1"), "10", wire(USDC)],
            [wire("0x2"), "10", wire(USDC)],
        ]

    @pytest.mark.asyncio
    async def test_transfer_coins(self, gateway: MagicMock, user_account: Account) -> None:
        await operations.transfer_coins(gateway, user_account, ["0x1", "0x2"], 100)

        assert submitted(gateway) == [
            ("aptos_account::transfer", [wire("0x1"), "100"]),
            ("aptos_account::transfer", [wire("0x2"), "100"]),
        ]

    @pytest.mark.asyncio
    async def test_set_feed_ids_skips_unknown_symbols(
        self, gateway: MagicMock, router: ViewRouter, user_account: Account
    ) -> None:
        router.responses["pool_data_provider::get_all_reserves_tokens"] = [[
            {"symbol": "DAI", "token_address": wire(DAI)},
            {"symbol": "XYZ", "token_address": "0xf00"},
        ]]

        receipts = await operations.set_asset_feed_ids(gateway, user_account)

        assert len(receipts) == 1
        assert [name for name, _ in submitted(gateway)] == ["oracle::set_asset_feed_id"]

    @pytest.mark.asyncio
    async def test_set_feed_ids_filters_symbols(
        self, gateway: MagicMock, listed: ViewRouter, user_account: Account
    ) -> None:
        await operations.set_asset_feed_ids(gateway, user_account, ["USDC"])

        (_, args), = submitted(gateway)
        assert args[0] == wire(USDC)

    @pytest.mark.asyncio
    async def test_fund_derived_signer(self, gateway: MagicMock) -> None:
        account = await operations.fund_derived_signer(gateway, TEST_MNEMONIC, 2)

        assert account.address() == account_from_mnemonic(TEST_MNEMONIC, 2).address()
        gateway.fund_account.assert_awaited_once_with(account.address(), 100_000_000)

    @pytest.mark.asyncio
    async def test_fund_without_mnemonic(self, gateway: MagicMock) -> None:
        with pytest.raises(ConfigError):
            await operations.fund_derived_signer(gateway, "", 0)
        gateway.fund_account.assert_not_awaited()


class TestQueries:
    @pytest.mark.asyncio
    async def test_price_and_timestamp_is_one_read(
        self, gateway: MagicMock, router: ViewRouter
    ) -> None:
        router.responses["oracle::get_asset_price_and_timestamp"] = ["150", "1700000000"]

        first = await operations.get_asset_price_and_timestamp(gateway, wire(DAI))
        second = await operations.get_asset_price_and_timestamp(gateway, wire(DAI))

        assert first == second == (150, 1700000000)
        assert len(router.called("oracle::get_asset_price_and_timestamp")) == 2

    @pytest.mark.asyncio
    async def test_protocol_data(self, gateway: MagicMock, listed: ViewRouter) -> None:
        listed.responses.update({
            "pool_data_provider::get_reserve_configuration_data": [
                "8", "7500", "8000", "10500", "1000", True, True, True, False
            ],
            "pool_data_provider::get_reserve_caps": ["100", "200"],
            "pool_data_provider::get_paused": [False],
            "pool_data_provider::get_siloed_borrowing": [False],
            "pool_data_provider::get_debt_ceiling": ["0"],
            "pool_data_provider::get_reserve_data": ["0"] * 9,
            "oracle::get_asset_price": ["42"],
        })

        snapshots = await operations.get_protocol_data(gateway)

        assert [s.token.symbol for s in snapshots] == ["DAI", "USDC"]
        assert snapshots[0].configuration.ltv == 7500
        assert snapshots[0].caps.supply_cap == 200
        assert snapshots[1].price == 42

    @pytest.mark.asyncio
    async def test_user_data(self, gateway: MagicMock, listed: ViewRouter) -> None:
        listed.responses.update({
            "user_logic::get_user_account_data": ["1", "2", "3", "4", "5", "6"],
            "pool_data_provider::get_user_reserve_data": ["9", "0", "0", "0", True],
        })

        account, reserves = await operations.get_user_data(gateway, "0xbeef")

        assert account == UserAccountData(1, 2, 3, 4, 5, 6)
        assert [r.data.current_a_token_balance for r in reserves] == [9, 9]
        assert listed.called("user_logic::get_user_account_data") == [[wire("0xbeef")]]
