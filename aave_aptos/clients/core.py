"""User-facing supply, borrow and liquidation calls."""
from __future__ import annotations

from ..codec import into, to_int
from ..models import UserAccountData
from ..profiles import AAVE_POOL, APTOS_FRAMEWORK
from .base import BaseClient, entry, view


class CoreClient(BaseClient):
    """Signs as the bound user account."""

    supply = entry(AAVE_POOL, "supply_logic::supply", ("address", "u256", "address", "u16"))
    withdraw = entry(AAVE_POOL, "supply_logic::withdraw", ("address", "u256", "address"))
    set_user_use_reserve_as_collateral = entry(
        AAVE_POOL, "supply_logic::set_user_use_reserve_as_collateral", ("address", "bool")
    )
    borrow = entry(
        AAVE_POOL, "borrow_logic::borrow", ("address", "u256", "u8", "u16", "address")
    )
    repay = entry(AAVE_POOL, "borrow_logic::repay", ("address", "u256", "u8", "address"))
    repay_with_a_tokens = entry(
        AAVE_POOL, "borrow_logic::repay_with_a_tokens", ("address", "u256", "u8")
    )
    liquidation_call = entry(
        AAVE_POOL,
        "liquidation_logic::liquidation_call",
        ("address", "address", "address", "u256", "bool"),
    )
    get_user_account_data = view(
        AAVE_POOL,
        "user_logic::get_user_account_data",
        ("address",),
        into(UserAccountData, *([to_int] * 6)),
    )

    transfer_coins = entry(APTOS_FRAMEWORK, "aptos_account::transfer", ("address", "u64"))
