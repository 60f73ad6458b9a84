"""aToken and variable debt token factory calls."""
from __future__ import annotations

from ..codec import first, inner_address, into, to_address, to_int, to_str
from ..models import ScaledBalanceAndSupply
from ..profiles import AAVE_POOL
from .base import BaseClient, entry, view

_A = "a_token_factory"
_V = "variable_debt_token_factory"


class ATokensClient(BaseClient):
    """Interest-bearing aTokens, one per reserve, addressed by metadata."""

    create_token = entry(
        AAVE_POOL,
        f"{_A}::create_token",
        ("u256", "string", "string", "u8", "string", "string", "address", "address"),
    )
    rescue_tokens = entry(AAVE_POOL, f"{_A}::rescue_tokens", ("address", "address", "u256"))

    get_revision = view(AAVE_POOL, f"{_A}::get_revision", (), first(to_int))
    asset_metadata = view(
        AAVE_POOL, f"{_A}::asset_metadata", ("address", "string"), first(inner_address)
    )
    token_address = view(
        AAVE_POOL, f"{_A}::token_address", ("address", "string"), first(to_address)
    )
    get_token_account_address = view(
        AAVE_POOL, f"{_A}::get_token_account_address", ("address",), first(to_address)
    )
    get_reserve_treasury_address = view(
        AAVE_POOL, f"{_A}::get_reserve_treasury_address", ("address",), first(to_address)
    )
    get_underlying_asset_address = view(
        AAVE_POOL, f"{_A}::get_underlying_asset_address", ("address",), first(to_address)
    )
    scaled_balance_of = view(
        AAVE_POOL, f"{_A}::scaled_balance_of", ("address", "address"), first(to_int)
    )
    scaled_total_supply = view(
        AAVE_POOL, f"{_A}::scaled_total_supply", ("address",), first(to_int)
    )
    get_previous_index = view(
        AAVE_POOL, f"{_A}::get_previous_index", ("address", "address"), first(to_int)
    )
    get_scaled_user_balance_and_supply = view(
        AAVE_POOL,
        f"{_A}::get_scaled_user_balance_and_supply",
        ("address", "address"),
        into(ScaledBalanceAndSupply, to_int, to_int),
    )
    name = view(AAVE_POOL, f"{_A}::name", ("address",), first(to_str))
    symbol = view(AAVE_POOL, f"{_A}::symbol", ("address",), first(to_str))
    decimals = view(AAVE_POOL, f"{_A}::decimals", ("address",), first(to_int))


class VariableTokensClient(BaseClient):
    """Variable debt tokens, one per reserve, addressed by metadata."""

    create_token = entry(
        AAVE_POOL,
        f"{_V}::create_token",
        ("u256", "string", "string", "u8", "string", "string", "address"),
    )

    get_revision = view(AAVE_POOL, f"{_V}::get_revision", (), first(to_int))
    asset_metadata = view(
        AAVE_POOL, f"{_V}::asset_metadata", ("address", "string"), first(inner_address)
    )
    token_address = view(
        AAVE_POOL, f"{_V}::token_address", ("address", "string"), first(to_address)
    )
    get_underlying_asset_address = view(
        AAVE_POOL, f"{_V}::get_underlying_asset_address", ("address",), first(to_address)
    )
    scaled_balance_of = view(
        AAVE_POOL, f"{_V}::scaled_balance_of", ("address", "address"), first(to_int)
    )
    scaled_total_supply = view(
        AAVE_POOL, f"{_V}::scaled_total_supply", ("address",), first(to_int)
    )
    get_previous_index = view(
        AAVE_POOL, f"{_V}::get_previous_index", ("address", "address"), first(to_int)
    )
    get_scaled_user_balance_and_supply = view(
        AAVE_POOL,
        f"{_V}::get_scaled_user_balance_and_supply",
        ("address", "address"),
        into(ScaledBalanceAndSupply, to_int, to_int),
    )
    name = view(AAVE_POOL, f"{_V}::name", ("address",), first(to_str))
    symbol = view(AAVE_POOL, f"{_V}::symbol", ("address",), first(to_str))
    decimals = view(AAVE_POOL, f"{_V}::decimals", ("address",), first(to_int))
