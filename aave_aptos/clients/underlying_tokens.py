"""Mock underlying token factory calls (test deployments)."""
from __future__ import annotations

from typing import Any

from aptos_sdk.account_address import AccountAddress

from ..codec import first, inner_address, option, raw, to_address, to_int, to_str
from ..errors import NotFoundError, ViewError
from ..profiles import AAVE_POOL
from .base import BaseClient, ContractFunction, entry, view

_MODULE = "mock_underlying_token_factory"


def _optional_amount(value: Any) -> int | None:
    """Supply figures come back either bare or wrapped in a Move ``Option``."""
    if isinstance(value, dict):
        return option(to_int)(value)
    return to_int(value)


class UnderlyingTokensClient(BaseClient):
    """Creates, mints and inspects the mock underlying fungible assets."""

    create_token = entry(
        AAVE_POOL,
        f"{_MODULE}::create_token",
        ("u128", "string", "string", "u8", "string", "string"),
    )
    mint = entry(AAVE_POOL, f"{_MODULE}::mint", ("address", "u64", "address"))

    get_token_account_address = view(
        AAVE_POOL, f"{_MODULE}::get_token_account_address", (), first(to_address)
    )
    supply = view(AAVE_POOL, f"{_MODULE}::supply", ("address",), first(_optional_amount))
    maximum = view(AAVE_POOL, f"{_MODULE}::maximum", ("address",), first(_optional_amount))
    name = view(AAVE_POOL, f"{_MODULE}::name", ("address",), first(to_str))
    symbol = view(AAVE_POOL, f"{_MODULE}::symbol", ("address",), first(to_str))
    decimals = view(AAVE_POOL, f"{_MODULE}::decimals", ("address",), first(to_int))
    balance_of = view(AAVE_POOL, f"{_MODULE}::balance_of", ("address", "address"), first(to_int))
    token_address = view(AAVE_POOL, f"{_MODULE}::token_address", ("string",), first(to_address))

    async def get_metadata_by_symbol(self, symbol: str) -> AccountAddress:
        """Return the metadata address of the token registered as ``symbol``.

        Raises:
            NotFoundError: the factory has no token under ``symbol``.
        """
        fn = ContractFunction(AAVE_POOL, f"{_MODULE}::get_metadata_by_symbol", ("string",))
        try:
            values = await self.call_view(fn, symbol)
        except ViewError as e:
            # 4xx: the factory aborted on an unknown symbol
            if e.status is not None and 400 <= e.status < 500:
                raise NotFoundError(f"No underlying token with symbol '{symbol}'") from e
            raise

        value = first(raw)(values)
        if isinstance(value, dict) and "vec" in value:
            value = option(raw)(value)
            if value is None:
                raise NotFoundError(f"No underlying token with symbol '{symbol}'")
        return inner_address(value)
