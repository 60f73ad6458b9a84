"""Test doubles shared by the integration tests."""
from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

from aptos_sdk.account_address import AccountAddress

from aave_aptos.codec import to_account_address, wire_address

POOL_KEY = "0x" + "11" * 32
ORACLE_KEY = "0x" + "22" * 32
RATE_KEY = "0x" + "33" * 32
TOKENS_KEY = "0x" + "44" * 32
USER_KEY = "0x" + "55" * 32

# 12-word BIP-39 test phrase
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)


def addr(short: str) -> AccountAddress:
    return to_account_address(short)


def wire(short: str | AccountAddress) -> str:
    """Long-form ``0x`` hex as the node expects it in arguments."""
    return wire_address(short)


class ViewRouter:
    """Canned view responses keyed by ``module::function``.

    A value may be a list (returned as-is), an exception (raised) or a
    callable taking the encoded arguments.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, list[Any]]] = []

    async def __call__(self, function: str, arguments: list[Any], type_arguments=()) -> Any:
        name = function.split("::", 1)[1]
        self.calls.append((name, arguments))
        response = self.responses[name]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(arguments)
        return response

    def called(self, name: str) -> list[list[Any]]:
        return [args for fn, args in self.calls if fn == name]


def submitted(gateway: MagicMock) -> list[tuple[str, list[Any]]]:
    """``(module::function, arguments)`` of every submitted transaction, in order."""
    return [
        (c.args[1].split("::", 1)[1], c.args[2])
        for c in gateway.submit_transaction.await_args_list
    ]
