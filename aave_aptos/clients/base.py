"""Table-driven building blocks shared by every resource client.

A client method is declared as one row: the address key of the deployment,
the ``module::function`` name, the Move types of its parameters and, for
views, the decoder applied to the returned values::

    get_reserves_count = view(AAVE_POOL, "pool::get_reserves_count", (), first(to_int))

``view`` produces a coroutine method returning the decoded value, ``entry``
one that signs with the client's bound account and returns the receipt.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Coroutine

from aptos_sdk.account import Account

from .. import codec
from ..codec import Decoder
from ..errors import ConfigError
from ..interfaces.gateway import ContractGateway
from ..models import TransactionReceipt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractFunction:
    """Declarative reference to one remote Move function."""

    profile: str
    name: str
    arg_types: tuple[str, ...] = ()
    decoder: Decoder = codec.raw
    type_arguments: tuple[str, ...] = ()


class BaseClient:
    """Binds a gateway and an optional signer; stateless between calls."""

    def __init__(self, gateway: ContractGateway, signer: Account | None = None) -> None:
        self._gateway = gateway
        self._signer = signer

    @property
    def gateway(self) -> ContractGateway:
        return self._gateway

    @property
    def signer(self) -> Account:
        if self._signer is None:
            raise ConfigError(f"{type(self).__name__} has no signer bound")
        return self._signer

    async def call_view(self, fn: ContractFunction, *args: Any) -> Any:
        function = self._gateway.function_id(fn.profile, fn.name)
        arguments = codec.encode_arguments(fn.arg_types, args)
        values = await self._gateway.view(function, arguments, fn.type_arguments)
        return fn.decoder(values)

    async def send(self, fn: ContractFunction, *args: Any) -> TransactionReceipt:
        signer = self.signer
        function = self._gateway.function_id(fn.profile, fn.name)
        arguments = codec.encode_arguments(fn.arg_types, args)
        receipt = await self._gateway.submit_transaction(
            signer, function, arguments, fn.arg_types, fn.type_arguments
        )
        logger.debug("%s committed in %s", fn.name, receipt.hash)
        return receipt


def _describe(kind: str, fn: ContractFunction) -> str:
    return f"{kind} ``{fn.name}({', '.join(fn.arg_types)})``."


def view(
    profile: str,
    name: str,
    arg_types: tuple[str, ...] = (),
    decoder: Decoder = codec.raw,
) -> Callable[..., Coroutine[Any, Any, Any]]:
    """Declare a client method calling the view function ``name``."""
    fn = ContractFunction(profile, name, tuple(arg_types), decoder)

    async def method(self: BaseClient, *args: Any) -> Any:
        return await self.call_view(fn, *args)

    method.__name__ = name.rsplit("::", 1)[-1]
    method.__doc__ = _describe("View", fn)
    method.function = fn  # type: ignore[attr-defined]
    return method


def entry(
    profile: str, name: str, arg_types: tuple[str, ...] = ()
) -> Callable[..., Coroutine[Any, Any, TransactionReceipt]]:
    """Declare a client method submitting the entry function ``name``."""
    fn = ContractFunction(profile, name, tuple(arg_types))

    async def method(self: BaseClient, *args: Any) -> TransactionReceipt:
        return await self.send(fn, *args)

    method.__name__ = name.rsplit("::", 1)[-1]
    method.__doc__ = _describe("Entry", fn)
    method.function = fn  # type: ignore[attr-defined]
    return method
