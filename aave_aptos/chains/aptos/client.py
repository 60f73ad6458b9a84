"""Aptos fullnode client for view calls and signed entry-function submission."""
from __future__ import annotations

import asyncio
import json
import logging
import ssl
import time
from typing import Any, Sequence

import aiohttp
import certifi
import httpx
from aptos_sdk.account import Account
from aptos_sdk.account_address import AccountAddress
from aptos_sdk.async_client import ApiError, ClientConfig, FaucetClient, RestClient
from aptos_sdk.transactions import EntryFunction, TransactionPayload
from aptos_sdk.type_tag import StructTag, TypeTag

from ...codec import bcs_arguments, wire_address
from ...config import NetworkConfig
from ...errors import ConfigError, DecodingError, ExecutionError, SubmissionError, ViewError
from ...models import TransactionReceipt

logger = logging.getLogger(__name__)

DEFAULT_MAX_GAS_AMOUNT = 200_000
EXPIRATION_SECS = 60
POLL_INTERVAL_SECS = 1.0
FAUCET_FUNCTION = "faucet::mint"


def _error_message(data: Any) -> str:
    if isinstance(data, dict):
        return str(data.get("message") or data)
    return str(data)


def _receipt(data: Any) -> TransactionReceipt:
    """Build a receipt from a committed transaction's JSON."""
    if not isinstance(data, dict):
        raise DecodingError(f"Expected a transaction object, got {data!r}")
    try:
        return TransactionReceipt(
            hash=str(data["hash"]),
            success=bool(data["success"]),
            vm_status=str(data.get("vm_status", "")),
            version=int(data.get("version", 0)),
            gas_used=int(data.get("gas_used", 0)),
        )
    except KeyError as e:
        raise DecodingError(f"Transaction is missing field {e}") from None
    except (TypeError, ValueError) as e:
        raise DecodingError(f"Malformed transaction {data!r}: {e}") from None


class AptosClient:
    """Aptos fullnode client bound to one deployment profile.

    Views go through a plain JSON request; transactions are built, signed in
    BCS and broadcast with the Aptos SDK. Every call opens its own session
    and failures are never retried.
    """

    def __init__(self, config: NetworkConfig) -> None:
        self.network = config.name
        self.node_url = config.node_url.rstrip("/")
        self.faucet_url = config.faucet_url.rstrip("/")
        self.timeout = config.timeout
        self.addresses = dict(config.addresses)
        self.max_gas_amount = DEFAULT_MAX_GAS_AMOUNT
        self.poll_interval = POLL_INTERVAL_SECS

    def function_id(self, profile: str, function: str) -> str:
        """Resolve ``module::function`` under the address registered as ``profile``."""
        try:
            address = self.addresses[profile]
        except KeyError:
            raise ConfigError(
                f"Address '{profile}' is not defined for network '{self.network}'"
            ) from None
        return f"{wire_address(address)}::{function}"

    def _rest_client(self) -> RestClient:
        client_config = ClientConfig()
        client_config.max_gas_amount = self.max_gas_amount
        client_config.expiration_ttl = EXPIRATION_SECS
        return RestClient(self.node_url, client_config)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    async def view(
        self, function: str, arguments: list[Any], type_arguments: Sequence[str] = ()
    ) -> list[Any]:
        """Execute a view function and return its positional return values."""
        payload = {
            "function": function,
            "type_arguments": list(type_arguments),
            "arguments": arguments,
        }
        logger.debug("view %s %s", function, arguments)
        url = f"{self.node_url}/view"
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    url, json=payload, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    status = response.status
                    data = await response.json(content_type=None)
        except json.JSONDecodeError as e:
            raise DecodingError(f"View {function} returned a non-JSON body: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ViewError(function, f"request failed: {e!r}") from e

        logger.debug("POST %s -> %s", url, status)
        if status >= 400:
            raise ViewError(function, _error_message(data), status)
        if not isinstance(data, list):
            raise DecodingError(f"View {function} returned {data!r}, expected a list")
        return data

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def submit_transaction(
        self,
        signer: Account,
        function: str,
        arguments: list[Any],
        arg_types: Sequence[str],
        type_arguments: Sequence[str] = (),
    ) -> TransactionReceipt:
        """Build, sign and submit an entry-function call, then wait for it to commit.

        ``arguments`` are JSON-wire values as produced by
        ``codec.encode_arguments`` for the Move types ``arg_types``.
        """
        module, name = function.rsplit("::", 1)
        try:
            payload = TransactionPayload(
                EntryFunction.natural(
                    module,
                    name,
                    [TypeTag(StructTag.from_str(t)) for t in type_arguments],
                    bcs_arguments(tuple(arg_types), arguments),
                )
            )
        except (TypeError, ValueError) as e:
            raise SubmissionError(function, f"invalid arguments: {e}") from e

        rest = self._rest_client()
        tx_hash: str | None = None
        try:
            signed = await rest.create_bcs_signed_transaction(signer, payload)
            tx_hash = await rest.submit_bcs_transaction(signed)
            logger.debug("Submitted %s as %s", function, tx_hash)
            return await self._await_commit(rest, tx_hash, function)
        except ApiError as e:
            raise SubmissionError(function, str(e), tx_hash) from e
        except httpx.HTTPError as e:
            raise SubmissionError(function, f"request failed: {e!r}", tx_hash) from e
        finally:
            await rest.close()

    async def _await_commit(
        self, rest: RestClient, tx_hash: str, function: str
    ) -> TransactionReceipt:
        deadline = time.monotonic() + self.timeout
        while await rest.transaction_pending(tx_hash):
            if time.monotonic() >= deadline:
                raise SubmissionError(
                    function, f"not committed within {self.timeout}s", tx_hash
                )
            await asyncio.sleep(self.poll_interval)

        receipt = _receipt(await rest.transaction_by_hash(tx_hash))
        if not receipt.success:
            raise ExecutionError(receipt.hash, receipt.vm_status)
        return receipt

    async def wait_for_transaction(
        self, tx_hash: str, function: str = "transaction"
    ) -> TransactionReceipt:
        """Block until ``tx_hash`` is committed; raise ``ExecutionError`` if it aborted."""
        rest = self._rest_client()
        try:
            return await self._await_commit(rest, tx_hash, function)
        except ApiError as e:
            raise SubmissionError(function, str(e), tx_hash) from e
        except httpx.HTTPError as e:
            raise SubmissionError(function, f"request failed: {e!r}", tx_hash) from e
        finally:
            await rest.close()

    # ------------------------------------------------------------------
    # Faucet
    # ------------------------------------------------------------------

    async def fund_account(
        self, address: AccountAddress, amount: int
    ) -> TransactionReceipt | None:
        """Mint ``amount`` octas to ``address`` through the network faucet."""
        if not self.faucet_url:
            raise ConfigError(f"Network '{self.network}' has no faucet")
        rest = self._rest_client()
        tx_hash: str | None = None
        try:
            tx_hash = await FaucetClient(self.faucet_url, rest).fund_account(address, amount)
            receipt = None
            if tx_hash:
                receipt = await self._await_commit(rest, tx_hash, FAUCET_FUNCTION)
        except ApiError as e:
            raise SubmissionError(FAUCET_FUNCTION, str(e), tx_hash) from e
        except httpx.HTTPError as e:
            raise SubmissionError(FAUCET_FUNCTION, f"request failed: {e!r}", tx_hash) from e
        finally:
            await rest.close()
        logger.info("Funded %s with %d octas", address, amount)
        return receipt
