"""Contract gateway protocol for view calls and transaction submission."""
from typing import Any, Protocol, Sequence

from aptos_sdk.account import Account
from aptos_sdk.account_address import AccountAddress

from ..models import TransactionReceipt


class ContractGateway(Protocol):
    """Abstract interface to a node hosting the protocol's Move modules."""

    def function_id(self, profile: str, function: str) -> str: ...

    async def view(
        self, function: str, arguments: list[Any], type_arguments: Sequence[str] = ()
    ) -> list[Any]: ...

    async def submit_transaction(
        self,
        signer: Account,
        function: str,
        arguments: list[Any],
        arg_types: Sequence[str],
        type_arguments: Sequence[str] = (),
    ) -> TransactionReceipt: ...

    async def fund_account(
        self, address: AccountAddress, amount: int
    ) -> TransactionReceipt | None: ...
