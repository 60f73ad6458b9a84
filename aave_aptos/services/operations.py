"""Operator actions behind the CLI sub-commands.

Each coroutine takes the gateway and, where it submits, the signing account.
Amounts are parsed as unsigned integers before anything is sent.
"""
from __future__ import annotations

import logging
from typing import Iterable

from aptos_sdk.account import Account
from aptos_sdk.account_address import AccountAddress

from ..clients import CoreClient, OracleClient, PoolClient, UnderlyingTokensClient
from ..codec import parse_amount, to_account_address
from ..constants import ONE_OCTA, REFERRAL_CODE, InterestRateMode
from ..errors import ConfigError, NotFoundError
from ..interfaces.gateway import ContractGateway
from ..keys import account_from_mnemonic
from ..models import (
    ReserveSnapshot,
    TransactionReceipt,
    UserAccountData,
    UserReserveSnapshot,
)
from ..price_feeds import feed_id_for

logger = logging.getLogger(__name__)


async def resolve_reserve(pool: PoolClient, symbol: str) -> AccountAddress:
    """Return the underlying token address of the reserve listed as ``symbol``."""
    for token in await pool.get_all_reserves_tokens():
        if token.symbol == symbol:
            return token.token_address
    raise NotFoundError(f"No reserve with symbol '{symbol}'")


# ---------------------------------------------------------------------------
# User actions
# ---------------------------------------------------------------------------


async def supply(
    gateway: ContractGateway,
    signer: Account,
    symbol: str,
    amount: str | int,
    on_behalf_of: AccountAddress | str | None = None,
) -> TransactionReceipt:
    value = parse_amount(amount)
    asset = await resolve_reserve(PoolClient(gateway), symbol)
    beneficiary = to_account_address(on_behalf_of) if on_behalf_of else signer.address()
    receipt = await CoreClient(gateway, signer).supply(asset, value, beneficiary, REFERRAL_CODE)
    logger.info("Supplied %d %s for %s, tx %s", value, symbol, beneficiary, receipt.hash)
    return receipt


async def borrow(
    gateway: ContractGateway,
    signer: Account,
    symbol: str,
    amount: str | int,
    on_behalf_of: AccountAddress | str | None = None,
) -> TransactionReceipt:
    value = parse_amount(amount)
    asset = await resolve_reserve(PoolClient(gateway), symbol)
    borrower = to_account_address(on_behalf_of) if on_behalf_of else signer.address()
    receipt = await CoreClient(gateway, signer).borrow(
        asset, value, InterestRateMode.VARIABLE, REFERRAL_CODE, borrower
    )
    logger.info("Borrowed %d %s for %s, tx %s", value, symbol, borrower, receipt.hash)
    return receipt


async def repay(
    gateway: ContractGateway,
    signer: Account,
    symbol: str,
    amount: str | int,
    on_behalf_of: AccountAddress | str | None = None,
) -> TransactionReceipt:
    value = parse_amount(amount)
    asset = await resolve_reserve(PoolClient(gateway), symbol)
    debtor = to_account_address(on_behalf_of) if on_behalf_of else signer.address()
    receipt = await CoreClient(gateway, signer).repay(
        asset, value, InterestRateMode.VARIABLE, debtor
    )
    logger.info("Repaid %d %s for %s, tx %s", value, symbol, debtor, receipt.hash)
    return receipt


async def withdraw(
    gateway: ContractGateway,
    signer: Account,
    symbol: str,
    amount: str | int,
    to: AccountAddress | str | None = None,
) -> TransactionReceipt:
    value = parse_amount(amount)
    asset = await resolve_reserve(PoolClient(gateway), symbol)
    recipient = to_account_address(to) if to else signer.address()
    receipt = await CoreClient(gateway, signer).withdraw(asset, value, recipient)
    logger.info("Withdrew %d %s to %s, tx %s", value, symbol, recipient, receipt.hash)
    return receipt


# ---------------------------------------------------------------------------
# Admin actions
# ---------------------------------------------------------------------------


async def mint_underlyings(
    gateway: ContractGateway,
    signer: Account,
    recipients: Iterable[AccountAddress | str],
    amount: str | int,
    symbols: Iterable[str],
) -> list[TransactionReceipt]:
    """Mint ``amount`` of every listed underlying to every recipient."""
    value = parse_amount(amount)
    tokens = UnderlyingTokensClient(gateway, signer)
    targets = [to_account_address(r) for r in recipients]
    receipts = []
    for symbol in symbols:
        metadata = await tokens.get_metadata_by_symbol(symbol)
        for recipient in targets:
            receipt = await tokens.mint(recipient, value, metadata)
            logger.info("Minted %d %s to %s, tx %s", value, symbol, recipient, receipt.hash)
            receipts.append(receipt)
    return receipts


async def transfer_coins(
    gateway: ContractGateway,
    signer: Account,
    recipients: Iterable[AccountAddress | str],
    amount: str | int,
) -> list[TransactionReceipt]:
    """Transfer ``amount`` octas of APT to each recipient."""
    value = parse_amount(amount)
    core = CoreClient(gateway, signer)
    receipts = []
    for recipient in recipients:
        address = to_account_address(recipient)
        receipt = await core.transfer_coins(address, value)
        logger.info("Transferred %d octas to %s, tx %s", value, address, receipt.hash)
        receipts.append(receipt)
    return receipts


async def fund_derived_signer(
    gateway: ContractGateway, mnemonic: str, index: int, amount: int = ONE_OCTA
) -> Account:
    """Derive the mnemonic account at ``index`` and fund it through the faucet."""
    if not mnemonic:
        raise ConfigError("A mnemonic is required to derive signers")
    account = account_from_mnemonic(mnemonic, index)
    await gateway.fund_account(account.address(), amount)
    logger.info("Funded derived signer #%d at %s", index, account.address())
    return account


async def set_asset_feed_ids(
    gateway: ContractGateway,
    signer: Account,
    symbols: Iterable[str] | None = None,
) -> list[TransactionReceipt]:
    """Register price feeds for the listed reserves, or every reserve when none are given.

    Reserves without a known feed are skipped with a warning.
    """
    wanted = set(symbols) if symbols else None
    oracle = OracleClient(gateway, signer)
    receipts = []
    for token in await PoolClient(gateway).get_all_reserves_tokens():
        if wanted is not None and token.symbol not in wanted:
            continue
        try:
            feed_id = feed_id_for(token.symbol)
        except ConfigError:
            logger.warning("No price feed configured for %s, skipping", token.symbol)
            continue
        receipt = await oracle.set_asset_feed_id(token.token_address, feed_id)
        logger.info("Set price feed for %s, tx %s", token.symbol, receipt.hash)
        receipts.append(receipt)
    return receipts


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


async def get_asset_price(gateway: ContractGateway, asset: AccountAddress | str) -> int:
    return await OracleClient(gateway).get_asset_price(asset)


async def get_asset_price_and_timestamp(
    gateway: ContractGateway, asset: AccountAddress | str
) -> tuple[int, int]:
    return await OracleClient(gateway).get_asset_price_and_timestamp(asset)


async def get_protocol_data(gateway: ContractGateway) -> list[ReserveSnapshot]:
    """Snapshot configuration, caps, flags, balances and price of every reserve."""
    pool = PoolClient(gateway)
    oracle = OracleClient(gateway)
    snapshots = []
    for token in await pool.get_all_reserves_tokens():
        asset = token.token_address
        snapshots.append(
            ReserveSnapshot(
                token=token,
                configuration=await pool.get_reserve_configuration_data(asset),
                caps=await pool.get_reserve_caps(asset),
                paused=await pool.get_paused(asset),
                siloed_borrowing=await pool.get_siloed_borrowing(asset),
                debt_ceiling=await pool.get_debt_ceiling(asset),
                data=await pool.get_reserve_data2(asset),
                price=await oracle.get_asset_price(asset),
            )
        )
    return snapshots


async def get_user_data(
    gateway: ContractGateway, user: AccountAddress | str
) -> tuple[UserAccountData, list[UserReserveSnapshot]]:
    """Return the user's aggregate account data and per-reserve balances."""
    address = to_account_address(user)
    pool = PoolClient(gateway)
    account = await CoreClient(gateway).get_user_account_data(address)
    reserves = []
    for token in await pool.get_all_reserves_tokens():
        data = await pool.get_user_reserve_data(token.token_address, address)
        reserves.append(UserReserveSnapshot(token=token, data=data))
    return account, reserves
