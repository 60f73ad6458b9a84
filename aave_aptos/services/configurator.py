"""Protocol bootstrap: drives a deployment to a declared reserve and eMode state."""
from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, Sequence

from aptos_sdk.account import Account
from aptos_sdk.account_address import AccountAddress

from ..clients import OracleClient, PoolClient, RateClient, UnderlyingTokensClient
from ..codec import wire_address
from ..constants import ONE_OCTA
from ..errors import ConfigError, NotFoundError
from ..interfaces.gateway import ContractGateway
from ..keys import load_account
from ..models import EModeConfig, ReserveConfig, TransactionReceipt
from ..price_feeds import feed_id_for
from .operations import fund_derived_signer

logger = logging.getLogger(__name__)


def _load_signer(private_key: str, role: str) -> Account:
    if not private_key:
        raise ConfigError(f"No private key given for the {role} signer")
    try:
        return load_account(private_key)
    except ValueError as e:
        raise ConfigError(f"Invalid {role} private key: {e}") from None


def _require_address(reserve: ReserveConfig) -> AccountAddress:
    if reserve.address is None:
        raise ConfigError(
            f"Reserve '{reserve.symbol}' has no token address; run try_create_tokens first"
        )
    return reserve.address


class ProtocolConfigurator:
    """Runs the ordered configuration steps of ``setup_protocol``.

    Every step is sequential and stops at the first error. Nothing is rolled
    back: steps that already committed stay committed, and a rerun converges
    because token creation, reserve initialisation and debt ceilings are
    checked against the remote first.
    """

    def __init__(
        self,
        gateway: ContractGateway,
        pool_private_key: str,
        oracle_private_key: str,
        rate_private_key: str,
        underlying_tokens_private_key: str,
        mnemonic: str | None = None,
    ) -> None:
        self._gateway = gateway
        self._mnemonic = mnemonic
        self.pool = PoolClient(gateway, _load_signer(pool_private_key, "pool admin"))
        self.oracle = OracleClient(gateway, _load_signer(oracle_private_key, "oracle admin"))
        self.rate = RateClient(gateway, _load_signer(rate_private_key, "rate admin"))
        self.underlying_tokens = UnderlyingTokensClient(
            gateway, _load_signer(underlying_tokens_private_key, "underlying tokens admin")
        )

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    async def setup_protocol(
        self, reserves: Sequence[ReserveConfig], emodes: Sequence[EModeConfig]
    ) -> list[ReserveConfig]:
        """Apply every configuration step in order and return the resolved reserves."""
        logger.info(
            "Setting up protocol: %d reserve(s), %d eMode(s)", len(reserves), len(emodes)
        )
        resolved = await self.try_create_tokens(reserves)
        await self.set_assets_price(resolved)
        await self.set_emodes(emodes)
        await self.set_reserves_interest_rate_strategy(resolved)
        await self.try_init_reserves(resolved)
        await self.config_reserves(resolved)
        await self.set_reserves_emode_category(resolved)
        await self.set_reserves_borrowable_in_isolation(resolved)
        await self.set_reserves_active(resolved)
        await self.set_reserves_paused(resolved)
        await self.set_reserves_freezed(resolved)
        await self.set_reserves_debt_ceiling(resolved)
        logger.info("Protocol setup complete")
        return resolved

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def try_create_tokens(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[ReserveConfig]:
        """Resolve each reserve's underlying token, creating the missing ones.

        An existing token wins over the declared values: ``name``,
        ``decimals`` and ``max_supply`` are read back from the remote.
        """
        resolved: list[ReserveConfig] = []
        for reserve in reserves:
            try:
                address = await self.underlying_tokens.get_metadata_by_symbol(reserve.symbol)
            except NotFoundError:
                receipt = await self.underlying_tokens.create_token(
                    reserve.max_supply,
                    reserve.name,
                    reserve.symbol,
                    reserve.decimals,
                    reserve.icon_uri,
                    reserve.project_uri,
                )
                logger.info("Created underlying token %s, tx %s", reserve.symbol, receipt.hash)
                address = await self.underlying_tokens.get_metadata_by_symbol(reserve.symbol)
                resolved.append(dataclasses.replace(reserve, address=address))
                continue

            name = await self.underlying_tokens.name(address)
            decimals = await self.underlying_tokens.decimals(address)
            maximum = await self.underlying_tokens.maximum(address)
            backfilled = dataclasses.replace(
                reserve,
                address=address,
                name=name,
                decimals=decimals,
                max_supply=reserve.max_supply if maximum is None else maximum,
            )
            for field in ("name", "decimals", "max_supply"):
                declared, remote = getattr(reserve, field), getattr(backfilled, field)
                if declared != remote:
                    logger.warning(
                        "Token %s already exists: %s %r overrides declared %r",
                        reserve.symbol, field, remote, declared,
                    )
            logger.info("Underlying token %s exists at %s", reserve.symbol, address)
            resolved.append(backfilled)
        return resolved

    async def set_assets_price(
        self, reserves: Sequence[ReserveConfig]
    ) -> list[TransactionReceipt]:
        """Register the price feed of every reserve with the oracle."""
        # every feed is resolved before the first submission
        feeds = [(_require_address(r), feed_id_for(r.symbol), r.symbol) for r in reserves]
        receipts = []
        for address, feed_id, symbol in feeds:
            receipt = await self.oracle.set_asset_feed_id(address, feed_id)
            logger.info("Set price feed for %s, tx %s", symbol, receipt.hash)
            receipts.append(receipt)
        return receipts

    async def set_emodes(self, emodes: Iterable[EModeConfig]) -> list[TransactionReceipt]:
        receipts = []
        for emode in emodes:
            receipt = await self.pool.set_emode_category(
                emode.category_id,
                emode.ltv,
                emode.liquidation_threshold,
                emode.liquidation_bonus,
                emode.oracle,
                emode.label,
            )
            logger.info("Set eMode category %d (%s), tx %s", emode.category_id, emode.label, receipt.hash)
            receipts.append(receipt)
        return receipts

    async def set_reserves_interest_rate_strategy(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[TransactionReceipt]:
        receipts = []
        for reserve in reserves:
            receipt = await self.rate.set_reserve_interest_rate_strategy(
                _require_address(reserve),
                reserve.optimal_usage_ratio,
                reserve.base_variable_borrow_rate,
                reserve.variable_rate_slope1,
                reserve.variable_rate_slope2,
            )
            logger.info("Set interest rate strategy for %s, tx %s", reserve.symbol, receipt.hash)
            receipts.append(receipt)
        return receipts

    async def try_init_reserves(
        self, reserves: Sequence[ReserveConfig]
    ) -> TransactionReceipt | None:
        """Initialise, in a single transaction, the reserves the pool does not list yet."""
        existing = {wire_address(a) for a in await self.pool.get_reserves_list()}
        missing: list[ReserveConfig] = []
        for reserve in reserves:
            if wire_address(_require_address(reserve)) in existing:
                logger.warning("Reserve %s already initialised, skipping", reserve.symbol)
            else:
                missing.append(reserve)

        if not missing:
            logger.info("All reserves already initialised")
            return None

        receipt = await self.pool.init_reserves(
            [r.address for r in missing],
            [r.treasury for r in missing],
            [r.a_token_name for r in missing],
            [r.a_token_symbol for r in missing],
            [r.variable_debt_token_name for r in missing],
            [r.variable_debt_token_symbol for r in missing],
        )
        logger.info(
            "Initialised reserves %s, tx %s",
            ", ".join(r.symbol for r in missing), receipt.hash,
        )
        return receipt

    async def config_reserves(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[TransactionReceipt]:
        """Collateral parameters, reserve factor, caps and borrowing/flashloan flags."""
        receipts = []
        for reserve in reserves:
            address = _require_address(reserve)
            calls = (
                ("collateral", self.pool.configure_reserve_as_collateral, (
                    reserve.ltv, reserve.liquidation_threshold, reserve.liquidation_bonus,
                )),
                ("reserve factor", self.pool.set_reserve_factor, (reserve.reserve_factor,)),
                ("borrow cap", self.pool.set_borrow_cap, (reserve.borrow_cap,)),
                ("supply cap", self.pool.set_supply_cap, (reserve.supply_cap,)),
                ("borrowing", self.pool.set_reserve_borrowing, (reserve.borrowing_enabled,)),
                ("flash loaning", self.pool.set_reserve_flash_loaning, (reserve.flashloan_enabled,)),
            )
            for label, submit, args in calls:
                receipt = await submit(address, *args)
                logger.info("Configured %s %s, tx %s", reserve.symbol, label, receipt.hash)
                receipts.append(receipt)
        return receipts

    async def set_reserves_emode_category(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[TransactionReceipt]:
        receipts = []
        for reserve in reserves:
            receipt = await self.pool.set_asset_emode_category(
                _require_address(reserve), reserve.emode_category_id
            )
            logger.info(
                "Set %s eMode category %d, tx %s",
                reserve.symbol, reserve.emode_category_id, receipt.hash,
            )
            receipts.append(receipt)
        return receipts

    async def set_reserves_borrowable_in_isolation(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[TransactionReceipt]:
        receipts = []
        for reserve in reserves:
            receipt = await self.pool.set_borrowable_in_isolation(
                _require_address(reserve), reserve.borrowable_in_isolation
            )
            logger.info(
                "Set %s borrowable in isolation=%s, tx %s",
                reserve.symbol, reserve.borrowable_in_isolation, receipt.hash,
            )
            receipts.append(receipt)
        return receipts

    async def set_reserves_active(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[TransactionReceipt]:
        receipts = []
        for reserve in reserves:
            receipt = await self.pool.set_reserve_active(_require_address(reserve), reserve.active)
            logger.info("Set %s active=%s, tx %s", reserve.symbol, reserve.active, receipt.hash)
            receipts.append(receipt)
        return receipts

    async def set_reserves_paused(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[TransactionReceipt]:
        receipts = []
        for reserve in reserves:
            receipt = await self.pool.set_reserve_pause(_require_address(reserve), reserve.paused)
            logger.info("Set %s paused=%s, tx %s", reserve.symbol, reserve.paused, receipt.hash)
            receipts.append(receipt)
        return receipts

    async def set_reserves_freezed(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[TransactionReceipt]:
        receipts = []
        for reserve in reserves:
            receipt = await self.pool.set_reserve_freeze(_require_address(reserve), reserve.freezed)
            logger.info("Set %s frozen=%s, tx %s", reserve.symbol, reserve.freezed, receipt.hash)
            receipts.append(receipt)
        return receipts

    async def set_reserves_debt_ceiling(
        self, reserves: Iterable[ReserveConfig]
    ) -> list[TransactionReceipt]:
        """Submit a debt ceiling only where the remote value differs."""
        receipts = []
        for reserve in reserves:
            address = _require_address(reserve)
            current = await self.pool.get_debt_ceiling(address)
            if current == reserve.debt_ceiling:
                logger.info("Debt ceiling of %s already %d", reserve.symbol, current)
                continue
            receipt = await self.pool.set_debt_ceiling(address, reserve.debt_ceiling)
            logger.info(
                "Set %s debt ceiling %d -> %d, tx %s",
                reserve.symbol, current, reserve.debt_ceiling, receipt.hash,
            )
            receipts.append(receipt)
        return receipts

    # ------------------------------------------------------------------
    # Test signers
    # ------------------------------------------------------------------

    async def generate_and_fund_signer(self, index: int) -> Account:
        """Derive the mnemonic account at ``index`` and fund it with one APT."""
        return await fund_derived_signer(self._gateway, self._mnemonic or "", index, ONE_OCTA)
