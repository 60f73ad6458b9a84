"""Rewards controller, emission manager and transfer strategy calls."""
from __future__ import annotations

import logging
from typing import Sequence

from aptos_sdk.account_address import AccountAddress

from ..codec import (
    as_tuple,
    first,
    inner_address,
    struct,
    to_account_address,
    to_address,
    to_int,
    vector,
)
from ..errors import ConfigError
from ..models import AssetRewardData, PullRewardsTransferStrategy, TransactionReceipt
from ..profiles import AAVE_POOL
from .base import BaseClient, entry, view

logger = logging.getLogger(__name__)

_RC = "rewards_controller"
_EM = "emission_manager"
_TS = "transfer_strategy"

_transfer_strategy = first(
    struct(
        PullRewardsTransferStrategy,
        rewards_admin=("rewards_admin", to_address),
        incentives_controller=("incentives_controller", to_address),
    )
)


class RewardsControllerClient(BaseClient):
    """Reads of the rewards controller.

    Every per-asset view takes the controller's object handle as its last
    argument; ``rewards_controller_object`` resolves it.
    """

    rewards_controller_address = view(
        AAVE_POOL, f"{_RC}::rewards_controller_address", (), first(to_address)
    )
    rewards_controller_object = view(
        AAVE_POOL, f"{_RC}::rewards_controller_object", (), first(inner_address)
    )
    get_claimer = view(AAVE_POOL, f"{_RC}::get_claimer", ("address", "address"), first(to_address))
    get_reward_oracle = view(
        AAVE_POOL, f"{_RC}::get_reward_oracle", ("address", "address"), first(to_address)
    )
    get_pull_rewards_transfer_strategy = view(
        AAVE_POOL,
        f"{_RC}::get_pull_rewards_transfer_strategy",
        ("address", "address"),
        _transfer_strategy,
    )
    # (index, emission_per_second, last_update_timestamp, distribution_end)
    get_rewards_data = view(
        AAVE_POOL,
        f"{_RC}::get_rewards_data",
        ("address", "address", "address"),
        as_tuple(to_int, to_int, to_int, to_int),
    )
    # (old index, new index)
    get_asset_index = view(
        AAVE_POOL,
        f"{_RC}::get_asset_index",
        ("address", "address", "address"),
        as_tuple(to_int, to_int),
    )
    get_distribution_end = view(
        AAVE_POOL,
        f"{_RC}::get_distribution_end",
        ("address", "address", "address"),
        first(to_int),
    )
    get_rewards_by_asset = view(
        AAVE_POOL,
        f"{_RC}::get_rewards_by_asset",
        ("address", "address"),
        first(vector(to_address)),
    )
    get_rewards_list = view(
        AAVE_POOL, f"{_RC}::get_rewards_list", ("address",), first(vector(to_address))
    )
    get_user_asset_index = view(
        AAVE_POOL,
        f"{_RC}::get_user_asset_index",
        ("address", "address", "address", "address"),
        first(to_int),
    )
    get_user_accrued_rewards = view(
        AAVE_POOL,
        f"{_RC}::get_user_accrued_rewards",
        ("address", "address", "address"),
        first(to_int),
    )
    get_user_rewards = view(
        AAVE_POOL,
        f"{_RC}::get_user_rewards",
        ("vector<address>", "address", "address", "address"),
        first(to_int),
    )
    # (reward tokens, unclaimed amounts), index-aligned
    get_all_user_rewards = view(
        AAVE_POOL,
        f"{_RC}::get_all_user_rewards",
        ("vector<address>", "address", "address"),
        as_tuple(vector(to_address), vector(to_int)),
    )
    get_asset_decimals = view(
        AAVE_POOL, f"{_RC}::get_asset_decimals", ("address", "address"), first(to_int)
    )

    async def get_asset_reward_data(
        self, asset: AccountAddress | str, reward: AccountAddress | str
    ) -> AssetRewardData:
        """Read the emission state of ``reward`` on ``asset``.

        The controller is only exposed as an object handle: it is resolved
        first, then each field is queried with it. The value is built once
        every query has returned.
        """
        controller = await self.rewards_controller_object()
        logger.debug("Reading rewards of %s through controller %s", asset, controller)
        index, emission_per_second, last_update, distribution_end = (
            await self.get_rewards_data(asset, reward, controller)
        )
        decimals = await self.get_asset_decimals(asset, controller)
        return AssetRewardData(
            asset=to_account_address(asset),
            reward=to_account_address(reward),
            index=index,
            emission_per_second=emission_per_second,
            last_update_timestamp=last_update,
            distribution_end=distribution_end,
            asset_decimals=decimals,
        )


class EmissionManagerClient(BaseClient):
    """Reward emission administration and claims through ``emission_manager``."""

    emission_manager_address = view(
        AAVE_POOL, f"{_EM}::emission_manager_address", (), first(to_address)
    )
    emission_manager_object = view(
        AAVE_POOL, f"{_EM}::emission_manager_object", (), first(inner_address)
    )
    get_emission_admin = view(
        AAVE_POOL, f"{_EM}::get_emission_admin", ("address",), first(to_address)
    )
    get_rewards_controller = view(
        AAVE_POOL, f"{_EM}::get_rewards_controller", (), first(to_address)
    )

    _configure_assets = entry(
        AAVE_POOL,
        f"{_EM}::configure_assets",
        (
            "vector<u128>",
            "vector<u128>",
            "vector<u32>",
            "vector<address>",
            "vector<address>",
            "vector<address>",
        ),
    )
    set_pull_rewards_transfer_strategy = entry(
        AAVE_POOL, f"{_EM}::set_pull_rewards_transfer_strategy", ("address", "address")
    )
    set_distribution_end = entry(
        AAVE_POOL, f"{_EM}::set_distribution_end", ("address", "address", "u32")
    )
    set_emission_per_second = entry(
        AAVE_POOL,
        f"{_EM}::set_emission_per_second",
        ("address", "vector<address>", "vector<u128>"),
    )
    set_claimer = entry(AAVE_POOL, f"{_EM}::set_claimer", ("address", "address"))
    set_emission_admin = entry(AAVE_POOL, f"{_EM}::set_emission_admin", ("address", "address"))
    set_rewards_controller = entry(AAVE_POOL, f"{_EM}::set_rewards_controller", ("address",))

    claim_rewards = entry(
        AAVE_POOL,
        f"{_EM}::claim_rewards",
        ("vector<address>", "u256", "address", "address"),
    )
    claim_rewards_on_behalf = entry(
        AAVE_POOL,
        f"{_EM}::claim_rewards_on_behalf",
        ("vector<address>", "u256", "address", "address", "address"),
    )
    claim_rewards_to_self = entry(
        AAVE_POOL, f"{_EM}::claim_rewards_to_self", ("vector<address>", "u256", "address")
    )
    claim_all_rewards = entry(
        AAVE_POOL, f"{_EM}::claim_all_rewards", ("vector<address>", "address")
    )
    claim_all_rewards_on_behalf = entry(
        AAVE_POOL,
        f"{_EM}::claim_all_rewards_on_behalf",
        ("vector<address>", "address", "address"),
    )
    claim_all_rewards_to_self = entry(
        AAVE_POOL, f"{_EM}::claim_all_rewards_to_self", ("vector<address>",)
    )

    async def configure_assets(
        self,
        emissions_per_second: Sequence[int],
        max_emission_rates: Sequence[int],
        distribution_ends: Sequence[int],
        assets: Sequence[AccountAddress | str],
        rewards: Sequence[AccountAddress | str],
        transfer_strategies: Sequence[AccountAddress | str],
    ) -> TransactionReceipt:
        """Configure emissions for several (asset, reward) pairs in one transaction.

        The six sequences are index-aligned and must have the same length.
        """
        columns = (
            emissions_per_second,
            max_emission_rates,
            distribution_ends,
            assets,
            rewards,
            transfer_strategies,
        )
        if len({len(c) for c in columns}) != 1:
            raise ConfigError(
                "configure_assets needs equally long inputs, got lengths "
                + ", ".join(str(len(c)) for c in columns)
            )
        return await self._configure_assets(*columns)


class TransferStrategyClient(BaseClient):
    """Pull-rewards transfer strategies paying rewards out of a vault."""

    create_pull_rewards_transfer_strategy = entry(
        AAVE_POOL,
        f"{_TS}::create_pull_rewards_transfer_strategy",
        ("address", "address", "address"),
    )
    pull_rewards_transfer_strategy_emergency_withdrawal = entry(
        AAVE_POOL,
        f"{_TS}::pull_rewards_transfer_strategy_emergency_withdrawal",
        ("address", "address", "address", "u256"),
    )
    pull_rewards_transfer_strategy_get_incentives_controller = view(
        AAVE_POOL,
        f"{_TS}::pull_rewards_transfer_strategy_get_incentives_controller",
        ("address",),
        first(to_address),
    )
    pull_rewards_transfer_strategy_get_rewards_admin = view(
        AAVE_POOL,
        f"{_TS}::pull_rewards_transfer_strategy_get_rewards_admin",
        ("address",),
        first(to_address),
    )
    pull_rewards_transfer_strategy_get_rewards_vault = view(
        AAVE_POOL,
        f"{_TS}::pull_rewards_transfer_strategy_get_rewards_vault",
        ("address",),
        first(to_address),
    )
