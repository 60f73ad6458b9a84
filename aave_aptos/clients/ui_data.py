"""UI pool and incentive data providers: whole-market reads in one call each."""
from __future__ import annotations

import dataclasses

from ..codec import (
    Decoder,
    as_tuple,
    first,
    inner_address,
    struct,
    to_address,
    to_bool,
    to_int,
    to_str,
    vector,
)
from ..models import (
    AggregatedReserveData,
    AggregatedReserveIncentiveData,
    BaseCurrencyInfo,
    IncentiveData,
    RewardInfo,
    UiUserReserveData,
    UserIncentiveData,
    UserReserveIncentiveData,
    UserRewardInfo,
)
from ..profiles import AAVE_POOL
from .base import BaseClient, view

_SCALARS = {"int": to_int, "bool": to_bool, "str": to_str, "AccountAddress": to_address}


def _flat(cls: type) -> Decoder:
    """Decode a struct whose JSON keys are the dataclass field names."""
    return struct(
        cls, **{f.name: (f.name, _SCALARS[f.type]) for f in dataclasses.fields(cls)}
    )


_incentive_data = struct(
    IncentiveData,
    token_address=("token_address", to_address),
    incentive_controller_address=("incentive_controller_address", to_address),
    rewards_token_information=("rewards_token_information", vector(_flat(RewardInfo))),
)
_user_incentive_data = struct(
    UserIncentiveData,
    token_address=("token_address", to_address),
    incentive_controller_address=("incentive_controller_address", to_address),
    user_rewards_information=("user_rewards_information", vector(_flat(UserRewardInfo))),
)
_reserve_incentives = vector(
    struct(
        AggregatedReserveIncentiveData,
        underlying_asset=("underlying_asset", to_address),
        a_incentive_data=("a_incentive_data", _incentive_data),
        v_incentive_data=("v_incentive_data", _incentive_data),
    )
)
_user_incentives = vector(
    struct(
        UserReserveIncentiveData,
        underlying_asset=("underlying_asset", to_address),
        a_token_incentives_user_data=("a_token_incentives_user_data", _user_incentive_data),
        v_token_incentives_user_data=("v_token_incentives_user_data", _user_incentive_data),
    )
)

_POOL = "ui_pool_data_provider_v3"
_INCENTIVES = "ui_incentive_data_provider_v3"


class UiPoolDataProviderClient(BaseClient):
    """Every reserve's configuration, state and prices, and a user's positions."""

    ui_pool_data_provider_v3_data_address = view(
        AAVE_POOL, f"{_POOL}::ui_pool_data_provider_v3_data_address", (), first(to_address)
    )
    ui_pool_data_provider_v3_data_object = view(
        AAVE_POOL, f"{_POOL}::ui_pool_data_provider_v3_data_object", (), first(inner_address)
    )
    get_reserves_list = view(
        AAVE_POOL, f"{_POOL}::get_reserves_list", (), first(vector(to_address))
    )
    # (reserves, base currency)
    get_reserves_data = view(
        AAVE_POOL,
        f"{_POOL}::get_reserves_data",
        (),
        as_tuple(vector(_flat(AggregatedReserveData)), _flat(BaseCurrencyInfo)),
    )
    # (user reserves, user eMode category id)
    get_user_reserves_data = view(
        AAVE_POOL,
        f"{_POOL}::get_user_reserves_data",
        ("address",),
        as_tuple(vector(_flat(UiUserReserveData)), to_int),
    )


class UiIncentiveDataProviderClient(BaseClient):
    """Reward emissions per reserve and the rewards a user has accrued."""

    # (reserve incentives, user incentives)
    get_full_reserves_incentive_data = view(
        AAVE_POOL,
        f"{_INCENTIVES}::get_full_reserves_incentive_data",
        (),
        as_tuple(_reserve_incentives, _user_incentives),
    )
    get_reserves_incentives_data = view(
        AAVE_POOL, f"{_INCENTIVES}::get_reserves_incentives_data", (), first(_reserve_incentives)
    )
    get_user_reserves_incentives_data = view(
        AAVE_POOL,
        f"{_INCENTIVES}::get_user_reserves_incentives_data",
        ("address",),
        first(_user_incentives),
    )
