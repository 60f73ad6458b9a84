"""Data models, all frozen."""
from __future__ import annotations

from dataclasses import dataclass

from aptos_sdk.account_address import AccountAddress


@dataclass(frozen=True)
class TransactionReceipt:
    """Outcome of a committed transaction."""

    hash: str
    success: bool
    vm_status: str = ""
    version: int = 0
    gas_used: int = 0


@dataclass(frozen=True)
class TokenData:
    """Symbol and address of a fungible asset known to the pool."""

    symbol: str
    token_address: AccountAddress


@dataclass(frozen=True)
class ReserveConfig:
    """Declarative target state of one reserve.

    ``address`` is unset until the configurator has resolved or created the
    underlying token. All amounts are unbounded ints (caps, ray rates,
    basis points), never floats.
    """

    symbol: str
    name: str
    decimals: int
    max_supply: int
    icon_uri: str = ""
    project_uri: str = ""
    treasury: AccountAddress | None = None
    a_token_name: str = ""
    a_token_symbol: str = ""
    variable_debt_token_name: str = ""
    variable_debt_token_symbol: str = ""
    price_in_market_reference_currency: int = 0
    optimal_usage_ratio: int = 0
    base_variable_borrow_rate: int = 0
    variable_rate_slope1: int = 0
    variable_rate_slope2: int = 0
    ltv: int = 0
    liquidation_threshold: int = 0
    liquidation_bonus: int = 0
    reserve_factor: int = 0
    borrow_cap: int = 0
    supply_cap: int = 0
    borrowing_enabled: bool = False
    flashloan_enabled: bool = False
    emode_category_id: int = 0
    borrowable_in_isolation: bool = False
    active: bool = True
    paused: bool = False
    freezed: bool = False
    debt_ceiling: int = 0
    address: AccountAddress | None = None


@dataclass(frozen=True)
class EModeConfig:
    """Efficiency-mode risk category."""

    category_id: int
    ltv: int
    liquidation_threshold: int
    liquidation_bonus: int
    oracle: AccountAddress
    label: str


@dataclass(frozen=True)
class ReserveData:
    """On-chain reserve state, populated in full by ``PoolClient.get_reserve_data``."""

    configuration: int
    liquidity_index: int
    current_liquidity_rate: int
    variable_borrow_index: int
    current_variable_borrow_rate: int
    last_update_timestamp: int
    id: int
    a_token_address: AccountAddress
    variable_debt_token_address: AccountAddress
    accrued_to_treasury: int
    unbacked: int
    isolation_mode_total_debt: int


@dataclass(frozen=True)
class ReserveData2:
    """Reserve data as reported by the pool data provider."""

    unbacked: int
    accrued_to_treasury: int
    a_token_supply: int
    variable_token_supply: int
    current_liquidity_rate: int
    current_variable_borrow_rate: int
    liquidity_index: int
    variable_borrow_index: int
    last_update_timestamp: int


@dataclass(frozen=True)
class ReserveConfigurationData:
    decimals: int
    ltv: int
    liquidation_threshold: int
    liquidation_bonus: int
    reserve_factor: int
    usage_as_collateral_enabled: bool
    borrowing_enabled: bool
    is_active: bool
    is_frozen: bool


@dataclass(frozen=True)
class ReserveCaps:
    borrow_cap: int
    supply_cap: int


@dataclass(frozen=True)
class ReserveTokensAddresses:
    a_token_address: AccountAddress
    variable_debt_token_address: AccountAddress


@dataclass(frozen=True)
class InterestRates:
    current_liquidity_rate: int
    current_variable_borrow_rate: int


@dataclass(frozen=True)
class UserReserveData:
    current_a_token_balance: int
    current_variable_debt: int
    scaled_variable_debt: int
    liquidity_rate: int
    usage_as_collateral_enabled: bool


@dataclass(frozen=True)
class UserAccountData:
    """Aggregated user position in the market's base currency."""

    total_collateral_base: int
    total_debt_base: int
    available_borrows_base: int
    current_liquidation_threshold: int
    ltv: int
    health_factor: int


@dataclass(frozen=True)
class ReserveSnapshot:
    """Everything ``get-protocol-data`` reports for one reserve."""

    token: TokenData
    configuration: ReserveConfigurationData
    caps: ReserveCaps
    paused: bool
    siloed_borrowing: bool
    debt_ceiling: int
    data: ReserveData2
    price: int


@dataclass(frozen=True)
class UserReserveSnapshot:
    token: TokenData
    data: UserReserveData


@dataclass(frozen=True)
class ScaledBalanceAndSupply:
    scaled_user_balance: int
    scaled_total_supply: int


# ---------------------------------------------------------------------------
# Incentives
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PullRewardsTransferStrategy:
    rewards_admin: AccountAddress
    incentives_controller: AccountAddress


@dataclass(frozen=True)
class AssetRewardData:
    """Emission state of one reward on one incentivised asset.

    Built by ``RewardsControllerClient.get_asset_reward_data`` once every
    field has been read through the controller handle.
    """

    asset: AccountAddress
    reward: AccountAddress
    index: int
    emission_per_second: int
    last_update_timestamp: int
    distribution_end: int
    asset_decimals: int


@dataclass(frozen=True)
class RewardInfo:
    reward_token_symbol: str
    reward_token_address: AccountAddress
    reward_oracle_address: AccountAddress
    emission_per_second: int
    incentives_last_update_timestamp: int
    token_incentives_index: int
    emission_end_timestamp: int
    reward_price_feed: int
    reward_token_decimals: int
    precision: int
    price_feed_decimals: int


@dataclass(frozen=True)
class IncentiveData:
    token_address: AccountAddress
    incentive_controller_address: AccountAddress
    rewards_token_information: list[RewardInfo]


@dataclass(frozen=True)
class AggregatedReserveIncentiveData:
    underlying_asset: AccountAddress
    a_incentive_data: IncentiveData
    v_incentive_data: IncentiveData


@dataclass(frozen=True)
class UserRewardInfo:
    reward_token_symbol: str
    reward_oracle_address: AccountAddress
    reward_token_address: AccountAddress
    user_unclaimed_rewards: int
    token_incentives_user_index: int
    reward_price_feed: int
    price_feed_decimals: int
    reward_token_decimals: int


@dataclass(frozen=True)
class UserIncentiveData:
    token_address: AccountAddress
    incentive_controller_address: AccountAddress
    user_rewards_information: list[UserRewardInfo]


@dataclass(frozen=True)
class UserReserveIncentiveData:
    underlying_asset: AccountAddress
    a_token_incentives_user_data: UserIncentiveData
    v_token_incentives_user_data: UserIncentiveData


# ---------------------------------------------------------------------------
# UI pool data provider
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AggregatedReserveData:
    """One reserve as reported by ``ui_pool_data_provider_v3::get_reserves_data``."""

    underlying_asset: AccountAddress
    name: str
    symbol: str
    decimals: int
    base_ltv_as_collateral: int
    reserve_liquidation_threshold: int
    reserve_liquidation_bonus: int
    reserve_factor: int
    usage_as_collateral_enabled: bool
    borrowing_enabled: bool
    is_active: bool
    is_frozen: bool
    liquidity_index: int
    variable_borrow_index: int
    liquidity_rate: int
    variable_borrow_rate: int
    last_update_timestamp: int
    a_token_address: AccountAddress
    variable_debt_token_address: AccountAddress
    available_liquidity: int
    total_scaled_variable_debt: int
    price_in_market_reference_currency: int
    variable_rate_slope1: int
    variable_rate_slope2: int
    base_variable_borrow_rate: int
    optimal_usage_ratio: int
    is_paused: bool
    is_siloed_borrowing: bool
    accrued_to_treasury: int
    isolation_mode_total_debt: int
    flash_loan_enabled: bool
    debt_ceiling: int
    debt_ceiling_decimals: int
    e_mode_category_id: int
    borrow_cap: int
    supply_cap: int
    e_mode_ltv: int
    e_mode_liquidation_threshold: int
    e_mode_liquidation_bonus: int
    e_mode_label: str
    borrowable_in_isolation: bool
    deficit: int
    virtual_underlying_balance: int
    is_virtual_acc_active: bool


@dataclass(frozen=True)
class BaseCurrencyInfo:
    market_reference_currency_unit: int
    market_reference_currency_price_in_usd: int
    network_base_token_price_in_usd: int
    network_base_token_price_decimals: int


@dataclass(frozen=True)
class UiUserReserveData:
    underlying_asset: AccountAddress
    scaled_a_token_balance: int
    usage_as_collateral_enabled_on_user: bool
    scaled_variable_debt: int
    decimals: int
