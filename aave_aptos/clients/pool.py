"""Pool, configurator, eMode and data-provider calls of the Aave pool package."""
from __future__ import annotations

from ..codec import (
    as_tuple,
    bitmap,
    first,
    into,
    maybe_inner,
    struct,
    to_address,
    to_bool,
    to_int,
    to_str,
    vector,
)
from ..models import (
    ReserveCaps,
    ReserveConfigurationData,
    ReserveData,
    ReserveData2,
    ReserveTokensAddresses,
    TokenData,
    UserReserveData,
)
from ..profiles import AAVE_POOL
from .base import BaseClient, entry, view

_token_list = first(
    vector(struct(TokenData, symbol=("symbol", to_str), token_address=("token_address", to_address)))
)

_reserve_data_struct = struct(
    ReserveData,
    configuration=("configuration", bitmap),
    liquidity_index=("liquidity_index", to_int),
    current_liquidity_rate=("current_liquidity_rate", to_int),
    variable_borrow_index=("variable_borrow_index", to_int),
    current_variable_borrow_rate=("current_variable_borrow_rate", to_int),
    last_update_timestamp=("last_update_timestamp", to_int),
    id=("id", to_int),
    a_token_address=("a_token_address", to_address),
    variable_debt_token_address=("variable_debt_token_address", to_address),
    accrued_to_treasury=("accrued_to_treasury", to_int),
    unbacked=("unbacked", to_int),
    isolation_mode_total_debt=("isolation_mode_total_debt", to_int),
)


class PoolClient(BaseClient):
    """Typed access to ``pool``, ``pool_configurator``, ``emode_logic``,
    ``pool_data_provider`` and ``pool_addresses_provider``.

    Reads never need a signer; every admin entry signs with the bound
    pool-admin account.
    """

    # -- pool entries ------------------------------------------------------
    mint_to_treasury = entry(AAVE_POOL, "pool::mint_to_treasury", ("vector<address>",))
    reset_isolation_mode_total_debt = entry(
        AAVE_POOL, "pool::reset_isolation_mode_total_debt", ("address",)
    )
    rescue_tokens = entry(AAVE_POOL, "pool::rescue_tokens", ("address", "address", "u256"))
    set_bridge_protocol_fee = entry(AAVE_POOL, "pool::set_bridge_protocol_fee", ("u256",))
    set_flashloan_premiums = entry(
        AAVE_POOL, "pool::set_flashloan_premiums", ("u128", "u128")
    )

    # -- pool views --------------------------------------------------------
    get_revision = view(AAVE_POOL, "pool::get_revision", (), first(to_int))
    get_reserve_configuration = view(
        AAVE_POOL, "pool::get_reserve_configuration", ("address",), first(bitmap)
    )
    get_reserves_count = view(AAVE_POOL, "pool::get_reserves_count", (), first(to_int))
    get_reserves_list = view(
        AAVE_POOL, "pool::get_reserves_list", (), first(vector(to_address))
    )
    get_reserve_address_by_id = view(
        AAVE_POOL, "pool::get_reserve_address_by_id", ("u16",), first(to_address)
    )
    get_reserve_normalized_variable_debt = view(
        AAVE_POOL, "pool::get_reserve_normalized_variable_debt", ("address",), first(to_int)
    )
    get_reserve_normalized_income = view(
        AAVE_POOL, "pool::get_reserve_normalized_income", ("address",), first(to_int)
    )
    get_user_configuration = view(
        AAVE_POOL, "pool::get_user_configuration", ("address",), first(bitmap)
    )
    get_bridge_protocol_fee = view(
        AAVE_POOL, "pool::get_bridge_protocol_fee", (), first(to_int)
    )
    get_flashloan_premium_total = view(
        AAVE_POOL, "pool::get_flashloan_premium_total", (), first(to_int)
    )
    get_flashloan_premium_to_protocol = view(
        AAVE_POOL, "pool::get_flashloan_premium_to_protocol", (), first(to_int)
    )
    max_number_reserves = view(AAVE_POOL, "pool::max_number_reserves", (), first(to_int))
    scaled_a_token_total_supply = view(
        AAVE_POOL, "pool::scaled_a_token_total_supply", ("address",), first(to_int)
    )
    scaled_a_token_balance_of = view(
        AAVE_POOL, "pool::scaled_a_token_balance_of", ("address", "address"), first(to_int)
    )
    scaled_variable_token_total_supply = view(
        AAVE_POOL, "pool::scaled_variable_token_total_supply", ("address",), first(to_int)
    )
    scaled_variable_token_balance_of = view(
        AAVE_POOL,
        "pool::scaled_variable_token_balance_of",
        ("address", "address"),
        first(to_int),
    )

    # -- pool_configurator -------------------------------------------------
    init_reserves = entry(
        AAVE_POOL,
        "pool_configurator::init_reserves",
        (
            "vector<address>",
            "vector<address>",
            "vector<string>",
            "vector<string>",
            "vector<string>",
            "vector<string>",
        ),
    )
    drop_reserve = entry(AAVE_POOL, "pool_configurator::drop_reserve", ("address",))
    set_asset_emode_category = entry(
        AAVE_POOL, "pool_configurator::set_asset_emode_category", ("address", "u8")
    )
    set_borrow_cap = entry(AAVE_POOL, "pool_configurator::set_borrow_cap", ("address", "u256"))
    set_borrowable_in_isolation = entry(
        AAVE_POOL, "pool_configurator::set_borrowable_in_isolation", ("address", "bool")
    )
    set_debt_ceiling = entry(
        AAVE_POOL, "pool_configurator::set_debt_ceiling", ("address", "u256")
    )
    set_emode_category = entry(
        AAVE_POOL,
        "pool_configurator::set_emode_category",
        ("u8", "u16", "u16", "u16", "address", "string"),
    )
    set_liquidation_protocol_fee = entry(
        AAVE_POOL, "pool_configurator::set_liquidation_protocol_fee", ("address", "u256")
    )
    set_pool_pause = entry(AAVE_POOL, "pool_configurator::set_pool_pause", ("bool",))
    set_reserve_active = entry(
        AAVE_POOL, "pool_configurator::set_reserve_active", ("address", "bool")
    )
    set_reserve_borrowing = entry(
        AAVE_POOL, "pool_configurator::set_reserve_borrowing", ("address", "bool")
    )
    configure_reserve_as_collateral = entry(
        AAVE_POOL,
        "pool_configurator::configure_reserve_as_collateral",
        ("address", "u256", "u256", "u256"),
    )
    set_reserve_factor = entry(
        AAVE_POOL, "pool_configurator::set_reserve_factor", ("address", "u256")
    )
    set_reserve_flash_loaning = entry(
        AAVE_POOL, "pool_configurator::set_reserve_flash_loaning", ("address", "bool")
    )
    set_reserve_freeze = entry(
        AAVE_POOL, "pool_configurator::set_reserve_freeze", ("address", "bool")
    )
    set_reserve_pause = entry(
        AAVE_POOL, "pool_configurator::set_reserve_pause", ("address", "bool")
    )
    set_siloed_borrowing = entry(
        AAVE_POOL, "pool_configurator::set_siloed_borrowing", ("address", "bool")
    )
    set_supply_cap = entry(AAVE_POOL, "pool_configurator::set_supply_cap", ("address", "u256"))
    set_unbacked_mint_cap = entry(
        AAVE_POOL, "pool_configurator::set_unbacked_mint_cap", ("address", "u256")
    )
    update_bridge_protocol_fee = entry(
        AAVE_POOL, "pool_configurator::update_bridge_protocol_fee", ("u256",)
    )
    update_flashloan_premium_to_protocol = entry(
        AAVE_POOL, "pool_configurator::update_flashloan_premium_to_protocol", ("u128",)
    )
    update_flashloan_premium_total = entry(
        AAVE_POOL, "pool_configurator::update_flashloan_premium_total", ("u128",)
    )
    get_configurator_revision = view(
        AAVE_POOL, "pool_configurator::get_revision", (), first(to_int)
    )

    # -- emode_logic -------------------------------------------------------
    set_user_emode = entry(AAVE_POOL, "emode_logic::set_user_emode", ("u8",))
    configure_emode_category = entry(
        AAVE_POOL,
        "emode_logic::configure_emode_category",
        ("u16", "u16", "u16", "address", "string"),
    )
    get_emode_category_data = view(
        AAVE_POOL, "emode_logic::get_emode_category_data", ("u8",), first(to_int)
    )
    get_user_emode = view(AAVE_POOL, "emode_logic::get_user_emode", ("address",), first(to_int))

    # -- pool_data_provider ------------------------------------------------
    get_all_reserves_tokens = view(
        AAVE_POOL, "pool_data_provider::get_all_reserves_tokens", (), _token_list
    )
    get_all_a_tokens = view(AAVE_POOL, "pool_data_provider::get_all_a_tokens", (), _token_list)
    get_all_var_tokens = view(
        AAVE_POOL, "pool_data_provider::get_all_var_tokens", (), _token_list
    )
    get_reserve_configuration_data = view(
        AAVE_POOL,
        "pool_data_provider::get_reserve_configuration_data",
        ("address",),
        into(
            ReserveConfigurationData,
            to_int, to_int, to_int, to_int, to_int,
            to_bool, to_bool, to_bool, to_bool,
        ),
    )
    get_reserve_emode_category = view(
        AAVE_POOL, "pool_data_provider::get_reserve_emode_category", ("address",), first(to_int)
    )
    get_reserve_caps = view(
        AAVE_POOL,
        "pool_data_provider::get_reserve_caps",
        ("address",),
        into(ReserveCaps, to_int, to_int),
    )
    get_paused = view(AAVE_POOL, "pool_data_provider::get_paused", ("address",), first(to_bool))
    get_siloed_borrowing = view(
        AAVE_POOL, "pool_data_provider::get_siloed_borrowing", ("address",), first(to_bool)
    )
    get_liquidation_protocol_fee = view(
        AAVE_POOL, "pool_data_provider::get_liquidation_protocol_fee", ("address",), first(to_int)
    )
    get_unbacked_mint_cap = view(
        AAVE_POOL, "pool_data_provider::get_unbacked_mint_cap", ("address",), first(to_int)
    )
    get_debt_ceiling = view(
        AAVE_POOL, "pool_data_provider::get_debt_ceiling", ("address",), first(to_int)
    )
    get_debt_ceiling_decimals = view(
        AAVE_POOL, "pool_data_provider::get_debt_ceiling_decimals", (), first(to_int)
    )
    get_reserve_data2 = view(
        AAVE_POOL,
        "pool_data_provider::get_reserve_data",
        ("address",),
        into(ReserveData2, *([to_int] * 9)),
    )
    get_a_token_total_supply = view(
        AAVE_POOL, "pool_data_provider::get_a_token_total_supply", ("address",), first(to_int)
    )
    get_total_debt = view(
        AAVE_POOL, "pool_data_provider::get_total_debt", ("address",), first(to_int)
    )
    get_user_reserve_data = view(
        AAVE_POOL,
        "pool_data_provider::get_user_reserve_data",
        ("address", "address"),
        into(UserReserveData, to_int, to_int, to_int, to_int, to_bool),
    )
    get_reserve_tokens_addresses = view(
        AAVE_POOL,
        "pool_data_provider::get_reserve_tokens_addresses",
        ("address",),
        into(ReserveTokensAddresses, to_address, to_address),
    )
    get_flash_loan_enabled = view(
        AAVE_POOL, "pool_data_provider::get_flash_loan_enabled", ("address",), first(to_bool)
    )

    # -- pool_addresses_provider -------------------------------------------
    has_id_mapped_account = view(
        AAVE_POOL, "pool_addresses_provider::has_id_mapped_account", ("string",), first(to_bool)
    )
    get_market_id = view(
        AAVE_POOL, "pool_addresses_provider::get_market_id", (), first(maybe_inner(to_str))
    )
    get_address = view(
        AAVE_POOL, "pool_addresses_provider::get_address", ("string",), first(maybe_inner())
    )
    get_pool = view(AAVE_POOL, "pool_addresses_provider::get_pool", (), first(maybe_inner()))
    get_pool_configurator = view(
        AAVE_POOL, "pool_addresses_provider::get_pool_configurator", (), first(maybe_inner())
    )
    get_price_oracle = view(
        AAVE_POOL, "pool_addresses_provider::get_price_oracle", (), first(maybe_inner())
    )
    get_acl_manager = view(
        AAVE_POOL, "pool_addresses_provider::get_acl_manager", (), first(maybe_inner())
    )
    get_acl_admin = view(
        AAVE_POOL, "pool_addresses_provider::get_acl_admin", (), first(maybe_inner())
    )
    get_price_oracle_sentinel = view(
        AAVE_POOL, "pool_addresses_provider::get_price_oracle_sentinel", (), first(maybe_inner())
    )
    get_pool_data_provider = view(
        AAVE_POOL, "pool_addresses_provider::get_pool_data_provider", (), first(maybe_inner())
    )
    set_market_id = entry(AAVE_POOL, "pool_addresses_provider::set_market_id", ("string",))
    set_address = entry(
        AAVE_POOL, "pool_addresses_provider::set_address", ("string", "address")
    )
    set_pool_impl = entry(AAVE_POOL, "pool_addresses_provider::set_pool_impl", ("address",))
    set_pool_configurator = entry(
        AAVE_POOL, "pool_addresses_provider::set_pool_configurator", ("address",)
    )
    set_price_oracle = entry(AAVE_POOL, "pool_addresses_provider::set_price_oracle", ("address",))
    set_acl_manager = entry(AAVE_POOL, "pool_addresses_provider::set_acl_manager", ("address",))
    set_acl_admin = entry(AAVE_POOL, "pool_addresses_provider::set_acl_admin", ("address",))
    set_price_oracle_sentinel = entry(
        AAVE_POOL, "pool_addresses_provider::set_price_oracle_sentinel", ("address",)
    )
    set_pool_data_provider = entry(
        AAVE_POOL, "pool_addresses_provider::set_pool_data_provider", ("address",)
    )

    # -- reserve data ------------------------------------------------------
    get_reserve_data = view(
        AAVE_POOL, "pool::get_reserve_data", ("address",), first(_reserve_data_struct)
    )
    get_reserve_data_and_reserves_count = view(
        AAVE_POOL,
        "pool::get_reserve_data_and_reserves_count",
        ("address",),
        as_tuple(_reserve_data_struct, to_int),
    )
