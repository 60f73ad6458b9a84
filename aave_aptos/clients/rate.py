"""Interest rate strategy calls."""
from __future__ import annotations

from ..codec import first, into, to_bool, to_int
from ..models import InterestRates
from ..profiles import AAVE_RATE
from .base import BaseClient, entry, view

_STRATEGY = "interest_rate_strategy"


class RateClient(BaseClient):
    """Per-reserve default interest rate strategy (ray-denominated values)."""

    set_reserve_interest_rate_strategy = entry(
        AAVE_RATE,
        "default_reserve_interest_rate_strategy::set_reserve_interest_rate_strategy",
        ("address", "u256", "u256", "u256", "u256"),
    )

    asset_interest_rate_exists = view(
        AAVE_RATE, f"{_STRATEGY}::asset_interest_rate_exists", ("address",), first(to_bool)
    )
    get_optimal_usage_ratio = view(
        AAVE_RATE, f"{_STRATEGY}::get_optimal_usage_ratio", ("address",), first(to_int)
    )
    get_max_excess_usage_ratio = view(
        AAVE_RATE, f"{_STRATEGY}::get_max_excess_usage_ratio", ("address",), first(to_int)
    )
    get_variable_rate_slope1 = view(
        AAVE_RATE, f"{_STRATEGY}::get_variable_rate_slope1", ("address",), first(to_int)
    )
    get_variable_rate_slope2 = view(
        AAVE_RATE, f"{_STRATEGY}::get_variable_rate_slope2", ("address",), first(to_int)
    )
    get_base_variable_borrow_rate = view(
        AAVE_RATE, f"{_STRATEGY}::get_base_variable_borrow_rate", ("address",), first(to_int)
    )
    get_max_variable_borrow_rate = view(
        AAVE_RATE, f"{_STRATEGY}::get_max_variable_borrow_rate", ("address",), first(to_int)
    )
    # (unbacked, liquidity_added, liquidity_taken, total_variable_debt,
    #  reserve_factor, reserve, reserve_symbol, a_token_underlying_balance)
    calculate_interest_rates = view(
        AAVE_RATE,
        f"{_STRATEGY}::calculate_interest_rates",
        ("u256", "u256", "u256", "u256", "u256", "address", "string", "u256"),
        into(InterestRates, to_int, to_int),
    )
