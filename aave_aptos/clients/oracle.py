"""Price oracle calls."""
from __future__ import annotations

from ..codec import as_tuple, first, to_address, to_int, vector
from ..profiles import AAVE_ORACLE
from .base import BaseClient, entry, view


class OracleClient(BaseClient):
    """Prices and feed registration on ``oracle`` / ``oracle_base``."""

    get_asset_price = view(AAVE_ORACLE, "oracle::get_asset_price", ("address",), first(to_int))
    get_assets_prices = view(
        AAVE_ORACLE, "oracle::get_assets_prices", ("vector<address>",), first(vector(to_int))
    )
    # (price, timestamp) read in one call so the pair is consistent
    get_asset_price_and_timestamp = view(
        AAVE_ORACLE,
        "oracle::get_asset_price_and_timestamp",
        ("address",),
        as_tuple(to_int, to_int),
    )
    get_oracle_resource_account = view(
        AAVE_ORACLE, "oracle_base::get_oracle_resource_account", (), first(to_address)
    )
    get_oracle_address = view(AAVE_ORACLE, "oracle_base::oracle_address", (), first(to_address))

    set_asset_feed_id = entry(AAVE_ORACLE, "oracle::set_asset_feed_id", ("address", "vector<u8>"))
    batch_set_asset_feed_ids = entry(
        AAVE_ORACLE,
        "oracle::batch_set_asset_feed_ids",
        ("vector<address>", "vector<vector<u8>>"),
    )
    remove_asset_feed_id = entry(AAVE_ORACLE, "oracle::remove_asset_feed_id", ("address",))
    batch_remove_asset_feed_ids = entry(
        AAVE_ORACLE, "oracle::batch_remove_asset_feed_ids", ("vector<address>",)
    )
    set_chainlink_mock_feed = entry(
        AAVE_ORACLE, "oracle::set_chainlink_mock_feed", ("address", "vector<u8>")
    )
    set_chainlink_mock_price = entry(
        AAVE_ORACLE, "oracle::set_chainlink_mock_price", ("u256", "vector<u8>")
    )
