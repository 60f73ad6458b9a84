"""Oracle feed ids per reserve symbol."""
from __future__ import annotations

from .errors import ConfigError

_APT_FEED = "0x011e22d6bf000332000000000000000000000000000000000000000000000000"

PRICE_FEEDS: dict[str, str] = {
    "APT": _APT_FEED,
    "USDC": "0x01a80ff216000332000000000000000000000000000000000000000000000000",
    "USDT": "0x016d06ebb6000332000000000000000000000000000000000000000000000000",
    "BTC": "0x01a0b4d920000332000000000000000000000000000000000000000000000000",
    # same feed as ETH
    "WETH": "0x01d585327c000332000000000000000000000000000000000000000000000000",
    "LINK": "0x0101199b3b000332000000000000000000000000000000000000000000000000",
    # no live feed, mocked with APT
    "AAVE": _APT_FEED,
    "DAI": _APT_FEED,
}


def feed_id_for(symbol: str) -> bytes:
    """Return the 32-byte feed id registered for ``symbol``."""
    try:
        return bytes.fromhex(PRICE_FEEDS[symbol][2:])
    except KeyError:
        raise ConfigError(f"No price feed registered for symbol '{symbol}'") from None
