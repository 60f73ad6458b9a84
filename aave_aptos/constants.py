"""Protocol-wide numeric constants."""
from __future__ import annotations

from enum import IntEnum

ONE_OCTA = 100_000_000

WAD = 10**18
RAY = 10**27
HALF_RAY = RAY // 2
PERCENTAGE_FACTOR = 10_000

U8_MAX = 2**8 - 1
U16_MAX = 2**16 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
U256_MAX = 2**256 - 1

REFERRAL_CODE = 0

ZERO_ADDRESS = "0x" + "0" * 64


class InterestRateMode(IntEnum):
    NONE = 0
    VARIABLE = 2
