"""Static address registry of the known deployments, keyed by network profile."""
from __future__ import annotations

from dataclasses import dataclass, field

from .constants import ZERO_ADDRESS

# Logical address keys
A_TOKENS = "A_TOKENS"
UNDERLYING_TOKENS = "UNDERLYING_TOKENS"
VARIABLE_TOKENS = "VARIABLE_TOKENS"
AAVE_ACL = "AAVE_ACL"
AAVE_CONFIG = "AAVE_CONFIG"
AAVE_ORACLE = "AAVE_ORACLE"
AAVE_POOL = "AAVE_POOL"
AAVE_RATE = "AAVE_RATE"
AAVE_DATA = "AAVE_DATA"
AAVE_MATH = "AAVE_MATH"
AAVE_MOCK_UNDERLYINGS = "AAVE_MOCK_UNDERLYINGS"
APTOS_FRAMEWORK = "APTOS_FRAMEWORK"

FRAMEWORK_ADDRESS = "0x" + "0" * 63 + "1"


@dataclass(frozen=True)
class DeploymentProfile:
    name: str
    node_url: str
    faucet_url: str = ""
    addresses: dict[str, str] = field(default_factory=dict)


LOCAL = DeploymentProfile(
    name="local",
    node_url="http://127.0.0.1:8080/v1",
    faucet_url="http://127.0.0.1:8081",
    addresses={
        A_TOKENS: ZERO_ADDRESS,
        UNDERLYING_TOKENS: ZERO_ADDRESS,
        VARIABLE_TOKENS: ZERO_ADDRESS,
        AAVE_ACL: ZERO_ADDRESS,
        AAVE_CONFIG: ZERO_ADDRESS,
        AAVE_ORACLE: ZERO_ADDRESS,
        AAVE_POOL: ZERO_ADDRESS,
        AAVE_RATE: ZERO_ADDRESS,
        AAVE_DATA: ZERO_ADDRESS,
        AAVE_MATH: ZERO_ADDRESS,
        AAVE_MOCK_UNDERLYINGS: ZERO_ADDRESS,
        APTOS_FRAMEWORK: FRAMEWORK_ADDRESS,
    },
)

TESTNET = DeploymentProfile(
    name="testnet",
    node_url="https://api.testnet.aptoslabs.com/v1",
    faucet_url="https://faucet.testnet.aptoslabs.com",
    addresses={
        A_TOKENS: "0x68d265c5fd096673f64dd71ad77fffdbea9f96e1a6efd65704e8e4648a4c83ab",
        UNDERLYING_TOKENS: "0xe24b50a6f88cfcf8c684d1ee9eee8972b61eedfabe10139821e24e85c1d4a12f",
        VARIABLE_TOKENS: "0xed77450ea30a643893c4047784bbb4b75e182a11d8cd728a36d02575a8dcff2c",
        AAVE_ACL: "0x5e9f527f47e0a187d611f45e5bba8e7243af54dbda31920ff5db41138e0706dc",
        AAVE_CONFIG: "0x8b0039f9bd18b819a6891f16db3ab50e2400024291ee3c9019de5abe32246958",
        AAVE_ORACLE: "0xa08790ab581acb4a54ffaa2c9630f29851a842c73710ddf97d675c260a77e2d3",
        AAVE_POOL: "0x4741de1a64e54e16eef6278e4af610136230f2ac90e40cdcd5f29790b45e4dc4",
        AAVE_RATE: "0x6341e72afa3f77ed32716e82a84c8a86c26a7d31e837043a53bc28ecabe3dc55",
        AAVE_DATA: "0x568ea1b4c9d473897be294ad40402c0102a3f3416bd8a5f25769bbfb571313bc",
        AAVE_MATH: "0x568ea1b4c9d473897be294ad40402c0102a3f3416bd8a5f25769bbfb571313bc",
        APTOS_FRAMEWORK: FRAMEWORK_ADDRESS,
    },
)

MAINNET = DeploymentProfile(
    name="mainnet",
    node_url="https://api.mainnet.aptoslabs.com/v1",
    addresses={
        AAVE_MOCK_UNDERLYINGS: "0x12b05c42ac3209a3c6ffadff4ebb6c3e983e5115f26031d56652815b49a14245",
        AAVE_ACL: "0x34c3e6af238f3a7fa3f3b0088cbc4b194d21f62e65a15b79ae91364de5a81a3a",
        AAVE_CONFIG: "0x531069f4741cdead39d70b76e5779863864654fae6db8a752a244ff2f9916c15",
        AAVE_ORACLE: "0x249676f3faddb83d64fd101baa3f84a171ae02505d796e3edbf4861038a4b5cc",
        AAVE_POOL: "0x39ddcd9e1a39fa14f25e3f9ec8a86074d05cc0881cbf667df8a6ee70942016fb",
        AAVE_DATA: "0x5eb5cc775c5a446db0f3a1c944e11563b97e6a7e1387b9fb459aa26168f738dc",
        AAVE_MATH: "0xc0338eea778de2a5348824ddbfcec033c7f7cbe18da6da40869562906b63c78c",
        APTOS_FRAMEWORK: FRAMEWORK_ADDRESS,
    },
)

PROFILES: dict[str, DeploymentProfile] = {
    p.name: p for p in (LOCAL, TESTNET, MAINNET)
}


def get_profile(name: str) -> DeploymentProfile:
    """Return the deployment profile called ``name`` (``KeyError`` if unknown)."""
    return PROFILES[name.lower()]
