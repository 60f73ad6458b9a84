"""Signing key loading and mnemonic-based derivation of test signers.

BIP-39 turns the phrase into a 64-byte seed; SLIP-0010 derives an Ed25519
key from it along the Aptos path ``m/44'/637'/0'/0'/{index}'``. Ed25519 only
supports hardened children, so every path segment is hardened.
"""
from __future__ import annotations

import hashlib
import hmac
import re
import unicodedata

from aptos_sdk.account import Account

from .errors import ConfigError

APTOS_COIN_TYPE = 637
HARDENED_OFFSET = 0x80000000
_ED25519_SEED_KEY = b"ed25519 seed"
_PATH_RE = re.compile(r"m(/[0-9]+')+")
_PRIVATE_KEY_RE = re.compile(r"(?:ed25519-priv-)?(?:0x)?([0-9a-fA-F]{64})")


def derivation_path(index: int) -> str:
    return f"m/44'/{APTOS_COIN_TYPE}'/0'/0'/{index}'"


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> bytes:
    """BIP-39 seed: PBKDF2-HMAC-SHA512, 2048 rounds, salt ``"mnemonic" + passphrase``."""
    words = " ".join(mnemonic.split())
    if not words:
        raise ConfigError("Mnemonic is empty")
    normalized = unicodedata.normalize("NFKD", words).encode("utf-8")
    salt = unicodedata.normalize("NFKD", "mnemonic" + passphrase).encode("utf-8")
    return hashlib.pbkdf2_hmac("sha512", normalized, salt, 2048)


def derive_private_key(seed: bytes, path: str) -> bytes:
    """Return the 32-byte Ed25519 private key at the hardened ``path``."""
    if not _PATH_RE.fullmatch(path):
        raise ValueError(f"Invalid hardened derivation path: {path!r}")

    digest = hmac.new(_ED25519_SEED_KEY, seed, hashlib.sha512).digest()
    key, chain_code = digest[:32], digest[32:]
    for segment in path.split("/")[1:]:
        index = int(segment[:-1]) + HARDENED_OFFSET
        data = b"\x00" + key + index.to_bytes(4, "big")
        digest = hmac.new(chain_code, data, hashlib.sha512).digest()
        key, chain_code = digest[:32], digest[32:]
    return key


def account_from_mnemonic(mnemonic: str, index: int = 0) -> Account:
    """Derive the account at ``m/44'/637'/0'/0'/{index}'``."""
    if index < 0 or index >= HARDENED_OFFSET:
        raise ValueError(f"Account index out of range: {index}")
    seed = mnemonic_to_seed(mnemonic)
    private_key = derive_private_key(seed, derivation_path(index))
    return Account.load_key("0x" + private_key.hex())


def load_account(private_key: str) -> Account:
    """Load a 32-byte Ed25519 key given as hex, with optional ``0x`` or AIP-80 prefix."""
    match = _PRIVATE_KEY_RE.fullmatch(private_key.strip())
    if match is None:
        raise ValueError("Private key must be 32 bytes of hex")
    return Account.load_key("0x" + match.group(1).lower())
