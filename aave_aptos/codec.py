"""Wire coercion between Python values and the node's JSON and BCS representations.

Arguments are encoded by their Move type name. Unsigned integers up to
``u32`` travel as JSON numbers and wider ones as decimal strings. Addresses
travel as fixed-length ``0x`` + 64 hex digits and byte vectors as ``0x`` hex.
The same JSON-wire values convert to BCS transaction arguments for signing.

Decoders take the JSON array returned by a view call (or one element of it)
and raise ``DecodingError`` on any shape mismatch instead of coercing.
"""
from __future__ import annotations

import re
from typing import Any, Callable

from aptos_sdk.account_address import AccountAddress
from aptos_sdk.bcs import Serializer
from aptos_sdk.transactions import TransactionArgument

from .errors import DecodingError

Decoder = Callable[[Any], Any]

_DIGITS_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"(0x)?([0-9a-fA-F]*)")
_UINT_BITS = {"u8": 8, "u16": 16, "u32": 32, "u64": 64, "u128": 128, "u256": 256}


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------


def parse_amount(value: str | int) -> int:
    """Parse an unsigned decimal amount into an int, without going through float."""
    if isinstance(value, bool):
        raise ValueError(f"Amount must be an unsigned integer, got {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Amount must be an unsigned integer, got {value}")
        return value
    text = str(value).strip()
    if not _DIGITS_RE.fullmatch(text):
        raise ValueError(f"Amount must be an unsigned integer, got {value!r}")
    return int(text)


def to_account_address(value: AccountAddress | str) -> AccountAddress:
    """Accept an ``AccountAddress`` or a hex string with or without ``0x``."""
    if isinstance(value, AccountAddress):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Expected an address, got {type(value).__name__}")
    match = _HEX_RE.fullmatch(value.strip())
    if match is None or not match.group(2) or len(match.group(2)) > 64:
        raise ValueError(f"Invalid address: {value!r}")
    return AccountAddress.from_str_relaxed("0x" + match.group(2).lower())


def wire_address(value: AccountAddress | str) -> str:
    """Long form ``0x`` + 64 hex digits, also for special addresses such as ``0x1``."""
    return "0x" + to_account_address(value).address.hex()


def normalize_hex(value: str) -> str:
    """Return ``value`` as lowercase ``0x`` hex, accepting a missing prefix."""
    match = _HEX_RE.fullmatch(value.strip())
    if match is None or len(match.group(2)) % 2:
        raise ValueError(f"Invalid hex string: {value!r}")
    return "0x" + match.group(2).lower()


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode(arg_type: str, value: Any) -> Any:
    """Encode ``value`` for a Move parameter of type ``arg_type``."""
    bits = _UINT_BITS.get(arg_type)
    if bits is not None:
        number = parse_amount(value)
        if number >> bits:
            raise ValueError(f"{number} does not fit in {arg_type}")
        return int(number) if bits <= 32 else str(int(number))

    if arg_type == "address":
        return wire_address(value)
    if arg_type == "bool":
        if not isinstance(value, bool):
            raise TypeError(f"Expected bool, got {type(value).__name__}")
        return value
    if arg_type == "string":
        return str(value)
    if arg_type == "vector<u8>":
        if isinstance(value, (bytes, bytearray)):
            return "0x" + bytes(value).hex()
        return normalize_hex(value)
    if arg_type.startswith("vector<") and arg_type.endswith(">"):
        inner = arg_type[len("vector<"):-1]
        return [encode(inner, item) for item in value]

    raise ValueError(f"Unsupported Move argument type '{arg_type}'")


def encode_arguments(arg_types: tuple[str, ...], values: tuple[Any, ...]) -> list[Any]:
    if len(arg_types) != len(values):
        raise TypeError(f"Expected {len(arg_types)} arguments, got {len(values)}")
    return [encode(t, v) for t, v in zip(arg_types, values)]


_BCS_UINTS = {
    "u8": Serializer.u8,
    "u16": Serializer.u16,
    "u32": Serializer.u32,
    "u64": Serializer.u64,
    "u128": Serializer.u128,
    "u256": Serializer.u256,
}


def _bcs_encoder(arg_type: str) -> tuple[Callable[[Any], Any], Callable[..., None]]:
    """Return ``(convert, serialize)`` for one JSON-wire value of ``arg_type``."""
    if arg_type in _BCS_UINTS:
        return int, _BCS_UINTS[arg_type]
    if arg_type == "address":
        return to_account_address, Serializer.struct
    if arg_type == "bool":
        return bool, Serializer.bool
    if arg_type == "string":
        return str, Serializer.str
    if arg_type == "vector<u8>":
        return (lambda value: bytes.fromhex(normalize_hex(value)[2:])), Serializer.to_bytes
    if arg_type.startswith("vector<") and arg_type.endswith(">"):
        convert, serialize = _bcs_encoder(arg_type[len("vector<"):-1])
        return (
            lambda values: [convert(v) for v in values],
            Serializer.sequence_serializer(serialize),
        )
    raise ValueError(f"Unsupported Move argument type '{arg_type}'")


def bcs_arguments(arg_types: tuple[str, ...], wire_values: list[Any]) -> list[TransactionArgument]:
    """Convert values produced by ``encode_arguments`` into BCS transaction arguments."""
    if len(arg_types) != len(wire_values):
        raise TypeError(f"Expected {len(arg_types)} arguments, got {len(wire_values)}")
    arguments = []
    for arg_type, value in zip(arg_types, wire_values):
        convert, serialize = _bcs_encoder(arg_type)
        arguments.append(TransactionArgument(convert(value), serialize))
    return arguments


# ---------------------------------------------------------------------------
# Decoding: single values
# ---------------------------------------------------------------------------


def to_int(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _DIGITS_RE.fullmatch(value):
        return int(value)
    raise DecodingError(f"Expected an unsigned integer, got {value!r}")


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise DecodingError(f"Expected a bool, got {value!r}")


def to_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise DecodingError(f"Expected a string, got {value!r}")


def to_address(value: Any) -> AccountAddress:
    if not isinstance(value, str):
        raise DecodingError(f"Expected an address, got {value!r}")
    try:
        return to_account_address(value)
    except ValueError as e:
        raise DecodingError(f"Invalid address {value!r}: {e}") from e


def inner_address(value: Any) -> AccountAddress:
    """Decode an object handle such as ``{"inner": "0x.."}``."""
    if not isinstance(value, dict) or "inner" not in value:
        raise DecodingError(f"Expected an object handle, got {value!r}")
    return to_address(value["inner"])


def maybe_inner(decoder: Decoder = to_address) -> Decoder:
    """Decode a handle ``{"inner": x}`` that may be unset; ``null`` or empty gives ``None``."""

    def decode(value: Any) -> Any:
        if value is None or value == "" or value == {}:
            return None
        if not isinstance(value, dict) or "inner" not in value:
            raise DecodingError(f"Expected an object handle, got {value!r}")
        return decoder(value["inner"])

    return decode


def option(decoder: Decoder) -> Decoder:
    """Decode a Move ``Option`` (``{"vec": []}`` or ``{"vec": [x]}``) to ``None`` or x."""

    def decode(value: Any) -> Any:
        if not isinstance(value, dict) or not isinstance(value.get("vec"), list):
            raise DecodingError(f"Expected an option, got {value!r}")
        items = value["vec"]
        if len(items) > 1:
            raise DecodingError(f"Option holds {len(items)} values")
        return decoder(items[0]) if items else None

    return decode


def vector(decoder: Decoder) -> Decoder:
    def decode(value: Any) -> list[Any]:
        if not isinstance(value, list):
            raise DecodingError(f"Expected a vector, got {value!r}")
        return [decoder(item) for item in value]

    return decode


def struct(cls: type, **field_decoders: tuple[str, Decoder]) -> Decoder:
    """Decode a JSON object into ``cls`` from ``field=(json_key, decoder)`` pairs."""

    def decode(value: Any) -> Any:
        if not isinstance(value, dict):
            raise DecodingError(f"Expected a struct for {cls.__name__}, got {value!r}")
        kwargs: dict[str, Any] = {}
        for name, (key, decoder) in field_decoders.items():
            if key not in value:
                raise DecodingError(f"{cls.__name__}: missing field '{key}'")
            kwargs[name] = decoder(value[key])
        return cls(**kwargs)

    return decode


# ---------------------------------------------------------------------------
# Decoding: view return lists
# ---------------------------------------------------------------------------


def raw(values: Any) -> Any:
    return values


def first(decoder: Decoder) -> Decoder:
    """Decode the single return value of a view."""

    def decode(values: Any) -> Any:
        if not isinstance(values, list) or len(values) != 1:
            raise DecodingError(f"Expected exactly one return value, got {values!r}")
        return decoder(values[0])

    return decode


def as_tuple(*decoders: Decoder) -> Decoder:
    """Decode a multi-value return positionally; the arity must match exactly."""

    def decode(values: Any) -> tuple[Any, ...]:
        if not isinstance(values, list) or len(values) != len(decoders):
            raise DecodingError(
                f"Expected {len(decoders)} return values, got {values!r}"
            )
        return tuple(d(v) for d, v in zip(decoders, values))

    return decode


def into(cls: type, *decoders: Decoder) -> Decoder:
    """Decode a positional return tuple into the dataclass ``cls``."""
    positional = as_tuple(*decoders)

    def decode(values: Any) -> Any:
        return cls(*positional(values))

    return decode


def bitmap(value: Any) -> int:
    """Decode a configuration bitmap wrapper ``{"data": "<u256>"}``."""
    if not isinstance(value, dict) or "data" not in value:
        raise DecodingError(f"Expected a bitmap, got {value!r}")
    return to_int(value["data"])
