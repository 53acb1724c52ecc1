"""Text-transport form of the messages.

JSON and most other text formats cannot carry 64 or 128-bit integers
without losing precision, so those are written as decimal strings.
Byte strings are written as ``0x``-prefixed lowercase hex. Narrow
integers (``uint8``, ``uint32``) stay plain numbers.

Each Solidity type maps to one codec object in :data:`WIRE_CODECS`;
messages are (de)serialized field by field through their schema.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from .exceptions import DecodeError
from .types import int_bounds

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DECIMAL = re.compile(r"-?[0-9]+")
_HEX = re.compile(r"[0-9a-fA-F]*")


class WireCodec:
    """Converts one field kind to and from its text-transport value."""

    def encode(self, value: Any) -> Any:
        raise NotImplementedError()

    def decode(self, raw: Any, name: str) -> Any:
        raise NotImplementedError()


class DecimalStringCodec(WireCodec):
    """Wide integers as decimal strings."""

    def __init__(self, abi_type: str):
        self.abi_type = abi_type
        self.low, self.high = int_bounds(abi_type)

    def encode(self, value: int) -> str:
        return str(value)

    def decode(self, raw: Any, name: str) -> int:
        if not isinstance(raw, str) or not _DECIMAL.fullmatch(raw):
            raise DecodeError(f"Invalid {name}: {raw!r}. Must be a decimal string")
        value = int(raw)
        if value < self.low or value > self.high:
            raise DecodeError(f"Invalid {name}: {raw}. Does not fit {self.abi_type}")
        return value


class IntegerCodec(WireCodec):
    """Narrow integers as plain numbers."""

    def __init__(self, abi_type: str):
        self.abi_type = abi_type
        self.low, self.high = int_bounds(abi_type)

    def encode(self, value: int) -> int:
        return value

    def decode(self, raw: Any, name: str) -> int:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise DecodeError(f"Invalid {name}: {raw!r}. Must be an integer")
        if raw < self.low or raw > self.high:
            raise DecodeError(f"Invalid {name}: {raw}. Does not fit {self.abi_type}")
        return raw


class HexCodec(WireCodec):
    """Byte strings as ``0x`` hex, optionally of a fixed length."""

    def __init__(self, length: Optional[int] = None):
        self.length = length

    def encode(self, value: bytes) -> str:
        return "0x" + bytes(value).hex()

    def decode(self, raw: Any, name: str) -> bytes:
        if not isinstance(raw, str):
            raise DecodeError(f"Invalid {name}: {raw!r}. Must be a hex string")
        digits = raw[2:] if raw[:2] in ("0x", "0X") else raw
        if len(digits) % 2 or not _HEX.fullmatch(digits):
            raise DecodeError(f"Invalid {name}: {raw!r}. Malformed hex")
        try:
            value = bytes.fromhex(digits)
        except ValueError as e:
            raise DecodeError(f"Invalid {name}: {raw!r}. Malformed hex") from e
        if self.length is not None and len(value) != self.length:
            raise DecodeError(
                f"Invalid {name}: {raw!r}. Must be {self.length} bytes, got {len(value)}"
            )
        return value


class ListCodec(WireCodec):
    """Sequences as JSON lists of the element codec."""

    def __init__(self, element: WireCodec):
        self.element = element

    def encode(self, value) -> List[Any]:
        return [self.element.encode(v) for v in value]

    def decode(self, raw: Any, name: str) -> tuple:
        if not isinstance(raw, list):
            raise DecodeError(f"Invalid {name}: {raw!r}. Must be a list")
        return tuple(self.element.decode(v, f"{name}[{i}]") for i, v in enumerate(raw))


BYTES32 = HexCodec(32)
BYTES = HexCodec()

WIRE_CODECS: Dict[str, WireCodec] = {
    "bytes32": BYTES32,
    "bytes32[]": ListCodec(BYTES32),
    "bytes": BYTES,
    "int128": DecimalStringCodec("int128"),
    "uint128": DecimalStringCodec("uint128"),
    "uint64": DecimalStringCodec("uint64"),
    "uint32": IntegerCodec("uint32"),
    "uint32[]": ListCodec(IntegerCodec("uint32")),
    "uint8": IntegerCodec("uint8"),
}


def encode_message(message) -> Dict[str, Any]:
    """Render a message as a JSON-safe dict keyed by field name."""
    return {
        f.name: WIRE_CODECS[f.abi_type].encode(getattr(message, f.attribute))
        for f in message.FIELDS
    }


def decode_message(cls: Type[T], data: Mapping[str, Any]) -> T:
    """Parse the output of :func:`encode_message` back into ``cls``.

    Unknown keys are ignored.

    Raises:
        DecodeError: If a field is missing or malformed
    """
    if not isinstance(data, Mapping):
        raise DecodeError(f"Invalid {cls.PRIMARY_TYPE}: {data!r}. Must be an object")

    kwargs = {}
    try:
        for f in cls.FIELDS:
            if f.name not in data:
                raise DecodeError(f"Missing field {f.name} in {cls.PRIMARY_TYPE}")
            kwargs[f.argument] = WIRE_CODECS[f.abi_type].decode(data[f.name], f.name)
    except DecodeError as e:
        logger.debug("Rejected %s: %s", cls.PRIMARY_TYPE, e)
        raise

    return cls(**kwargs)


def encode_hex(value: bytes) -> str:
    return BYTES.encode(value)


def decode_hex(raw: str, name: str = "bytes") -> bytes:
    """Parse a variable-length hex string, e.g. a signature.

    Raises:
        DecodeError: On odd length or non-hex characters
    """
    return BYTES.decode(raw, name)
