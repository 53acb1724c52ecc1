"""Subaccount identity encoding.

A subaccount is addressed on-chain by a single ``bytes32``: the 20-byte
owner address followed by a 12-byte ASCII name, right-padded with zero
bytes. The encoding is part of every signed message, so it round-trips
exactly for any address and any name of at most 12 ASCII characters.
"""

from typing import NamedTuple, Union

from eth_utils import is_address, to_canonical_address, to_checksum_address

from .exceptions import InvalidAddress, InvalidNameEncoding

ADDRESS_LENGTH = 20
NAME_LENGTH = 12
IDENTITY_LENGTH = ADDRESS_LENGTH + NAME_LENGTH

AddressLike = Union[bytes, str]


class Identity(NamedTuple):
    """Decoded subaccount identity."""

    address: bytes
    """20-byte owner address."""

    name: str
    """Subaccount name, trailing zero padding removed."""

    @property
    def checksum_address(self) -> str:
        return to_checksum_address(self.address)


def to_address_bytes(address: AddressLike) -> bytes:
    """Normalise an address to 20 raw bytes.

    Args:
        address: 20 raw bytes or a hex address string

    Raises:
        InvalidAddress: If the address is neither
    """
    if isinstance(address, (bytes, bytearray)):
        if len(address) != ADDRESS_LENGTH:
            raise InvalidAddress(
                f"Invalid address: {bytes(address).hex()}. Must be {ADDRESS_LENGTH} bytes"
            )
        return bytes(address)

    if isinstance(address, str) and is_address(address):
        return to_canonical_address(address)

    raise InvalidAddress(f"Invalid address: {address!r}")


def encode_name(name: str) -> bytes:
    """Encode a subaccount name into its 12-byte, zero-padded form.

    Raises:
        InvalidNameEncoding: If the name is not ASCII, contains a NUL byte
            or is longer than 12 bytes
    """
    if not isinstance(name, str):
        raise InvalidNameEncoding(f"Invalid name: {name!r}. Must be a string")

    try:
        raw = name.encode("ascii")
    except UnicodeEncodeError as e:
        raise InvalidNameEncoding(f"Invalid name: {name!r}. Must be ASCII") from e

    if b"\x00" in raw:
        raise InvalidNameEncoding(f"Invalid name: {name!r}. Must not contain NUL")

    if len(raw) > NAME_LENGTH:
        raise InvalidNameEncoding(
            f"Name too long: {name!r} is {len(raw)} bytes. Maximum: {NAME_LENGTH}"
        )

    return raw.ljust(NAME_LENGTH, b"\x00")


def decode_name(raw: bytes) -> str:
    """Decode a 12-byte name, dropping the zero padding.

    Raises:
        InvalidNameEncoding: If the bytes are not valid UTF-8
    """
    if len(raw) != NAME_LENGTH:
        raise InvalidNameEncoding(
            f"Invalid name length: {len(raw)} bytes. Must be {NAME_LENGTH}"
        )

    try:
        return bytes(raw).rstrip(b"\x00").decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidNameEncoding(f"Invalid name bytes: {bytes(raw).hex()}") from e


def concat_identity(address: bytes, name: bytes) -> bytes:
    """Join an already encoded address and name."""
    if len(address) != ADDRESS_LENGTH or len(name) != NAME_LENGTH:
        raise InvalidAddress(
            f"Cannot build identity from {len(address)}+{len(name)} bytes. "
            f"Must be {ADDRESS_LENGTH}+{NAME_LENGTH}"
        )
    return bytes(address) + bytes(name)


def encode_identity(address: AddressLike, name: str) -> bytes:
    """Encode an address and subaccount name into a ``bytes32`` sender.

    Args:
        address: Owner address, raw bytes or hex string
        name: Subaccount name, at most 12 ASCII characters

    Returns:
        32-byte identity

    Raises:
        InvalidAddress: If the address is malformed
        InvalidNameEncoding: If the name cannot be encoded
    """
    return concat_identity(to_address_bytes(address), encode_name(name))


def decode_identity(identity: bytes) -> Identity:
    """Split a ``bytes32`` sender into address and name.

    Raises:
        InvalidNameEncoding: If the identity is not 32 bytes or the name
            part is not valid UTF-8
    """
    if not isinstance(identity, (bytes, bytearray)) or len(identity) != IDENTITY_LENGTH:
        raise InvalidNameEncoding(
            f"Invalid identity: {identity!r}. Must be {IDENTITY_LENGTH} bytes"
        )

    return Identity(
        address=bytes(identity[:ADDRESS_LENGTH]),
        name=decode_name(identity[ADDRESS_LENGTH:]),
    )
