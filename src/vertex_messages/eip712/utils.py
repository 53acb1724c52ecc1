"""Utility functions and constants for message construction."""

import secrets
import time
from decimal import Decimal
from typing import Optional, Union

from eth_utils import to_checksum_address

from .packing import MAX_NONCE_LOW, pack_nonce
from .types import OrderType

# EIP-712 domain of every message
EIP712_DOMAIN_NAME = "Vertex"
EIP712_DOMAIN_VERSION = "0.0.1"

# Arbitrum One
DEFAULT_CHAIN_ID = 42161

# Subaccount used when none is named
DEFAULT_SUBACCOUNT_NAME = "default"

# Zero address
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# How long a generated nonce stays acceptable to the sequencer
DEFAULT_RECV_WINDOW_MS = 90_000

X18 = 10**18


def to_x18(value: Union[int, float, str, Decimal]) -> int:
    """Convert a human readable amount to 18-decimal fixed point.

    Args:
        value: Amount (e.g., "1.5")

    Returns:
        Fixed point integer (e.g., 1500000000000000000)
    """
    return int(Decimal(str(value)) * X18)


def from_x18(value: int) -> Decimal:
    """Convert an 18-decimal fixed point integer to a Decimal."""
    return Decimal(value) / X18


def format_x18(value: int) -> str:
    """Format a fixed point amount (e.g., -2000000000000000000 -> "-2")."""
    text = f"{from_x18(value):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def gen_nonce(recv_time_ms: Optional[int] = None, is_trigger: bool = False) -> int:
    """Generate a packed nonce with random low bits.

    Args:
        recv_time_ms: Receive time in milliseconds (default: now + 90 seconds)
        is_trigger: Mark the nonce as belonging to a trigger order

    Returns:
        Packed uint64 nonce
    """
    if recv_time_ms is None:
        recv_time_ms = int(time.time() * 1000) + DEFAULT_RECV_WINDOW_MS
    return pack_nonce(recv_time_ms, secrets.randbelow(MAX_NONCE_LOW + 1), is_trigger)


def gen_expiration(
    seconds_from_now: int,
    order_type: OrderType = OrderType.DEFAULT,
    reduce_only: bool = False,
) -> int:
    """Packed order expiration ``seconds_from_now`` in the future."""
    return order_type.apply_to_expiration(int(time.time()) + seconds_from_now, reduce_only)


def product_verifying_contract(product_id: int) -> str:
    """Verifying contract of a product's orders when no book address is known.

    The product id is written as a big-endian 20-byte address.
    """
    if product_id < 0 or product_id >= 2**32:
        raise ValueError(f"Invalid product_id: {product_id}")
    return to_checksum_address(product_id.to_bytes(20, "big"))
