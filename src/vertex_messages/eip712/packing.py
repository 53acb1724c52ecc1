"""Bit layout of the packed ``expiration`` and ``nonce`` fields.

The positions below are part of the signed payload. Changing any of them
changes the hash of every future signature.

``expiration`` (uint64, orders only)::

    bits 0-57   expiration timestamp
    bits 58-60  reserved, carried through untouched
    bit  61     reduce-only
    bits 62-63  order type tag

``nonce`` (uint64, every nonce-bearing message)::

    bits 0-19   caller assigned anti-replay counter
    bits 20-62  receive time
    bit  63     trigger order flag
"""

from .exceptions import FieldOutOfRange

EXPIRATION_BITS = 58
MAX_EXPIRATION = (1 << EXPIRATION_BITS) - 1

RESERVED_SHIFT = 58
RESERVED_BITS = 3
MAX_RESERVED = (1 << RESERVED_BITS) - 1

REDUCE_ONLY_BIT = 61

ORDER_TYPE_SHIFT = 62
MAX_ORDER_TYPE_TAG = 3

NONCE_LOW_BITS = 20
MAX_NONCE_LOW = (1 << NONCE_LOW_BITS) - 1

RECV_TIME_BITS = 43
MAX_RECV_TIME = (1 << RECV_TIME_BITS) - 1

TRIGGER_BIT = 63


def check_range(name: str, value: int, maximum: int) -> int:
    """Return ``value`` if it is an integer in ``[0, maximum]``.

    Raises:
        FieldOutOfRange: On anything else, including ``bool``
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldOutOfRange(f"Invalid {name}: {value!r}. Must be an integer")
    if value < 0 or value > maximum:
        raise FieldOutOfRange(
            f"Invalid {name}: {value}. Must be between 0 and {maximum}"
        )
    return value


def pack_expiration(
    order_type: int, reduce_only: bool, reserved_bits: int, raw_expiration: int
) -> int:
    """Combine order flags and a timestamp into a packed expiration.

    Args:
        order_type: Order type tag, 0 to 3
        reduce_only: Whether the order may only decrease a position
        reserved_bits: Bits 58-60, zero for new orders
        raw_expiration: Expiration timestamp, below 2^58

    Returns:
        Packed uint64 expiration

    Raises:
        FieldOutOfRange: If any sub-field is wider than its bit budget
    """
    check_range("order_type", order_type, MAX_ORDER_TYPE_TAG)
    check_range("reserved_bits", reserved_bits, MAX_RESERVED)
    check_range("expiration", raw_expiration, MAX_EXPIRATION)

    packed = raw_expiration
    packed |= reserved_bits << RESERVED_SHIFT
    if reduce_only:
        packed |= 1 << REDUCE_ONLY_BIT
    packed |= order_type << ORDER_TYPE_SHIFT
    return packed


def expiration(packed: int) -> int:
    """Timestamp part of a packed expiration."""
    return packed & MAX_EXPIRATION


def reduce_only(packed: int) -> bool:
    return (packed >> REDUCE_ONLY_BIT) & 1 == 1


def reserved_bits(packed: int) -> int:
    return (packed >> RESERVED_SHIFT) & MAX_RESERVED


def order_type_tag(packed: int) -> int:
    return (packed >> ORDER_TYPE_SHIFT) & MAX_ORDER_TYPE_TAG


def pack_nonce(recv_time: int, low_bits: int = 0, is_trigger: bool = False) -> int:
    """Build a packed nonce.

    Args:
        recv_time: Time after which the message is no longer accepted, below 2^43
        low_bits: Anti-replay counter, below 2^20
        is_trigger: Set the trigger order flag

    Returns:
        Packed uint64 nonce

    Raises:
        FieldOutOfRange: If ``recv_time`` or ``low_bits`` does not fit
    """
    check_range("recv_time", recv_time, MAX_RECV_TIME)
    check_range("nonce low bits", low_bits, MAX_NONCE_LOW)

    packed = (recv_time << NONCE_LOW_BITS) | low_bits
    if is_trigger:
        packed |= 1 << TRIGGER_BIT
    return packed


def recv_time(nonce: int) -> int:
    """Receive time of a packed nonce.

    The trigger flag sits above the receive time, so it is included here
    exactly as the on-chain verifier does (``nonce >> 20``).
    """
    return nonce >> NONCE_LOW_BITS


def nonce_low_bits(nonce: int) -> int:
    return nonce & MAX_NONCE_LOW


def is_trigger_order(nonce: int) -> bool:
    return (nonce >> TRIGGER_BIT) == 1
