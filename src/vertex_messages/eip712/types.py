"""Message schema types.

Every message is described once by a tuple of :class:`MessageField`
records. The same records drive the EIP-712 type definitions, the
constructor range checks and the text-transport codecs, so the field
order and width of a message cannot drift between them.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple

from hexbytes import HexBytes

from . import packing
from .exceptions import FieldOutOfRange


class OrderType(Enum):
    """Execution policy of an order, stored in bits 62-63 of its expiration."""

    DEFAULT = 0
    IMMEDIATE_OR_CANCEL = 1
    FILL_OR_KILL = 2
    POST_ONLY = 3

    def __str__(self) -> str:
        return _ORDER_TYPE_LABELS[self]

    @property
    def tag(self) -> int:
        return self.value

    def taker_only(self) -> bool:
        """Orders of this type must never rest on the book."""
        return self in (OrderType.IMMEDIATE_OR_CANCEL, OrderType.FILL_OR_KILL)

    def apply_to_expiration(self, expiration: int, reduce_only: bool = False) -> int:
        """Stamp this order type onto a raw expiration timestamp.

        Args:
            expiration: Expiration timestamp, below 2^58
            reduce_only: Also set the reduce-only flag

        Returns:
            Packed expiration with reserved bits cleared

        Raises:
            FieldOutOfRange: If ``expiration`` does not fit in 58 bits
        """
        return packing.pack_expiration(self.tag, reduce_only, 0, expiration)

    @classmethod
    def from_tag(cls, tag: int) -> "OrderType":
        return cls(tag)

    @classmethod
    def from_label(cls, label: str) -> "OrderType":
        """Parse ``default``, ``ioc``, ``fok`` or ``post_only``."""
        for order_type, name in _ORDER_TYPE_LABELS.items():
            if name == label.lower():
                return order_type
        raise ValueError(f"Invalid order type: {label}")


_ORDER_TYPE_LABELS = {
    OrderType.DEFAULT: "default",
    OrderType.IMMEDIATE_OR_CANCEL: "ioc",
    OrderType.FILL_OR_KILL: "fok",
    OrderType.POST_ONLY: "post_only",
}


@dataclass(frozen=True)
class MessageField:
    """One field of a signable message."""

    name: str
    """EIP-712 and wire name, e.g. ``priceX18``."""

    abi_type: str
    """Solidity type, e.g. ``int128`` or ``bytes32[]``."""

    attribute: str
    """Attribute holding the value on the message object."""

    @property
    def argument(self) -> str:
        """Constructor keyword for this field."""
        return self.attribute.lstrip("_")

    def as_eip712(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.abi_type}


_INT_TYPE = re.compile(r"^(u?)int(\d+)$")


def int_bounds(abi_type: str) -> Tuple[int, int]:
    """Inclusive value range of a Solidity integer type."""
    match = _INT_TYPE.match(abi_type)
    if not match:
        raise ValueError(f"Not an integer type: {abi_type}")
    unsigned, bits = match.group(1), int(match.group(2))
    if unsigned:
        return 0, (1 << bits) - 1
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def coerce_value(abi_type: str, value: Any, name: str) -> Any:
    """Check ``value`` against a fixed-width ABI type.

    Byte strings are normalised to ``bytes`` and sequences to tuples so
    messages stay immutable and hashable.

    Raises:
        FieldOutOfRange: If the value does not fit the type
    """
    if abi_type.endswith("[]"):
        if isinstance(value, (str, bytes, bytearray)) or not hasattr(value, "__iter__"):
            raise FieldOutOfRange(f"Invalid {name}: {value!r}. Must be a sequence")
        element_type = abi_type[:-2]
        return tuple(
            coerce_value(element_type, item, f"{name}[{i}]")
            for i, item in enumerate(value)
        )

    if abi_type == "bytes32":
        if isinstance(value, str):
            try:
                value = HexBytes(value)
            except ValueError as e:
                raise FieldOutOfRange(f"Invalid {name}: {value!r}. Not hex") from e
        if not isinstance(value, (bytes, bytearray)) or len(value) != 32:
            raise FieldOutOfRange(f"Invalid {name}: {value!r}. Must be 32 bytes")
        return bytes(value)

    low, high = int_bounds(abi_type)
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldOutOfRange(f"Invalid {name}: {value!r}. Must be an integer")
    if value < low or value > high:
        raise FieldOutOfRange(
            f"Invalid {name}: {value}. Does not fit {abi_type} [{low}, {high}]"
        )
    return value


def eip712_types(primary_type: str, fields: Tuple[MessageField, ...]) -> Dict[str, List[Dict[str, str]]]:
    return {primary_type: [f.as_eip712() for f in fields]}


ORDER_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("priceX18", "int128", "price_x18"),
    MessageField("amount", "int128", "amount"),
    MessageField("expiration", "uint64", "_expiration"),
    MessageField("nonce", "uint64", "_nonce"),
)

CANCELLATION_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("productIds", "uint32[]", "product_ids"),
    MessageField("digests", "bytes32[]", "digests"),
    MessageField("nonce", "uint64", "_nonce"),
)

CANCELLATION_PRODUCTS_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("productIds", "uint32[]", "product_ids"),
    MessageField("nonce", "uint64", "_nonce"),
)

LINK_SIGNER_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("signer", "bytes32", "signer"),
    MessageField("nonce", "uint64", "_nonce"),
)

LIQUIDATE_SUBACCOUNT_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("liquidatee", "bytes32", "liquidatee"),
    MessageField("mode", "uint8", "mode"),
    MessageField("healthGroup", "uint32", "health_group"),
    MessageField("amount", "int128", "amount"),
    MessageField("nonce", "uint64", "_nonce"),
)

WITHDRAW_COLLATERAL_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("productId", "uint32", "product_id"),
    MessageField("amount", "uint128", "amount"),
    MessageField("nonce", "uint64", "_nonce"),
)

MINT_LP_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("productId", "uint32", "product_id"),
    MessageField("amountBase", "uint128", "amount_base"),
    MessageField("quoteAmountLow", "uint128", "quote_amount_low"),
    MessageField("quoteAmountHigh", "uint128", "quote_amount_high"),
    MessageField("nonce", "uint64", "_nonce"),
)

BURN_LP_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("productId", "uint32", "product_id"),
    MessageField("amount", "uint128", "amount"),
    MessageField("nonce", "uint64", "_nonce"),
)

LIST_TRIGGER_ORDERS_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("recvTime", "uint64", "recv_time"),
)

STREAM_AUTHENTICATION_FIELDS = (
    MessageField("sender", "bytes32", "sender"),
    MessageField("expiration", "uint64", "expiration"),
)

# EIP-712 types per message
ORDER_TYPES = eip712_types("Order", ORDER_FIELDS)
CANCELLATION_TYPES = eip712_types("Cancellation", CANCELLATION_FIELDS)
CANCELLATION_PRODUCTS_TYPES = eip712_types(
    "CancellationProducts", CANCELLATION_PRODUCTS_FIELDS
)
LINK_SIGNER_TYPES = eip712_types("LinkSigner", LINK_SIGNER_FIELDS)
LIQUIDATE_SUBACCOUNT_TYPES = eip712_types(
    "LiquidateSubaccount", LIQUIDATE_SUBACCOUNT_FIELDS
)
WITHDRAW_COLLATERAL_TYPES = eip712_types(
    "WithdrawCollateral", WITHDRAW_COLLATERAL_FIELDS
)
MINT_LP_TYPES = eip712_types("MintLp", MINT_LP_FIELDS)
BURN_LP_TYPES = eip712_types("BurnLp", BURN_LP_FIELDS)
LIST_TRIGGER_ORDERS_TYPES = eip712_types(
    "ListTriggerOrders", LIST_TRIGGER_ORDERS_FIELDS
)
STREAM_AUTHENTICATION_TYPES = eip712_types(
    "StreamAuthentication", STREAM_AUTHENTICATION_FIELDS
)

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]
