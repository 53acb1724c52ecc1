"""Off-chain order book contract bindings.

The book takes the same order layout as the endpoint, but it is a
separate contract type and the two are never interchanged.
"""

from dataclasses import dataclass

from .base import AbiStruct


@dataclass(frozen=True)
class Order(AbiStruct):
    ABI_TYPE = "(bytes32,int128,int128,uint64,uint64)"

    sender: bytes
    price_x18: int
    amount: int
    expiration: int
    nonce: int


@dataclass(frozen=True)
class SignedOrder(AbiStruct):
    ABI_TYPE = f"({Order.ABI_TYPE},bytes)"
    NESTED = {"order": Order}

    order: Order
    signature: bytes
