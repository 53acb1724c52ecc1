"""Endpoint contract bindings.

Field-for-field images of the structs accepted by the endpoint contract.
Packed fields are carried as plain integers; these types do no range
checking of their own and are produced from validated messages.
"""

from dataclasses import dataclass
from typing import Tuple

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


@dataclass(frozen=True)
class Cancellation(AbiStruct):
    ABI_TYPE = "(bytes32,uint32[],bytes32[],uint64)"

    sender: bytes
    product_ids: Tuple[int, ...]
    digests: Tuple[bytes, ...]
    nonce: int


@dataclass(frozen=True)
class SignedCancellation(AbiStruct):
    ABI_TYPE = f"({Cancellation.ABI_TYPE},bytes)"
    NESTED = {"cancellation": Cancellation}

    cancellation: Cancellation
    signature: bytes


@dataclass(frozen=True)
class CancellationProducts(AbiStruct):
    ABI_TYPE = "(bytes32,uint32[],uint64)"

    sender: bytes
    product_ids: Tuple[int, ...]
    nonce: int


@dataclass(frozen=True)
class SignedCancellationProducts(AbiStruct):
    ABI_TYPE = f"({CancellationProducts.ABI_TYPE},bytes)"
    NESTED = {"cancellation_products": CancellationProducts}

    cancellation_products: CancellationProducts
    signature: bytes


@dataclass(frozen=True)
class LinkSigner(AbiStruct):
    ABI_TYPE = "(bytes32,bytes32,uint64)"

    sender: bytes
    signer: bytes
    nonce: int


@dataclass(frozen=True)
class SignedLinkSigner(AbiStruct):
    ABI_TYPE = f"({LinkSigner.ABI_TYPE},bytes)"
    NESTED = {"tx": LinkSigner}

    tx: LinkSigner
    signature: bytes


@dataclass(frozen=True)
class LiquidateSubaccount(AbiStruct):
    ABI_TYPE = "(bytes32,bytes32,uint8,uint32,int128,uint64)"

    sender: bytes
    liquidatee: bytes
    mode: int
    health_group: int
    amount: int
    nonce: int


@dataclass(frozen=True)
class SignedLiquidateSubaccount(AbiStruct):
    ABI_TYPE = f"({LiquidateSubaccount.ABI_TYPE},bytes)"
    NESTED = {"tx": LiquidateSubaccount}

    tx: LiquidateSubaccount
    signature: bytes


@dataclass(frozen=True)
class WithdrawCollateral(AbiStruct):
    ABI_TYPE = "(bytes32,uint32,uint128,uint64)"

    sender: bytes
    product_id: int
    amount: int
    nonce: int


@dataclass(frozen=True)
class SignedWithdrawCollateral(AbiStruct):
    ABI_TYPE = f"({WithdrawCollateral.ABI_TYPE},bytes)"
    NESTED = {"tx": WithdrawCollateral}

    tx: WithdrawCollateral
    signature: bytes


@dataclass(frozen=True)
class MintLp(AbiStruct):
    ABI_TYPE = "(bytes32,uint32,uint128,uint128,uint128,uint64)"

    sender: bytes
    product_id: int
    amount_base: int
    quote_amount_low: int
    quote_amount_high: int
    nonce: int


@dataclass(frozen=True)
class SignedMintLp(AbiStruct):
    ABI_TYPE = f"({MintLp.ABI_TYPE},bytes)"
    NESTED = {"tx": MintLp}

    tx: MintLp
    signature: bytes


@dataclass(frozen=True)
class BurnLp(AbiStruct):
    ABI_TYPE = "(bytes32,uint32,uint128,uint64)"

    sender: bytes
    product_id: int
    amount: int
    nonce: int


@dataclass(frozen=True)
class SignedBurnLp(AbiStruct):
    ABI_TYPE = f"({BurnLp.ABI_TYPE},bytes)"
    NESTED = {"tx": BurnLp}

    tx: BurnLp
    signature: bytes


@dataclass(frozen=True)
class ListTriggerOrders(AbiStruct):
    ABI_TYPE = "(bytes32,uint64)"

    sender: bytes
    recv_time: int


@dataclass(frozen=True)
class SignedListTriggerOrders(AbiStruct):
    ABI_TYPE = f"({ListTriggerOrders.ABI_TYPE},bytes)"
    NESTED = {"tx": ListTriggerOrders}

    tx: ListTriggerOrders
    signature: bytes


@dataclass(frozen=True)
class StreamAuthentication(AbiStruct):
    ABI_TYPE = "(bytes32,uint64)"

    sender: bytes
    expiration: int


@dataclass(frozen=True)
class SignedStreamAuthentication(AbiStruct):
    ABI_TYPE = f"({StreamAuthentication.ABI_TYPE},bytes)"
    NESTED = {"tx": StreamAuthentication}

    tx: StreamAuthentication
    signature: bytes
