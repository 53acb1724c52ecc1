"""Signable messages of the off-chain order and account-action protocol.

Messages are immutable. Packed fields (``expiration`` on orders and
``nonce`` everywhere) are stored privately and read through accessors
that decode one sub-field each; the packed integer itself is only
available through the ``raw_*`` accessors, for transport.

Each message converts to its endpoint binding with :meth:`to_binding`
and pairs with a signature through :meth:`to_signed_binding`.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Iterable, Optional, Protocol, Tuple, Type, TypeVar, Union

from hexbytes import HexBytes

from . import packing
from .types import (
    BURN_LP_FIELDS,
    CANCELLATION_FIELDS,
    CANCELLATION_PRODUCTS_FIELDS,
    LINK_SIGNER_FIELDS,
    LIQUIDATE_SUBACCOUNT_FIELDS,
    LIST_TRIGGER_ORDERS_FIELDS,
    MINT_LP_FIELDS,
    ORDER_FIELDS,
    STREAM_AUTHENTICATION_FIELDS,
    WITHDRAW_COLLATERAL_FIELDS,
    MessageField,
    OrderType,
    coerce_value,
)
from . import wire
from ..bindings import endpoint, offchain_book

M = TypeVar("M", bound="Message")

SignatureLike = Union[bytes, str]


def signature_bytes(signature: SignatureLike) -> bytes:
    """Normalise a signature given as bytes or hex. Not validated."""
    return bytes(HexBytes(signature))


class BindingConvertible(Protocol):
    """Anything that converts to an endpoint binding."""

    def to_binding(self) -> Any:
        ...

    def to_signed_binding(self, signature: SignatureLike) -> Any:
        ...


class Message:
    """Shared behaviour of all signable messages.

    Subclasses are frozen dataclasses declaring ``PRIMARY_TYPE`` and
    ``FIELDS``; their constructors pass every field through
    :meth:`_assign`.
    """

    PRIMARY_TYPE: ClassVar[str]
    FIELDS: ClassVar[Tuple[MessageField, ...]]

    def _assign(self, **values: Any) -> None:
        for field in self.FIELDS:
            value = coerce_value(field.abi_type, values[field.argument], field.argument)
            object.__setattr__(self, field.attribute, value)

    @classmethod
    def eip712_types(cls) -> Dict[str, list]:
        return {cls.PRIMARY_TYPE: [f.as_eip712() for f in cls.FIELDS]}

    def typed_data_message(self) -> Dict[str, Any]:
        """Field values keyed by EIP-712 name, in native Python types."""
        message = {}
        for f in self.FIELDS:
            value = getattr(self, f.attribute)
            message[f.name] = list(value) if isinstance(value, tuple) else value
        return message

    def to_wire(self) -> Dict[str, Any]:
        """Text-transport form, see :mod:`vertex_messages.eip712.wire`."""
        return wire.encode_message(self)

    @classmethod
    def from_wire(cls: Type[M], data: Dict[str, Any]) -> M:
        return wire.decode_message(cls, data)


class NonceMixin:
    """Accessors for the packed ``nonce`` field."""

    _nonce: int

    @property
    def raw_nonce(self) -> int:
        """Packed nonce, for transport only."""
        return self._nonce

    @property
    def recv_time(self) -> int:
        return packing.recv_time(self._nonce)

    @property
    def nonce_low_bits(self) -> int:
        return packing.nonce_low_bits(self._nonce)

    @property
    def is_trigger_order(self) -> bool:
        return packing.is_trigger_order(self._nonce)


@dataclass(frozen=True, init=False)
class Order(NonceMixin, Message):
    """Limit order.

    ``amount`` is positive for a bid and negative for an ask. Both price
    and amount are fixed point with 18 decimals.
    """

    PRIMARY_TYPE = "Order"
    FIELDS = ORDER_FIELDS

    sender: bytes
    price_x18: int
    amount: int
    _expiration: int
    _nonce: int

    def __init__(self, sender: bytes, price_x18: int, amount: int, expiration: int, nonce: int):
        self._assign(
            sender=sender,
            price_x18=price_x18,
            amount=amount,
            expiration=expiration,
            nonce=nonce,
        )

    @property
    def raw_expiration(self) -> int:
        """Packed expiration, for transport only."""
        return self._expiration

    @property
    def expiration(self) -> int:
        """Expiration timestamp without order type and flag bits."""
        return packing.expiration(self._expiration)

    @property
    def reduce_only(self) -> bool:
        return packing.reduce_only(self._expiration)

    @property
    def reserved_bits(self) -> int:
        return packing.reserved_bits(self._expiration)

    @property
    def order_type_tag(self) -> int:
        return packing.order_type_tag(self._expiration)

    @property
    def order_type(self) -> OrderType:
        return OrderType.from_tag(self.order_type_tag)

    def with_expiration_flags(
        self,
        order_type: Optional[OrderType] = None,
        reduce_only: Optional[bool] = None,
    ) -> "Order":
        """Copy of this order with a re-packed expiration.

        The timestamp and the reserved bits are carried over verbatim;
        flags that are not given keep their current value.
        """
        order_type = self.order_type if order_type is None else order_type
        reduce_only = self.reduce_only if reduce_only is None else reduce_only
        expiration = packing.pack_expiration(
            order_type.tag, reduce_only, self.reserved_bits, self.expiration
        )
        return Order(self.sender, self.price_x18, self.amount, expiration, self._nonce)

    def to_binding(self) -> endpoint.Order:
        return endpoint.Order(
            sender=self.sender,
            price_x18=self.price_x18,
            amount=self.amount,
            expiration=self._expiration,
            nonce=self._nonce,
        )

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedOrder:
        return endpoint.SignedOrder(
            order=self.to_binding(),
            signature=signature_bytes(signature),
        )

    def to_offchain_book_binding(self) -> offchain_book.Order:
        return offchain_book.Order(
            sender=self.sender,
            price_x18=self.price_x18,
            amount=self.amount,
            expiration=self._expiration,
            nonce=self._nonce,
        )

    def to_offchain_book_signed_binding(self, signature: SignatureLike) -> offchain_book.SignedOrder:
        return offchain_book.SignedOrder(
            order=self.to_offchain_book_binding(),
            signature=signature_bytes(signature),
        )

    @classmethod
    def from_binding(cls, order: Union[endpoint.Order, offchain_book.Order]) -> "Order":
        """Inverse of :meth:`to_binding`.

        Raises:
            FieldOutOfRange: If the binding carries values wider than the
                order fields
        """
        return cls(
            sender=order.sender,
            price_x18=order.price_x18,
            amount=order.amount,
            expiration=order.expiration,
            nonce=order.nonce,
        )


@dataclass(frozen=True, init=False)
class Cancellation(NonceMixin, Message):
    """Cancel orders by digest.

    ``product_ids`` and ``digests`` are not required to have equal length.
    """

    PRIMARY_TYPE = "Cancellation"
    FIELDS = CANCELLATION_FIELDS

    sender: bytes
    product_ids: Tuple[int, ...]
    digests: Tuple[bytes, ...]
    _nonce: int

    def __init__(self, sender: bytes, product_ids: Iterable[int], digests: Iterable[bytes], nonce: int):
        self._assign(sender=sender, product_ids=product_ids, digests=digests, nonce=nonce)

    def to_binding(self) -> endpoint.Cancellation:
        return endpoint.Cancellation(
            sender=self.sender,
            product_ids=self.product_ids,
            digests=self.digests,
            nonce=self._nonce,
        )

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedCancellation:
        return endpoint.SignedCancellation(
            cancellation=self.to_binding(),
            signature=signature_bytes(signature),
        )


@dataclass(frozen=True, init=False)
class CancellationProducts(NonceMixin, Message):
    """Cancel every open order of the sender on the given products."""

    PRIMARY_TYPE = "CancellationProducts"
    FIELDS = CANCELLATION_PRODUCTS_FIELDS

    sender: bytes
    product_ids: Tuple[int, ...]
    _nonce: int

    def __init__(self, sender: bytes, product_ids: Iterable[int], nonce: int):
        self._assign(sender=sender, product_ids=product_ids, nonce=nonce)

    def to_binding(self) -> endpoint.CancellationProducts:
        return endpoint.CancellationProducts(
            sender=self.sender,
            product_ids=self.product_ids,
            nonce=self._nonce,
        )

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedCancellationProducts:
        return endpoint.SignedCancellationProducts(
            cancellation_products=self.to_binding(),
            signature=signature_bytes(signature),
        )


@dataclass(frozen=True, init=False)
class LinkSigner(NonceMixin, Message):
    """Delegate signing for ``sender`` to another subaccount's address."""

    PRIMARY_TYPE = "LinkSigner"
    FIELDS = LINK_SIGNER_FIELDS

    sender: bytes
    signer: bytes
    _nonce: int

    def __init__(self, sender: bytes, signer: bytes, nonce: int):
        self._assign(sender=sender, signer=signer, nonce=nonce)

    def to_binding(self) -> endpoint.LinkSigner:
        return endpoint.LinkSigner(sender=self.sender, signer=self.signer, nonce=self._nonce)

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedLinkSigner:
        return endpoint.SignedLinkSigner(
            tx=self.to_binding(),
            signature=signature_bytes(signature),
        )


@dataclass(frozen=True, init=False)
class LiquidateSubaccount(NonceMixin, Message):
    PRIMARY_TYPE = "LiquidateSubaccount"
    FIELDS = LIQUIDATE_SUBACCOUNT_FIELDS

    sender: bytes
    liquidatee: bytes
    mode: int
    health_group: int
    amount: int
    _nonce: int

    def __init__(
        self,
        sender: bytes,
        liquidatee: bytes,
        mode: int,
        health_group: int,
        amount: int,
        nonce: int,
    ):
        self._assign(
            sender=sender,
            liquidatee=liquidatee,
            mode=mode,
            health_group=health_group,
            amount=amount,
            nonce=nonce,
        )

    def to_binding(self) -> endpoint.LiquidateSubaccount:
        return endpoint.LiquidateSubaccount(
            sender=self.sender,
            liquidatee=self.liquidatee,
            mode=self.mode,
            health_group=self.health_group,
            amount=self.amount,
            nonce=self._nonce,
        )

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedLiquidateSubaccount:
        return endpoint.SignedLiquidateSubaccount(
            tx=self.to_binding(),
            signature=signature_bytes(signature),
        )


@dataclass(frozen=True, init=False)
class WithdrawCollateral(NonceMixin, Message):
    PRIMARY_TYPE = "WithdrawCollateral"
    FIELDS = WITHDRAW_COLLATERAL_FIELDS

    sender: bytes
    product_id: int
    amount: int
    _nonce: int

    def __init__(self, sender: bytes, product_id: int, amount: int, nonce: int):
        self._assign(sender=sender, product_id=product_id, amount=amount, nonce=nonce)

    def to_binding(self) -> endpoint.WithdrawCollateral:
        return endpoint.WithdrawCollateral(
            sender=self.sender,
            product_id=self.product_id,
            amount=self.amount,
            nonce=self._nonce,
        )

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedWithdrawCollateral:
        return endpoint.SignedWithdrawCollateral(
            tx=self.to_binding(),
            signature=signature_bytes(signature),
        )


@dataclass(frozen=True, init=False)
class MintLp(NonceMixin, Message):
    """Mint LP tokens.

    ``quote_amount_low`` and ``quote_amount_high`` bound the quote amount
    the sender is willing to deposit.
    """

    PRIMARY_TYPE = "MintLp"
    FIELDS = MINT_LP_FIELDS

    sender: bytes
    product_id: int
    amount_base: int
    quote_amount_low: int
    quote_amount_high: int
    _nonce: int

    def __init__(
        self,
        sender: bytes,
        product_id: int,
        amount_base: int,
        quote_amount_low: int,
        quote_amount_high: int,
        nonce: int,
    ):
        self._assign(
            sender=sender,
            product_id=product_id,
            amount_base=amount_base,
            quote_amount_low=quote_amount_low,
            quote_amount_high=quote_amount_high,
            nonce=nonce,
        )

    def to_binding(self) -> endpoint.MintLp:
        return endpoint.MintLp(
            sender=self.sender,
            product_id=self.product_id,
            amount_base=self.amount_base,
            quote_amount_low=self.quote_amount_low,
            quote_amount_high=self.quote_amount_high,
            nonce=self._nonce,
        )

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedMintLp:
        return endpoint.SignedMintLp(
            tx=self.to_binding(),
            signature=signature_bytes(signature),
        )


@dataclass(frozen=True, init=False)
class BurnLp(NonceMixin, Message):
    PRIMARY_TYPE = "BurnLp"
    FIELDS = BURN_LP_FIELDS

    sender: bytes
    product_id: int
    amount: int
    _nonce: int

    def __init__(self, sender: bytes, product_id: int, amount: int, nonce: int):
        self._assign(sender=sender, product_id=product_id, amount=amount, nonce=nonce)

    def to_binding(self) -> endpoint.BurnLp:
        return endpoint.BurnLp(
            sender=self.sender,
            product_id=self.product_id,
            amount=self.amount,
            nonce=self._nonce,
        )

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedBurnLp:
        return endpoint.SignedBurnLp(
            tx=self.to_binding(),
            signature=signature_bytes(signature),
        )


@dataclass(frozen=True, init=False)
class ListTriggerOrders(Message):
    """Authenticate a request to list the sender's trigger orders.

    ``recv_time`` is a plain timestamp, not a packed nonce.
    """

    PRIMARY_TYPE = "ListTriggerOrders"
    FIELDS = LIST_TRIGGER_ORDERS_FIELDS

    sender: bytes
    recv_time: int

    def __init__(self, sender: bytes, recv_time: int):
        self._assign(sender=sender, recv_time=recv_time)

    def to_binding(self) -> endpoint.ListTriggerOrders:
        return endpoint.ListTriggerOrders(sender=self.sender, recv_time=self.recv_time)

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedListTriggerOrders:
        return endpoint.SignedListTriggerOrders(
            tx=self.to_binding(),
            signature=signature_bytes(signature),
        )


@dataclass(frozen=True, init=False)
class StreamAuthentication(Message):
    """Authenticate a subscription stream until ``expiration``."""

    PRIMARY_TYPE = "StreamAuthentication"
    FIELDS = STREAM_AUTHENTICATION_FIELDS

    sender: bytes
    expiration: int

    def __init__(self, sender: bytes, expiration: int):
        self._assign(sender=sender, expiration=expiration)

    def to_binding(self) -> endpoint.StreamAuthentication:
        return endpoint.StreamAuthentication(sender=self.sender, expiration=self.expiration)

    def to_signed_binding(self, signature: SignatureLike) -> endpoint.SignedStreamAuthentication:
        return endpoint.SignedStreamAuthentication(
            tx=self.to_binding(),
            signature=signature_bytes(signature),
        )


MESSAGE_CLASSES = {
    cls.PRIMARY_TYPE: cls
    for cls in (
        Order,
        Cancellation,
        CancellationProducts,
        LinkSigner,
        LiquidateSubaccount,
        WithdrawCollateral,
        MintLp,
        BurnLp,
        ListTriggerOrders,
        StreamAuthentication,
    )
}
