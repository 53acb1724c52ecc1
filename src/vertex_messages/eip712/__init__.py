"""Signable messages of the off-chain order and account-action protocol.

Key components:
- Bit packing of order expiration flags and message nonces
- Subaccount identity encoding (address + 12-byte name)
- Message types and their endpoint bindings
- Text-transport serialization
- EIP-712 payloads and signing

Example usage:
    ```python
    from vertex_messages.eip712 import (
        Order,
        OrderType,
        encode_identity,
        gen_nonce,
        sign_message,
        to_x18,
    )

    # Ask 2 at 1.5, post only
    order = Order(
        sender=encode_identity("0x...", "default"),
        price_x18=to_x18("1.5"),
        amount=-to_x18(2),
        expiration=OrderType.POST_ONLY.apply_to_expiration(1_700_000_000),
        nonce=gen_nonce(),
    )

    assert order.order_type is OrderType.POST_ONLY
    payload = order.to_wire()

    # Sign against the product's order book
    signed = sign_message(
        private_key="0x...",
        message=order,
        verifying_contract="0x...",
        chain_id=42161,
    )
    ```
"""

from .exceptions import (
    MessageError,
    DecodeError,
    InvalidNameEncoding,
    FieldOutOfRange,
    InvalidAddress,
)
from .packing import (
    pack_expiration,
    expiration,
    reduce_only,
    reserved_bits,
    order_type_tag,
    pack_nonce,
    recv_time,
    nonce_low_bits,
    is_trigger_order,
)
from .identity import (
    Identity,
    encode_identity,
    decode_identity,
    encode_name,
    decode_name,
    concat_identity,
)
from .types import OrderType, MessageField
from .messages import (
    BindingConvertible,
    Message,
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
    MESSAGE_CLASSES,
)
from .wire import encode_message, decode_message, encode_hex, decode_hex
from .signing import (
    create_eip712_domain,
    build_typed_data,
    message_digest,
    sign_message,
    sign_message_with_signer,
    recover_message_signer,
    verify_message_signature,
    TypedDataSigner,
)
from .utils import (
    EIP712_DOMAIN_NAME,
    EIP712_DOMAIN_VERSION,
    DEFAULT_CHAIN_ID,
    DEFAULT_SUBACCOUNT_NAME,
    ZERO_ADDRESS,
    to_x18,
    from_x18,
    format_x18,
    gen_nonce,
    gen_expiration,
    product_verifying_contract,
)

__all__ = [
    # Errors
    "MessageError",
    "DecodeError",
    "InvalidNameEncoding",
    "FieldOutOfRange",
    "InvalidAddress",
    # Packing
    "pack_expiration",
    "expiration",
    "reduce_only",
    "reserved_bits",
    "order_type_tag",
    "pack_nonce",
    "recv_time",
    "nonce_low_bits",
    "is_trigger_order",
    # Identity
    "Identity",
    "encode_identity",
    "decode_identity",
    "encode_name",
    "decode_name",
    "concat_identity",
    # Messages
    "OrderType",
    "MessageField",
    "BindingConvertible",
    "Message",
    "Order",
    "Cancellation",
    "CancellationProducts",
    "LinkSigner",
    "LiquidateSubaccount",
    "WithdrawCollateral",
    "MintLp",
    "BurnLp",
    "ListTriggerOrders",
    "StreamAuthentication",
    "MESSAGE_CLASSES",
    # Wire
    "encode_message",
    "decode_message",
    "encode_hex",
    "decode_hex",
    # Signing
    "create_eip712_domain",
    "build_typed_data",
    "message_digest",
    "sign_message",
    "sign_message_with_signer",
    "recover_message_signer",
    "verify_message_signature",
    "TypedDataSigner",
    # Utils
    "EIP712_DOMAIN_NAME",
    "EIP712_DOMAIN_VERSION",
    "DEFAULT_CHAIN_ID",
    "DEFAULT_SUBACCOUNT_NAME",
    "ZERO_ADDRESS",
    "to_x18",
    "from_x18",
    "format_x18",
    "gen_nonce",
    "gen_expiration",
    "product_verifying_contract",
]
