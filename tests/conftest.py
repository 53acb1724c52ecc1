"""Shared message fixtures."""

import pytest

from vertex_messages.eip712 import (
    BurnLp,
    Cancellation,
    CancellationProducts,
    LinkSigner,
    LiquidateSubaccount,
    ListTriggerOrders,
    MintLp,
    Order,
    OrderType,
    StreamAuthentication,
    WithdrawCollateral,
    encode_identity,
    pack_nonce,
)

SENDER = encode_identity(b"\xaa" * 20, "acct1")
OTHER = encode_identity(b"\xbb" * 20, "default")
NONCE = pack_nonce(1_700_000_123, low_bits=7)


@pytest.fixture
def order() -> Order:
    """Ask of 2 at 1.5, post only."""
    return Order(
        sender=SENDER,
        price_x18=1_500_000_000_000_000_000,
        amount=-2_000_000_000_000_000_000,
        expiration=OrderType.POST_ONLY.apply_to_expiration(1_700_000_000),
        nonce=pack_nonce(1_700_000_123),
    )


@pytest.fixture
def all_messages(order):
    """One instance of every message type."""
    return [
        order,
        Cancellation(SENDER, [1, 2], [b"\x01" * 32], NONCE),
        CancellationProducts(SENDER, [3], NONCE),
        LinkSigner(SENDER, OTHER, NONCE),
        LiquidateSubaccount(SENDER, OTHER, 1, 2, -(10**18), NONCE),
        WithdrawCollateral(SENDER, 0, 5 * 10**18, NONCE),
        MintLp(SENDER, 1, 10**18, 10**17, 2 * 10**17, NONCE),
        BurnLp(SENDER, 1, 10**18, NONCE),
        ListTriggerOrders(SENDER, 1_700_000_000_000),
        StreamAuthentication(SENDER, 1_700_000_000_000),
    ]
