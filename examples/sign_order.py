"""Sign a post-only order and a cancellation for it.

Prerequisites:
1. pip install -e ".[examples]"
2. Set environment variables:
   - VERTEX_PRIVATE_KEY
   - VERTEX_ENDPOINT_ADDRESS
   - VERTEX_CHAIN_ID (optional, default 42161)
   - VERTEX_BOOK_ADDRESSES (optional, e.g. "1:0x...,2:0x...")

Usage:
    python sign_order.py
"""

import json
import os
import time

from dotenv import load_dotenv

load_dotenv()


def main():
    from vertex_messages import (
        Cancellation,
        MessageSigner,
        Order,
        OrderType,
        format_x18,
        gen_nonce,
        signer_config_from_env,
        to_x18,
    )

    private_key = os.environ.get("VERTEX_PRIVATE_KEY")
    if not private_key:
        print("Missing required environment variable: VERTEX_PRIVATE_KEY")
        return

    signer = MessageSigner(private_key, signer_config_from_env())
    product_id = 1

    print("=" * 60)
    print("  SIGN ORDER + CANCELLATION")
    print("=" * 60)

    order = Order(
        sender=signer.subaccount("default"),
        price_x18=to_x18("1.5"),
        amount=-to_x18(2),
        expiration=OrderType.POST_ONLY.apply_to_expiration(int(time.time()) + 3600),
        nonce=gen_nonce(),
    )
    signed_order = signer.sign(order, product_id=product_id)
    digest = signer.digest(order, product_id=product_id)

    print(f"  Signer:     {signer.address}")
    print(f"  Order type: {order.order_type}")
    print(f"  Price:      {format_x18(order.price_x18)}")
    print(f"  Amount:     {format_x18(order.amount)}")
    print(f"  Digest:     0x{digest.hex()}")
    print(f"  Signature:  0x{signed_order.signature.hex()[:20]}...")
    print(json.dumps(order.to_wire(), indent=2))

    if not signer.get_config().endpoint_address:
        print("VERTEX_ENDPOINT_ADDRESS not set, skipping cancellation")
        return

    cancellation = Cancellation(
        sender=order.sender,
        product_ids=[product_id],
        digests=[digest],
        nonce=gen_nonce(),
    )
    signed_cancellation = signer.sign(cancellation)
    print(f"  Cancellation ABI: {len(signed_cancellation.abi_encode())} bytes")


if __name__ == "__main__":
    main()
