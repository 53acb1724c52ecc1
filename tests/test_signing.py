"""Tests for EIP-712 signing."""

import asyncio

import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data

from vertex_messages.bindings import endpoint
from vertex_messages.eip712 import (
    Cancellation,
    DecodeError,
    Order,
    build_typed_data,
    create_eip712_domain,
    encode_identity,
    message_digest,
    recover_message_signer,
    sign_message,
    sign_message_with_signer,
    verify_message_signature,
)

from conftest import NONCE

# Test wallet (DO NOT use in production)
TEST_PRIVATE_KEY = "0x" + "ab" * 32  # Deterministic test key
TEST_ACCOUNT = Account.from_key(TEST_PRIVATE_KEY)
TEST_ADDRESS = TEST_ACCOUNT.address

ENDPOINT = "0x" + "12" * 20
BOOK = "0x" + "34" * 20
CHAIN_ID = 42161


class TestDomain:
    """Tests for the EIP-712 domain."""

    def test_create_domain(self):
        """Test domain fields."""
        domain = create_eip712_domain(ENDPOINT, CHAIN_ID)

        assert domain["name"] == "Vertex"
        assert domain["version"] == "0.0.1"
        assert domain["chainId"] == CHAIN_ID
        assert domain["verifyingContract"].lower() == ENDPOINT

    def test_invalid_contract(self):
        """Test that invalid verifying contracts raise error."""
        with pytest.raises(ValueError, match="Invalid verifying contract"):
            create_eip712_domain("invalid", CHAIN_ID)

    def test_typed_data(self, order):
        """Test the full typed-data payload."""
        typed_data = build_typed_data(order, BOOK, CHAIN_ID)

        assert typed_data["primaryType"] == "Order"
        assert set(typed_data["types"]) == {"EIP712Domain", "Order"}
        assert typed_data["message"]["expiration"] == order.raw_expiration


class TestDigest:
    """Tests for message digests."""

    def test_digest_matches_eth_account(self, order):
        """Test that the digest is the EIP-712 hash eth_account signs."""
        digest = message_digest(order, BOOK, CHAIN_ID)
        signable = encode_typed_data(full_message=build_typed_data(order, BOOK, CHAIN_ID))
        signed = Account.sign_message(signable, TEST_PRIVATE_KEY)

        assert len(digest) == 32
        assert digest == bytes(signed.message_hash)

    def test_digest_depends_on_domain(self, order):
        """Test replay protection across chains and contracts."""
        digest = message_digest(order, BOOK, CHAIN_ID)

        assert digest == message_digest(order, BOOK, CHAIN_ID)
        assert digest != message_digest(order, BOOK, 1)
        assert digest != message_digest(order, ENDPOINT, CHAIN_ID)

    def test_digest_depends_on_packed_flags(self, order):
        """Test that flipping reduce-only changes the signed hash."""
        flipped = order.with_expiration_flags(reduce_only=True)
        assert message_digest(order, BOOK, CHAIN_ID) != message_digest(flipped, BOOK, CHAIN_ID)


class TestSignMessage:
    """Tests for private key signing."""

    def test_sign_order(self, order):
        """Test that signing returns the signed endpoint binding."""
        signed = sign_message(TEST_PRIVATE_KEY, order, BOOK, CHAIN_ID)

        assert isinstance(signed, endpoint.SignedOrder)
        assert signed.order == order.to_binding()
        assert len(signed.signature) == 65

    def test_sign_and_verify_every_message(self, all_messages):
        """Test signature recovery for each message type."""
        for message in all_messages:
            signed = sign_message(TEST_PRIVATE_KEY, message, ENDPOINT, CHAIN_ID)

            assert verify_message_signature(
                message, signed.signature, ENDPOINT, CHAIN_ID, TEST_ADDRESS
            ) is True

    def test_verify_wrong_signer(self, order):
        """Test that another address does not verify."""
        signed = sign_message(TEST_PRIVATE_KEY, order, BOOK, CHAIN_ID)
        wrong_address = Account.create().address

        assert verify_message_signature(order, signed.signature, BOOK, CHAIN_ID, wrong_address) is False

    def test_verify_wrong_domain(self, order):
        """Test that a signature does not carry over to another book."""
        signed = sign_message(TEST_PRIVATE_KEY, order, BOOK, CHAIN_ID)

        assert verify_message_signature(order, signed.signature, ENDPOINT, CHAIN_ID, TEST_ADDRESS) is False

    def test_verify_garbage_signature(self, order):
        """Test that malformed signatures do not raise."""
        assert verify_message_signature(order, b"\x00" * 3, BOOK, CHAIN_ID, TEST_ADDRESS) is False

    def test_recover_hex_signature(self, order):
        """Test recovery from a hex signature."""
        signed = sign_message(TEST_PRIVATE_KEY, order, BOOK, CHAIN_ID)

        assert recover_message_signer(order, "0x" + signed.signature.hex(), BOOK, CHAIN_ID) == TEST_ADDRESS

    def test_cancel_by_digest(self, order):
        """Test cancelling an order by its signed digest."""
        digest = message_digest(order, BOOK, CHAIN_ID)
        cancellation = Cancellation(order.sender, [1], [digest], NONCE)

        signed = sign_message(TEST_PRIVATE_KEY, cancellation, ENDPOINT, CHAIN_ID)

        assert signed.cancellation.digests == (digest,)


class FakeSigner:
    """Records the typed data it is asked to sign."""

    def __init__(self, signature: str):
        self.signature = signature
        self.params = None

    async def get_address(self) -> str:
        return TEST_ADDRESS

    async def sign_typed_data(self, params):
        self.params = params
        return self.signature


class TestSignWithSigner:
    """Tests for signing through an external signer."""

    def test_json_safe_message(self, order):
        """Test that the signer receives strings for wide integers."""
        signer = FakeSigner("0x" + "11" * 65)

        signed = asyncio.run(sign_message_with_signer(signer, order, BOOK, CHAIN_ID))

        assert signed.signature == b"\x11" * 65
        assert signed.order == order.to_binding()
        assert signer.params["primaryType"] == "Order"
        assert signer.params["message"]["amount"] == "-2000000000000000000"
        assert signer.params["message"]["sender"] == "0x" + order.sender.hex()
        assert "EIP712Domain" not in signer.params["types"]

    @pytest.mark.parametrize("signature", ["0x123", "0x" + "11" * 64 + "1\n", "0x" + "11" * 65 + " "])
    def test_malformed_signature(self, order, signature):
        """Test that a malformed hex signature is a decode error."""
        signer = FakeSigner(signature)

        with pytest.raises(DecodeError):
            asyncio.run(sign_message_with_signer(signer, order, BOOK, CHAIN_ID))


class TestIntegration:
    """Integration tests for the full flow."""

    def test_full_flow(self, order):
        """Test build -> sign -> ABI encode -> decode -> verify."""
        sender = encode_identity(TEST_ADDRESS, "default")

        mine = Order(sender, order.price_x18, order.amount, order.raw_expiration, order.raw_nonce)
        signed = sign_message(TEST_PRIVATE_KEY, mine, BOOK, CHAIN_ID)

        decoded = endpoint.SignedOrder.abi_decode(signed.abi_encode())
        received = Order.from_binding(decoded.order)

        assert received == mine
        assert verify_message_signature(received, decoded.signature, BOOK, CHAIN_ID, TEST_ADDRESS)
