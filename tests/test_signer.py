"""Tests for the config driven message signer."""

import pytest
from eth_account import Account

from vertex_messages import MessageSigner, signer_config_from_env
from vertex_messages.bindings import endpoint
from vertex_messages.eip712 import (
    CancellationProducts,
    StreamAuthentication,
    decode_identity,
    message_digest,
    verify_message_signature,
)

from conftest import NONCE

TEST_PRIVATE_KEY = "0x" + "ab" * 32
TEST_ADDRESS = Account.from_key(TEST_PRIVATE_KEY).address

ENDPOINT = "0x" + "12" * 20
BOOK = "0x" + "34" * 20


@pytest.fixture
def signer() -> MessageSigner:
    return MessageSigner(
        TEST_PRIVATE_KEY,
        {
            "chain_id": 421613,
            "endpoint_address": ENDPOINT,
            "book_addresses": {1: BOOK},
        },
    )


class TestConfig:
    """Tests for signer configuration."""

    def test_defaults(self):
        """Test that defaults are applied."""
        config = MessageSigner(TEST_PRIVATE_KEY).get_config()

        assert config.chain_id == 42161
        assert config.endpoint_address is None
        assert config.book_addresses == {}

    def test_addresses_checksummed(self, signer):
        """Test that configured addresses are normalised."""
        config = signer.get_config()

        assert config.endpoint_address.lower() == ENDPOINT
        assert config.book_addresses[1].lower() == BOOK

    def test_invalid_endpoint(self):
        """Test that an invalid endpoint address raises error."""
        with pytest.raises(ValueError, match="Invalid endpoint_address"):
            MessageSigner(TEST_PRIVATE_KEY, {"endpoint_address": "invalid"})

    def test_invalid_book(self):
        """Test that an invalid book address raises error."""
        with pytest.raises(ValueError, match="Invalid book address for product 2"):
            MessageSigner(TEST_PRIVATE_KEY, {"book_addresses": {2: "0x1234"}})

    def test_from_env(self):
        """Test reading configuration from environment variables."""
        config = signer_config_from_env(
            {
                "VERTEX_CHAIN_ID": "421613",
                "VERTEX_ENDPOINT_ADDRESS": ENDPOINT,
                "VERTEX_BOOK_ADDRESSES": f"1:{BOOK}, 2:{ENDPOINT}",
            }
        )

        assert config == {
            "chain_id": 421613,
            "endpoint_address": ENDPOINT,
            "book_addresses": {1: BOOK, 2: ENDPOINT},
        }

    def test_from_env_empty(self):
        """Test that missing variables leave the defaults."""
        assert signer_config_from_env({}) == {}

    @pytest.mark.parametrize(
        "environ",
        [
            {"VERTEX_CHAIN_ID": "arbitrum"},
            {"VERTEX_BOOK_ADDRESSES": "one:0x00"},
            {"VERTEX_BOOK_ADDRESSES": "0x00"},
        ],
    )
    def test_from_env_malformed(self, environ):
        """Test that malformed variables raise error."""
        with pytest.raises(ValueError):
            signer_config_from_env(environ)


class TestVerifyingContract:
    """Tests for verifying contract selection."""

    def test_order_uses_book(self, signer, order):
        """Test that orders are verified by their product's book."""
        assert signer.verifying_contract(order, product_id=1).lower() == BOOK

    def test_order_without_book(self, signer, order):
        """Test the product id fallback for unknown books."""
        assert signer.verifying_contract(order, product_id=2) == "0x0000000000000000000000000000000000000002"

    def test_order_requires_product(self, signer, order):
        """Test that orders cannot be signed without a product id."""
        with pytest.raises(ValueError, match="product_id is required"):
            signer.sign(order)

    def test_other_messages_use_endpoint(self, signer):
        """Test that everything else is verified by the endpoint."""
        message = StreamAuthentication(signer.subaccount(), 1)
        assert signer.verifying_contract(message).lower() == ENDPOINT

    def test_endpoint_required(self):
        """Test that the endpoint must be configured for non-order messages."""
        signer = MessageSigner(TEST_PRIVATE_KEY)
        message = CancellationProducts(signer.subaccount(), [1], NONCE)

        with pytest.raises(ValueError, match="endpoint_address not set"):
            signer.sign(message)


class TestSign:
    """Tests for signing through the signer."""

    def test_subaccount(self, signer):
        """Test the signer's own subaccount identity."""
        identity = decode_identity(signer.subaccount("trading"))

        assert identity.checksum_address == TEST_ADDRESS
        assert identity.name == "trading"

    def test_sign_order(self, signer, order):
        """Test signing an order against its book."""
        signed = signer.sign(order, product_id=1)

        assert isinstance(signed, endpoint.SignedOrder)
        assert verify_message_signature(order, signed.signature, BOOK, 421613, TEST_ADDRESS)

    def test_sign_cancellation(self, signer):
        """Test signing a cancellation against the endpoint."""
        message = CancellationProducts(signer.subaccount(), [1, 2], NONCE)
        signed = signer.sign(message)

        assert signed.cancellation_products == message.to_binding()
        assert verify_message_signature(message, signed.signature, ENDPOINT, 421613, TEST_ADDRESS)

    def test_digest(self, signer, order):
        """Test that the signer digest uses the resolved domain."""
        assert signer.digest(order, product_id=1) == message_digest(order, BOOK, 421613)
