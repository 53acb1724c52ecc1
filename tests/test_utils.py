"""Tests for utility functions."""

import time
from decimal import Decimal

import pytest

from vertex_messages.eip712 import (
    OrderType,
    format_x18,
    from_x18,
    gen_expiration,
    gen_nonce,
    is_trigger_order,
    nonce_low_bits,
    order_type_tag,
    product_verifying_contract,
    recv_time,
    reduce_only,
    to_x18,
)
from vertex_messages.eip712 import expiration as expiration_of


class TestFixedPoint:
    """Tests for 18 decimal fixed point helpers."""

    def test_to_x18(self):
        """Test parsing human readable amounts."""
        assert to_x18("1.5") == 1_500_000_000_000_000_000
        assert to_x18(2) == 2_000_000_000_000_000_000
        assert to_x18(0.1) == 100_000_000_000_000_000
        assert to_x18("-0.000000000000000001") == -1

    def test_from_x18(self):
        """Test converting back to Decimal."""
        assert from_x18(1_500_000_000_000_000_000) == Decimal("1.5")

    def test_format_x18(self):
        """Test formatting."""
        assert format_x18(1_500_000_000_000_000_000) == "1.5"
        assert format_x18(-2_000_000_000_000_000_000) == "-2"
        assert format_x18(1) == "0.000000000000000001"


class TestGenerators:
    """Tests for nonce and expiration generators."""

    def test_gen_nonce_default_recv_time(self):
        """Test that the default receive time is about 90 seconds ahead."""
        now_ms = int(time.time() * 1000)
        nonce = gen_nonce()

        assert now_ms + 80_000 <= recv_time(nonce) <= now_ms + 100_000
        assert is_trigger_order(nonce) is False

    def test_gen_nonce_explicit(self):
        """Test an explicit receive time and trigger flag."""
        nonce = gen_nonce(1_700_000_123, is_trigger=True)

        assert (nonce >> 20) & ((1 << 43) - 1) == 1_700_000_123
        assert is_trigger_order(nonce) is True
        assert 0 <= nonce_low_bits(nonce) < 1 << 20

    def test_gen_expiration(self):
        """Test expiration relative to now with flags."""
        now = int(time.time())
        packed = gen_expiration(60, OrderType.IMMEDIATE_OR_CANCEL, reduce_only=True)

        assert now + 59 <= expiration_of(packed) <= now + 61
        assert order_type_tag(packed) == 1
        assert reduce_only(packed) is True


class TestProductVerifyingContract:
    """Tests for the product id verifying contract."""

    def test_product_address(self):
        """Test big-endian rendering of the product id."""
        assert product_verifying_contract(0) == "0x0000000000000000000000000000000000000000"
        assert product_verifying_contract(258).lower() == "0x0000000000000000000000000000000000000102"

    def test_invalid_product(self):
        """Test that product ids outside uint32 raise error."""
        with pytest.raises(ValueError, match="Invalid product_id"):
            product_verifying_contract(2**32)
