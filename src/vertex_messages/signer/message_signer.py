"""Config driven message signer.

Resolves which contract verifies each message and signs with a local
private key:

    signer = MessageSigner(private_key, {
        "chain_id": 42161,
        "endpoint_address": "0x...",
        "book_addresses": {1: "0x...", 2: "0x..."},
    })

    order = Order(
        sender=signer.subaccount("default"),
        price_x18=to_x18("1.5"),
        amount=-to_x18(2),
        expiration=OrderType.POST_ONLY.apply_to_expiration(1_700_000_000),
        nonce=gen_nonce(),
    )
    signed = signer.sign(order, product_id=1)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, TypedDict

from eth_account import Account
from eth_utils import is_address, to_checksum_address

from ..bindings.base import AbiStruct
from ..eip712.identity import encode_identity
from ..eip712.messages import Message, Order
from ..eip712.signing import message_digest, sign_message
from ..eip712.utils import DEFAULT_CHAIN_ID, DEFAULT_SUBACCOUNT_NAME, product_verifying_contract

logger = logging.getLogger(__name__)


class MessageSignerConfig(TypedDict, total=False):
    """Signer configuration."""

    chain_id: int
    """Chain ID. Default: 42161 (Arbitrum One)"""

    endpoint_address: str
    """Endpoint contract address, verifies every message except orders."""

    book_addresses: Dict[int, str]
    """Order book address per product id. Products without an entry use
    the product id itself as verifying contract."""


@dataclass
class ResolvedSignerConfig:
    """Resolved signer configuration with all defaults applied."""

    chain_id: int
    endpoint_address: Optional[str]
    book_addresses: Dict[int, str] = field(default_factory=dict)


def signer_config_from_env(environ: Optional[Mapping[str, str]] = None) -> MessageSignerConfig:
    """Read signer configuration from environment variables.

    - ``VERTEX_CHAIN_ID``
    - ``VERTEX_ENDPOINT_ADDRESS``
    - ``VERTEX_BOOK_ADDRESSES``, as ``product_id:address`` pairs separated by commas

    Raises:
        ValueError: If a variable is malformed
    """
    environ = os.environ if environ is None else environ
    config: MessageSignerConfig = {}

    chain_id = environ.get("VERTEX_CHAIN_ID")
    if chain_id:
        try:
            config["chain_id"] = int(chain_id)
        except ValueError as e:
            raise ValueError(f"Invalid VERTEX_CHAIN_ID: {chain_id}") from e

    endpoint_address = environ.get("VERTEX_ENDPOINT_ADDRESS")
    if endpoint_address:
        config["endpoint_address"] = endpoint_address

    book_addresses = environ.get("VERTEX_BOOK_ADDRESSES")
    if book_addresses:
        books = {}
        for entry in book_addresses.split(","):
            product_id, sep, address = entry.strip().partition(":")
            if not sep or not product_id.strip().isdigit():
                raise ValueError(f"Invalid VERTEX_BOOK_ADDRESSES entry: {entry}")
            books[int(product_id)] = address.strip()
        config["book_addresses"] = books

    return config


class MessageSigner:
    """Signs protocol messages with a local private key.

    Orders are signed against the order book of their product, all other
    messages against the endpoint.
    """

    def __init__(self, private_key: str, config: Optional[MessageSignerConfig] = None):
        """Initialize the signer.

        Args:
            private_key: Private key (hex string with or without 0x prefix)
            config: Optional configuration

        Raises:
            ValueError: If a configured address is invalid
        """
        config = config or {}

        endpoint_address = config.get("endpoint_address")
        if endpoint_address is not None:
            if not is_address(endpoint_address):
                raise ValueError(f"Invalid endpoint_address: {endpoint_address}")
            endpoint_address = to_checksum_address(endpoint_address)

        book_addresses = {}
        for product_id, address in config.get("book_addresses", {}).items():
            if not is_address(address):
                raise ValueError(f"Invalid book address for product {product_id}: {address}")
            book_addresses[int(product_id)] = to_checksum_address(address)

        self._config = ResolvedSignerConfig(
            chain_id=config.get("chain_id", DEFAULT_CHAIN_ID),
            endpoint_address=endpoint_address,
            book_addresses=book_addresses,
        )
        self._private_key = private_key
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def get_config(self) -> ResolvedSignerConfig:
        """Get the signer configuration."""
        return self._config

    def subaccount(self, name: str = DEFAULT_SUBACCOUNT_NAME) -> bytes:
        """``bytes32`` sender for one of this signer's subaccounts."""
        return encode_identity(self.address, name)

    def verifying_contract(self, message: Message, product_id: Optional[int] = None) -> str:
        """Contract that verifies the signature of ``message``.

        Raises:
            ValueError: If an order is given without product id, or the
                endpoint address is needed but not configured
        """
        if isinstance(message, Order):
            if product_id is None:
                raise ValueError("product_id is required to sign an order")
            return self._config.book_addresses.get(product_id) or product_verifying_contract(product_id)

        if not self._config.endpoint_address:
            raise ValueError(
                f"endpoint_address not set. Pass it in the config to sign {message.PRIMARY_TYPE}."
            )
        return self._config.endpoint_address

    def digest(self, message: Message, product_id: Optional[int] = None) -> bytes:
        """EIP-712 digest of ``message`` under this signer's domain."""
        return message_digest(
            message,
            self.verifying_contract(message, product_id),
            self._config.chain_id,
        )

    def sign(self, message: Message, product_id: Optional[int] = None) -> AbiStruct:
        """Sign ``message`` and return its signed endpoint binding."""
        verifying_contract = self.verifying_contract(message, product_id)
        logger.debug(
            "Signing %s against %s on chain %d",
            message.PRIMARY_TYPE,
            verifying_contract,
            self._config.chain_id,
        )
        return sign_message(
            self._private_key,
            message,
            verifying_contract,
            self._config.chain_id,
        )
