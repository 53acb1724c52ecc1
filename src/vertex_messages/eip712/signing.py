"""EIP-712 signing of protocol messages.

The messages themselves only describe their typed-data schema. Hashing,
signing and recovery are done by ``eth_account``; this module builds the
payloads it needs and wraps the resulting signature into the signed
endpoint binding. Works with:

- eth_account.Account (direct signing)
- any wallet implementing :class:`TypedDataSigner`
"""

import logging
from typing import Any, Dict, Protocol, TypedDict, Union

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import is_address, keccak, to_checksum_address

from ..bindings.base import AbiStruct
from .messages import Message
from .types import EIP712_DOMAIN_TYPE
from .utils import EIP712_DOMAIN_NAME, EIP712_DOMAIN_VERSION
from .wire import decode_hex

logger = logging.getLogger(__name__)


class EIP712Domain(TypedDict):
    """EIP-712 domain separator."""

    name: str
    version: str
    chainId: int
    verifyingContract: str


def create_eip712_domain(verifying_contract: str, chain_id: int) -> EIP712Domain:
    """Create the EIP-712 domain for a verifying contract.

    Args:
        verifying_contract: Endpoint address, or the order book address for orders
        chain_id: Chain ID (42161 for Arbitrum One)

    Raises:
        ValueError: If the verifying contract address is invalid
    """
    if not is_address(verifying_contract):
        raise ValueError(f"Invalid verifying contract: {verifying_contract}")

    return {
        "name": EIP712_DOMAIN_NAME,
        "version": EIP712_DOMAIN_VERSION,
        "chainId": chain_id,
        "verifyingContract": to_checksum_address(verifying_contract),
    }


def build_typed_data(message: Message, verifying_contract: str, chain_id: int) -> Dict[str, Any]:
    """Full EIP-712 payload for a message, ``EIP712Domain`` type included."""
    return {
        "types": {
            "EIP712Domain": EIP712_DOMAIN_TYPE,
            **message.eip712_types(),
        },
        "primaryType": message.PRIMARY_TYPE,
        "domain": create_eip712_domain(verifying_contract, chain_id),
        "message": message.typed_data_message(),
    }


def message_digest(message: Message, verifying_contract: str, chain_id: int) -> bytes:
    """EIP-712 hash of a message.

    For an order this is the digest referenced by cancellations.
    """
    signable = encode_typed_data(full_message=build_typed_data(message, verifying_contract, chain_id))
    return keccak(b"\x19" + signable.version + signable.header + signable.body)


def sign_message(
    private_key: str,
    message: Message,
    verifying_contract: str,
    chain_id: int,
) -> AbiStruct:
    """Sign a message with EIP-712 using a private key.

    Args:
        private_key: Private key (hex string with or without 0x prefix)
        message: Message to sign
        verifying_contract: Contract the signature is checked by
        chain_id: Chain ID

    Returns:
        The signed endpoint binding of the message
    """
    domain = create_eip712_domain(verifying_contract, chain_id)

    account = Account.from_key(private_key)
    signed_message = account.sign_typed_data(
        domain_data=domain,
        message_types=message.eip712_types(),
        message_data=message.typed_data_message(),
    )

    logger.debug("Signed %s as %s", message.PRIMARY_TYPE, account.address)
    return message.to_signed_binding(bytes(signed_message.signature))


class TypedDataSigner(Protocol):
    """Protocol for signers that can sign EIP-712 typed data."""

    async def get_address(self) -> str:
        """Get the signer's address."""
        ...

    async def sign_typed_data(self, params: Dict[str, Any]) -> str:
        """Sign EIP-712 typed data.

        Args:
            params: Dict with domain, types, primaryType, and message

        Returns:
            Signature as hex string
        """
        ...


async def sign_message_with_signer(
    signer: TypedDataSigner,
    message: Message,
    verifying_contract: str,
    chain_id: int,
) -> AbiStruct:
    """Sign a message with EIP-712 using any compatible signer.

    The message is handed over in its text-transport form, so wide
    integers arrive as decimal strings and byte strings as hex.

    Raises:
        DecodeError: If the signer returns a malformed hex signature
    """
    domain = create_eip712_domain(verifying_contract, chain_id)

    signature = await signer.sign_typed_data(
        {
            "domain": domain,
            "types": message.eip712_types(),
            "primaryType": message.PRIMARY_TYPE,
            "message": message.to_wire(),
        }
    )

    return message.to_signed_binding(decode_hex(signature, "signature"))


def recover_message_signer(
    message: Message,
    signature: Union[bytes, str],
    verifying_contract: str,
    chain_id: int,
) -> str:
    """Recover the address that signed a message."""
    if isinstance(signature, str):
        signature = decode_hex(signature, "signature")
    signable = encode_typed_data(full_message=build_typed_data(message, verifying_contract, chain_id))
    return Account.recover_message(signable, signature=signature)


def verify_message_signature(
    message: Message,
    signature: Union[bytes, str],
    verifying_contract: str,
    chain_id: int,
    expected_signer: str,
) -> bool:
    """Verify a message signature locally (for EOA signatures).

    Note: Contract wallets must be verified on-chain.

    Returns:
        True if signature is valid and from expected signer
    """
    try:
        recovered = recover_message_signer(message, signature, verifying_contract, chain_id)
        return recovered.lower() == expected_signer.lower()
    except Exception as e:
        logger.debug("Could not recover %s signer: %s", message.PRIMARY_TYPE, e)
        return False
