"""Vertex off-chain message formats.

- :mod:`vertex_messages.eip712`: messages, bit packing, wire format and signing
- :mod:`vertex_messages.bindings`: endpoint and order book contract structs
- :mod:`vertex_messages.signer`: config driven signer
"""

from .eip712 import *  # noqa: F401,F403
from .eip712 import __all__ as _eip712_all
from .signer import MessageSigner, MessageSignerConfig, ResolvedSignerConfig, signer_config_from_env

__version__ = "0.1.0"

__all__ = [
    *_eip712_all,
    "MessageSigner",
    "MessageSignerConfig",
    "ResolvedSignerConfig",
    "signer_config_from_env",
]
