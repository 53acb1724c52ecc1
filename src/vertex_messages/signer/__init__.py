"""Config driven signing of protocol messages."""

from .message_signer import (
    MessageSigner,
    MessageSignerConfig,
    ResolvedSignerConfig,
    signer_config_from_env,
)

__all__ = [
    "MessageSigner",
    "MessageSignerConfig",
    "ResolvedSignerConfig",
    "signer_config_from_env",
]
